from __future__ import annotations

import argparse
import json
import logging
import sys

import requests
from dotenv import load_dotenv

from .config import ConfigError, ExtractorConfig
from .extractor import ExtractionError, GaodunExtractor
from .models import ExtractionResult, MediaDescriptor
from .utils.http_client import AuthenticationError, RemoteAPIError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List the videos and documents of a gaodun course.")
    parser.add_argument("url", help="Course URL (course_id=, courseId= or /course/<id>)")
    parser.add_argument("--json", action="store_true", help="Print the full extraction result as JSON")
    parser.add_argument("--info", action="store_true", help="Also list the streams of every item")
    parser.add_argument(
        "--strict-schema",
        action="store_true",
        default=None,
        help="Inspect every gradation and fail when they disagree about the course layout",
    )
    parser.add_argument("--max-in-flight", type=int, help="Maximum concurrent gateway/CDN requests")
    parser.add_argument("--resolution", help="Resolution hint sent to the vod resource endpoint (default SD)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def build_config(args: argparse.Namespace) -> ExtractorConfig:
    config = ExtractorConfig.from_env()
    overrides = {}
    if args.strict_schema is not None:
        overrides["strict_schema"] = args.strict_schema
    if args.max_in_flight is not None:
        overrides["max_in_flight"] = args.max_in_flight
    if args.resolution:
        overrides["resolution_hint"] = args.resolution
    if overrides:
        config = ExtractorConfig(**{**config.model_dump(), **overrides})
    return config


def _format_size(size: int) -> str:
    value = float(size)
    for unit in ("B", "KiB", "MiB", "GiB"):
        if value < 1024 or unit == "GiB":
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GiB"


def print_descriptors(descriptors: list[MediaDescriptor], show_streams: bool) -> None:
    if not descriptors:
        logging.info("No downloadable items found for this course.")
        return
    for descriptor in descriptors:
        logging.info("%-8s | %2s stream(s) | %s", descriptor.type.value, len(descriptor.streams), descriptor.title)
        if not show_streams:
            continue
        for stream in descriptor.streams.values():
            logging.info(
                "    - %s quality=%s size=%s parts=%s",
                stream.id,
                stream.quality,
                _format_size(stream.size),
                len(stream.parts),
            )


def report_branch_errors(result: ExtractionResult) -> None:
    if not result.errors:
        return
    logging.warning("%s branch(es) were skipped:", len(result.errors))
    for error in result.errors:
        logging.warning("  - [%s] %s: %s", error.scope, error.label, error.message)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = parse_args(argv)
    configure_logging(args.debug)

    try:
        config = build_config(args)
    except (ConfigError, ValueError) as exc:
        logging.error("%s", exc)
        return 2

    with GaodunExtractor.from_config(config) as extractor:
        try:
            result = extractor.extract_with_errors(args.url)
        except AuthenticationError as exc:
            logging.error("%s", exc)
            return 1
        except (ExtractionError, RemoteAPIError, requests.RequestException) as exc:
            logging.error("Extraction failed: %s", exc)
            return 1

    if args.json:
        json.dump(result.model_dump(mode="json"), sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")
    else:
        print_descriptors(result.descriptors, args.info)
    report_branch_errors(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
