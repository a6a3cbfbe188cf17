"""Turns raw gateway payloads into typed models.

The gateway is inconsistent about field spelling (``syllabusId`` next to
``syllabus_id``, ``itemId`` next to ``item_id``) and about numbers, which may
arrive as JSON numbers or as strings. Both are normalized here so the rest of
the package only sees one shape.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ..models import Gradation, Resource, Syllabus, VideoInfo, VideoQuality


def first_non_empty(payload: Dict[str, Any], *names: str, default: Any = None) -> Any:
    """Returns the value of the first key in ``names`` that is neither missing, None nor ``""``."""

    for name in names:
        value = payload.get(name)
        if value is not None and value != "":
            return value
    return default


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _as_int(value: Any) -> int:
    if value is None or value == "":
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        logging.debug("Ignoring non-numeric value %r", value)
        return 0


def _as_optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return _as_int(value)


def parse_resource(entry: Dict[str, Any]) -> Resource:
    return Resource(
        id=_as_int(entry.get("id")),
        title=_as_str(entry.get("title")),
        discriminator=_as_str(entry.get("discriminator")),
        duration=_as_optional_int(entry.get("duration")),
        category=_as_int(entry.get("category")),
        description=_as_str(entry.get("description")),
        uri=_as_str(entry.get("uri")),
        extension=_as_str(entry.get("extension")),
        mime=_as_str(entry.get("mime")),
        path=_as_str(entry.get("path")),
        video_id=_as_str(entry.get("video_id")),
        live_status=_as_str(entry.get("liveStatus")),
        filesize=_as_str(entry.get("filesize")),
        file_size_human=_as_str(entry.get("fileSize")),
        live_url_playback_app=_as_str(entry.get("liveUrlPlayBackApp")),
    )


def _parse_resources(entries: Any) -> List[Resource]:
    return [parse_resource(entry) for entry in entries or [] if isinstance(entry, dict)]


def parse_syllabus(entry: Dict[str, Any]) -> Syllabus:
    return Syllabus(
        id=_as_int(entry.get("id")),
        item_id=_as_int(first_non_empty(entry, "itemId", "item_id")),
        name=_as_str(entry.get("name")),
        type=_as_str(entry.get("type")),
        depth=_as_str(entry.get("depth")),
        is_resource=bool(_as_int(entry.get("isResource"))),
        resource_total=_as_int(first_non_empty(entry, "resourceTotal", "total_resource")),
        parent_id=_as_str(entry.get("parent_id")),
        children=parse_syllabus_list(entry.get("children")),
        pre_class_resource=_parse_resources(entry.get("preClassResource")),
        in_class_main_resource=_parse_resources(entry.get("inClassMainResource")),
        in_class_assist_resource=_parse_resources(entry.get("inClassAssistResource")),
        after_class_resource=_parse_resources(entry.get("afterClassResource")),
    )


def parse_syllabus_list(entries: Any) -> List[Syllabus]:
    return [parse_syllabus(entry) for entry in entries or [] if isinstance(entry, dict)]


def parse_gradation(entry: Dict[str, Any]) -> Gradation:
    glive_raw = entry.get("gliveSyllabus")
    ep_raw = entry.get("epSyllabus")
    return Gradation(
        id=_as_str(entry.get("id")),
        name=_as_str(entry.get("name")),
        description=_as_str(entry.get("description")),
        syllabus_id=_as_str(first_non_empty(entry, "syllabusId", "syllabus_id")),
        course_id=_as_str(first_non_empty(entry, "courseId", "course_id")),
        children=parse_gradation_list(entry.get("children")),
        glive_syllabus=parse_syllabus(glive_raw) if isinstance(glive_raw, dict) else None,
        ep_syllabus=parse_syllabus_list(ep_raw) if ep_raw is not None else None,
    )


def parse_gradation_list(entries: Any) -> List[Gradation]:
    return [parse_gradation(entry) for entry in entries or [] if isinstance(entry, dict)]


def parse_video_info(result: Any) -> VideoInfo:
    if not isinstance(result, dict):
        result = {}
    qualities: Dict[str, VideoQuality] = {}
    for label, raw in (result.get("list") or {}).items():
        if not isinstance(raw, dict):
            logging.debug("Skipping malformed quality entry %s: %r", label, raw)
            continue
        resolution = raw.get("resolution")
        if not isinstance(resolution, dict):
            resolution = {}
        qualities[str(label)] = VideoQuality(
            available=_as_int(raw.get("available")),
            file_size=_as_int(raw.get("file_size")),
            is_watermark=_as_int(raw.get("is_watermark")),
            path=_as_str(raw.get("path")),
            resolution=_as_str(resolution.get("resolution")),
            resolution_name=_as_str(resolution.get("name") or resolution.get("name_simple")),
            transcode_id=_as_str(raw.get("transcode_id")),
        )
    return VideoInfo(
        title=_as_str(result.get("title")),
        duration=_as_int(result.get("duration")),
        encrypt=_as_int(result.get("encrypt")),
        default_type=_as_str(result.get("defaultType")),
        qualities=qualities,
    )
