"""Maps raw syllabus resources to normalized media descriptors."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from ..api.gateway import Gateway
from ..models import MediaDescriptor, MediaType, Part, Resource, Stream
from ..utils.file_utils import build_destination
from ..utils.http_client import AuthenticationError
from .aggregator import RequestGate
from .errors import LiveLinkError, NoStreamsError
from .locator import extract_room_and_token
from .m3u8_parser import M3U8Parser

DISCRIMINATOR_LIVE = "live_new"
DISCRIMINATOR_VIDEO = "video"
DISCRIMINATOR_LECTURE_NOTE = "lecture_note"

MIME_EXTENSIONS: Dict[str, str] = {
    "application/pdf": "pdf",
    "application/msword": "doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
}
DEFAULT_DOCUMENT_EXTENSION = "file"
SEGMENT_EXTENSION = "ts"


def document_extension(resource: Resource) -> str:
    if resource.extension:
        return resource.extension
    return MIME_EXTENSIONS.get(resource.mime, DEFAULT_DOCUMENT_EXTENSION)


def parse_filesize(value: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


class ResourceResolver:
    """Turns one resource record into at most one ``MediaDescriptor``.

    ``resolve`` returns ``None`` for records that are skipped on purpose
    (unknown discriminator, document without a path, unusable replay link or
    failed token exchange). A video that ends up without a single stream
    raises ``NoStreamsError`` instead.
    """

    def __init__(
        self,
        gateway: Gateway,
        expander: M3U8Parser,
        gate: RequestGate,
        resolution: str = "SD",
        channel: int = 0,
    ) -> None:
        self._gateway = gateway
        self._expander = expander
        self._gate = gate
        self.resolution = resolution
        self.channel = channel

    async def resolve(self, resource: Resource, base_dir: str) -> Optional[MediaDescriptor]:
        if resource.discriminator == DISCRIMINATOR_LIVE:
            video_id = await self._resolve_live_code(resource)
            if not video_id:
                return None
            return await self.map_video(resource.model_copy(update={"video_id": video_id}), base_dir)
        if resource.discriminator == DISCRIMINATOR_VIDEO:
            return await self.map_video(resource, base_dir)
        if resource.discriminator == DISCRIMINATOR_LECTURE_NOTE:
            return self.map_document(resource, base_dir)
        logging.debug("Skipping resource %s with discriminator %r", resource.id, resource.discriminator)
        return None

    async def _resolve_live_code(self, resource: Resource) -> Optional[str]:
        try:
            room_id, token = extract_room_and_token(resource.live_url_playback_app)
        except LiveLinkError as exc:
            logging.error("Failed to extract room ID and token for resource %s: %s", resource.id, exc)
            return None

        try:
            return await self._gate.call(self._gateway.check_live_token, room_id, token)
        except AuthenticationError:
            raise
        except Exception as exc:
            logging.error("Failed to check glive room %s for resource %s: %s", room_id, resource.id, exc)
            return None

    def map_document(self, resource: Resource, base_dir: str) -> Optional[MediaDescriptor]:
        if not resource.path:
            logging.debug("Skipping document %s without path", resource.id)
            return None

        ext = document_extension(resource)
        size = parse_filesize(resource.filesize)
        stream_id = str(resource.id)
        stream = Stream(
            id=stream_id,
            quality="Unknown",
            size=size,
            parts=[Part(url=resource.path, ext=ext, size=size)],
            ext=ext,
        )
        return MediaDescriptor(
            title=build_destination(base_dir, resource.title, f"document_{resource.id}"),
            type=MediaType.DOCUMENT,
            url=resource.path,
            streams={stream_id: stream},
        )

    async def map_video(self, resource: Resource, base_dir: str) -> MediaDescriptor:
        video_id = resource.video_id
        info = await self._gate.call(self._gateway.fetch_video_qualities, video_id, self.resolution, self.channel)
        logging.info(
            "Video %s (%s): duration=%s encrypt=%s qualities=%s",
            video_id,
            info.title,
            info.duration,
            info.encrypt,
            len(info.qualities),
        )

        headers = self._gateway.headers()
        streams: Dict[str, Stream] = {}
        for label, quality in info.qualities.items():
            if not quality.is_usable:
                logging.warning(
                    "Skipping unavailable quality %s of %s (available=%s, has_path=%s)",
                    label,
                    video_id,
                    quality.available,
                    bool(quality.path),
                )
                continue

            try:
                urls = await self._gate.run(self._expander.expand(quality.path, headers))
            except Exception as exc:
                logging.error("Failed to expand manifest %s: %s", quality.path, exc)
                continue
            if not urls:
                continue

            for index, url in enumerate(urls[:3]):
                logging.debug("TS segment %s of %s_%s: %s", index, video_id, label, url)

            stream_id = f"{video_id}_{label}"
            streams[stream_id] = Stream(
                id=stream_id,
                quality=quality.resolution,
                size=quality.file_size * 1024,
                parts=[Part(url=url, ext=SEGMENT_EXTENSION) for url in urls],
                need_mux=False,
            )

        if not streams:
            raise NoStreamsError(f"no available video streams for {video_id}")

        return MediaDescriptor(
            title=build_destination(base_dir, resource.title, f"video_{resource.id}"),
            type=MediaType.VIDEO,
            url=f"gaodun://video/{video_id}",
            streams=streams,
        )
