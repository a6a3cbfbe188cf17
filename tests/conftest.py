"""Shared fakes for network-free extractor tests."""

from __future__ import annotations

import threading
from typing import Any, Dict, List, Optional, Tuple

import pytest

from gaodun_extractor.extractor.aggregator import RequestGate
from gaodun_extractor.extractor.resolver import ResourceResolver
from gaodun_extractor.models import CourseSchema, Resource, VideoInfo, VideoQuality

REPLAY_LINK = "gaodunapp://gd/liveroom/v2/replays/detail?recordId=rec01&did=dev01&roomId=room-42&token=tok99"


class FakeGateway:
    """In-memory stand-in for ``Gateway``; values that are exceptions get raised."""

    def __init__(self) -> None:
        self.gradations: Dict[CourseSchema, Any] = {}
        self.syllabi: Dict[Tuple[CourseSchema, str], Any] = {}
        self.live_codes: Dict[Tuple[str, str], Any] = {}
        self.videos: Dict[str, Any] = {}
        self.calls: List[Tuple[str, tuple]] = []
        self._lock = threading.Lock()

    def _record(self, name: str, *args: Any) -> None:
        with self._lock:
            self.calls.append((name, args))

    @staticmethod
    def _answer(value: Any) -> Any:
        if isinstance(value, Exception):
            raise value
        return value

    def fetch_gradations(self, course_id, schema):
        self._record("fetch_gradations", course_id, schema)
        return self._answer(self.gradations.get(schema, []))

    def fetch_syllabus(self, course_id, syllabus_id, schema):
        self._record("fetch_syllabus", course_id, syllabus_id, schema)
        return self._answer(self.syllabi[(schema, syllabus_id)])

    def check_live_token(self, room_id, token):
        self._record("check_live_token", room_id, token)
        return self._answer(self.live_codes[(room_id, token)])

    def fetch_video_qualities(self, video_id, resolution="SD", channel=0):
        self._record("fetch_video_qualities", video_id, resolution, channel)
        return self._answer(self.videos[video_id])

    def headers(self):
        return {"Authentication": "token-123"}

    def count(self, name: str) -> int:
        return sum(1 for call_name, _ in self.calls if call_name == name)


class FakeExpander:
    """Stand-in for ``M3U8Parser`` mapping manifest URLs to segment lists."""

    def __init__(self, manifests: Optional[Dict[str, Any]] = None) -> None:
        self.manifests = manifests or {}
        self.seen_headers: List[Dict[str, str]] = []

    async def expand(self, m3u8_url, headers=None):
        self.seen_headers.append(dict(headers or {}))
        value = self.manifests.get(m3u8_url)
        if value is None:
            raise RuntimeError(f"manifest {m3u8_url} unreachable")
        if isinstance(value, Exception):
            raise value
        return list(value)


def make_quality(path: str, available: int = 1, file_size: int = 100, resolution: str = "720p") -> VideoQuality:
    return VideoQuality(available=available, file_size=file_size, path=path, resolution=resolution)


def make_video_info(**qualities: VideoQuality) -> VideoInfo:
    return VideoInfo(title="video", duration=60, qualities=qualities)


def video_resource(resource_id: int, video_id: str, title: str = "") -> Resource:
    return Resource(id=resource_id, discriminator="video", video_id=video_id, title=title or f"Video {resource_id}")


def note_resource(resource_id: int, title: str = "", path: str = "", **extra: Any) -> Resource:
    return Resource(
        id=resource_id,
        discriminator="lecture_note",
        title=title or f"Note {resource_id}",
        path=path or f"https://file.gaodun.com/{resource_id}.pdf",
        **extra,
    )


def add_video(gateway: FakeGateway, expander: FakeExpander, video_id: str, segments: int = 2) -> None:
    """Registers a video with one usable SD quality of ``segments`` parts."""

    manifest = f"https://vod.gaodun.com/{video_id}/sd.m3u8"
    gateway.videos[video_id] = make_video_info(SD=make_quality(manifest))
    expander.manifests[manifest] = [f"https://vod.gaodun.com/{video_id}/{i}.ts" for i in range(segments)]


@pytest.fixture()
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture()
def expander() -> FakeExpander:
    return FakeExpander()


@pytest.fixture()
def make_resolver(gateway, expander):
    """Builds a resolver bound to a gate created inside the running loop."""

    def _build(max_in_flight: int = 4) -> ResourceResolver:
        return ResourceResolver(gateway, expander, RequestGate(max_in_flight))

    return _build
