"""Single entry point the extractor uses to talk to the gaodun gateway."""

from __future__ import annotations

from typing import Dict, List, Union

from ..models import CourseSchema, Gradation, Syllabus, VideoInfo
from ..utils.http_client import HttpClient
from .study_api import StudyAPI
from .vod_api import VodAPI


class Gateway:
    """Routes schema-dependent calls to the matching endpoint family."""

    def __init__(self, http_client: HttpClient) -> None:
        self._client = http_client
        self._study_api = StudyAPI(http_client)
        self._vod_api = VodAPI(http_client)

    def fetch_gradations(self, course_id: str, schema: CourseSchema) -> List[Gradation]:
        if schema is CourseSchema.GSTUDY:
            return self._study_api.get_gstudy_gradations(course_id)
        return self._study_api.get_ep_gradations(course_id)

    def fetch_syllabus(
        self,
        course_id: str,
        syllabus_id: str,
        schema: CourseSchema,
    ) -> Union[Syllabus, List[Syllabus]]:
        """Returns the whole glive tree for g-study, the flat item list for ep-study."""

        if schema is CourseSchema.GSTUDY:
            return self._study_api.get_gstudy_syllabus(course_id, syllabus_id)
        return self._study_api.get_ep_syllabus(course_id, syllabus_id)

    def check_live_token(self, room_id: str, token: str) -> str:
        return self._vod_api.check_live_token(room_id, token)

    def fetch_video_qualities(self, video_id: str, resolution: str = "SD", channel: int = 0) -> VideoInfo:
        return self._vod_api.get_video_info(video_id, resolution, channel)

    def headers(self) -> Dict[str, str]:
        return self._client.headers
