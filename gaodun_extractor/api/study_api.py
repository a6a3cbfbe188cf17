"""API client for the g-study and ep-study course structure endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from ..models import Gradation, Syllabus
from ..utils.http_client import HttpClient, RemoteAPIError
from .parsing import parse_gradation_list, parse_syllabus, parse_syllabus_list

GSTUDY_GRADATION_PATH = "g-study/api/v1/front/course/{course_id}/gradation/syllabus"
GSTUDY_SYLLABUS_PATH = "g-study/api/v1/front/course/{course_id}/syllabus/glive/{syllabus_id}"
EPSTUDY_GRADATION_PATH = "ep-study/front/course/{course_id}/gradation"
EPSTUDY_SYLLABUS_PATH = "ep-study/front/course/{course_id}/syllabus/{syllabus_id}"

STUDY_OK_STATUS = 0


def unwrap_result(data: Dict[str, Any], ok_status: int) -> Any:
    """Returns the ``result`` member of a gateway envelope or raises ``RemoteAPIError``."""

    if not isinstance(data, dict):
        raise RemoteAPIError(None, "malformed gateway envelope")
    status = data.get("status")
    if status != ok_status:
        raise RemoteAPIError(status, str(data.get("message") or "unknown error"))
    return data.get("result")


class StudyAPI:
    """Wraps the course structure endpoints for both course layouts."""

    def __init__(self, http_client: HttpClient) -> None:
        self._client = http_client

    def get_gstudy_gradations(self, course_id: str) -> List[Gradation]:
        path = GSTUDY_GRADATION_PATH.format(course_id=course_id)
        try:
            data = self._client.request_api(path)
        except Exception as exc:  # pragma: no cover - network errors
            logging.error("Failed to fetch g-study gradations for course %s: %s", course_id, exc)
            raise

        gradations = parse_gradation_list(unwrap_result(data, STUDY_OK_STATUS))
        if not gradations:
            logging.warning("No gradations were returned for course %s", course_id)
        return gradations

    def get_gstudy_syllabus(self, course_id: str, syllabus_id: str) -> Syllabus:
        path = GSTUDY_SYLLABUS_PATH.format(course_id=course_id, syllabus_id=syllabus_id)
        try:
            data = self._client.request_api(path)
        except Exception as exc:  # pragma: no cover - network errors
            logging.error("Failed to fetch glive syllabus %s: %s", syllabus_id, exc)
            raise

        result = unwrap_result(data, STUDY_OK_STATUS)
        if not isinstance(result, dict):
            raise RemoteAPIError(data.get("status"), f"syllabus {syllabus_id} has no body")
        return parse_syllabus(result)

    def get_ep_gradations(self, course_id: str) -> List[Gradation]:
        path = EPSTUDY_GRADATION_PATH.format(course_id=course_id)
        try:
            data = self._client.request_api(path)
        except Exception as exc:  # pragma: no cover - network errors
            logging.error("Failed to fetch ep-study gradations for course %s: %s", course_id, exc)
            raise

        return parse_gradation_list(unwrap_result(data, STUDY_OK_STATUS))

    def get_ep_syllabus(self, course_id: str, syllabus_id: str) -> List[Syllabus]:
        path = EPSTUDY_SYLLABUS_PATH.format(course_id=course_id, syllabus_id=syllabus_id)
        try:
            data = self._client.request_api(path, params={"show_own_teacher": "true"})
        except Exception as exc:  # pragma: no cover - network errors
            logging.error("Failed to fetch ep-study syllabus %s: %s", syllabus_id, exc)
            raise

        result = unwrap_result(data, STUDY_OK_STATUS)
        if not isinstance(result, dict) or "items" not in result:
            raise RemoteAPIError(data.get("status"), "no items found in ep syllabus response")
        return parse_syllabus_list(result["items"])
