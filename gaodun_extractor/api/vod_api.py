"""API client for the glive vod endpoints (token exchange and quality listing)."""

from __future__ import annotations

import logging

from ..models import VideoInfo
from ..utils.http_client import HttpClient, RemoteAPIError
from .parsing import parse_video_info
from .study_api import unwrap_result

VOD_CHECK_PATH = "glive2-vod/api/v1/vod/check"
VOD_RESOURCE_PATH = "glive2-vod/api/v1/live/resource"

VOD_OK_STATUS = 200
VOD_HEADERS = {"isLiveVodAuthenticate": "true"}


class VodAPI:
    """Resolves replay rooms to playable codes and lists their encodings."""

    def __init__(self, http_client: HttpClient) -> None:
        self._client = http_client

    def check_live_token(self, room_id: str, token: str) -> str:
        params = {"roomId": room_id, "token": token}
        try:
            data = self._client.request_api(VOD_CHECK_PATH, params=params, extra_headers=VOD_HEADERS)
        except Exception as exc:  # pragma: no cover - network errors
            logging.error("Failed to check glive vod for room %s: %s", room_id, exc)
            raise

        result = unwrap_result(data, VOD_OK_STATUS)
        code = str(result.get("code") or "") if isinstance(result, dict) else ""
        if not code:
            raise RemoteAPIError(data.get("status"), f"room {room_id} returned no video code")
        return code

    def get_video_info(self, code: str, resolution: str = "SD", channel: int = 0) -> VideoInfo:
        params = {"code": code, "res": resolution, "channel": channel}
        try:
            data = self._client.request_api(VOD_RESOURCE_PATH, params=params, extra_headers=VOD_HEADERS)
        except Exception as exc:  # pragma: no cover - network errors
            logging.error("Failed to fetch video resource %s: %s", code, exc)
            raise

        return parse_video_info(unwrap_result(data, VOD_OK_STATUS))
