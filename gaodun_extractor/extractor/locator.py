"""Pattern matchers for identifiers embedded in gaodun URLs."""

from __future__ import annotations

import re
from typing import Tuple

from .errors import CourseIDNotFoundError, LiveLinkError

COURSE_ID_PARAM = re.compile(r"(?:course_id|courseId)=(\d+)")
COURSE_ID_PATH = re.compile(r"/course/(\d+)")
REPLAY_LINK = re.compile(
    r"gaodunapp://gd/liveroom/v2/replays/detail\?recordId=([a-zA-Z0-9]+)"
    r"&did=[a-zA-Z0-9]+&roomId=([a-zA-Z0-9-]+)&token=([a-zA-Z0-9]+)"
)


def extract_course_id(url: str) -> str:
    """Returns the course id from a ``course_id``/``courseId`` query or a ``/course/<id>`` path."""

    for pattern in (COURSE_ID_PARAM, COURSE_ID_PATH):
        match = pattern.search(url or "")
        if match:
            return match.group(1)
    raise CourseIDNotFoundError(f"course ID not found in URL: {url}")


def extract_room_and_token(url: str) -> Tuple[str, str]:
    """Returns ``(room_id, token)`` from an app replay deep link."""

    match = REPLAY_LINK.search(url or "")
    if not match:
        raise LiveLinkError("room ID and token not found in URL")
    return match.group(2), match.group(3)
