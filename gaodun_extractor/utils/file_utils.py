"""Helpers for building filesystem-safe destination paths."""

from __future__ import annotations

import os
import re

INVALID_FILENAME_CHARS = re.compile(r"[\\/:*?\"<>|]")
MAX_NAME_LENGTH = 100


def sanitize_filename(value: str) -> str:
    """Replaces characters that are invalid on most filesystems with ``-``.

    Leading and trailing spaces and dots are removed and the result is capped
    at ``MAX_NAME_LENGTH`` characters. An empty input gives an empty output,
    so callers pick their own fallback name.
    """

    sanitized = INVALID_FILENAME_CHARS.sub("-", value or "").strip(" .")
    if len(sanitized) > MAX_NAME_LENGTH:
        sanitized = sanitized[:MAX_NAME_LENGTH].rstrip(" .")
    return sanitized


def build_base_directory(course_id: str, gradation_name: str, syllabus_name: str) -> str:
    """Returns the relative folder that groups the resources of one syllabus node."""

    return os.path.join(course_id, sanitize_filename(gradation_name), sanitize_filename(syllabus_name))


def build_destination(base_dir: str, title: str, fallback: str) -> str:
    safe_name = sanitize_filename(title) or fallback
    return os.path.join(base_dir, safe_name)
