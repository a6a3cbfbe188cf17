"""Data models for the course tree and the media descriptors extracted from it."""

from .course_models import CourseSchema, Gradation, Resource, Syllabus, VideoInfo, VideoQuality
from .media_models import (
    SITE_NAME,
    BranchError,
    ExtractionResult,
    MediaDescriptor,
    MediaType,
    Part,
    Stream,
)

__all__ = [
    "CourseSchema",
    "Gradation",
    "Syllabus",
    "Resource",
    "VideoQuality",
    "VideoInfo",
    "SITE_NAME",
    "MediaType",
    "Part",
    "Stream",
    "MediaDescriptor",
    "BranchError",
    "ExtractionResult",
]
