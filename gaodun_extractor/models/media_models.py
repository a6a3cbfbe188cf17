"""Models for the normalized media descriptors produced by an extraction."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field

SITE_NAME = "高顿教育 gaodun.com"


class MediaType(str, Enum):
    VIDEO = "video"
    DOCUMENT = "document"


class Part(BaseModel):
    """One fetchable unit: a whole file or a single video segment."""

    url: str
    ext: str
    size: int = 0


class Stream(BaseModel):
    """A quality/rendition of a media item."""

    id: str
    quality: str
    size: int = 0
    parts: List[Part] = Field(default_factory=list)
    ext: str = ""
    need_mux: bool = False


class MediaDescriptor(BaseModel):
    """A downloadable item with its destination path and available streams."""

    site: str = SITE_NAME
    title: str
    type: MediaType
    url: str
    streams: Dict[str, Stream] = Field(default_factory=dict)


class BranchError(BaseModel):
    """A failure that only removed one branch from the result."""

    scope: str
    label: str
    message: str


class ExtractionResult(BaseModel):
    """Descriptors gathered from a (sub)tree plus the branch failures met on the way."""

    descriptors: List[MediaDescriptor] = Field(default_factory=list)
    errors: List[BranchError] = Field(default_factory=list)
