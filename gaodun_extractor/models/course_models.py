"""Pydantic models that describe gradations, syllabus trees, and raw resources."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, Field


class CourseSchema(str, Enum):
    """The two course layouts the gateway serves."""

    GSTUDY = "g-study"
    EPSTUDY = "ep-study"


class Resource(BaseModel):
    """A leaf media record inside a syllabus node."""

    id: int = 0
    title: str = ""
    discriminator: str = ""
    duration: Optional[int] = None
    category: int = 0
    description: str = ""
    uri: str = ""
    extension: str = ""
    mime: str = ""
    path: str = ""
    video_id: str = ""
    live_status: str = ""
    filesize: str = ""
    file_size_human: str = ""
    live_url_playback_app: str = ""


class Syllabus(BaseModel):
    """A chapter or lesson node; nested through ``children``."""

    id: int = 0
    item_id: int = 0
    name: str = ""
    type: str = ""
    depth: str = ""
    is_resource: bool = False
    resource_total: int = 0
    parent_id: str = ""
    children: List["Syllabus"] = Field(default_factory=list)
    pre_class_resource: List[Resource] = Field(default_factory=list)
    in_class_main_resource: List[Resource] = Field(default_factory=list)
    in_class_assist_resource: List[Resource] = Field(default_factory=list)
    after_class_resource: List[Resource] = Field(default_factory=list)

    def resource_slots(self) -> Iterator[Tuple[str, List[Resource]]]:
        """Yields ``(label, resources)`` for the four slots in class order."""

        yield "pre-class", self.pre_class_resource
        yield "in-class-main", self.in_class_main_resource
        yield "in-class-assist", self.in_class_assist_resource
        yield "after-class", self.after_class_resource


class Gradation(BaseModel):
    """A course stage, the top level of the course hierarchy."""

    id: str = ""
    name: str = ""
    description: str = ""
    syllabus_id: str = ""
    course_id: str = ""
    children: List["Gradation"] = Field(default_factory=list)
    glive_syllabus: Optional[Syllabus] = None
    # None when the payload lacks the field, which is what classification keys on.
    ep_syllabus: Optional[List[Syllabus]] = None

    def identity(self, schema: CourseSchema) -> str:
        return self.syllabus_id if schema is CourseSchema.GSTUDY else self.id


class VideoQuality(BaseModel):
    """One encoding of a video as listed by the vod resource endpoint."""

    available: int = 0
    file_size: int = 0
    is_watermark: int = 0
    path: str = ""
    resolution: str = ""
    resolution_name: str = ""
    transcode_id: str = ""

    @property
    def is_usable(self) -> bool:
        return self.available == 1 and bool(self.path)


class VideoInfo(BaseModel):
    """Quality listing for one playable video code."""

    title: str = ""
    duration: int = 0
    encrypt: int = 0
    default_type: str = ""
    qualities: Dict[str, VideoQuality] = Field(default_factory=dict)


Syllabus.model_rebuild()
Gradation.model_rebuild()
