"""Course classification, tree walking, and resource resolution."""

from .aggregator import RequestGate, collect, gather_branches
from .classifier import SchemaClassifier, classify_gradation
from .errors import (
    CourseIDNotFoundError,
    ExtractionError,
    LiveLinkError,
    NoGradationError,
    NoStreamsError,
    SchemaMismatchError,
)
from .gaodun import GaodunExtractor
from .locator import extract_course_id, extract_room_and_token
from .m3u8_parser import M3U8Parser
from .resolver import ResourceResolver
from .walker import EpResourceMapper, EpStudyWalker, GStudyWalker

__all__ = [
    "GaodunExtractor",
    "SchemaClassifier",
    "classify_gradation",
    "GStudyWalker",
    "EpStudyWalker",
    "EpResourceMapper",
    "ResourceResolver",
    "M3U8Parser",
    "RequestGate",
    "collect",
    "gather_branches",
    "extract_course_id",
    "extract_room_and_token",
    "ExtractionError",
    "CourseIDNotFoundError",
    "LiveLinkError",
    "NoGradationError",
    "SchemaMismatchError",
    "NoStreamsError",
]
