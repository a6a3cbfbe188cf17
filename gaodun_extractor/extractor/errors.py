"""Exceptions raised by the extraction engine."""

from __future__ import annotations


class ExtractionError(Exception):
    """Base class for extraction failures."""


class CourseIDNotFoundError(ExtractionError):
    """The input URL does not carry a course id."""


class LiveLinkError(ExtractionError):
    """A replay deep link lacks a room id or token."""


class NoGradationError(ExtractionError):
    """The course has no gradations, so its layout cannot be determined."""


class SchemaMismatchError(ExtractionError):
    """Gradations of one course disagree about the course layout."""


class NoStreamsError(ExtractionError):
    """A video resource produced no usable stream."""
