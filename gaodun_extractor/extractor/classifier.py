"""Decides which of the two course layouts a course uses."""

from __future__ import annotations

import logging

from ..api.gateway import Gateway
from ..models import CourseSchema, Gradation
from .errors import NoGradationError, SchemaMismatchError


def classify_gradation(gradation: Gradation) -> CourseSchema:
    """A gradation with a glive root and no ep list is g-study; anything else is ep-study."""

    if gradation.glive_syllabus is not None and gradation.ep_syllabus is None:
        return CourseSchema.GSTUDY
    return CourseSchema.EPSTUDY


class SchemaClassifier:
    """Probes the g-study gradation listing to pick a walker.

    By default only the first gradation is inspected, which is how the app
    itself decides. ``strict`` inspects every gradation and refuses courses
    whose gradations disagree.
    """

    def __init__(self, gateway: Gateway) -> None:
        self._gateway = gateway

    def classify(self, course_id: str, strict: bool = False) -> CourseSchema:
        gradations = self._gateway.fetch_gradations(course_id, CourseSchema.GSTUDY)
        if not gradations:
            raise NoGradationError(f"no gradations found for course {course_id}")

        schema = classify_gradation(gradations[0])
        if strict:
            for gradation in gradations[1:]:
                other = classify_gradation(gradation)
                if other is not schema:
                    raise SchemaMismatchError(
                        f"course {course_id}: gradation {gradations[0].name!r} looks {schema.value} "
                        f"but {gradation.name!r} looks {other.value}"
                    )

        logging.info("Course %s uses the %s layout", course_id, schema.value)
        return schema
