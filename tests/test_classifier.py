import pytest

from gaodun_extractor.extractor.classifier import SchemaClassifier, classify_gradation
from gaodun_extractor.extractor.errors import NoGradationError, SchemaMismatchError
from gaodun_extractor.models import CourseSchema, Gradation, Syllabus
from gaodun_extractor.utils.http_client import AuthenticationError

GSTUDY_GRADATION = Gradation(id="1", name="Stage 1", syllabus_id="49752", glive_syllabus=Syllabus(id=1))
EPSTUDY_GRADATION = Gradation(id="17785", name="Stage 1", ep_syllabus=[Syllabus(id=2)])


def test_glive_root_without_ep_list_is_gstudy():
    assert classify_gradation(GSTUDY_GRADATION) is CourseSchema.GSTUDY


@pytest.mark.parametrize(
    "gradation",
    [
        EPSTUDY_GRADATION,
        Gradation(id="3", name="both", glive_syllabus=Syllabus(id=1), ep_syllabus=[]),
        Gradation(id="4", name="neither"),
    ],
)
def test_everything_else_is_epstudy(gradation):
    assert classify_gradation(gradation) is CourseSchema.EPSTUDY


def test_classify_uses_first_gradation_only(gateway):
    gateway.gradations[CourseSchema.GSTUDY] = [GSTUDY_GRADATION, EPSTUDY_GRADATION]
    assert SchemaClassifier(gateway).classify("33795") is CourseSchema.GSTUDY

    gateway.gradations[CourseSchema.GSTUDY] = [EPSTUDY_GRADATION, GSTUDY_GRADATION]
    assert SchemaClassifier(gateway).classify("17244") is CourseSchema.EPSTUDY


def test_classify_probes_gstudy_endpoint(gateway):
    gateway.gradations[CourseSchema.GSTUDY] = [EPSTUDY_GRADATION]
    SchemaClassifier(gateway).classify("17244")
    assert gateway.calls == [("fetch_gradations", ("17244", CourseSchema.GSTUDY))]


def test_classify_without_gradations_fails(gateway):
    gateway.gradations[CourseSchema.GSTUDY] = []
    with pytest.raises(NoGradationError):
        SchemaClassifier(gateway).classify("1")


def test_classify_propagates_gateway_errors(gateway):
    gateway.gradations[CourseSchema.GSTUDY] = AuthenticationError("expired")
    with pytest.raises(AuthenticationError):
        SchemaClassifier(gateway).classify("1")


def test_strict_mode_rejects_mixed_courses(gateway):
    gateway.gradations[CourseSchema.GSTUDY] = [GSTUDY_GRADATION, EPSTUDY_GRADATION]
    with pytest.raises(SchemaMismatchError):
        SchemaClassifier(gateway).classify("1", strict=True)


def test_strict_mode_accepts_uniform_courses(gateway):
    gateway.gradations[CourseSchema.GSTUDY] = [GSTUDY_GRADATION, GSTUDY_GRADATION]
    assert SchemaClassifier(gateway).classify("1", strict=True) is CourseSchema.GSTUDY
