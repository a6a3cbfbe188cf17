import pytest

from gaodun_extractor.extractor.errors import CourseIDNotFoundError, LiveLinkError
from gaodun_extractor.extractor.locator import extract_course_id, extract_room_and_token

from conftest import REPLAY_LINK


@pytest.mark.parametrize(
    "url",
    [
        "https://gaodun.com/course?course_id=17244",
        "https://gaodun.com/course?courseId=17244",
        "https://gaodun.com/course/17244",
        "https://gaodun.com/course/17244/detail?tab=syllabus",
        "https://m.gaodun.com/study?from=app&courseId=17244&x=1",
    ],
)
def test_extract_course_id(url):
    assert extract_course_id(url) == "17244"


def test_query_parameter_wins_over_path():
    assert extract_course_id("https://gaodun.com/course/111?course_id=222") == "222"


@pytest.mark.parametrize("url", ["https://gaodun.com/invalid", "https://gaodun.com/course/abc", ""])
def test_extract_course_id_not_found(url):
    with pytest.raises(CourseIDNotFoundError):
        extract_course_id(url)


def test_extract_room_and_token_discards_record_and_device():
    assert extract_room_and_token(REPLAY_LINK) == ("room-42", "tok99")


@pytest.mark.parametrize(
    "url",
    [
        "",
        "https://gaodun.com/replay?roomId=1&token=2",
        "gaodunapp://gd/liveroom/v2/replays/detail?recordId=rec01&did=dev01&roomId=room-42",
    ],
)
def test_extract_room_and_token_rejects_other_links(url):
    with pytest.raises(LiveLinkError):
        extract_room_and_token(url)
