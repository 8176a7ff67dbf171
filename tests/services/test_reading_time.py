import pytest

from spacetraveling.schemas.blog import ContentSection
from spacetraveling.services.reading_time import count_words, estimate_reading_time
from tests.conftest import paragraph


def words(n: int) -> str:
    return " ".join(["palavra"] * n)


def test_heading_and_body_words_are_summed():
    content = [ContentSection(heading="A B", body=[paragraph("C D E")])]

    assert estimate_reading_time(content) == 1


def test_empty_content_reads_in_zero_minutes():
    assert estimate_reading_time([]) == 0


def test_all_empty_text_reads_in_zero_minutes():
    content = [ContentSection(heading="   ", body=[paragraph("")])]

    assert estimate_reading_time(content) == 0


@pytest.mark.parametrize(("total", "expected"), [(200, 1), (400, 2), (401, 3)])
def test_minutes_round_up_at_boundaries(total, expected):
    content = [
        ContentSection(heading=words(1), body=[paragraph(words(total - 101))]),
        ContentSection(heading="", body=[paragraph(words(50)), paragraph(words(50))]),
    ]

    assert estimate_reading_time(content) == expected


def test_uses_given_text_conversion():
    content = [ContentSection(heading="Title", body=[{"opaque": True}])]

    assert estimate_reading_time(content, as_text=lambda body: words(399)) == 2


def test_count_words_splits_on_whitespace_runs():
    assert count_words("  one\ttwo\n\nthree   four ") == 4
    assert count_words("") == 0
