import datetime

import pytest

from spacetraveling.utils import format_edited_at, format_publication_date

UTC = datetime.timezone.utc


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (datetime.datetime(2021, 3, 5, tzinfo=UTC), "05 mar 2021"),
        (datetime.datetime(2021, 2, 15, 23, 59, tzinfo=UTC), "15 fev 2021"),
        (datetime.datetime(2020, 12, 31, tzinfo=UTC), "31 dez 2020"),
        (None, None),
    ],
)
def test_format_publication_date(value, expected):
    assert format_publication_date(value) == expected


def test_format_edited_at_describes_later_edit():
    first = datetime.datetime(2021, 3, 25, 19, 25, tzinfo=UTC)
    last = datetime.datetime(2021, 3, 26, 8, 5, tzinfo=UTC)

    assert format_edited_at(first, last) == "* editado em 26 mar 2021, às 08:05"


def test_format_edited_at_is_none_when_never_edited():
    moment = datetime.datetime(2021, 3, 25, 19, 25, tzinfo=UTC)

    assert format_edited_at(moment, moment) is None
    assert format_edited_at(None, moment) is None
    assert format_edited_at(moment, None) is None
