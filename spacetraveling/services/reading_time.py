import math
from typing import Callable, Iterable

from spacetraveling.schemas.blog import ContentSection, RichText
from spacetraveling.services import rich_text

WORDS_PER_MINUTE = 200


def count_words(text: str) -> int:
    return len(text.split())


def estimate_reading_time(
    content: Iterable[ContentSection],
    as_text: Callable[[RichText], str] = rich_text.as_text,
) -> int:
    """
    Estimate reading minutes for a post's sections.
    Headings and bodies both count; an empty post reads in 0 minutes.
    """
    total_words = sum(
        count_words(section.heading) + count_words(as_text(section.body))
        for section in content
    )
    return math.ceil(total_words / WORDS_PER_MINUTE)
