import datetime
from typing import Optional

PT_BR_MONTHS = (
    "jan",
    "fev",
    "mar",
    "abr",
    "mai",
    "jun",
    "jul",
    "ago",
    "set",
    "out",
    "nov",
    "dez",
)


def format_publication_date(value: Optional[datetime.datetime]) -> Optional[str]:
    """Format a timestamp as ``dd MMM yyyy`` with pt-BR month abbreviations."""
    if value is None:
        return None
    return f"{value.day:02d} {PT_BR_MONTHS[value.month - 1]} {value.year}"


def format_edited_at(
    first: Optional[datetime.datetime], last: Optional[datetime.datetime]
) -> Optional[str]:
    """
    Describe the last edit of a post, or None when it was never edited
    after its first publication.
    """
    if last is None or first is None or last == first:
        return None
    return f"* editado em {format_publication_date(last)}, às {last:%H:%M}"
