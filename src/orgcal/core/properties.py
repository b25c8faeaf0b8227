"""Event styling and description derived from a heading's property drawer.

Property keys are matched exactly and may repeat. The description collects
every DESCRIPTION entry; the colors take the last matching entry.
"""

from .outline import Heading

DESCRIPTION_KEY = "DESCRIPTION"
BG_COLOR_KEY = "FC_BG_COLOR"
TXT_COLOR_KEY = "FC_TXT_COLOR"
LINE_BREAK = "<br>"


def title_with_keyword(heading: Heading, prefix: str) -> str:
    """Prefix + optional TODO keyword + raw title."""
    keyword = f"{heading.keyword} " if heading.keyword else ""
    return f"{prefix}{keyword}{heading.raw}"


def title_without_keyword(heading: Heading, prefix: str) -> str:
    return f"{prefix}{heading.raw}"


def make_description(heading: Heading) -> str:
    """Join every DESCRIPTION value, each followed by ``<br>``.

    Falls back to the heading title (with keyword) when there is none.
    """
    description = "".join(
        f"{value}{LINE_BREAK}" for key, value in heading.properties if key == DESCRIPTION_KEY
    )
    if not description:
        return title_with_keyword(heading, "")
    return description


def make_color(heading: Heading) -> str | None:
    """Background color: last FC_BG_COLOR value, or None if missing/empty."""
    color = ""
    for key, value in heading.properties:
        if key == BG_COLOR_KEY:
            color = value
    return color or None


def make_text_color(heading: Heading) -> str | None:
    """Text color: last FC_TXT_COLOR value, or None if missing/empty."""
    text_color = ""
    for key, value in heading.properties:
        if key == TXT_COLOR_KEY:
            text_color = value
    return text_color or None
