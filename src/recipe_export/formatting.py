"""Filename, date and unit formatting.

Pure helpers shared by the renderer and the orchestrator: filename
sanitization, the two date representations (filename-safe and display),
and seconds-to-minutes conversion.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Optional, Union

from recipe_export.models import RecipeRecord

# Characters that are unsafe in filenames on at least one platform
_UNSAFE_FILENAME_CHARS = re.compile(r'[/\\?%*:|"<>]')

# Creation dates before this year are placeholders from the service
MIN_KNOWN_YEAR = 2000

UNKNOWN_DATE_TEXT = "Unknown"


@dataclass(frozen=True)
class DateLabel:
    """Creation date rendered for a filename and for display."""

    file_token: str
    display_text: str

    @property
    def is_unknown(self) -> bool:
        return not self.file_token


def sanitize_filename(name: str) -> str:
    """Replace filename-unsafe characters with '-' and strip whitespace.

    Args:
        name: Raw recipe name.

    Returns:
        Name safe to use as a single path component.

    Examples:
        >>> sanitize_filename(' Mac & Cheese: 2/3 "Best" ')
        'Mac & Cheese- 2-3 -Best-'
    """
    return _UNSAFE_FILENAME_CHARS.sub("-", name).strip()


def format_date(timestamp: Union[int, float], tz: Optional[tzinfo] = None) -> DateLabel:
    """Convert a creation timestamp to its filename token and display text.

    Args:
        timestamp: Seconds since the epoch.
        tz: Timezone for the calendar date (default: local time).

    Returns:
        DateLabel with ``MM-DD-YYYY`` / ``Month D, YYYY``, or ``""`` /
        ``"Unknown"`` when the year is before 2000.

    Examples:
        >>> from datetime import timezone
        >>> format_date(1704456000, tz=timezone.utc)
        DateLabel(file_token='01-05-2024', display_text='January 5, 2024')
        >>> format_date(0, tz=timezone.utc)
        DateLabel(file_token='', display_text='Unknown')
    """
    date = datetime.fromtimestamp(timestamp, tz)
    if date.year < MIN_KNOWN_YEAR:
        return DateLabel(file_token="", display_text=UNKNOWN_DATE_TEXT)
    return DateLabel(
        file_token=f"{date:%m-%d-%Y}",
        display_text=f"{date:%B} {date.day}, {date.year}",
    )


def format_number(value: Union[int, float, str]) -> str:
    """Render a number without a trailing '.0' for whole values.

    Fractional values keep full precision; nothing is rounded.

    Examples:
        >>> format_number(10.0), format_number(1.5), format_number(4)
        ('10', '1.5', '4')
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_minutes(seconds: Union[int, float, str]) -> str:
    """Convert a duration in seconds to minutes text.

    Numeric strings such as "600" are accepted.

    Examples:
        >>> format_minutes(600), format_minutes(90), format_minutes("600")
        ('10', '1.5', '10')
    """
    return format_number(float(seconds) / 60)


def document_filename(recipe: RecipeRecord, tz: Optional[tzinfo] = None) -> str:
    """Build the output filename (without extension) for a recipe.

    The creation date comes first so files sort chronologically; recipes
    with an unknown date get the bare name.
    """
    token = format_date(recipe.creation_timestamp, tz).file_token
    prefix = f"{token} - " if token else ""
    return prefix + sanitize_filename(recipe.name)
