"""
Module: recipe_export.layout.models

Purpose:
    Data models for page layout.
    Immutable dataclasses for text styles, styled runs, and the record of
    what a LayoutContext has drawn.

Key Classes:
    - TextStyle: Font, size, colour, underline and link target
    - Run: Text in a single style
    - Fragment: Part of a drawn line in a single style
    - RenderedLine: One drawn line of text
    - PlacedImage: One drawn image

Dependencies:
    - dataclasses (std)

Used By:
    - recipe_export.layout.context: Drawing and recording
    - recipe_export.output.sections: Section renderers
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Standard Type 1 fonts (always available to reportlab)
REGULAR = "Helvetica"
BOLD = "Helvetica-Bold"
OBLIQUE = "Helvetica-Oblique"

BLACK = "#000000"
LINK_BLUE = "#0000FF"


@dataclass(frozen=True)
class TextStyle:
    """
    Text style (immutable).

    Attributes:
        font: reportlab font name
        size: Font size in points
        color: Fill colour as hex string
        underline: Draw an underline below the text
        link: URL the text links to, if any

    Example:
        >>> TextStyle().bold.font
        'Helvetica-Bold'
    """

    font: str = REGULAR
    size: float = 12
    color: str = BLACK
    underline: bool = False
    link: Optional[str] = None

    @property
    def is_bold(self) -> bool:
        return self.font == BOLD

    @property
    def is_oblique(self) -> bool:
        return self.font == OBLIQUE

    @property
    def bold(self) -> "TextStyle":
        return TextStyle(BOLD, self.size, self.color, self.underline, self.link)

    @property
    def regular(self) -> "TextStyle":
        return TextStyle(REGULAR, self.size, self.color, self.underline, self.link)


@dataclass(frozen=True)
class Run:
    """Text in one style. ``style=None`` means the context's current style."""

    text: str
    style: Optional[TextStyle] = None


@dataclass(frozen=True)
class Fragment:
    """Part of a drawn line in a single style, with its x position."""

    text: str
    style: TextStyle
    x: float
    width: float


@dataclass(frozen=True)
class RenderedLine:
    """
    One line of text drawn on a page.

    Attributes:
        page: Page number (1-indexed)
        top: Top-down Y of the line box
        fragments: Styled pieces, left to right
    """

    page: int
    top: float
    fragments: tuple[Fragment, ...]

    @property
    def text(self) -> str:
        return "".join(f.text for f in self.fragments)

    @property
    def is_blank(self) -> bool:
        return not self.fragments


@dataclass(frozen=True)
class PlacedImage:
    """An image drawn on a page (top-down coordinates, points)."""

    page: int
    x: float
    top: float
    width: float
    height: float

    @property
    def bottom(self) -> float:
        return self.top + self.height
