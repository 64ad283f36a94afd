"""
Module: recipe_export.layout.config

Purpose:
    Configuration for the page layout engine.
    Defines page dimensions, margins, and vertical spacing.

Key Classes:
    - PageConfig: Immutable page configuration

Dependencies:
    - reportlab: Page size constants

Used By:
    - recipe_export.layout.context: LayoutContext
    - recipe_export.output.renderer: Document rendering
"""

from __future__ import annotations

from dataclasses import dataclass

from reportlab.lib.pagesizes import LETTER

# US Letter in points (1/72 inch)
LETTER_WIDTH_PT, LETTER_HEIGHT_PT = LETTER


@dataclass(frozen=True)
class PageConfig:
    """
    Configuration for page layout (immutable).

    All values are in points.

    Attributes:
        width: Page width
        height: Page height
        margin_top: Top margin
        margin_bottom: Bottom margin
        margin_left: Left margin
        margin_right: Right margin
        line_gap: Vertical space added after each section
        leading: Line height as a multiple of font size
        image_gutter: Horizontal space kept between text and a side image

    Example:
        >>> config = PageConfig()
        >>> config.available_width
        468.0
    """

    # Page dimensions
    width: float = LETTER_WIDTH_PT
    height: float = LETTER_HEIGHT_PT

    # Margins
    margin_top: float = 72
    margin_bottom: float = 72
    margin_left: float = 72
    margin_right: float = 72

    # Spacing
    line_gap: float = 14
    leading: float = 1.2
    image_gutter: float = 12

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.width <= 0:
            raise ValueError(f"width must be positive: {self.width}")
        if self.height <= 0:
            raise ValueError(f"height must be positive: {self.height}")
        if self.available_width <= 0:
            raise ValueError("Margins exceed page width")
        if self.available_height <= 0:
            raise ValueError("Margins exceed page height")
        if self.line_gap < 0:
            raise ValueError(f"line_gap must be non-negative: {self.line_gap}")

    @property
    def half_gap(self) -> float:
        """Spacing between sub-items such as individual steps."""
        return self.line_gap / 2

    @property
    def available_width(self) -> float:
        """Width available for content (excluding margins)."""
        return self.width - self.margin_left - self.margin_right

    @property
    def available_height(self) -> float:
        """Height available for content (excluding margins)."""
        return self.height - self.margin_top - self.margin_bottom

    @property
    def content_right(self) -> float:
        """X coordinate of the right margin."""
        return self.width - self.margin_right

    @property
    def content_bottom(self) -> float:
        """Top-down Y coordinate of the bottom margin."""
        return self.height - self.margin_bottom
