"""
Module: recipe_export.layout

Purpose:
    Cursor-based page layout for recipe documents.
    Draws styled, wrapped text and images sequentially onto a reportlab
    canvas, starting new pages as needed.

Key Classes:
    - PageConfig: Page size, margins and spacing
    - LayoutContext: Cursor, style stack and drawing
    - TextStyle, Run: Inline styling
    - RenderedLine, PlacedImage: Record of drawn content

Dependencies:
    - reportlab: PDF canvas

Used By:
    - recipe_export.output: Section rendering
"""

from .config import PageConfig
from .context import LayoutContext
from .models import (
    BLACK,
    BOLD,
    LINK_BLUE,
    OBLIQUE,
    REGULAR,
    Fragment,
    PlacedImage,
    RenderedLine,
    Run,
    TextStyle,
)

__all__ = [
    # Config
    "PageConfig",
    # Context
    "LayoutContext",
    # Models
    "TextStyle",
    "Run",
    "Fragment",
    "RenderedLine",
    "PlacedImage",
    # Fonts and colours
    "REGULAR",
    "BOLD",
    "OBLIQUE",
    "BLACK",
    "LINK_BLUE",
]
