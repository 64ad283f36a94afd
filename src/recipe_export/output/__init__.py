"""
Module: recipe_export.output

Purpose:
    Document rendering and archive output.
    Renders recipes to PDF using ReportLab and serializes the collection
    to JSON.

Key Functions:
    - render_recipe(): Render one recipe to a stream
    - render_recipe_bytes(): Render one recipe into memory
    - write_archive(): Write the JSON archive

Dependencies:
    - reportlab: PDF generation
    - recipe_export.layout: LayoutContext

Used By:
    - recipe_export.controller: Export orchestration
"""

from .archive import serialize_recipes, write_archive
from .renderer import render_recipe, render_recipe_bytes
from .sections import SECTION_NAMES, SECTIONS, RenderedDocument, Section

__all__ = [
    "render_recipe",
    "render_recipe_bytes",
    "serialize_recipes",
    "write_archive",
    "RenderedDocument",
    "Section",
    "SECTIONS",
    "SECTION_NAMES",
]
