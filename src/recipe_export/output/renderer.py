"""
Module: recipe_export.output.renderer

Purpose:
    Render one RecipeRecord to a PDF using ReportLab.
    Walks the ordered section policy, drawing every included section at
    the layout cursor, then finalizes the document.

Key Functions:
    - render_recipe(): Render to an open binary stream
    - render_recipe_bytes(): Render into memory

Dependencies:
    - reportlab: PDF generation
    - recipe_export.layout: LayoutContext, PageConfig
    - recipe_export.output.sections: SECTIONS

Used By:
    - recipe_export.controller: Export orchestration
"""

from __future__ import annotations

import io
import logging
from datetime import tzinfo
from typing import BinaryIO, Optional, Sequence, Tuple

from reportlab.pdfgen import canvas

from recipe_export.errors import RenderError
from recipe_export.images import ImageResolver
from recipe_export.layout import LayoutContext, PageConfig
from recipe_export.models import RecipeRecord

from .sections import SECTIONS, RenderedDocument, Section

logger = logging.getLogger(__name__)


def _get_creator() -> str:
    """Creator string embedded in PDF metadata."""
    from recipe_export import __version__
    return f"recipe_export v{__version__}"


def render_recipe(
    recipe: RecipeRecord,
    stream: BinaryIO,
    *,
    resolver: Optional[ImageResolver] = None,
    page: Optional[PageConfig] = None,
    tz: Optional[tzinfo] = None,
    sections: Sequence[Section] = SECTIONS,
) -> RenderedDocument:
    """
    Render a recipe document to an open binary stream.

    Sections are written once, in order, and the document is finalized
    (saved to ``stream``) before returning. Photo failures are swallowed by
    the image section; any other failure aborts this document.

    Args:
        recipe: Recipe to render
        stream: Writable binary stream receiving the PDF
        resolver: Photo resolver (None renders without photos)
        page: Page configuration (default: US Letter, 72pt margins)
        tz: Timezone for the creation date (default: local time)
        sections: Section policy (default: SECTIONS)

    Returns:
        RenderedDocument with the layout record and rendered section names

    Raises:
        RenderError: If any section fails or the PDF cannot be written

    Example:
        >>> with open("Soup.pdf", "wb") as f:
        ...     doc = render_recipe(recipe, f, resolver=resolver)
        >>> doc.sections[:3]
        ['title', 'created', 'rating']
    """
    page = page or PageConfig()

    try:
        c = canvas.Canvas(stream, pagesize=(page.width, page.height))
        c.setTitle(recipe.name)
        c.setCreator(_get_creator())

        doc = RenderedDocument(layout=LayoutContext(c, page), resolver=resolver, tz=tz)
        for section in sections:
            if not section.include(recipe):
                continue
            if section.render(doc, recipe) is False:
                continue
            doc.sections.append(section.name)
            if section.gap_after:
                doc.layout.gap()

        doc.layout.finish()
    except RenderError:
        raise
    except Exception as e:
        raise RenderError(f"Failed to render {recipe.name!r}: {e}", recipe.name) from e

    logger.debug(
        f"Rendered {recipe.name!r}: {doc.layout.page_number} page(s), "
        f"sections={','.join(doc.sections)}"
    )
    return doc


def render_recipe_bytes(
    recipe: RecipeRecord,
    **kwargs,
) -> Tuple[bytes, RenderedDocument]:
    """
    Render a recipe into memory.

    Nothing reaches disk unless rendering completes, so a failure never
    leaves a partial file behind.

    Args:
        recipe: Recipe to render
        **kwargs: Passed to render_recipe()

    Returns:
        (pdf_bytes, RenderedDocument)
    """
    buffer = io.BytesIO()
    doc = render_recipe(recipe, buffer, **kwargs)
    return buffer.getvalue(), doc
