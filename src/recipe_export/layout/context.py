"""
Module: recipe_export.layout.context

Purpose:
    Cursor-based sequential layout on a reportlab canvas.

    The context owns an explicit (x, y) cursor measured top-down in points
    and a style stack. Content is only ever appended: each line or image is
    drawn at the cursor, the cursor moves down, and a new page starts when
    the next item would cross the bottom margin. Positioning tricks (such
    as a photo beside the title) use saved cursor values, never rewrites.

    Everything drawn is also recorded as RenderedLine / PlacedImage so
    section renderers can be tested without parsing PDF output.

Key Classes:
    - LayoutContext: Cursor, style stack, wrapping and pagination

Dependencies:
    - reportlab: Canvas drawing, font metrics, links
    - recipe_export.layout.config: PageConfig
    - recipe_export.layout.models: TextStyle, Run, RenderedLine, PlacedImage

Used By:
    - recipe_export.output.sections: Section renderers
    - recipe_export.output.renderer: Document rendering
"""

from __future__ import annotations

import io
import logging
import re
from contextlib import contextmanager
from dataclasses import replace
from typing import Iterator, List, Optional, Sequence, Tuple

from reportlab.lib.colors import HexColor
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas as rl_canvas

from .config import PageConfig
from .models import Fragment, PlacedImage, RenderedLine, Run, TextStyle

logger = logging.getLogger(__name__)

_TOKEN_PATTERN = re.compile(r"\S+|\s+")

# Underline sits this far below the baseline (points)
UNDERLINE_OFFSET = 1.5
UNDERLINE_WIDTH = 0.75

ALIGNMENTS = ("left", "center", "right")

# (text, style, width)
_Item = Tuple[str, TextStyle, float]


class LayoutContext:
    """
    Explicit layout state for one document.

    Attributes:
        canvas: reportlab canvas being written
        page: Page configuration
        x: Left edge for text (top-down coordinates, points)
        y: Top-down Y of the next line
        page_number: Current page (1-indexed)
        lines: Every line drawn so far
        images: Every image drawn so far

    Example:
        >>> ctx = LayoutContext(rl_canvas.Canvas(buffer, pagesize=LETTER))
        >>> with ctx.styled(font=BOLD, size=16):
        ...     ctx.text("Ingredients:")
        >>> ctx.finish()
    """

    def __init__(
        self,
        canvas: rl_canvas.Canvas,
        page: Optional[PageConfig] = None,
        base_style: Optional[TextStyle] = None,
    ) -> None:
        self.canvas = canvas
        self.page = page or PageConfig()
        self.x = self.page.margin_left
        self.y = self.page.margin_top
        self.page_number = 1
        self.lines: List[RenderedLine] = []
        self.images: List[PlacedImage] = []
        self._styles: List[TextStyle] = [base_style or TextStyle()]
        self._side_image: Optional[PlacedImage] = None

    # ------------------------------------------------------------------
    # Style stack
    # ------------------------------------------------------------------

    @property
    def style(self) -> TextStyle:
        """Current text style."""
        return self._styles[-1]

    def push_style(self, **changes) -> TextStyle:
        """Push a copy of the current style with ``changes`` applied."""
        style = replace(self.style, **changes)
        self._styles.append(style)
        return style

    def pop_style(self) -> TextStyle:
        """Restore the previous style."""
        if len(self._styles) == 1:
            raise RuntimeError("Cannot pop the base text style")
        return self._styles.pop()

    @contextmanager
    def styled(self, **changes) -> Iterator[TextStyle]:
        """Apply style changes for the duration of a ``with`` block."""
        style = self.push_style(**changes)
        try:
            yield style
        finally:
            self.pop_style()

    # ------------------------------------------------------------------
    # Cursor and pagination
    # ------------------------------------------------------------------

    def line_height(self, size: Optional[float] = None) -> float:
        return (size if size is not None else self.style.size) * self.page.leading

    def gap(self, amount: Optional[float] = None) -> None:
        """Advance the cursor by ``amount`` (default: one line gap)."""
        self.y += self.page.line_gap if amount is None else amount

    def half_gap(self) -> None:
        self.gap(self.page.half_gap)

    def move_to(self, y: float) -> None:
        """Set the cursor to a previously saved position on this page."""
        self.y = y

    def ensure_space(self, height: float) -> bool:
        """
        Start a new page if ``height`` does not fit below the cursor.

        An item taller than a whole page is drawn at the top of a fresh page
        and allowed to overflow rather than looping forever.

        Returns:
            True if a new page was started
        """
        if self.y + height <= self.page.content_bottom:
            return False
        if self.y <= self.page.margin_top:
            logger.warning(
                f"Item of {height:.1f}pt overflows page {self.page_number} "
                f"({self.page.available_height:.1f}pt available)"
            )
            return False
        self.new_page()
        return True

    def new_page(self) -> None:
        self.canvas.showPage()
        self.page_number += 1
        self.y = self.page.margin_top
        self._side_image = None
        logger.debug(f"Started page {self.page_number}")

    def float_beside(self, image: PlacedImage) -> None:
        """Wrap following lines to the left of ``image`` until past its bottom."""
        self._side_image = image

    def _line_box(self, height: float) -> Tuple[float, float]:
        """Return (left, width) available for a line at the cursor."""
        left = self.x
        width = self.page.content_right - left
        side = self._side_image
        if (
            side is not None
            and side.page == self.page_number
            and self.y < side.bottom
            and self.y + height > side.top
        ):
            width = side.x - self.page.image_gutter - left
        return left, width

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def text(
        self,
        text: str,
        *,
        align: str = "left",
        style: Optional[TextStyle] = None,
    ) -> List[RenderedLine]:
        """Write text in one style, wrapping and breaking on newlines."""
        return self.write_runs([Run(text, style)], align=align)

    def write_runs(self, runs: Sequence[Run], *, align: str = "left") -> List[RenderedLine]:
        """
        Write mixed-style text as one or more wrapped lines.

        Runs flow into each other on the same line (e.g. a bold label
        followed by a regular value). A newline inside any run starts a new
        line; an empty line between newlines advances by one line height.

        Args:
            runs: Styled runs, in order
            align: "left", "center" or "right"

        Returns:
            Lines drawn
        """
        if align not in ALIGNMENTS:
            raise ValueError(f"Unknown alignment: {align!r}")

        paragraphs: List[List[Tuple[str, TextStyle]]] = [[]]
        for run in runs:
            style = run.style or self.style
            for i, part in enumerate(run.text.split("\n")):
                if i > 0:
                    paragraphs.append([])
                if part:
                    paragraphs[-1].append((part, style))

        drawn: List[RenderedLine] = []
        for pieces in paragraphs:
            drawn.extend(self._write_paragraph(pieces, align))
        return drawn

    def _write_paragraph(
        self,
        pieces: List[Tuple[str, TextStyle]],
        align: str,
    ) -> List[RenderedLine]:
        if not pieces:
            height = self.line_height()
            self.ensure_space(height)
            blank = RenderedLine(page=self.page_number, top=self.y, fragments=())
            self.lines.append(blank)
            self.y += height
            return [blank]

        size = max(style.size for _, style in pieces)
        height = self.line_height(size)
        drawn: List[RenderedLine] = []

        self.ensure_space(height)
        left, avail = self._line_box(height)
        line: List[_Item] = []
        line_width = 0.0

        for text, style in pieces:
            for token in _TOKEN_PATTERN.findall(text):
                width = stringWidth(token, style.font, style.size)
                if token.isspace():
                    if line:
                        line.append((token, style, width))
                        line_width += width
                    continue

                if line and line_width + width > avail:
                    drawn.append(self._draw_line(line, size, height, align, left, avail))
                    line, line_width = [], 0.0
                    self.ensure_space(height)
                    left, avail = self._line_box(height)

                # Hard-break words wider than a whole line
                while width > avail and len(token) > 1:
                    cut = _fit_chars(token, style, avail)
                    head = token[:cut]
                    drawn.append(self._draw_line(
                        [(head, style, stringWidth(head, style.font, style.size))],
                        size, height, align, left, avail,
                    ))
                    self.ensure_space(height)
                    left, avail = self._line_box(height)
                    token = token[cut:]
                    width = stringWidth(token, style.font, style.size)

                line.append((token, style, width))
                line_width += width

        if line:
            drawn.append(self._draw_line(line, size, height, align, left, avail))
        return drawn

    def _draw_line(
        self,
        items: List[_Item],
        size: float,
        height: float,
        align: str,
        left: float,
        avail: float,
    ) -> RenderedLine:
        """Draw one wrapped line at the cursor and advance past it."""
        while items and items[-1][0].isspace():
            items = items[:-1]

        merged = _merge_items(items)
        total = sum(width for _, _, width in merged)
        if align == "center":
            x = left + (avail - total) / 2
        elif align == "right":
            x = left + avail - total
        else:
            x = left

        baseline = self.page.height - (self.y + size)
        fragments: List[Fragment] = []
        for text, style, width in merged:
            self._draw_fragment(text, style, x, baseline, width)
            fragments.append(Fragment(text=text, style=style, x=x, width=width))
            x += width

        line = RenderedLine(page=self.page_number, top=self.y, fragments=tuple(fragments))
        self.lines.append(line)
        self.y += height
        return line

    def _draw_fragment(
        self,
        text: str,
        style: TextStyle,
        x: float,
        baseline: float,
        width: float,
    ) -> None:
        c = self.canvas
        color = HexColor(style.color)
        c.setFont(style.font, style.size)
        c.setFillColor(color)
        c.drawString(x, baseline, text)

        if style.underline and not text.isspace():
            c.saveState()
            c.setStrokeColor(color)
            c.setLineWidth(UNDERLINE_WIDTH)
            c.line(x, baseline - UNDERLINE_OFFSET, x + width, baseline - UNDERLINE_OFFSET)
            c.restoreState()

        if style.link:
            c.linkURL(
                style.link,
                (x, baseline - UNDERLINE_OFFSET * 2, x + width, baseline + style.size),
                relative=1,
                thickness=0,
            )

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    def draw_image(
        self,
        data: bytes,
        width: float,
        height: float,
        *,
        x: Optional[float] = None,
        top: Optional[float] = None,
    ) -> PlacedImage:
        """
        Draw encoded image bytes at (x, top) without moving the cursor.

        Starts a new page first if the image would cross the bottom margin,
        in which case it is placed at the top of the new page.

        Args:
            data: Encoded image (JPEG, PNG, ...)
            width: Placed width in points
            height: Placed height in points
            x: Left edge (default: left margin)
            top: Top-down Y (default: cursor)

        Returns:
            PlacedImage describing where the image went
        """
        if top is None:
            top = self.y
        if top + height > self.page.content_bottom and top > self.page.margin_top:
            self.new_page()
            top = self.y
        left = self.page.margin_left if x is None else x

        self.canvas.drawImage(
            ImageReader(io.BytesIO(data)),
            left,
            self.page.height - top - height,
            width=width,
            height=height,
            preserveAspectRatio=True,
            mask="auto",
        )
        placed = PlacedImage(page=self.page_number, x=left, top=top, width=width, height=height)
        self.images.append(placed)
        return placed

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def finish(self) -> None:
        """Close the last page and write the PDF to the canvas's file."""
        self.canvas.save()

    def text_lines(self) -> List[str]:
        """Plain text of every non-blank line drawn, in order."""
        return [line.text for line in self.lines if not line.is_blank]


def _fit_chars(token: str, style: TextStyle, avail: float) -> int:
    """Number of leading characters of ``token`` that fit in ``avail`` (at least 1)."""
    for cut in range(len(token) - 1, 0, -1):
        if stringWidth(token[:cut], style.font, style.size) <= avail:
            return cut
    return 1


def _merge_items(items: List[_Item]) -> List[_Item]:
    """Join consecutive items that share a style."""
    merged: List[_Item] = []
    for text, style, width in items:
        if merged and merged[-1][1] == style:
            prev_text, _, prev_width = merged[-1]
            merged[-1] = (prev_text + text, style, prev_width + width)
        else:
            merged.append((text, style, width))
    return merged
