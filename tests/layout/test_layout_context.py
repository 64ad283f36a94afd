"""
Unit tests for LayoutContext: style stack, wrapping, pagination and
side images.
"""

import io

import pytest
from reportlab.pdfgen import canvas

from recipe_export.layout import (
    BOLD,
    OBLIQUE,
    LayoutContext,
    PageConfig,
    PlacedImage,
    Run,
    TextStyle,
)

from conftest import make_image_bytes


def _context(page: PageConfig = None) -> LayoutContext:
    page = page or PageConfig()
    return LayoutContext(canvas.Canvas(io.BytesIO(), pagesize=(page.width, page.height)), page)


def _line_width(line) -> float:
    return sum(f.width for f in line.fragments)


class TestPageConfig:
    """Tests for PageConfig."""

    def test_init_when_defaults_then_letter_with_inch_margins(self):
        page = PageConfig()

        assert (page.width, page.height) == (612, 792)
        assert page.available_width == 468
        assert page.content_right == 540
        assert page.content_bottom == 720
        assert page.half_gap == 7

    def test_init_when_margins_exceed_width_then_raises(self):
        with pytest.raises(ValueError, match="width"):
            PageConfig(width=100, margin_left=60, margin_right=60)


class TestStyleStack:
    """Tests for push_style/pop_style/styled."""

    def test_push_pop_when_nested_then_restores(self):
        ctx = _context()
        base = ctx.style

        ctx.push_style(font=BOLD, size=16)
        assert ctx.style.font == BOLD and ctx.style.size == 16
        ctx.pop_style()

        assert ctx.style == base

    def test_pop_when_only_base_then_raises(self):
        with pytest.raises(RuntimeError):
            _context().pop_style()

    def test_styled_when_exception_then_still_restored(self):
        ctx = _context()
        base = ctx.style

        with pytest.raises(KeyError):
            with ctx.styled(font=OBLIQUE):
                raise KeyError("boom")

        assert ctx.style == base

    def test_text_when_no_explicit_style_then_uses_current(self):
        ctx = _context()

        with ctx.styled(font=BOLD):
            line = ctx.text("Heading")[0]

        assert line.fragments[0].style.font == BOLD


class TestTextLayout:
    """Tests for text writing and wrapping."""

    def test_text_when_short_then_one_line_at_cursor(self):
        """A short line is drawn at the top margin and advances by the leading."""
        ctx = _context()

        lines = ctx.text("Hello")

        assert len(lines) == 1
        assert lines[0].top == 72
        assert lines[0].fragments[0].x == 72
        assert ctx.y == pytest.approx(72 + 12 * 1.2)

    def test_text_when_long_then_wraps_within_width(self):
        """Wrapped lines fit the content width and keep every word in order."""
        # Arrange
        page = PageConfig(width=200, margin_left=20, margin_right=20)
        ctx = _context(page)
        text = " ".join(f"word{i}" for i in range(60))

        # Act
        lines = ctx.text(text)

        # Assert
        assert len(lines) > 1
        assert all(_line_width(line) <= page.available_width + 1e-6 for line in lines)
        assert " ".join(line.text for line in lines) == text

    def test_text_when_word_wider_than_line_then_hard_broken(self):
        page = PageConfig(width=200, margin_left=20, margin_right=20)
        ctx = _context(page)
        word = "x" * 200

        lines = ctx.text(word)

        assert len(lines) > 1
        assert all(_line_width(line) <= page.available_width + 1e-6 for line in lines)
        assert "".join(line.text for line in lines) == word

    def test_text_when_newlines_then_separate_lines_and_blank(self):
        ctx = _context()

        lines = ctx.text("one\n\ntwo")

        assert [line.text for line in lines] == ["one", "", "two"]
        assert lines[1].is_blank
        assert ctx.text_lines() == ["one", "two"]

    def test_write_runs_when_mixed_styles_then_one_line_two_fragments(self):
        """A bold label and an oblique value share a line."""
        ctx = _context()
        body = TextStyle()

        line = ctx.write_runs([Run("Created:", body.bold), Run(" Unknown", TextStyle(OBLIQUE))])[0]

        assert line.text == "Created: Unknown"
        assert [f.style.font for f in line.fragments] == [BOLD, OBLIQUE]
        assert line.fragments[1].x == pytest.approx(line.fragments[0].x + line.fragments[0].width)

    def test_text_when_centered_then_equal_margins(self):
        ctx = _context()

        fragment = ctx.text("Title", align="center")[0].fragments[0]

        left_space = fragment.x - 72
        right_space = 540 - (fragment.x + fragment.width)
        assert left_space == pytest.approx(right_space)

    def test_text_when_unknown_alignment_then_raises(self):
        with pytest.raises(ValueError, match="alignment"):
            _context().text("x", align="justify")


class TestPagination:
    """Tests for page breaks."""

    def test_text_when_page_full_then_continues_on_next_page(self):
        """The line that would cross the bottom margin starts page 2."""
        # Arrange: 160pt of content height holds 11 lines of 14.4pt
        page = PageConfig(height=200, margin_top=20, margin_bottom=20)
        ctx = _context(page)

        # Act
        lines = ctx.text("\n".join(f"line {i}" for i in range(12)))

        # Assert
        assert [line.page for line in lines] == [1] * 11 + [2]
        assert lines[11].top == 20
        assert ctx.page_number == 2
        assert all(line.top + 14.4 <= page.content_bottom + 1e-6 for line in lines)

    def test_ensure_space_when_item_taller_than_page_then_no_new_page(self):
        """An oversized item at the top of a page does not loop forever."""
        page = PageConfig(height=200, margin_top=20, margin_bottom=20)
        ctx = _context(page)

        assert ctx.ensure_space(500) is False
        assert ctx.page_number == 1


class TestImages:
    """Tests for draw_image and float_beside."""

    def test_draw_image_when_placed_then_cursor_unchanged(self):
        ctx = _context()
        ctx.text("Title")
        y = ctx.y

        placed = ctx.draw_image(make_image_bytes(), 200, 100, x=340)

        assert placed == PlacedImage(page=1, x=340, top=y, width=200, height=100)
        assert ctx.y == y
        assert ctx.images == [placed]

    def test_draw_image_when_crossing_bottom_then_moves_to_new_page(self):
        ctx = _context()
        ctx.move_to(700)

        placed = ctx.draw_image(make_image_bytes(), 200, 100)

        assert placed.page == 2
        assert placed.top == 72

    def test_float_beside_when_text_follows_then_wraps_left_of_image(self):
        """Lines beside the image stay left of it; lines below use full width."""
        # Arrange
        ctx = _context()
        placed = ctx.draw_image(make_image_bytes(), 200, 100, x=340, top=72)
        ctx.float_beside(placed)
        narrow = 340 - 12 - 72

        # Act
        lines = ctx.text(" ".join(["lorem"] * 200))

        # Assert
        beside = [line for line in lines if line.top < placed.bottom]
        below = [line for line in lines if line.top >= placed.bottom]
        assert beside and below
        assert all(_line_width(line) <= narrow + 1e-6 for line in beside)
        assert any(_line_width(line) > narrow for line in below)

    def test_float_beside_when_new_page_then_cleared(self):
        ctx = _context()
        ctx.float_beside(PlacedImage(page=1, x=340, top=72, width=200, height=600))

        ctx.new_page()
        line = ctx.text(" ".join(["lorem"] * 20))[0]

        assert _line_width(line) > 340 - 12 - 72
