"""
Module: recipe_export.output.sections

Purpose:
    The section policy for recipe documents, as data.

    SECTIONS is an ordered tuple of Section records. Each record pairs an
    inclusion predicate with a renderer, so both the order of sections and
    the rule for including each one are fixed here rather than by the
    sequence of calls in the renderer. Renderers only draw through the
    LayoutContext they are handed and can be exercised one at a time.

Key Classes:
    - Section: name + include predicate + render function
    - RenderedDocument: Per-document state handed to every renderer

Key Constants:
    - SECTIONS: Title, Image, Created, Source, Servings, Rating, Times,
      Categories, Notes (early), Ingredients, Instructions,
      Preparation Steps, Notes (late), Nutritional Info

Dependencies:
    - recipe_export.layout: LayoutContext, TextStyle, Run
    - recipe_export.images: ImageResolver
    - recipe_export.formatting: Dates and numbers

Used By:
    - recipe_export.output.renderer: render_recipe()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import tzinfo
from typing import Callable, List, Optional

from recipe_export.errors import ImageFetchFailed
from recipe_export.formatting import format_date, format_minutes, format_number
from recipe_export.images import ImageResolver
from recipe_export.layout import (
    BOLD,
    LINK_BLUE,
    OBLIQUE,
    REGULAR,
    LayoutContext,
    Run,
    TextStyle,
)
from recipe_export.models import RecipeRecord, is_present

logger = logging.getLogger(__name__)

# Font sizes (points)
TITLE_SIZE = 24
HEADING_SIZE = 16
EARLY_NOTES_HEADING_SIZE = 14
BODY_SIZE = 12

NO_RATING_TEXT = "No rating available"


@dataclass
class RenderedDocument:
    """
    State for one document while it is rendered.

    Attributes:
        layout: Layout context drawing onto the PDF canvas
        resolver: Photo resolver (None disables the image section)
        tz: Timezone for creation dates (None = local time)
        sections: Names of the sections rendered, in order
        image_error: Message of a swallowed photo failure, if any
    """

    layout: LayoutContext
    resolver: Optional[ImageResolver] = None
    tz: Optional[tzinfo] = None
    sections: List[str] = field(default_factory=list)
    image_error: Optional[str] = None


@dataclass(frozen=True)
class Section:
    """
    One labelled block of a recipe document.

    Attributes:
        name: Section identifier
        include: Predicate deciding whether the recipe gets this section
        render: Draws the section at the cursor; returning False means
            nothing was drawn and the section is not recorded
        gap_after: Add a line gap after the section
    """

    name: str
    include: Callable[[RecipeRecord], bool]
    render: Callable[[RenderedDocument, RecipeRecord], Optional[bool]]
    gap_after: bool = True


def _always(recipe: RecipeRecord) -> bool:
    return True


def _body() -> TextStyle:
    return TextStyle(REGULAR, BODY_SIZE)


def _link(url: str) -> TextStyle:
    return TextStyle(REGULAR, BODY_SIZE, LINK_BLUE, underline=True, link=url)


def _labelled(layout: LayoutContext, label: str, value: str, value_style: Optional[TextStyle] = None) -> None:
    """Bold label followed by the value on the same line."""
    body = _body()
    layout.write_runs([Run(label, body.bold), Run(f" {value}", value_style or body)])


def _heading(layout: LayoutContext, title: str) -> None:
    layout.text(title, style=TextStyle(BOLD, HEADING_SIZE))
    layout.half_gap()


# ─────────────────────────────────────────────────────────────────────────────
# Section renderers
# ─────────────────────────────────────────────────────────────────────────────

def render_title(doc: RenderedDocument, recipe: RecipeRecord) -> None:
    doc.layout.text(recipe.name, align="center", style=TextStyle(BOLD, TITLE_SIZE))


def render_image(doc: RenderedDocument, recipe: RecipeRecord) -> bool:
    """
    Draw the recipe photo right-aligned below the title.

    The photo's top is the cursor position after the title. The cursor is
    left at that same position so the metadata starts level with the photo
    and wraps to its left. Fetch, decode and drawing failures are logged and
    the document continues without a photo.

    Returns:
        True if a photo was drawn
    """
    if doc.resolver is None:
        logger.debug(f"No image resolver, skipping photo for {recipe.name}")
        return False

    layout = doc.layout
    anchor = layout.y
    try:
        image = doc.resolver.resolve(recipe.primary_photo_id)
        placed = layout.draw_image(
            image.data,
            image.placed_width,
            image.placed_height,
            x=layout.page.content_right - image.placed_width,
            top=anchor,
        )
    except Exception as e:
        doc.image_error = str(e)
        logger.error(f"Failed to add photo for {recipe.name}: {e}")
        return False

    layout.move_to(placed.top)
    layout.float_beside(placed)
    return True


def render_created(doc: RenderedDocument, recipe: RecipeRecord) -> None:
    date = format_date(recipe.creation_timestamp, doc.tz)
    value_style = TextStyle(OBLIQUE if date.is_unknown else REGULAR, BODY_SIZE)
    _labelled(doc.layout, "Created:", date.display_text, value_style)


def render_source(doc: RenderedDocument, recipe: RecipeRecord) -> None:
    """
    Source block.

    With both a name and a URL the name becomes a link to the URL. With only
    one of them it is shown alone; a lone URL gets its own "Source URL:"
    label and is still clickable.
    """
    layout = doc.layout
    has_name = is_present(recipe.source_name)
    has_url = is_present(recipe.source_url)

    layout.text("Source:", style=_body().bold)
    if has_name and has_url:
        layout.text(recipe.source_name, style=_link(recipe.source_url))
        return

    if has_name:
        layout.text(recipe.source_name, style=_body())
    if has_url:
        layout.gap()
        layout.text("Source URL:", style=_body().bold)
        layout.text(recipe.source_url, style=_link(recipe.source_url))


def render_servings(doc: RenderedDocument, recipe: RecipeRecord) -> None:
    _labelled(doc.layout, "Servings:", format_number(recipe.servings))


def render_rating(doc: RenderedDocument, recipe: RecipeRecord) -> None:
    if is_present(recipe.rating):
        value = f"{format_number(recipe.rating)} stars"
    else:
        value = NO_RATING_TEXT
    _labelled(doc.layout, "Rating:", value)


def render_times(doc: RenderedDocument, recipe: RecipeRecord) -> None:
    times = []
    if is_present(recipe.prep_time):
        times.append(f"Prep Time: {format_minutes(recipe.prep_time)} min")
    if is_present(recipe.cook_time):
        times.append(f"Cook Time: {format_minutes(recipe.cook_time)} min")
    doc.layout.text(" | ".join(times), style=_body())


def render_categories(doc: RenderedDocument, recipe: RecipeRecord) -> None:
    doc.layout.text(f"Categories: {', '.join(recipe.categories)}", style=_body())


def render_early_notes(doc: RenderedDocument, recipe: RecipeRecord) -> None:
    doc.layout.text("Notes:", style=TextStyle(REGULAR, EARLY_NOTES_HEADING_SIZE))
    doc.layout.text(recipe.notes, style=_body())


def render_ingredients(doc: RenderedDocument, recipe: RecipeRecord) -> None:
    layout = doc.layout
    _heading(layout, "Ingredients:")
    for ingredient in recipe.ingredients:
        layout.text(ingredient.raw_ingredient, style=_body())


def render_instructions(doc: RenderedDocument, recipe: RecipeRecord) -> None:
    layout = doc.layout
    _heading(layout, "Instructions:")
    steps = [line.strip() for line in recipe.instructions.split("\n") if line.strip()]
    for number, step in enumerate(steps, start=1):
        layout.text(f"{number}. {step}", style=_body())
        layout.half_gap()


def render_preparation_steps(doc: RenderedDocument, recipe: RecipeRecord) -> None:
    """
    Numbered steps with '#' headings.

    A step starting with '#' is a bold heading without a number and does
    not advance the step counter.
    """
    layout = doc.layout
    body = _body()
    _heading(layout, "Preparation Steps:")

    number = 1
    for step in recipe.preparation_steps:
        text = str(step).strip()
        if text.startswith("#"):
            layout.text(text[1:].strip(), style=body.bold)
        else:
            layout.write_runs([Run(f"{number}.", body.bold), Run(f" {text}", body)])
            number += 1
        layout.half_gap()


def render_late_notes(doc: RenderedDocument, recipe: RecipeRecord) -> None:
    _heading(doc.layout, "Notes:")
    doc.layout.text(recipe.late_note, style=_body())


def render_nutrition(doc: RenderedDocument, recipe: RecipeRecord) -> None:
    layout = doc.layout
    _heading(layout, "Nutritional Information:")
    for line in recipe.nutritional_info.split("\n"):
        layout.text(line, style=_body())


SECTIONS: tuple[Section, ...] = (
    Section("title", _always, render_title),
    Section("image", lambda r: bool(r.photo_ids), render_image, gap_after=False),
    Section("created", _always, render_created),
    Section(
        "source",
        lambda r: is_present(r.source_name) or is_present(r.source_url),
        render_source,
    ),
    Section("servings", lambda r: is_present(r.servings), render_servings),
    Section("rating", _always, render_rating),
    Section(
        "times",
        lambda r: is_present(r.prep_time) or is_present(r.cook_time),
        render_times,
    ),
    Section("categories", lambda r: bool(r.categories), render_categories),
    # Both Notes sections fire independently when their fields are set
    Section("notes_early", lambda r: is_present(r.notes), render_early_notes),
    Section("ingredients", _always, render_ingredients),
    Section("instructions", lambda r: is_present(r.instructions), render_instructions),
    Section("preparation_steps", lambda r: bool(r.preparation_steps), render_preparation_steps),
    Section("notes_late", lambda r: is_present(r.note) or is_present(r.notes), render_late_notes),
    Section("nutritional_info", lambda r: is_present(r.nutritional_info), render_nutrition),
)

SECTION_NAMES: tuple[str, ...] = tuple(s.name for s in SECTIONS)
