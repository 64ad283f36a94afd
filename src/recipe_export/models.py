"""
Module: recipe_export.models

Purpose:
    Read-only recipe data passed between the source, the renderer and the
    archive writer. Records are built from the service's camelCase payload
    and keep that payload untouched in ``raw`` so the JSON archive is the
    unmodified collection.

Key Classes:
    - Ingredient: One ingredient line (rendered verbatim)
    - RecipeRecord: One user-authored recipe

Key Functions:
    - is_present(): Presence rule for optional fields

Dependencies:
    - dataclasses (std)

Used By:
    - recipe_export.sources: Builds records from payloads
    - recipe_export.output: Section policy and rendering
    - recipe_export.controller: Orchestration
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Union

Number = Union[int, float]


def is_present(value: Any) -> bool:
    """
    Check whether an optional field counts as present.

    Missing, empty and zero values are all absent, so an unrated recipe
    (rating 0) and a recipe without prep time (0 seconds) render the same
    as ones where the field is missing entirely.

    Example:
        >>> is_present(0), is_present(""), is_present([]), is_present("4")
        (False, False, False, True)
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, (str, list, tuple)):
        return len(value) > 0
    return True


@dataclass(frozen=True)
class Ingredient:
    """
    Ingredient line as entered by the user.

    Attributes:
        raw_ingredient: Full text, e.g. "2 cups flour". Never parsed.
    """

    raw_ingredient: str

    @classmethod
    def from_dict(cls, data: Any) -> Ingredient:
        if isinstance(data, str):
            return cls(raw_ingredient=data)
        value = data.get("rawIngredient") if isinstance(data, dict) else None
        return cls(raw_ingredient="" if value is None else str(value))


@dataclass(frozen=True)
class RecipeRecord:
    """
    One recipe as returned by the recipe service (immutable).

    Only ``ingredients`` is always present; every other descriptive field is
    optional. ``notes`` and ``note`` are two legacy spellings of the same
    field and each gates its own Notes section.

    Attributes:
        identifier: Opaque recipe id
        name: Recipe title
        creation_timestamp: Seconds since the epoch
        photo_ids: Photo ids; only the first one is rendered
        source_name: Name of the site/book the recipe came from
        source_url: URL of the original recipe
        servings: Servings text or number
        rating: Star rating
        prep_time: Preparation time in seconds
        cook_time: Cooking time in seconds
        categories: Category/tag names
        notes: Notes (legacy spelling)
        note: Notes
        ingredients: Ingredient lines
        instructions: Newline-delimited steps
        preparation_steps: Steps; a leading '#' marks a heading
        nutritional_info: Newline-delimited nutrition lines
        raw: Untouched source payload

    Example:
        >>> recipe = RecipeRecord.from_dict({"name": "Soup", "ingredients": []})
        >>> recipe.name, recipe.ingredients
        ('Soup', ())
    """

    identifier: str
    name: str
    creation_timestamp: Number = 0
    photo_ids: tuple[str, ...] = ()
    source_name: Optional[str] = None
    source_url: Optional[str] = None
    servings: Optional[Union[str, Number]] = None
    rating: Optional[Number] = None
    prep_time: Optional[Number] = None
    cook_time: Optional[Number] = None
    categories: tuple[str, ...] = ()
    notes: Optional[str] = None
    note: Optional[str] = None
    ingredients: tuple[Ingredient, ...] = ()
    instructions: Optional[str] = None
    preparation_steps: tuple[str, ...] = ()
    nutritional_info: Optional[str] = None
    raw: dict = field(default_factory=dict, compare=False, repr=False)

    @property
    def primary_photo_id(self) -> Optional[str]:
        """First photo id, or None when the recipe has no photo."""
        return self.photo_ids[0] if self.photo_ids else None

    @property
    def late_note(self) -> Optional[str]:
        """Body for the closing Notes section (``note`` wins over ``notes``)."""
        if is_present(self.note):
            return self.note
        return self.notes

    @classmethod
    def from_dict(cls, data: dict) -> RecipeRecord:
        """
        Deserialize from a service payload.

        Args:
            data: Recipe dict with camelCase keys

        Returns:
            RecipeRecord instance, with ``raw`` set to ``data``
        """
        if not isinstance(data, dict):
            raise ValueError(f"Recipe payload must be an object, got {type(data).__name__}")

        return cls(
            identifier=str(data.get("identifier") or ""),
            name=str(data.get("name") or ""),
            creation_timestamp=data.get("creationTimestamp") or 0,
            photo_ids=tuple(data.get("photoIds") or ()),
            source_name=data.get("sourceName"),
            source_url=data.get("sourceUrl"),
            servings=data.get("servings"),
            rating=data.get("rating"),
            prep_time=data.get("prepTime"),
            cook_time=data.get("cookTime"),
            categories=tuple(data.get("categories") or ()),
            notes=data.get("notes"),
            note=data.get("note"),
            ingredients=tuple(Ingredient.from_dict(i) for i in data.get("ingredients") or ()),
            instructions=data.get("instructions"),
            preparation_steps=tuple(data.get("preparationSteps") or ()),
            nutritional_info=data.get("nutritionalInfo"),
            raw=data,
        )

    def to_dict(self) -> dict:
        """Return the untouched source payload."""
        return self.raw

    def __repr__(self) -> str:
        return f"RecipeRecord(identifier={self.identifier!r}, name={self.name!r})"
