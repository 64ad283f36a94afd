"""
Tests for whole-document rendering and the JSON archive.
"""

import io
import json
from datetime import timezone

import pytest

from recipe_export.errors import RenderError
from recipe_export.images import ImageResolver
from recipe_export.models import RecipeRecord
from recipe_export.output import (
    Section,
    render_recipe,
    render_recipe_bytes,
    serialize_recipes,
    write_archive,
)
from recipe_export.sink import FileSink

from conftest import FakeFetcher


class TestRenderRecipe:
    """Tests for render_recipe()/render_recipe_bytes()."""

    def test_render_bytes_when_minimal_then_valid_pdf(self, minimal_payload):
        data, doc = render_recipe_bytes(RecipeRecord.from_dict(minimal_payload), tz=timezone.utc)

        assert data.startswith(b"%PDF-")
        assert data.rstrip().endswith(b"%%EOF")
        assert doc.layout.page_number == 1

    def test_render_when_stream_given_then_written_to_stream(self, minimal_payload):
        buffer = io.BytesIO()

        render_recipe(RecipeRecord.from_dict(minimal_payload), buffer, tz=timezone.utc)

        assert buffer.getvalue().startswith(b"%PDF-")

    def test_render_when_custom_sections_then_only_those_drawn(self, minimal_payload):
        """The section policy can be replaced as data."""
        only_title = [Section("title_only", lambda r: True, lambda doc, r: doc.layout.text(r.name))]

        _, doc = render_recipe_bytes(RecipeRecord.from_dict(minimal_payload), sections=only_title)

        assert doc.sections == ["title_only"]
        assert doc.layout.text_lines() == ["Plain Toast"]

    def test_render_when_section_raises_then_wrapped(self, minimal_payload):
        def explode(doc, recipe):
            raise KeyError("missing")

        with pytest.raises(RenderError, match="Plain Toast"):
            render_recipe_bytes(
                RecipeRecord.from_dict(minimal_payload),
                sections=[Section("boom", lambda r: True, explode)],
            )

    def test_render_when_full_recipe_then_text_extractable(self, full_payload):
        """The PDF carries the drawn text and the document title."""
        PdfReader = pytest.importorskip("pypdf").PdfReader

        # Arrange
        recipe = RecipeRecord.from_dict(full_payload)

        # Act
        data, _ = render_recipe_bytes(recipe, resolver=ImageResolver(FakeFetcher()), tz=timezone.utc)
        reader = PdfReader(io.BytesIO(data))
        text = "".join(page.extract_text() for page in reader.pages)

        # Assert
        assert "Tomato Soup" in text
        assert "Ingredients:" in text
        assert "6 tomatoes" in text
        assert reader.metadata.title == "Tomato Soup"

    def test_render_when_long_recipe_then_multiple_pdf_pages(self):
        PdfReader = pytest.importorskip("pypdf").PdfReader
        ingredients = [{"rawIngredient": f"ingredient {i}"} for i in range(120)]
        recipe = RecipeRecord.from_dict({"name": "Long", "ingredients": ingredients})

        data, doc = render_recipe_bytes(recipe, tz=timezone.utc)

        assert len(PdfReader(io.BytesIO(data)).pages) == doc.layout.page_number > 1


class TestArchive:
    """Tests for serialize_recipes()/write_archive()."""

    def test_serialize_when_records_then_two_space_indent_array(self, full_payload, minimal_payload):
        recipes = [RecipeRecord.from_dict(full_payload), RecipeRecord.from_dict(minimal_payload)]

        text = serialize_recipes(recipes)

        assert text.startswith('[\n  {\n    "identifier": "r-1"')
        assert json.loads(text) == [full_payload, minimal_payload]

    def test_serialize_when_empty_then_empty_array(self):
        assert serialize_recipes([]) == "[]"

    def test_serialize_when_unicode_then_not_escaped(self):
        text = serialize_recipes([RecipeRecord.from_dict({"name": "Crème brûlée"})])

        assert "Crème brûlée" in text

    def test_write_archive_when_called_then_file_in_sink(self, tmp_path, minimal_payload):
        sink = FileSink(tmp_path / "out")

        path = write_archive([RecipeRecord.from_dict(minimal_payload)], sink, "all-recipes.json")

        assert path == tmp_path / "out" / "all-recipes.json"
        assert json.loads(path.read_text(encoding="utf-8")) == [minimal_payload]
