"""
Module: recipe_export.errors

Purpose:
    Exception taxonomy for the export run.

    Fatal errors abort the whole run before any document is rendered:
    AuthError, FetchListError, and FileSinkError while writing the archive.
    Recoverable errors are caught at the smallest enclosing unit:
    ImageFetchFailed skips only the image section, RenderError and a
    per-document FileSinkError skip only the current recipe.

Used By:
    - recipe_export.controller: Fatal vs per-recipe handling
    - recipe_export.output.renderer: Wraps layout failures
    - recipe_export.images: Photo fetch/decode failures
    - recipe_export.sources: Login and list failures
"""

from __future__ import annotations


class ExportError(Exception):
    """Base class for all export failures."""
    pass


class AuthError(ExportError):
    """Login to the recipe service failed."""
    pass


class FetchListError(ExportError):
    """Recipe list could not be retrieved."""
    pass


class ImageFetchFailed(ExportError):
    """Recipe photo could not be downloaded or decoded."""
    pass


class RenderError(ExportError):
    """A single recipe document could not be rendered."""

    def __init__(self, message: str, recipe_name: str | None = None) -> None:
        super().__init__(message)
        self.recipe_name = recipe_name


class FileSinkError(ExportError):
    """Output file or directory could not be written."""
    pass
