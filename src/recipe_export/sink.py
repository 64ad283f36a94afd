"""
Module: recipe_export.sink

Purpose:
    Filesystem output for the export: directory creation and atomic file
    writes. Files are written to a temp file in the target directory and
    moved into place, so a failed write never leaves a truncated file or
    clobbers the previous version.

Key Classes:
    - FileSink: Writes files under one root directory

Dependencies:
    - tempfile, pathlib (std)

Used By:
    - recipe_export.controller: Per-recipe PDFs
    - recipe_export.output.archive: JSON archive
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Union

from recipe_export.errors import FileSinkError

logger = logging.getLogger(__name__)


class FileSink:
    """
    Atomic file writer rooted at one directory.

    Example:
        >>> sink = FileSink(Path("recipe-pdfs"))
        >>> sink.write_bytes("Soup.pdf", pdf_bytes)
        PosixPath('recipe-pdfs/Soup.pdf')
    """

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root)

    def ensure_root(self) -> Path:
        """
        Create the root directory (and parents) if missing.

        Raises:
            FileSinkError: If the directory cannot be created
        """
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileSinkError(f"Could not create output directory {self.root}: {e}") from e
        return self.root

    def path_for(self, name: str) -> Path:
        """Path a file named ``name`` is written to."""
        return self.root / name

    def write_bytes(self, name: str, data: bytes) -> Path:
        """
        Atomically write ``data`` to ``root/name``.

        Raises:
            FileSinkError: If the file cannot be written
        """
        path = self.path_for(name)
        self.ensure_root()

        temp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="wb",
                suffix=".tmp",
                dir=self.root,
                delete=False,
            ) as f:
                temp_path = Path(f.name)
                f.write(data)

            # replace() overwrites existing files on all platforms
            temp_path.replace(path)
        except OSError as e:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            raise FileSinkError(f"Could not write {path}: {e}") from e

        logger.debug(f"Wrote {len(data)} bytes to {path}")
        return path

    def write_text(self, name: str, text: str, encoding: str = "utf-8") -> Path:
        """Atomically write ``text`` to ``root/name``."""
        return self.write_bytes(name, text.encode(encoding))
