"""Top-level package for the recipe exporter.

Provides subpackages:
- recipe_export.images – photo fetching and scale-to-fit sizing
- recipe_export.layout – cursor-based page layout on a reportlab canvas
- recipe_export.output – section policy, PDF renderer and JSON archive
- recipe_export.sources – recipe sources (remote service, saved archive)
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.1"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    from importlib.metadata import PackageNotFoundError, version as pkg_version

    try:
        return pkg_version("recipe_export")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
