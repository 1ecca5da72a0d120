"""Top-level package for Note Puzzle.

Provides subpackages:
- note_puzzle.core – fragment, group, document and session models
- note_puzzle.parsing – Markdown note to fragment groups
- note_puzzle.session – session generation, placement and correctness
- note_puzzle.rendering – Markdown rendering collaborator and cache
- note_puzzle.gui – Qt game controller
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
                    # Parse: version = "0.3.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    try:
        from importlib.metadata import version as pkg_version, PackageNotFoundError
        return pkg_version("note-puzzle")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
