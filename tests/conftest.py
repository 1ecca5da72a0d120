import random
import sys
from pathlib import Path

import pytest

# Add src to sys.path so we can import note_puzzle
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from note_puzzle.parsing import parse_document  # noqa: E402


SHOPPING_NOTE = "# A\n- x\n- y\n## B\n- z\n"

TABLE_NOTE = "| H |\n|---|\n| r1 |\n| r2 |\n"

STUDY_NOTE = """\
Loose intro line

# Biology
### Cells
- nucleus
- membrane
    - lipid bilayer
    - proteins
1. observe
2. record

## Tables
| Organ | Role |
|---|---|
| Heart | Pump |
| Lung | Gas exchange |

> [!note] Remember
> cells are small
> and numerous
"""


# Common test fixtures
@pytest.fixture
def rng():
    """Return a seeded random source."""
    return random.Random(1234)


@pytest.fixture
def parse(rng):
    """Parse note text with a seeded random source."""
    def _parse(text: str, file_name: str = "note", file_path: str = "notes/note.md"):
        return parse_document(text, file_name, file_path, rng=rng)
    return _parse


@pytest.fixture
def shopping_doc(parse):
    """Two groups: A (x, y) and B (z)."""
    return parse(SHOPPING_NOTE)


@pytest.fixture
def table_doc(parse):
    """A single Introduction group holding one table."""
    return parse(TABLE_NOTE)


@pytest.fixture
def study_doc(parse):
    """Intro text, nested bullets, numbered items, a table and a callout."""
    return parse(STUDY_NOTE)
