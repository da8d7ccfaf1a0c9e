# Add src/ to sys.path so pytest can import the dirkit package without installing it
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from dirkit.storage.dir import Dir  # noqa: E402


@pytest.fixture
def root(tmp_path: Path) -> Dir:
    """A temp Dir rooted in pytest's tmp_path."""
    return Dir(tmp_path / "root", temp=True)
