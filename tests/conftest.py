import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture
def commands_source(tmp_path: Path) -> Path:
    """Copy of the sample command declarations inside ``tmp_path``."""
    source = tmp_path / "commands.py"
    source.write_text((DATA_DIR / "commands.py").read_text())
    return source


@pytest.fixture(autouse=True)
def clear_cligen_env(monkeypatch):
    for name in ("CLIGEN_FILE", "CLIGEN_CONFIG", "CLIGEN_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
