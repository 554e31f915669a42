from pathlib import Path

import pytest

from socialcli.host import HostStore, seed_demo_state


@pytest.fixture
def store() -> HostStore:
    """Demo host state held in memory only."""
    return HostStore(seed_demo_state())


@pytest.fixture
def socialcli_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    monkeypatch.setenv("SOCIALCLI_HOME", str(home))
    monkeypatch.delenv("SOCIALCLI_LOG_LEVEL", raising=False)
    return home
