"""Filesystem locations and small parsing helpers."""

import os
from datetime import UTC, datetime
from pathlib import Path


def ensure_dir(path: Path) -> Path:
    """Create ``path`` (and parents) when missing and return it."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_path() -> Path:
    """Root of config and store files: $SOCIALCLI_HOME or ~/.socialcli."""
    home = os.environ.get("SOCIALCLI_HOME", "").strip()
    if home:
        return ensure_dir(Path(home).expanduser())
    return ensure_dir(Path.home() / ".socialcli")


def get_default_store_path() -> Path:
    """Get the default host store file (~/.socialcli/data/host.json)."""
    return ensure_dir(get_data_path() / "data") / "host.json"


def now_timestamp() -> str:
    """Current GMT time in ``Y-m-d H:M:S`` form, as the host stores dates."""
    return datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S")


def split_csv(value: str | None) -> list[str]:
    """Split a comma-separated option into trimmed, non-empty parts."""
    return [part.strip() for part in (value or "").split(",") if part.strip()]
