"""Read and write the camelCase JSON config file."""

import json
import os
import re
from collections.abc import Callable
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from socialcli.config.schema import Config

CONFIG_VERSION = 1

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def get_config_path() -> Path:
    """Config file inside the socialcli data directory."""
    from socialcli.utils.helpers import get_data_path

    return get_data_path() / "config.json"


def load_config(config_path: Path | None = None) -> Config:
    """Load the config file, or defaults when it is missing or malformed.

    Environment variables (``SOCIALCLI_*``) still apply on top of the file.
    """
    path = config_path or get_config_path()
    if not path.exists():
        return Config()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError("config root must be a JSON object")
        version = raw.get("configVersion", CONFIG_VERSION)
        if version != CONFIG_VERSION:
            logger.warning("Config {} has version {}, expected {}", path, version, CONFIG_VERSION)
        return Config(**convert_keys(raw))
    except (json.JSONDecodeError, PydanticValidationError, ValueError) as e:
        logger.warning("Ignoring unreadable config {}: {}", path, e)
        return Config()


def save_config(config: Config, config_path: Path | None = None) -> Path:
    """Write ``config`` as camelCase JSON, replacing the file atomically."""
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    payload = convert_to_camel(config.model_dump())
    payload["configVersion"] = CONFIG_VERSION
    staging = path.with_name(f".{path.name}.tmp-{os.getpid()}")
    staging.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    os.replace(staging, path)
    logger.debug("config written to {}", path)
    return path


def _rename_keys(data: Any, rename: Callable[[str], str]) -> Any:
    if isinstance(data, dict):
        return {rename(key): _rename_keys(value, rename) for key, value in data.items()}
    if isinstance(data, list):
        return [_rename_keys(item, rename) for item in data]
    return data


def convert_keys(data: Any) -> Any:
    """camelCase keys to snake_case, recursively."""
    return _rename_keys(data, camel_to_snake)


def convert_to_camel(data: Any) -> Any:
    """snake_case keys to camelCase, recursively."""
    return _rename_keys(data, snake_to_camel)


def camel_to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)
