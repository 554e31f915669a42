import json
from pathlib import Path

import pytest

from socialcli.config.loader import convert_keys, convert_to_camel, load_config, save_config
from socialcli.config.schema import Config


def test_save_and_load_use_camel_case(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    config = Config()
    config.output.default_format = "json"
    config.generate.default_count = 7
    save_config(config, path)

    raw = json.loads(path.read_text())
    assert raw["output"]["defaultFormat"] == "json"
    assert raw["generate"]["defaultCount"] == 7
    assert raw["configVersion"] == 1

    loaded = load_config(path)
    assert loaded.output.default_format == "json"
    assert loaded.generate.default_count == 7


def test_malformed_config_falls_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[1, 2]")
    assert load_config(path) == Config()
    path.write_text("{broken")
    assert load_config(path).listing.default_count == 50


def test_env_overrides_nested_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SOCIALCLI_GENERATE__DEFAULT_COUNT", "3")
    monkeypatch.setenv("SOCIALCLI_OUTPUT__DEFAULT_FORMAT", "yaml")
    config = Config()
    assert config.generate.default_count == 3
    assert config.output.default_format == "yaml"


def test_store_path_resolution(socialcli_home: Path, tmp_path: Path) -> None:
    assert Config().resolved_store_path == socialcli_home / "data" / "host.json"
    assert Config(store_path="mine.json").resolved_store_path == socialcli_home / "mine.json"
    absolute = tmp_path / "elsewhere.json"
    assert Config(store_path=str(absolute)).resolved_store_path == absolute


def test_key_conversion_round_trip() -> None:
    data = {"storePath": "x", "output": {"defaultFormat": "csv"}}
    assert convert_keys(data) == {"store_path": "x", "output": {"default_format": "csv"}}
    assert convert_to_camel(convert_keys(data)) == data


def test_env_overrides_values_from_saved_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "config.json"
    saved = Config()
    saved.output.default_format = "csv"
    saved.generate.default_action = "from_file"
    save_config(saved, path)

    monkeypatch.setenv("SOCIALCLI_OUTPUT__DEFAULT_FORMAT", "yaml")
    monkeypatch.setenv("SOCIALCLI_STORE_PATH", "env-host.json")
    loaded = load_config(path)

    assert loaded.output.default_format == "yaml"
    assert loaded.store_path == "env-host.json"
    assert loaded.generate.default_action == "from_file"
