import io
import json
from dataclasses import dataclass

import pytest
import yaml
from rich.console import Console

from socialcli.core.errors import ValidationError
from socialcli.core.formatter import OutputFormatter
from socialcli.core.models import FieldSpec
from socialcli.host.schema import Notification

ROWS = [
    {"user_id": 10, "user_login": "alice", "role": "admin", "is_banned": False},
    {"user_id": 30, "user_login": "carol", "role": "mod", "is_banned": False},
]


def _formatter() -> tuple[OutputFormatter, io.StringIO]:
    buffer = io.StringIO()
    return OutputFormatter(Console(file=buffer, width=200, color_system=None)), buffer


def test_json_projects_requested_fields_in_order() -> None:
    formatter, _ = _formatter()
    text = formatter.format_items(ROWS, FieldSpec.parse("role,user_id", "json"))
    assert json.loads(text) == [{"role": "admin", "user_id": 10}, {"role": "mod", "user_id": 30}]


def test_default_fields_apply_when_none_requested() -> None:
    formatter, _ = _formatter()
    text = formatter.format_items(ROWS, FieldSpec.parse(None, "csv"), default_fields=("user_id", "user_login"))
    assert text.splitlines() == ["user_id,user_login", "10,alice", "30,carol"]


def test_csv_renders_bools_as_digits() -> None:
    formatter, _ = _formatter()
    text = formatter.format_items(ROWS, FieldSpec.parse("user_id,is_banned", "csv"))
    assert text.splitlines()[1] == "10,0"


def test_yaml_round_trips_to_records() -> None:
    formatter, _ = _formatter()
    text = formatter.format_items(ROWS, FieldSpec.parse("user_id,role", "yaml"))
    assert yaml.safe_load(text) == [{"user_id": 10, "role": "admin"}, {"user_id": 30, "role": "mod"}]


def test_ids_and_count() -> None:
    formatter, _ = _formatter()
    assert formatter.format_items(ROWS, FieldSpec.parse(None, "ids"), id_field="user_id") == "10 30"
    assert formatter.format_items(ROWS, FieldSpec.parse(None, "count")) == "2"


def test_count_and_ids_ignore_requested_fields() -> None:
    formatter, _ = _formatter()
    assert formatter.format_items(ROWS, FieldSpec.parse("nope,role", "count")) == "2"
    assert formatter.format_items(ROWS, FieldSpec.parse("role", "ids"), id_field="user_id") == "10 30"
    assert formatter.format_item(ROWS[0], FieldSpec.parse("nope", "ids"), id_field="user_id") == "10"


@pytest.mark.parametrize("fmt", ["table", "csv", "json", "yaml", "ids", "count"])
def test_empty_input_never_fails(fmt: str) -> None:
    formatter, buffer = _formatter()
    formatter.render([], FieldSpec.parse(None, fmt), default_fields=("id",))
    if fmt == "count":
        assert buffer.getvalue().strip() == "0"
    if fmt == "json":
        assert json.loads(buffer.getvalue()) == []


def test_unknown_field_is_validation_error() -> None:
    formatter, _ = _formatter()
    with pytest.raises(ValidationError) as info:
        formatter.format_items(ROWS, FieldSpec.parse("user_id,nope", "json"))
    assert info.value.message == "Invalid field: nope."


def test_unknown_format_is_validation_error() -> None:
    with pytest.raises(ValidationError):
        FieldSpec.parse(None, "xml")


def test_display_item_is_unwrapped_for_models() -> None:
    formatter, buffer = _formatter()
    notification = Notification(id=520, user_id=10, component_name="groups")
    formatter.display_item(notification, FieldSpec.parse("id,component_name", "json"))
    assert json.loads(buffer.getvalue()) == {"id": 520, "component_name": "groups"}


def test_table_lists_requested_columns() -> None:
    formatter, buffer = _formatter()
    formatter.render(ROWS, FieldSpec.parse("user_login,role", "table"))
    output = buffer.getvalue()
    assert "user_login" in output
    assert "carol" in output
    assert "user_id" not in output


def test_dataclass_records_are_accepted() -> None:
    @dataclass
    class Row:
        id: int
        name: str

    formatter, _ = _formatter()
    assert formatter.format_items([Row(1, "a"), Row(2, "b")], FieldSpec.parse(None, "ids")) == "1 2"
