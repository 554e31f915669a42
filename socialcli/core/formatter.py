"""Render records as table, csv, json, yaml, ids or count output."""

from __future__ import annotations

import csv
import dataclasses
import io
import json
from collections.abc import Mapping, Sequence
from typing import Any

import yaml
from rich.console import Console
from rich.table import Table
from rich.text import Text

from socialcli.core.errors import ValidationError
from socialcli.core.models import FieldSpec, OutputFormat


def as_mapping(record: Any) -> dict[str, Any]:
    """Normalize a record (mapping, pydantic model or dataclass) to a plain dict."""
    if isinstance(record, Mapping):
        return dict(record)
    if hasattr(record, "model_dump"):
        return record.model_dump(mode="json")
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        return dataclasses.asdict(record)
    raise TypeError(f"Cannot render record of type {type(record).__name__}")


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (list, tuple)):
        return ",".join(_cell(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False, default=str)
    return str(value)


class OutputFormatter:
    """Writes projected records to a rich console in the requested encoding."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    # ── Collections ──────────────────────────────────────────────────────

    def render(
        self,
        records: Sequence[Any],
        spec: FieldSpec,
        *,
        default_fields: Sequence[str] = (),
        id_field: str = "id",
    ) -> None:
        """Write a collection of records. Empty input is never an error."""
        rows = [as_mapping(r) for r in records]
        if spec.format is OutputFormat.TABLE:
            fields = self._fields(rows, spec, default_fields)
            self._console.print(self.build_table(fields, self._project_all(rows, fields)))
            return
        self._write(self._format_rows(rows, spec, default_fields=default_fields, id_field=id_field))

    def format_items(
        self,
        records: Sequence[Any],
        spec: FieldSpec,
        *,
        default_fields: Sequence[str] = (),
        id_field: str = "id",
    ) -> str:
        """Return the text ``render`` would write, for non-table formats."""
        rows = [as_mapping(r) for r in records]
        return self._format_rows(rows, spec, default_fields=default_fields, id_field=id_field)

    def _format_rows(
        self,
        rows: list[dict[str, Any]],
        spec: FieldSpec,
        *,
        default_fields: Sequence[str],
        id_field: str,
    ) -> str:
        fmt = spec.format
        if fmt is OutputFormat.COUNT:
            return str(len(rows))
        if fmt is OutputFormat.IDS:
            return " ".join(_cell(self._value(row, id_field)) for row in rows)

        fields = self._fields(rows, spec, default_fields)
        projected = self._project_all(rows, fields)
        if fmt is OutputFormat.CSV:
            return self._csv([fields, *([_cell(row[f]) for f in fields] for row in projected)])
        if fmt is OutputFormat.JSON:
            return json.dumps(projected, ensure_ascii=False, default=str)
        if fmt is OutputFormat.YAML:
            return yaml.safe_dump(projected, sort_keys=False, allow_unicode=True).rstrip("\n")
        raise ValidationError(f"Format '{fmt.value}' has no text encoding.")

    # ── Single item ──────────────────────────────────────────────────────

    def display_item(
        self,
        record: Any,
        spec: FieldSpec,
        *,
        default_fields: Sequence[str] = (),
        id_field: str = "id",
    ) -> None:
        """Write one record unwrapped (a mapping, not a one-element list)."""
        row = as_mapping(record)
        if spec.format is OutputFormat.TABLE:
            fields = self._fields([row], spec, default_fields)
            table = self.build_table(["Field", "Value"], [])
            for name, value in self._project(row, fields).items():
                table.add_row(Text(name), Text(_cell(value)))
            self._console.print(table)
            return
        self._write(self.format_item(row, spec, default_fields=default_fields, id_field=id_field))

    def format_item(
        self,
        record: Any,
        spec: FieldSpec,
        *,
        default_fields: Sequence[str] = (),
        id_field: str = "id",
    ) -> str:
        row = as_mapping(record)
        fmt = spec.format
        if fmt is OutputFormat.COUNT:
            return "1"
        if fmt is OutputFormat.IDS:
            return _cell(self._value(row, id_field))

        projected = self._project(row, self._fields([row], spec, default_fields))
        if fmt is OutputFormat.CSV:
            return self._csv([["Field", "Value"], *([k, _cell(v)] for k, v in projected.items())])
        if fmt is OutputFormat.JSON:
            return json.dumps(projected, ensure_ascii=False, default=str)
        if fmt is OutputFormat.YAML:
            return yaml.safe_dump(projected, sort_keys=False, allow_unicode=True).rstrip("\n")
        raise ValidationError(f"Format '{fmt.value}' has no text encoding.")

    # ── Helpers ──────────────────────────────────────────────────────────

    @staticmethod
    def build_table(fields: Sequence[str], rows: Sequence[Mapping[str, Any]]) -> Table:
        table = Table(show_lines=False)
        for name in fields:
            table.add_column(name, overflow="fold")
        for row in rows:
            table.add_row(*(Text(_cell(row.get(name))) for name in fields))
        return table

    @staticmethod
    def _fields(
        rows: Sequence[Mapping[str, Any]],
        spec: FieldSpec,
        default_fields: Sequence[str],
    ) -> list[str]:
        if spec.requested_fields:
            return list(spec.requested_fields)
        if default_fields:
            return list(default_fields)
        return list(rows[0].keys()) if rows else []

    @staticmethod
    def _value(row: Mapping[str, Any], name: str) -> Any:
        if name not in row:
            raise ValidationError(f"Invalid field: {name}.")
        return row[name]

    def _project(self, row: Mapping[str, Any], fields: Sequence[str]) -> dict[str, Any]:
        return {name: self._value(row, name) for name in fields}

    def _project_all(self, rows: Sequence[Mapping[str, Any]], fields: Sequence[str]) -> list[dict[str, Any]]:
        return [self._project(row, fields) for row in rows]

    @staticmethod
    def _csv(lines: Sequence[Sequence[str]]) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerows(lines)
        return buffer.getvalue().rstrip("\n")

    def _write(self, text: str) -> None:
        self._console.out(text, highlight=False)
