from __future__ import annotations

import io

import pytest
from rich.console import Console

from param_harvester.engine.exporter import ConsoleExporter, LineExporter
from param_harvester.errors import SinkError


def test_line_exporter_writes_unique_sorted_values(output_path):
    exporter = LineExporter(output_path)
    exporter.export_many(["token", "id", "token", "redirect"])
    exporter.close()

    assert output_path.read_text(encoding="utf-8") == "id\nredirect\ntoken\n"
    assert exporter.count == 3
    assert exporter.received == 4


def test_line_exporter_truncates_on_open(output_path):
    output_path.parent.mkdir(parents=True)
    output_path.write_text("stale\n", encoding="utf-8")
    exporter = LineExporter(output_path)
    exporter.close()
    assert output_path.read_text(encoding="utf-8") == ""


def test_line_exporter_append_merges_and_dedupes(output_path):
    output_path.parent.mkdir(parents=True)
    output_path.write_text("zip\nid\n", encoding="utf-8")
    exporter = LineExporter(output_path, append=True)
    exporter.export_many(["id", "token"])
    exporter.close()
    assert output_path.read_text(encoding="utf-8") == "id\ntoken\nzip\n"


def test_line_exporter_close_is_idempotent(output_path):
    exporter = LineExporter(output_path)
    exporter.export("a")
    exporter.close()
    exporter.close()
    assert output_path.read_text(encoding="utf-8") == "a\n"


def test_unwritable_path_fails_at_construction(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(SinkError):
        LineExporter(blocker / "params.txt")


def test_console_exporter_prints_each_value_once():
    buffer = io.StringIO()
    exporter = ConsoleExporter(Console(file=buffer, highlight=False, soft_wrap=True))
    exporter.export_many(["b", "a", "b"])
    exporter.flush()
    exporter.close()
    assert buffer.getvalue().splitlines() == ["a", "b"]
