"""Tests for AuditExporter."""
from __future__ import annotations

import csv
import json
from pathlib import Path

import pytest

from fileserver_governance.audit.exporter import FIELDNAMES, AuditExporter
from fileserver_governance.audit.query import AuditQuery
from fileserver_governance.audit.record import AuditRecord
from fileserver_governance.audit.ring_buffer import BoundedRingBufferStore


@pytest.fixture()
def exporter() -> AuditExporter:
    store = BoundedRingBufferStore()
    store.store(AuditRecord(1546182000, "user-access", "login", "user1", "", "login ok", None))
    store.store(AuditRecord(1546182100, "file-access", "download", "user1", "user1/files/data.txt", "ok", ""))
    store.store(AuditRecord(1546182400, "file-access", "upload", "user2", "user1/files/upload.txt", "ok", ""))
    return AuditExporter(store)


class TestCsvExport:
    def test_header_and_rows(self, exporter: AuditExporter, tmp_path: Path) -> None:
        out = tmp_path / "audit.csv"
        assert exporter.to_csv(out) == 3

        with out.open(newline="", encoding="utf-8") as fh:
            rows = list(csv.DictReader(fh))
        assert tuple(rows[0].keys()) == FIELDNAMES
        assert len(rows) == 3

    def test_null_extra_written_empty(self, exporter: AuditExporter, tmp_path: Path) -> None:
        out = tmp_path / "audit.csv"
        exporter.to_csv(out, query=AuditQuery(action="login"))
        with out.open(newline="", encoding="utf-8") as fh:
            [row] = list(csv.DictReader(fh))
        assert row["extra"] == ""
        assert row["user_id"] == "user1"

    def test_explicit_records(self, exporter: AuditExporter, tmp_path: Path) -> None:
        assert exporter.to_csv(tmp_path / "empty.csv", records=[]) == 0


class TestJsonExport:
    def test_array_of_records(self, exporter: AuditExporter, tmp_path: Path) -> None:
        out = tmp_path / "nested" / "audit.json"
        assert exporter.to_json(out, query=AuditQuery(category="file-access")) == 2

        data = json.loads(out.read_text(encoding="utf-8"))
        assert [entry["action"] for entry in data] == ["upload", "download"]

    def test_round_trips_records(self, exporter: AuditExporter, tmp_path: Path) -> None:
        out = tmp_path / "audit.json"
        exporter.to_json(out)
        restored = [AuditRecord.from_dict(entry) for entry in json.loads(out.read_text(encoding="utf-8"))]
        assert restored[-1].extra is None
