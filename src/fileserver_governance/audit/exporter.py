"""Audit trail exporter.

Exports audit records to CSV or JSON for external analysis or archival.

Example
-------
>>> exporter = AuditExporter(store)
>>> exporter.to_csv(Path("/tmp/audit_export.csv"))
>>> exporter.to_json(Path("/tmp/audit_export.json"), query=AuditQuery.builder().with_user_id("joe").build())
"""
from __future__ import annotations

import csv
import json
from pathlib import Path

from fileserver_governance.audit.query import AuditQuery
from fileserver_governance.audit.record import AuditRecord
from fileserver_governance.audit.store import AuditStore

FIELDNAMES: tuple[str, ...] = (
    "timestamp",
    "category",
    "action",
    "user_id",
    "resource",
    "message",
    "extra",
)


class AuditExporter:
    """Exports records from an :class:`AuditStore` to structured files.

    Parameters
    ----------
    store:
        The store records are read from.
    """

    def __init__(self, store: AuditStore) -> None:
        self._store = store

    def _select(
        self,
        records: list[AuditRecord] | None,
        query: AuditQuery | None,
    ) -> list[AuditRecord]:
        if records is not None:
            return records
        return self._store.query(query or AuditQuery.MATCH_ALL)

    def to_csv(
        self,
        output_path: Path,
        records: list[AuditRecord] | None = None,
        query: AuditQuery | None = None,
    ) -> int:
        """Export records to a CSV file with a header row.

        Parameters
        ----------
        output_path:
            Destination path for the CSV file.
        records:
            Optional pre-selected records.  When omitted, the store is
            queried with *query* (default: every record).
        query:
            Filter applied when *records* is not given.

        Returns
        -------
        int
            Number of records written.
        """
        data = self._select(records, query)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", newline="", encoding="utf-8") as fh:
            writer = csv.DictWriter(fh, fieldnames=list(FIELDNAMES))
            writer.writeheader()
            for record in data:
                row = record.to_dict()
                if row["extra"] is None:
                    row["extra"] = ""
                writer.writerow(row)
        return len(data)

    def to_json(
        self,
        output_path: Path,
        records: list[AuditRecord] | None = None,
        query: AuditQuery | None = None,
        indent: int = 2,
    ) -> int:
        """Export records to a formatted JSON array file.

        Returns
        -------
        int
            Number of records written.
        """
        data = self._select(records, query)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with output_path.open("w", encoding="utf-8") as fh:
            json.dump([record.to_dict() for record in data], fh, indent=indent, ensure_ascii=False)
        return len(data)
