#!/usr/bin/env python3
"""Example: Persisted audit trail — fileserver-governance

Records file server activity to a JSONL append log, queries it back and
exports the result to CSV.

Usage:
    python examples/02_persisted_audit.py

Requirements:
    pip install fileserver-governance
"""
from __future__ import annotations

import tempfile
from pathlib import Path

import fileserver_governance as fsg
from fileserver_governance.audit.constants import FileAccess


def main() -> None:
    workdir = Path(tempfile.mkdtemp(prefix="fsg-audit-"))
    store = fsg.PersistedAppendLogStore(fsg.JsonlFilePersistence(workdir / "audit.jsonl"))
    recorder = fsg.AuditRecorder(store)

    # Step 1: Record a short session
    recorder.login_ok("user1", "session-42")
    recorder.file_access(FileAccess.UPLOAD, "user1", "user1/files/upload.txt")
    recorder.file_access(FileAccess.DOWNLOAD, "user1", "user1/files/upload.txt")
    recorder.file_access(FileAccess.LIST_DIR, "user1", "user1/xxx/", "error: file does not exist")
    recorder.logout("user1", "session-42")

    # Step 2: Query it back
    errors = store.query(fsg.AuditQuery.builder().with_message_pattern("error.*").build())
    print(f"Errors recorded: {len(errors)}")
    info = recorder.resource_access_info("user1/files/upload.txt")
    print(f"Access counts for {info.resource}: {info.counters}")

    # Step 3: Export for archival
    out = workdir / "audit.csv"
    count = fsg.AuditExporter(store).to_csv(out)
    print(f"Exported {count} records to {out}")


if __name__ == "__main__":
    main()
