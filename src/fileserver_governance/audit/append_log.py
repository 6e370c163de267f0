"""Durable append-only audit store.

:class:`PersistedAppendLogStore` serialises each record to one compact
JSON document and hands the bytes to a persistence collaborator.  Queries
replay everything the collaborator returns, so the store keeps no
in-process cache that could drift from what is durably stored.

Failures are never swallowed: an append or read error raises
:class:`~fileserver_governance.errors.AuditPersistenceError`, and so does
a stored record that cannot be decoded.  Nothing is retried.

Example
-------
::

    store = PersistedAppendLogStore(JsonlFilePersistence(Path("/var/lib/fs/audit.jsonl")))
    store.store(AuditRecord(1546182100, "file-access", "download", "user1",
                            "user1/files/data.txt", "OK", ""))
    store.query(AuditQuery.MATCH_ALL)
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from fileserver_governance.audit.evaluator import select
from fileserver_governance.audit.query import AuditQuery
from fileserver_governance.audit.record import AuditRecord
from fileserver_governance.errors import AuditPersistenceError

logger = logging.getLogger(__name__)

_ENCODING: str = "utf-8"


@runtime_checkable
class AuditPersistence(Protocol):
    """Append-only byte log consumed by :class:`PersistedAppendLogStore`.

    ``append`` and ``read_all`` are synchronous; an acknowledged append
    must be visible to every later ``read_all``.  Both signal failure by
    raising :class:`OSError`.
    """

    def append(self, data: bytes) -> None:
        ...

    def read_all(self) -> Sequence[bytes]:
        ...


class InMemoryPersistence:
    """Process-local persistence, mainly for tests and embedding."""

    def __init__(self) -> None:
        self._entries: list[bytes] = []
        self._lock = threading.Lock()

    def append(self, data: bytes) -> None:
        with self._lock:
            self._entries.append(bytes(data))

    def read_all(self) -> list[bytes]:
        with self._lock:
            return list(self._entries)


class JsonlFilePersistence:
    """Newline-delimited file persistence.

    Each appended payload becomes one line of the file.  Parent
    directories are created on first write.  Payloads must not contain
    newline bytes; JSON produced by :meth:`AuditRecord.to_json` never does.

    Parameters
    ----------
    log_path:
        Path to the ``.jsonl`` audit file.
    """

    def __init__(self, log_path: Path) -> None:
        self._log_path = Path(log_path)
        self._lock = threading.Lock()

    def append(self, data: bytes) -> None:
        if b"\n" in data:
            raise ValueError("Audit log payloads must not contain newline bytes.")
        with self._lock:
            self._log_path.parent.mkdir(parents=True, exist_ok=True)
            with self._log_path.open("ab") as fh:
                fh.write(data + b"\n")
                fh.flush()

    def read_all(self) -> list[bytes]:
        with self._lock:
            if not self._log_path.exists():
                return []
            with self._log_path.open("rb") as fh:
                return [line.rstrip(b"\r\n") for line in fh if line.strip()]

    @property
    def log_path(self) -> Path:
        return self._log_path


class PersistedAppendLogStore:
    """Audit store backed by an :class:`AuditPersistence` collaborator.

    Parameters
    ----------
    persistence:
        The append-only byte log records are written to and replayed from.
    """

    def __init__(self, persistence: AuditPersistence) -> None:
        self._persistence = persistence

    def store(self, record: AuditRecord) -> None:
        """Serialise and append *record*.

        Raises
        ------
        AuditPersistenceError
            If the collaborator fails to append.
        """
        payload = record.to_json().encode(_ENCODING)
        try:
            self._persistence.append(payload)
        except AuditPersistenceError:
            raise
        except OSError as exc:
            logger.error("Failed to append audit record: %s", exc)
            raise AuditPersistenceError(f"Failed to append audit record: {exc}") from exc

    def query(self, query: AuditQuery) -> list[AuditRecord]:
        """Replay every stored record and return matches in append order.

        Raises
        ------
        AuditPersistenceError
            If the log cannot be read or holds an undecodable record.
        """
        records = self.read_all()
        results = select(records, query)
        logger.debug("Audit query matched %d of %d records", len(results), len(records))
        return results

    def read_all(self) -> list[AuditRecord]:
        """Return every stored record in append order."""
        try:
            raw_entries = self._persistence.read_all()
        except AuditPersistenceError:
            raise
        except OSError as exc:
            logger.error("Failed to read audit log: %s", exc)
            raise AuditPersistenceError(f"Failed to read audit log: {exc}") from exc

        records: list[AuditRecord] = []
        for position, raw in enumerate(raw_entries):
            try:
                records.append(AuditRecord.from_json(raw.decode(_ENCODING)))
            except (ValueError, KeyError, TypeError) as exc:
                raise AuditPersistenceError(
                    f"Corrupt audit record at position {position}: {exc}"
                ) from exc
        return records
