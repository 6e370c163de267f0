"""Audit store capability.

Two implementations satisfy :class:`AuditStore`:

- :class:`~fileserver_governance.audit.ring_buffer.BoundedRingBufferStore`
  — bounded, volatile, newest-first.
- :class:`~fileserver_governance.audit.append_log.PersistedAppendLogStore`
  — durable, unbounded, append order.

Components that write or read audit records receive a store instance
explicitly; there is no process-wide audit singleton.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from fileserver_governance.audit.query import AuditQuery
from fileserver_governance.audit.record import AuditRecord


@runtime_checkable
class AuditStore(Protocol):
    """Protocol for storing and querying audit records.

    Implementations must be safe to call from multiple threads.
    """

    def store(self, record: AuditRecord) -> None:
        """Store *record*.  Failures propagate to the caller."""
        ...

    def query(self, query: AuditQuery) -> list[AuditRecord]:
        """Return every stored record satisfying *query*."""
        ...
