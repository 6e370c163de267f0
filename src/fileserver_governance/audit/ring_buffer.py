"""Bounded in-memory audit store.

Holds at most ``capacity`` records in insertion order; storing one more
evicts the oldest.  Queries return matches newest first.  Nothing
survives the process, so this store suits in-memory deployments and
tests.

Example
-------
>>> store = BoundedRingBufferStore(capacity=2)
>>> for ts in (1, 2, 3):
...     store.store(AuditRecord(ts, "user-access", "login", "u1", "", "OK"))
>>> [r.timestamp for r in store.query(AuditQuery.MATCH_ALL)]
[3, 2]
"""
from __future__ import annotations

import logging
import threading
from collections import deque

from fileserver_governance.audit.evaluator import select
from fileserver_governance.audit.query import AuditQuery
from fileserver_governance.audit.record import AuditRecord

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY: int = 1024


class BoundedRingBufferStore:
    """Fixed-capacity FIFO audit store.

    Parameters
    ----------
    capacity:
        Maximum number of records held.  Must be at least 1.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"Ring buffer capacity must be >= 1; got {capacity!r}.")
        self._capacity = capacity
        self._records: deque[AuditRecord] = deque(maxlen=capacity)
        self._lock = threading.Lock()
        logger.info("In-memory audit store created (capacity=%d)", capacity)

    def store(self, record: AuditRecord) -> None:
        """Append *record*, evicting the oldest one when full."""
        with self._lock:
            self._records.append(record)

    def query(self, query: AuditQuery) -> list[AuditRecord]:
        """Return records matching *query*, most recently stored first."""
        with self._lock:
            snapshot = list(self._records)
        snapshot.reverse()
        results = select(snapshot, query)
        logger.debug("Audit query matched %d of %d records", len(results), len(snapshot))
        return results

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    @property
    def capacity(self) -> int:
        return self._capacity
