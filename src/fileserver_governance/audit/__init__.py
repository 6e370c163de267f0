"""Audit trail package for fileserver-governance.

Provides the audit record and query model, the shared query evaluator,
a bounded in-memory store, a durable append-only store, a recorder for
file server operations and CSV/JSON export.
"""
from __future__ import annotations

from fileserver_governance.audit.append_log import (
    AuditPersistence,
    InMemoryPersistence,
    JsonlFilePersistence,
    PersistedAppendLogStore,
)
from fileserver_governance.audit.evaluator import evaluate
from fileserver_governance.audit.exporter import AuditExporter
from fileserver_governance.audit.query import AuditQuery, AuditQueryBuilder
from fileserver_governance.audit.record import AuditRecord
from fileserver_governance.audit.recorder import AuditRecorder, ResourceAccessInfo
from fileserver_governance.audit.ring_buffer import BoundedRingBufferStore
from fileserver_governance.audit.store import AuditStore

__all__ = [
    "AuditExporter",
    "AuditPersistence",
    "AuditQuery",
    "AuditQueryBuilder",
    "AuditRecord",
    "AuditRecorder",
    "AuditStore",
    "BoundedRingBufferStore",
    "InMemoryPersistence",
    "JsonlFilePersistence",
    "PersistedAppendLogStore",
    "ResourceAccessInfo",
    "evaluate",
]
