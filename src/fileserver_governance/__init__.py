"""fileserver-governance — access control and audit trail for a self-hosted file server.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import fileserver_governance as fsg
>>> resolver = fsg.AccessResolver([fsg.AccessPolicy.create("public/**", "READ", ["public"])])
>>> resolver.can_read({fsg.RoleId("public")}, "public/readme.txt")
True
>>> store = fsg.BoundedRingBufferStore(capacity=100)
>>> fsg.AuditRecorder(store).login_ok("joe", "session-1").action
'login'
"""
from __future__ import annotations

__version__: str = "0.1.0"

# ---------------------------------------------------------------------------
# Access control
# ---------------------------------------------------------------------------
from fileserver_governance.access.path_matcher import matches
from fileserver_governance.access.policy import AccessLevel, AccessPolicy, RoleId
from fileserver_governance.access.policy_loader import PolicyLoader
from fileserver_governance.access.resolver import AccessDecision, AccessResolver

# ---------------------------------------------------------------------------
# Audit
# ---------------------------------------------------------------------------
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

# ---------------------------------------------------------------------------
# Configuration, guard, errors
# ---------------------------------------------------------------------------
from fileserver_governance.config import (
    ConfigLoader,
    FileServerConfig,
    build_access_resolver,
    build_audit_store,
)
from fileserver_governance.errors import (
    AuditPersistenceError,
    AuditQueryError,
    FileServerGovernanceError,
    OperationNotAllowedError,
    PatternError,
    PolicyConfigError,
)
from fileserver_governance.guard import AccessGuard

__all__ = [
    "__version__",
    # Access control
    "AccessDecision",
    "AccessLevel",
    "AccessPolicy",
    "AccessResolver",
    "PolicyLoader",
    "RoleId",
    "matches",
    # Audit
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
    # Configuration and guard
    "AccessGuard",
    "ConfigLoader",
    "FileServerConfig",
    "build_access_resolver",
    "build_audit_store",
    # Errors
    "AuditPersistenceError",
    "AuditQueryError",
    "FileServerGovernanceError",
    "OperationNotAllowedError",
    "PatternError",
    "PolicyConfigError",
]
