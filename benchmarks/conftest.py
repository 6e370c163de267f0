"""Shared bootstrap for fileserver-governance benchmarks."""
from __future__ import annotations

import sys
from pathlib import Path

_REPO_ROOT = Path(__file__).parent.parent
_SRC = _REPO_ROOT / "src"
_BENCHMARKS = _REPO_ROOT / "benchmarks"

for _path in [str(_SRC), str(_BENCHMARKS)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from fileserver_governance.access.policy import AccessPolicy, RoleId
from fileserver_governance.access.resolver import AccessResolver
from fileserver_governance.audit.query import AuditQuery
from fileserver_governance.audit.record import AuditRecord
from fileserver_governance.audit.ring_buffer import BoundedRingBufferStore

__all__ = [
    "AccessPolicy",
    "AccessResolver",
    "AuditQuery",
    "AuditRecord",
    "BoundedRingBufferStore",
    "RoleId",
]
