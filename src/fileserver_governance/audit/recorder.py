"""Builds and stores audit records for file server operations.

:class:`AuditRecorder` is what the login, file and admin handlers call
after performing an action.  It stamps the current time, fills in the
category and message conventions, and hands the record to the configured
:class:`~fileserver_governance.audit.store.AuditStore`.
"""
from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from fileserver_governance.audit.constants import (
    ANONYMOUS_USER,
    MESSAGE_ERROR,
    MESSAGE_OK,
    AdminAccess,
    FileAccess,
    UserAccess,
)
from fileserver_governance.audit.query import AuditQuery
from fileserver_governance.audit.record import AuditRecord
from fileserver_governance.audit.store import AuditStore

logger = logging.getLogger(__name__)


@dataclass
class ResourceAccessInfo:
    """Per-action counts of the file-access records for one resource."""

    resource: str
    counters: dict[str, int] = field(default_factory=dict)

    def increment(self, action: str) -> None:
        self.counters[action] = self.counters.get(action, 0) + 1

    def count(self, action: str) -> int:
        return self.counters.get(action, 0)

    @property
    def total(self) -> int:
        return sum(self.counters.values())


class AuditRecorder:
    """Creates audit records and stores them.

    Parameters
    ----------
    store:
        Destination store.  Store failures propagate to the caller.
    clock:
        Returns the current time in seconds; defaults to :func:`time.time`.
    """

    def __init__(
        self,
        store: AuditStore,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._store = store
        self._clock = clock

    @property
    def store(self) -> AuditStore:
        return self._store

    def record(
        self,
        category: str,
        action: str,
        user_id: str,
        resource: str = "",
        message: str = MESSAGE_OK,
        extra: str | None = "",
    ) -> AuditRecord:
        """Store and return a record stamped with the current time."""
        entry = AuditRecord(
            timestamp=int(self._clock()),
            category=category,
            action=action,
            user_id=user_id,
            resource=resource,
            message=message,
            extra=extra,
        )
        self._store.store(entry)
        logger.debug("Audit %s/%s by %s on %r: %s", category, action, user_id, resource, message)
        return entry

    # ------------------------------------------------------------------
    # User access
    # ------------------------------------------------------------------

    def anonymous_login(self, session_id: str) -> AuditRecord:
        return self.record(UserAccess.NAME, UserAccess.LOGIN, ANONYMOUS_USER, extra=session_id)

    def login_ok(self, user_id: str, session_id: str) -> AuditRecord:
        return self.record(UserAccess.NAME, UserAccess.LOGIN, user_id, extra=session_id)

    def login_failed(self, user_id: str, session_id: str) -> AuditRecord:
        return self.record(
            UserAccess.NAME, UserAccess.LOGIN, user_id, message=MESSAGE_ERROR, extra=session_id
        )

    def logout(self, user_id: str, session_id: str) -> AuditRecord:
        return self.record(UserAccess.NAME, UserAccess.LOGOUT, user_id, extra=session_id)

    # ------------------------------------------------------------------
    # File access
    # ------------------------------------------------------------------

    def file_access(
        self,
        action: str,
        user_id: str,
        resource: str,
        message: str = MESSAGE_OK,
        extra: str = "",
    ) -> AuditRecord:
        return self.record(FileAccess.NAME, action, user_id, resource, message, extra)

    def move(self, user_id: str, source: str, destination: str) -> AuditRecord:
        """Record a move; the destination goes into ``extra``."""
        return self.record(FileAccess.NAME, FileAccess.MOVE, user_id, source, extra=destination)

    # ------------------------------------------------------------------
    # Admin access
    # ------------------------------------------------------------------

    def admin_access(self, action: str, user_id: str, extra: str = "") -> AuditRecord:
        return self.record(AdminAccess.NAME, action, user_id, extra=extra)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def resource_access_info(self, resource: str) -> ResourceAccessInfo:
        """Count file-access records per action for *resource*.

        *resource* is used as a glob pattern, so a directory path ending
        in ``/`` also counts its own listing records.
        """
        query = (
            AuditQuery.builder()
            .with_resource_pattern(resource)
            .with_category(FileAccess.NAME)
            .build()
        )
        info = ResourceAccessInfo(resource=resource)
        for entry in self._store.query(query):
            info.increment(entry.action)
        return info
