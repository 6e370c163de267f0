"""Check-then-audit facade for file server handlers.

:class:`AccessGuard` combines the resolver and the recorder the way the
file and admin handlers use them: verify access first, raise
:class:`~fileserver_governance.errors.OperationNotAllowedError` when it is
denied, and record the action once it is allowed.  The guard never
touches the filesystem; the handler performs the operation itself.

Example
-------
::

    guard = AccessGuard(resolver, AuditRecorder(store))
    guard.require_read("joe", {RoleId("joe")}, "joe/data.txt", FileAccess.DOWNLOAD)
    # ... stream the file ...
"""
from __future__ import annotations

import logging
from collections.abc import Iterable

from fileserver_governance.access.policy import AccessPolicy, RoleId, role_set
from fileserver_governance.access.resolver import AccessResolver
from fileserver_governance.audit.constants import AdminAccess
from fileserver_governance.audit.record import AuditRecord
from fileserver_governance.audit.recorder import AuditRecorder
from fileserver_governance.errors import OperationNotAllowedError

logger = logging.getLogger(__name__)


def _describe(policy: AccessPolicy) -> str:
    return f"{policy.path_pattern} {policy.access_level.value} {sorted(policy.roles)}"


class AccessGuard:
    """Enforces access decisions and records the resulting actions.

    Parameters
    ----------
    resolver:
        Access resolver consulted before every operation.
    recorder:
        Recorder the allowed operations are audited through.
    """

    def __init__(self, resolver: AccessResolver, recorder: AuditRecorder) -> None:
        self._resolver = resolver
        self._recorder = recorder

    @property
    def resolver(self) -> AccessResolver:
        return self._resolver

    @property
    def recorder(self) -> AuditRecorder:
        return self._recorder

    # ------------------------------------------------------------------
    # File operations
    # ------------------------------------------------------------------

    def require_read(
        self,
        user_id: str,
        roles: Iterable[RoleId],
        path: str,
        action: str,
    ) -> AuditRecord:
        """Verify read access to *path* and record *action* on it."""
        if not self._resolver.can_read(roles, path):
            logger.info("Read denied: user=%s path=%s action=%s", user_id, path, action)
            raise OperationNotAllowedError(path)
        return self._recorder.file_access(action, user_id, path)

    def require_read_write(
        self,
        user_id: str,
        roles: Iterable[RoleId],
        path: str,
        action: str,
    ) -> AuditRecord:
        """Verify read+write access to *path* and record *action* on it."""
        if not self._resolver.can_read_and_write(roles, path):
            logger.info("Write denied: user=%s path=%s action=%s", user_id, path, action)
            raise OperationNotAllowedError(path, write=True)
        return self._recorder.file_access(action, user_id, path)

    def require_move(
        self,
        user_id: str,
        roles: Iterable[RoleId],
        source: str,
        destination: str,
    ) -> AuditRecord:
        """Verify read+write access to both paths and record one move."""
        caller_roles = role_set(roles)
        for path in (source, destination):
            if not self._resolver.can_read_and_write(caller_roles, path):
                logger.info("Move denied: user=%s %s->%s", user_id, source, destination)
                raise OperationNotAllowedError(path, write=True)
        return self._recorder.move(user_id, source, destination)

    # ------------------------------------------------------------------
    # Filter administration
    # ------------------------------------------------------------------

    def list_filters(self, admin_id: str) -> tuple[AccessPolicy, ...]:
        self._recorder.admin_access(AdminAccess.GET_ACCESS_FILTERS, admin_id)
        return self._resolver.list_policies()

    def add_filter(self, admin_id: str, policy: AccessPolicy) -> None:
        self._resolver.add_policy(policy)
        self._recorder.admin_access(AdminAccess.CREATE_ACCESS_FILTER, admin_id, _describe(policy))

    def remove_filter(self, admin_id: str, policy: AccessPolicy) -> None:
        self._resolver.remove_policy(policy)
        self._recorder.admin_access(AdminAccess.DELETE_ACCESS_FILTER, admin_id, _describe(policy))
