"""Path-based access resolver.

:class:`AccessResolver` holds a collection of :class:`AccessPolicy`
entries and decides, for a caller's role set and a requested path,
whether read and/or read+write is permitted.

Resolution rules
----------------
1. The *matching set* is every policy whose ``path_pattern`` matches the
   path **and** whose roles intersect the caller's roles.
2. Read is granted if the matching set is non-empty; read+write is granted
   if any matching policy is ``READ_WRITE``.
3. Permissions combine with logical OR.  There is no "most specific wins":
   a directory-level READ policy never restricts a READ_WRITE policy on a
   sub-path, and vice versa.
4. An empty matching set denies everything (default-deny).

Policy order never affects the outcome.  The collection is held as an
immutable tuple replaced under a lock on every mutation, so concurrent
readers always see a complete snapshot.

Example
-------
::

    resolver = AccessResolver([
        AccessPolicy.create("public/**", "READ_WRITE", ["public"]),
        AccessPolicy.create("public/readonly/**", "READ", ["public"]),
    ])
    resolver.can_read({RoleId("public")}, "public/readonly/image.jpg")            # True
    resolver.can_read_and_write({RoleId("public")}, "public/readonly/image.jpg")  # True (OR)
"""
from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass

from fileserver_governance.access.path_matcher import matches
from fileserver_governance.access.policy import AccessLevel, AccessPolicy, RoleId, role_set

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of resolving one (roles, path) pair.

    Attributes
    ----------
    path:
        The resolved path.
    can_read:
        Whether any policy grants read.
    can_read_and_write:
        Whether any policy grants read+write.
    matched_policies:
        Every policy in the matching set, in collection order.
    """

    path: str
    can_read: bool
    can_read_and_write: bool
    matched_policies: tuple[AccessPolicy, ...] = ()

    def __bool__(self) -> bool:
        return self.can_read


class AccessResolver:
    """Resolves effective read/write permission from a policy collection.

    Parameters
    ----------
    policies:
        Initial policies, typically loaded from configuration.
    """

    def __init__(self, policies: Iterable[AccessPolicy] | None = None) -> None:
        self._policies: tuple[AccessPolicy, ...] = tuple(policies or ())
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, roles: Iterable[RoleId] | str, path: str) -> AccessDecision:
        """Return the full access decision for *roles* on *path*.

        A bare string is taken as a single role.
        """
        caller_roles = role_set(roles)
        snapshot = self._policies
        matched = tuple(
            policy
            for policy in snapshot
            if policy.applies_to(caller_roles) and matches(path, policy.path_pattern)
        )
        can_write = any(p.access_level is AccessLevel.READ_WRITE for p in matched)
        decision = AccessDecision(
            path=path,
            can_read=bool(matched),
            can_read_and_write=can_write,
            matched_policies=matched,
        )
        logger.debug(
            "Access %s: roles=%s path=%s matched=%d",
            "READ_WRITE" if can_write else ("READ" if matched else "DENY"),
            sorted(caller_roles),
            path,
            len(matched),
        )
        return decision

    def can_read(self, roles: Iterable[RoleId] | str, path: str) -> bool:
        """Return True if *roles* may read *path*."""
        return self.resolve(roles, path).can_read

    def can_read_and_write(self, roles: Iterable[RoleId] | str, path: str) -> bool:
        """Return True if *roles* may read and write *path*."""
        return self.resolve(roles, path).can_read_and_write

    # ------------------------------------------------------------------
    # Policy management
    # ------------------------------------------------------------------

    def add_policy(self, policy: AccessPolicy) -> None:
        """Add *policy*.  Duplicates are kept as distinct entries."""
        with self._lock:
            self._policies = self._policies + (policy,)
        logger.info(
            "Added access policy: path=%s access=%s roles=%s",
            policy.path_pattern,
            policy.access_level.value,
            sorted(policy.roles),
        )

    def remove_policy(self, policy: AccessPolicy) -> None:
        """Remove every entry structurally equal to *policy*.

        Removing a policy that is not present is a no-op.
        """
        with self._lock:
            remaining = tuple(p for p in self._policies if p != policy)
            removed = len(self._policies) - len(remaining)
            self._policies = remaining
        if removed:
            logger.info(
                "Removed %d access policy entries: path=%s access=%s roles=%s",
                removed,
                policy.path_pattern,
                policy.access_level.value,
                sorted(policy.roles),
            )
        else:
            logger.debug("Access policy not found for removal: %s", policy.path_pattern)

    def list_policies(self) -> tuple[AccessPolicy, ...]:
        """Return a snapshot of all policies."""
        return self._policies

    @property
    def policy_count(self) -> int:
        return len(self._policies)
