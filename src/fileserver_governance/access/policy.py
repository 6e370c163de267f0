"""Access policy model.

An :class:`AccessPolicy` (a "filter" in the file server's admin API)
grants :attr:`AccessLevel.READ` or :attr:`AccessLevel.READ_WRITE` on every
path matching a glob pattern to a set of roles.

Example
-------
::

    policy = AccessPolicy.create("public/readonly/**", "READ", ["public"])
    assert policy.access_level is AccessLevel.READ
    assert RoleId("public") in policy.roles
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import NewType

from fileserver_governance.access.path_matcher import validate_pattern
from fileserver_governance.errors import PatternError, PolicyConfigError

RoleId = NewType("RoleId", str)


def role_set(roles: Iterable[RoleId] | str) -> frozenset[RoleId]:
    """Return *roles* as a frozenset; a bare string is one role, not its characters."""
    if isinstance(roles, str):
        return frozenset({RoleId(roles)})
    return frozenset(roles)


class AccessLevel(str, Enum):
    """Permission granted by a policy.  READ_WRITE implies READ."""

    READ = "READ"
    READ_WRITE = "READ_WRITE"

    @classmethod
    def parse(cls, raw: str | AccessLevel) -> AccessLevel:
        """Parse an access level name case-insensitively.

        Raises
        ------
        PolicyConfigError
            If *raw* names no known access level.
        """
        if isinstance(raw, AccessLevel):
            return raw
        try:
            return cls(str(raw).strip().upper())
        except ValueError:
            raise PolicyConfigError(
                f"Unknown access level {raw!r}. "
                f"Known levels: {[level.value for level in cls]}."
            ) from None

    @property
    def grants_write(self) -> bool:
        return self is AccessLevel.READ_WRITE


@dataclass(frozen=True)
class AccessPolicy:
    """Immutable access rule.

    Attributes
    ----------
    path_pattern:
        Non-empty glob pattern (see :mod:`~fileserver_governance.access.path_matcher`).
    access_level:
        Access granted on matching paths.
    roles:
        Non-empty set of roles the policy applies to.
    """

    path_pattern: str
    access_level: AccessLevel
    roles: frozenset[RoleId]

    def __post_init__(self) -> None:
        try:
            validate_pattern(self.path_pattern)
        except PatternError as exc:
            raise PolicyConfigError(str(exc)) from exc
        if not isinstance(self.access_level, AccessLevel):
            object.__setattr__(self, "access_level", AccessLevel.parse(self.access_level))
        if isinstance(self.roles, str):
            raise PolicyConfigError(
                f"Access policy roles for {self.path_pattern!r} must be a collection "
                f"of role names, not the string {self.roles!r}."
            )
        if not isinstance(self.roles, frozenset):
            object.__setattr__(self, "roles", frozenset(self.roles))
        if not self.roles:
            raise PolicyConfigError(
                f"Access policy for {self.path_pattern!r} must name at least one role."
            )

    @classmethod
    def create(
        cls,
        path_pattern: str,
        access_level: str | AccessLevel,
        roles: Iterable[str],
    ) -> AccessPolicy:
        """Build a policy from plain values, normalising roles and level.

        Raises
        ------
        PolicyConfigError
            If *roles* is a bare string or empty, or a value is invalid.
        """
        if isinstance(roles, str):
            raise PolicyConfigError(
                f"Access policy roles for {path_pattern!r} must be a collection "
                f"of role names, not the string {roles!r}."
            )
        return cls(
            path_pattern=path_pattern,
            access_level=AccessLevel.parse(access_level),
            roles=frozenset(RoleId(str(role)) for role in roles),
        )

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> AccessPolicy:
        """Build a policy from a filter dict (``path``, ``access``, ``roles``).

        Raises
        ------
        PolicyConfigError
            If a key is missing or a value is invalid.
        """
        if "path" not in data:
            raise PolicyConfigError("Filter is missing the 'path' key.")
        raw_roles = data.get("roles", [])
        if isinstance(raw_roles, str) or not isinstance(raw_roles, Iterable):
            raise PolicyConfigError(
                f"Filter 'roles' must be a list of role names; got {raw_roles!r}."
            )
        return cls.create(
            path_pattern=str(data["path"]),
            access_level=str(data.get("access", "")),
            roles=raw_roles,  # type: ignore[arg-type]
        )

    def to_dict(self) -> dict[str, object]:
        """Serialise to the filter dict shape accepted by :meth:`from_dict`."""
        return {
            "path": self.path_pattern,
            "access": self.access_level.value,
            "roles": sorted(self.roles),
        }

    def applies_to(self, roles: Iterable[RoleId] | str) -> bool:
        """Return True if any of *roles* is named by this policy."""
        return not self.roles.isdisjoint(role_set(roles))
