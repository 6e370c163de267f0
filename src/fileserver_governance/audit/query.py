"""Audit query model and builder.

An :class:`AuditQuery` is an immutable predicate over audit records.
Every field is optional; an unset field never excludes a record, and all
set fields are combined with logical AND.

Example
-------
::

    query = (
        AuditQuery.builder()
        .with_user_id("user1")
        .with_resource_pattern("user1/files/*")
        .with_message_pattern("ok")
        .build()
    )
    records = store.query(query)
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import ClassVar

from fileserver_governance.access.path_matcher import validate_pattern
from fileserver_governance.errors import AuditQueryError, PatternError

# Wire names used by the admin API, mapped to attribute names.
_WIRE_NAMES: dict[str, str] = {
    "from": "from_ts",
    "to": "to_ts",
    "category": "category",
    "action": "action",
    "userId": "user_id",
    "resourcePattern": "resource_pattern",
    "messagePattern": "message_pattern",
}


@dataclass(frozen=True)
class AuditQuery:
    """Immutable audit query.

    Attributes
    ----------
    from_ts:
        Inclusive lower bound on the record timestamp (epoch seconds).
    to_ts:
        Inclusive upper bound on the record timestamp (epoch seconds).
    category, action, user_id:
        Exact-match constraints.
    resource_pattern:
        Glob pattern the record resource must match in full.
    message_pattern:
        Regular expression the record message must match in full.
    """

    MATCH_ALL: ClassVar[AuditQuery]

    from_ts: int | None = None
    to_ts: int | None = None
    category: str | None = None
    action: str | None = None
    user_id: str | None = None
    resource_pattern: str | None = None
    message_pattern: str | None = None
    _message_regex: re.Pattern[str] | None = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if self.resource_pattern is not None:
            try:
                validate_pattern(self.resource_pattern)
            except PatternError as exc:
                raise AuditQueryError(f"Invalid resource pattern: {exc}") from exc
        if self.message_pattern is not None:
            try:
                compiled = re.compile(self.message_pattern)
            except re.error as exc:
                raise AuditQueryError(
                    f"Invalid message pattern {self.message_pattern!r}: {exc}"
                ) from exc
            object.__setattr__(self, "_message_regex", compiled)

    @property
    def message_regex(self) -> re.Pattern[str] | None:
        """The compiled message pattern, or ``None`` when unset."""
        return self._message_regex

    @property
    def is_match_all(self) -> bool:
        return self == AuditQuery.MATCH_ALL

    @staticmethod
    def builder() -> AuditQueryBuilder:
        return AuditQueryBuilder()

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------

    def to_dict(self) -> dict[str, object]:
        """Return the set fields keyed by their wire names."""
        result: dict[str, object] = {}
        for wire_name, attr in _WIRE_NAMES.items():
            value = getattr(self, attr)
            if value is not None:
                result[wire_name] = value
        return result

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> AuditQuery:
        """Build a query from a dict using wire names or attribute names.

        Raises
        ------
        AuditQueryError
            On unknown keys, non-integer bounds or malformed patterns.
        """
        known_attrs = set(_WIRE_NAMES.values())
        kwargs: dict[str, object] = {}
        for key, value in data.items():
            attr = _WIRE_NAMES.get(key, key)
            if attr not in known_attrs:
                raise AuditQueryError(f"Unknown audit query field {key!r}.")
            if value is None:
                continue
            if attr in ("from_ts", "to_ts"):
                if isinstance(value, bool) or not isinstance(value, int):
                    raise AuditQueryError(f"Audit query field {key!r} must be an integer.")
            else:
                value = str(value)
            kwargs[attr] = value
        return cls(**kwargs)  # type: ignore[arg-type]


AuditQuery.MATCH_ALL = AuditQuery()


def _epoch_seconds(bound: str, value: object) -> int:
    if isinstance(value, bool):
        raise AuditQueryError(f"Audit query bound {bound!r} must be an integer; got {value!r}.")
    try:
        return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError) as exc:
        raise AuditQueryError(
            f"Audit query bound {bound!r} must be an integer; got {value!r}."
        ) from exc


class AuditQueryBuilder:
    """Incrementally assembles an :class:`AuditQuery`.

    Each ``with_*`` / ``from_time`` / ``to_time`` method returns the builder
    so calls can be chained; :meth:`build` validates the patterns and
    returns the frozen query.
    """

    def __init__(self) -> None:
        self._fields: dict[str, object] = {}

    def from_time(self, timestamp: int) -> AuditQueryBuilder:
        self._fields["from_ts"] = _epoch_seconds("from", timestamp)
        return self

    def to_time(self, timestamp: int) -> AuditQueryBuilder:
        self._fields["to_ts"] = _epoch_seconds("to", timestamp)
        return self

    def with_category(self, category: str) -> AuditQueryBuilder:
        self._fields["category"] = category
        return self

    def with_action(self, action: str) -> AuditQueryBuilder:
        self._fields["action"] = action
        return self

    def with_user_id(self, user_id: str) -> AuditQueryBuilder:
        self._fields["user_id"] = user_id
        return self

    def with_resource_pattern(self, pattern: str) -> AuditQueryBuilder:
        self._fields["resource_pattern"] = pattern
        return self

    def with_message_pattern(self, pattern: str) -> AuditQueryBuilder:
        self._fields["message_pattern"] = pattern
        return self

    def build(self) -> AuditQuery:
        """Return the immutable query.

        Raises
        ------
        AuditQueryError
            If a pattern is malformed.
        """
        return AuditQuery(**self._fields)  # type: ignore[arg-type]
