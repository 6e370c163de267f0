"""Immutable audit record.

An :class:`AuditRecord` describes one security-relevant action: who did
what, to which resource, when, and with which outcome.  Records are
created by the operation that performed the action and are never
mutated afterwards.
"""
from __future__ import annotations

import json
from dataclasses import dataclass

_FIELDS: tuple[str, ...] = (
    "timestamp",
    "category",
    "action",
    "user_id",
    "resource",
    "message",
)


@dataclass(frozen=True)
class AuditRecord:
    """A single audit trail entry.

    Attributes
    ----------
    timestamp:
        Epoch seconds at which the action happened.
    category:
        Category of the action (see :mod:`~fileserver_governance.audit.constants`).
    action:
        The action within the category (e.g. ``"download"``).
    user_id:
        Identifier of the acting user, or ``"ANONYMOUS"``.
    resource:
        Path of the affected resource; empty for non-file actions.
    message:
        Outcome message, e.g. ``"OK"`` or ``"error: file does not exist"``.
    extra:
        Free-form detail (session id, move destination).  May be empty
        or ``None``.
    """

    timestamp: int
    category: str
    action: str
    user_id: str
    resource: str
    message: str
    extra: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.timestamp, bool) or not isinstance(self.timestamp, int):
            raise ValueError(
                f"Audit record timestamp must be an integer; got {self.timestamp!r}."
            )
        for name in _FIELDS[1:]:
            value = getattr(self, name)
            if not isinstance(value, str):
                raise TypeError(f"Audit record field {name!r} must be a string; got {value!r}.")
        if self.extra is not None and not isinstance(self.extra, str):
            raise TypeError(f"Audit record field 'extra' must be a string or None; got {self.extra!r}.")

    def to_dict(self) -> dict[str, object]:
        """Serialise this record to a plain JSON-compatible dict."""
        return {
            "timestamp": self.timestamp,
            "category": self.category,
            "action": self.action,
            "user_id": self.user_id,
            "resource": self.resource,
            "message": self.message,
            "extra": self.extra,
        }

    def to_json(self) -> str:
        """Return this record as one compact JSON document (no newline)."""
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> AuditRecord:
        """Reconstruct a record from a dict produced by :meth:`to_dict`.

        Raises
        ------
        KeyError
            If a required field is missing.
        ValueError
            If ``timestamp`` is not an integer.
        """
        missing = [name for name in _FIELDS if name not in data]
        if missing:
            raise KeyError(f"Audit record is missing fields: {missing}")
        extra = data.get("extra")
        return cls(
            timestamp=data["timestamp"],  # type: ignore[arg-type]
            category=str(data["category"]),
            action=str(data["action"]),
            user_id=str(data["user_id"]),
            resource=str(data["resource"]),
            message=str(data["message"]),
            extra=None if extra is None else str(extra),
        )

    @classmethod
    def from_json(cls, text: str) -> AuditRecord:
        """Parse a record from the output of :meth:`to_json`."""
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("Audit record JSON must be an object.")
        return cls.from_dict(data)
