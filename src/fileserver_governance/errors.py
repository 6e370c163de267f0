"""Exception hierarchy for fileserver-governance.

Access denial is not an error: the resolver returns ``False``.  The
exceptions below cover configuration mistakes (bad patterns, invalid
policies or queries) and persistence failures of the durable audit log.
"""
from __future__ import annotations


class FileServerGovernanceError(Exception):
    """Base class for all errors raised by this package."""


class PatternError(FileServerGovernanceError, ValueError):
    """Raised when a glob or regular-expression pattern is malformed."""


class PolicyConfigError(PatternError):
    """Raised when an access policy or a filter config is invalid.

    Attributes
    ----------
    config_path:
        The config source that caused the error, if known.
    """

    def __init__(self, message: str, config_path: str | None = None) -> None:
        self.config_path = config_path
        prefix = f"[{config_path}] " if config_path else ""
        super().__init__(f"{prefix}{message}")


class AuditQueryError(PatternError):
    """Raised when an audit query carries a malformed pattern."""


class AuditPersistenceError(FileServerGovernanceError, OSError):
    """Raised when the durable audit log cannot be appended to or read."""


class OperationNotAllowedError(FileServerGovernanceError, PermissionError):
    """Raised by :class:`~fileserver_governance.guard.AccessGuard` on denial.

    Attributes
    ----------
    path:
        The path the caller was denied access to.
    write:
        ``True`` when read+write access was required.
    """

    def __init__(self, path: str, write: bool = False) -> None:
        self.path = path
        self.write = write
        mode = "read+write" if write else "read"
        super().__init__(f"Operation not allowed: {mode} access to {path!r} denied.")
