"""File server governance configuration with Pydantic v2 validation.

Loads and validates a ``fileserver.yaml`` file into a typed
:class:`FileServerConfig` and builds the access resolver and audit store
it describes.  Unknown keys are allowed so other components of the file
server can share the same file.

Example
-------
::

    config = ConfigLoader().load(Path("fileserver.yaml"))
    resolver = build_access_resolver(config)
    audit_store = build_audit_store(config)
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from fileserver_governance.access.policy import AccessLevel, AccessPolicy
from fileserver_governance.access.resolver import AccessResolver
from fileserver_governance.audit.append_log import JsonlFilePersistence, PersistedAppendLogStore
from fileserver_governance.audit.ring_buffer import DEFAULT_CAPACITY, BoundedRingBufferStore
from fileserver_governance.audit.store import AuditStore
from fileserver_governance.errors import PolicyConfigError

logger = logging.getLogger(__name__)


class FilterConfig(BaseModel):
    """One access filter as written in the config file."""

    model_config = {"extra": "forbid"}

    path: str = Field(min_length=1)
    access: AccessLevel
    roles: list[str] = Field(min_length=1)

    @field_validator("access", mode="before")
    @classmethod
    def normalise_access(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    def to_policy(self) -> AccessPolicy:
        return AccessPolicy.create(self.path, self.access, self.roles)


class AuditConfig(BaseModel):
    """Configuration for the audit trail store."""

    model_config = {"extra": "allow"}

    store: Literal["memory", "file"] = Field(default="memory")
    capacity: int = Field(default=DEFAULT_CAPACITY, ge=1)
    log_path: Path = Field(default=Path("./fileserver_audit.jsonl"))


class FileServerConfig(BaseModel):
    """Top-level configuration schema.

    All sections are optional; an empty file yields no filters (every
    path denied) and an in-memory audit store.
    """

    model_config = {"extra": "allow"}

    version: str = Field(default="1")
    filters: list[FilterConfig] = Field(default_factory=list)
    audit: AuditConfig = Field(default_factory=AuditConfig)

    def policies(self) -> list[AccessPolicy]:
        return [f.to_policy() for f in self.filters]


class ConfigLoader:
    """Loads and validates file server YAML configuration."""

    def load(self, config_path: Path) -> FileServerConfig:
        """Load and validate a YAML config file.

        Raises
        ------
        FileNotFoundError
            When the config file does not exist.
        PolicyConfigError
            When the YAML cannot be parsed or fails validation.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"File server config not found: {config_path}")

        with config_path.open("r", encoding="utf-8") as fh:
            text = fh.read()
        config = self.load_string(text, source=str(config_path))
        logger.info(
            "Loaded config from %s: %d filters, audit store=%s",
            config_path,
            len(config.filters),
            config.audit.store,
        )
        return config

    def load_string(self, yaml_content: str, source: str | None = None) -> FileServerConfig:
        """Load and validate YAML text."""
        try:
            raw = yaml.safe_load(yaml_content) or {}
        except yaml.YAMLError as exc:
            raise PolicyConfigError(f"Failed to parse YAML: {exc}", source) from exc
        if not isinstance(raw, dict):
            raise PolicyConfigError("Config must be a YAML mapping (dict).", source)
        try:
            return FileServerConfig.model_validate(raw)
        except ValidationError as exc:
            raise PolicyConfigError(f"Invalid configuration: {exc}", source) from exc

    def defaults(self) -> FileServerConfig:
        """Return a configuration with every default applied."""
        return FileServerConfig()


def build_access_resolver(config: FileServerConfig) -> AccessResolver:
    """Create a resolver populated with the configured filters."""
    return AccessResolver(config.policies())


def build_audit_store(config: FileServerConfig) -> AuditStore:
    """Create the audit store selected by ``config.audit.store``."""
    if config.audit.store == "file":
        logger.info("Using persisted audit log at %s", config.audit.log_path)
        return PersistedAppendLogStore(JsonlFilePersistence(config.audit.log_path))
    return BoundedRingBufferStore(capacity=config.audit.capacity)
