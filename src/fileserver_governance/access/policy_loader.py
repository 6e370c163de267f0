"""YAML-based filter configuration loader.

PolicyLoader reads a standalone filter file and returns the list of
:class:`AccessPolicy` entries it declares.

Schema
------
::

    version: "1"
    filters:
      - path: "joe/**"
        access: READ_WRITE
        roles: ["joe"]
      - path: "public/readonly/**"
        access: READ
        roles: ["public"]

Example
-------
::

    loader = PolicyLoader()
    resolver = AccessResolver(loader.load("/etc/fileserver/filters.yaml"))
"""
from __future__ import annotations

import logging
from pathlib import Path

import yaml

from fileserver_governance.access.policy import AccessPolicy
from fileserver_governance.errors import PolicyConfigError

logger = logging.getLogger(__name__)

_SUPPORTED_VERSIONS: frozenset[str] = frozenset(["1.0", "1"])


class PolicyLoader:
    """Loads access policies from YAML files, YAML strings or dicts.

    Parameters
    ----------
    strict:
        When ``True``, unknown top-level keys are an error.  Default
        ``False`` (unknown keys are ignored).
    """

    _KNOWN_TOP_KEYS: frozenset[str] = frozenset(["version", "filters", "description"])

    def __init__(self, strict: bool = False) -> None:
        self._strict = strict

    def load(self, config_path: str | Path) -> list[AccessPolicy]:
        """Load policies from a YAML file on disk.

        Raises
        ------
        FileNotFoundError
            If the file does not exist.
        PolicyConfigError
            If the file cannot be parsed or a filter is invalid.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Filter config not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise PolicyConfigError(f"Failed to parse YAML: {exc}", str(config_path)) from exc

        return self._build_policies(raw, config_path=str(config_path))

    def load_from_dict(
        self,
        config: dict[str, object],
        config_path: str | None = None,
    ) -> list[AccessPolicy]:
        """Load policies from an already-parsed config dict."""
        return self._build_policies(config, config_path=config_path)

    def load_from_yaml_string(
        self,
        yaml_string: str,
        config_path: str | None = None,
    ) -> list[AccessPolicy]:
        """Load policies from YAML text."""
        try:
            raw = yaml.safe_load(yaml_string) or {}
        except yaml.YAMLError as exc:
            raise PolicyConfigError(f"Failed to parse YAML string: {exc}", config_path) from exc
        return self._build_policies(raw, config_path=config_path)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _build_policies(
        self,
        raw: object,
        config_path: str | None = None,
    ) -> list[AccessPolicy]:
        raw = self._validate_structure(raw, config_path)

        version = str(raw.get("version", "1"))
        if version not in _SUPPORTED_VERSIONS:
            raise PolicyConfigError(
                f"Unsupported config version {version!r}. "
                f"Supported: {sorted(_SUPPORTED_VERSIONS)}.",
                config_path,
            )

        policies = build_policies(raw["filters"], config_path)  # type: ignore[arg-type]
        logger.info(
            "Loaded %d access policies from %s",
            len(policies),
            config_path or "<dict>",
        )
        return policies

    def _validate_structure(
        self,
        raw: object,
        config_path: str | None,
    ) -> dict[str, object]:
        """Validate top-level structure and return the config mapping."""
        if not isinstance(raw, dict):
            raise PolicyConfigError("Filter config must be a YAML mapping (dict).", config_path)

        if "filters" not in raw:
            raise PolicyConfigError("Filter config must contain a 'filters' list.", config_path)

        if not isinstance(raw["filters"], list):
            raise PolicyConfigError("Filter config 'filters' must be a list.", config_path)

        if self._strict:
            unknown_keys = set(raw.keys()) - self._KNOWN_TOP_KEYS
            if unknown_keys:
                raise PolicyConfigError(
                    f"Unknown top-level keys: {sorted(unknown_keys)}. "
                    f"Known keys: {sorted(self._KNOWN_TOP_KEYS)}.",
                    config_path,
                )
        return raw


def build_policies(
    raw_filters: list[object],
    config_path: str | None = None,
) -> list[AccessPolicy]:
    """Build policies from a list of filter dicts, reporting the bad index."""
    policies: list[AccessPolicy] = []
    for index, raw_filter in enumerate(raw_filters):
        if not isinstance(raw_filter, dict):
            raise PolicyConfigError(
                f"Filter at index {index} must be a mapping; got {raw_filter!r}.",
                config_path,
            )
        try:
            policies.append(AccessPolicy.from_dict(raw_filter))
        except (ValueError, TypeError) as exc:
            raise PolicyConfigError(f"Error in filter at index {index}: {exc}", config_path) from exc
    return policies
