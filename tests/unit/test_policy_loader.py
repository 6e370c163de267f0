"""Tests for PolicyLoader."""
from __future__ import annotations

from pathlib import Path

import pytest

from fileserver_governance.access.policy import AccessLevel
from fileserver_governance.access.policy_loader import PolicyLoader, build_policies
from fileserver_governance.errors import PolicyConfigError

VALID_YAML = """
version: "1"
filters:
  - path: "joe/**"
    access: READ_WRITE
    roles: ["joe"]
  - path: "public/readonly/**"
    access: read
    roles: ["public", "joe"]
"""


class TestLoadFromString:
    def test_valid_config(self) -> None:
        policies = PolicyLoader().load_from_yaml_string(VALID_YAML)
        assert [p.path_pattern for p in policies] == ["joe/**", "public/readonly/**"]
        assert policies[1].access_level is AccessLevel.READ

    def test_invalid_yaml(self) -> None:
        with pytest.raises(PolicyConfigError, match="parse"):
            PolicyLoader().load_from_yaml_string("filters: [unclosed")

    def test_empty_document_has_no_filters(self) -> None:
        with pytest.raises(PolicyConfigError, match="'filters'"):
            PolicyLoader().load_from_yaml_string("")

    def test_filters_must_be_list(self) -> None:
        with pytest.raises(PolicyConfigError, match="must be a list"):
            PolicyLoader().load_from_yaml_string("filters: {path: a}")

    def test_top_level_must_be_mapping(self) -> None:
        with pytest.raises(PolicyConfigError, match="mapping"):
            PolicyLoader().load_from_yaml_string("- a\n- b\n")

    def test_unsupported_version(self) -> None:
        with pytest.raises(PolicyConfigError, match="Unsupported config version"):
            PolicyLoader().load_from_yaml_string('version: "2"\nfilters: []\n')


class TestLoadFromDict:
    def test_empty_filter_list(self) -> None:
        assert PolicyLoader().load_from_dict({"filters": []}) == []

    def test_bad_filter_reports_index(self) -> None:
        config = {
            "filters": [
                {"path": "a/*", "access": "READ", "roles": ["x"]},
                {"path": "b/*", "access": "EXECUTE", "roles": ["x"]},
            ]
        }
        with pytest.raises(PolicyConfigError, match="index 1"):
            PolicyLoader().load_from_dict(config)

    def test_unknown_keys_ignored_by_default(self) -> None:
        policies = PolicyLoader().load_from_dict({"filters": [], "extra": 1})
        assert policies == []

    def test_unknown_keys_rejected_in_strict_mode(self) -> None:
        with pytest.raises(PolicyConfigError, match="Unknown top-level keys"):
            PolicyLoader(strict=True).load_from_dict({"filters": [], "extra": 1})

    def test_error_message_includes_source(self) -> None:
        with pytest.raises(PolicyConfigError, match=r"\[filters.yaml\]"):
            PolicyLoader().load_from_dict({"filters": "nope"}, config_path="filters.yaml")


class TestLoadFromFile:
    def test_load_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "filters.yaml"
        config_file.write_text(VALID_YAML, encoding="utf-8")
        assert len(PolicyLoader().load(config_file)) == 2

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            PolicyLoader().load(tmp_path / "absent.yaml")


class TestBuildPolicies:
    def test_non_mapping_entry(self) -> None:
        with pytest.raises(PolicyConfigError, match="index 0 must be a mapping"):
            build_policies(["joe/**"])
