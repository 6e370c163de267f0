"""Tests for AccessLevel and AccessPolicy."""
from __future__ import annotations

import pytest

from fileserver_governance.access.policy import AccessLevel, AccessPolicy, RoleId, role_set
from fileserver_governance.errors import PolicyConfigError


class TestAccessLevel:
    @pytest.mark.parametrize("raw", ["READ", "read", " Read "])
    def test_parse_read(self, raw: str) -> None:
        assert AccessLevel.parse(raw) is AccessLevel.READ

    def test_parse_read_write(self) -> None:
        assert AccessLevel.parse("read_write") is AccessLevel.READ_WRITE

    def test_parse_passes_enum_through(self) -> None:
        assert AccessLevel.parse(AccessLevel.READ) is AccessLevel.READ

    def test_parse_unknown_raises(self) -> None:
        with pytest.raises(PolicyConfigError, match="Unknown access level"):
            AccessLevel.parse("WRITE")

    def test_grants_write(self) -> None:
        assert AccessLevel.READ_WRITE.grants_write is True
        assert AccessLevel.READ.grants_write is False


class TestAccessPolicy:
    def test_create_normalises_values(self) -> None:
        policy = AccessPolicy.create("joe/**", "read_write", ["joe", "admin"])
        assert policy.access_level is AccessLevel.READ_WRITE
        assert policy.roles == frozenset({RoleId("joe"), RoleId("admin")})

    def test_structural_equality(self) -> None:
        a = AccessPolicy.create("joe/**", "READ", ["joe"])
        b = AccessPolicy.create("joe/**", "READ", ("joe",))
        assert a == b
        assert hash(a) == hash(b)

    def test_empty_pattern_rejected(self) -> None:
        with pytest.raises(PolicyConfigError):
            AccessPolicy.create("", "READ", ["joe"])

    def test_empty_roles_rejected(self) -> None:
        with pytest.raises(PolicyConfigError, match="at least one role"):
            AccessPolicy.create("joe/**", "READ", [])

    def test_policy_is_frozen(self) -> None:
        policy = AccessPolicy.create("joe/**", "READ", ["joe"])
        with pytest.raises(AttributeError):
            policy.path_pattern = "jane/**"  # type: ignore[misc]

    def test_applies_to(self) -> None:
        policy = AccessPolicy.create("public/**", "READ", ["public", "joe"])
        assert policy.applies_to({RoleId("joe")}) is True
        assert policy.applies_to({RoleId("jane")}) is False
        assert policy.applies_to(set()) is False


class TestPolicySerialisation:
    def test_from_dict(self) -> None:
        policy = AccessPolicy.from_dict(
            {"path": "public/readonly/**", "access": "READ", "roles": ["public"]}
        )
        assert policy.path_pattern == "public/readonly/**"
        assert policy.access_level is AccessLevel.READ

    def test_from_dict_missing_path(self) -> None:
        with pytest.raises(PolicyConfigError, match="'path'"):
            AccessPolicy.from_dict({"access": "READ", "roles": ["public"]})

    def test_from_dict_roles_must_be_list(self) -> None:
        with pytest.raises(PolicyConfigError, match="roles"):
            AccessPolicy.from_dict({"path": "a/*", "access": "READ", "roles": "public"})

    def test_to_dict_sorts_roles(self) -> None:
        policy = AccessPolicy.create("a/*", "READ_WRITE", ["zed", "amy"])
        assert policy.to_dict() == {
            "path": "a/*",
            "access": "READ_WRITE",
            "roles": ["amy", "zed"],
        }

    def test_dict_round_trip(self) -> None:
        policy = AccessPolicy.create("docs/**/*.md", "READ", ["staff"])
        assert AccessPolicy.from_dict(policy.to_dict()) == policy


class TestStringRoles:
    def test_create_rejects_bare_string_roles(self) -> None:
        with pytest.raises(PolicyConfigError, match="not the string 'admin'"):
            AccessPolicy.create("secret/**", "READ", "admin")

    def test_constructor_rejects_bare_string_roles(self) -> None:
        with pytest.raises(PolicyConfigError, match="collection of role names"):
            AccessPolicy("secret/**", AccessLevel.READ, "admin")  # type: ignore[arg-type]

    def test_applies_to_treats_string_as_one_role(self) -> None:
        policy = AccessPolicy.create("secret/**", "READ", ["a"])
        assert policy.applies_to("admin") is False
        assert policy.applies_to("a") is True

    def test_role_set_wraps_string(self) -> None:
        assert role_set("admin") == frozenset({RoleId("admin")})
        assert role_set(["a", "b"]) == frozenset({RoleId("a"), RoleId("b")})
