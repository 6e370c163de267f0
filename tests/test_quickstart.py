"""Test that the top-level quickstart API works for fileserver-governance."""
from __future__ import annotations


def test_quickstart_import() -> None:
    import fileserver_governance as fsg

    assert fsg.__version__


def test_quickstart_resolve() -> None:
    import fileserver_governance as fsg

    resolver = fsg.AccessResolver([fsg.AccessPolicy.create("public/**", "READ", ["public"])])
    assert resolver.can_read({fsg.RoleId("public")}, "public/readme.txt") is True
    assert resolver.can_read_and_write({fsg.RoleId("public")}, "public/readme.txt") is False


def test_quickstart_default_deny() -> None:
    import fileserver_governance as fsg

    resolver = fsg.AccessResolver()
    assert resolver.can_read({fsg.RoleId("admin")}, "anything") is False


def test_quickstart_audit() -> None:
    import fileserver_governance as fsg

    store = fsg.BoundedRingBufferStore(capacity=100)
    recorder = fsg.AuditRecorder(store)
    recorder.login_ok("joe", "session-1")
    assert len(store.query(fsg.AuditQuery.MATCH_ALL)) == 1


def test_quickstart_defaults_config() -> None:
    import fileserver_governance as fsg

    config = fsg.ConfigLoader().defaults()
    assert isinstance(fsg.build_audit_store(config), fsg.AuditStore)
    assert fsg.build_access_resolver(config).policy_count == 0
