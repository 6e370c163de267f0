#!/usr/bin/env python3
"""Example: Quickstart — fileserver-governance

Minimal working example: define access filters, check access for a few
users, and audit the allowed operations.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install fileserver-governance
"""
from __future__ import annotations

import fileserver_governance as fsg
from fileserver_governance.audit.constants import FileAccess


def main() -> None:
    print(f"fileserver-governance version: {fsg.__version__}")

    # Step 1: Load access filters
    policies = fsg.PolicyLoader().load_from_dict({
        "filters": [
            {"path": "joe/**", "access": "READ_WRITE", "roles": ["joe"]},
            {"path": "public/*", "access": "READ_WRITE", "roles": ["public"]},
            {"path": "public/readonly/**", "access": "READ", "roles": ["public"]},
        ]
    })
    resolver = fsg.AccessResolver(policies)
    print(f"Resolver ready: {resolver.policy_count} filters loaded")

    # Step 2: Check access
    checks = [
        ({fsg.RoleId("joe")}, "joe/data.txt"),
        ({fsg.RoleId("public")}, "public/readonly/image.jpg"),
        ({fsg.RoleId("public")}, "joe/data.txt"),
    ]

    print("\nAccess checks:")
    for roles, path in checks:
        decision = resolver.resolve(roles, path)
        level = "READ_WRITE" if decision.can_read_and_write else ("READ" if decision.can_read else "DENY")
        print(f"  [{level}] {sorted(roles)} -> {path}")

    # Step 3: Audit allowed operations through the guard
    store = fsg.BoundedRingBufferStore(capacity=100)
    guard = fsg.AccessGuard(resolver, fsg.AuditRecorder(store))
    guard.require_read_write("joe", {fsg.RoleId("joe")}, "joe/data.txt", FileAccess.UPLOAD)
    guard.require_read("anon", {fsg.RoleId("public")}, "public/readonly/image.jpg", FileAccess.DOWNLOAD)
    try:
        guard.require_read("anon", {fsg.RoleId("public")}, "joe/data.txt", FileAccess.DOWNLOAD)
    except fsg.OperationNotAllowedError as exc:
        print(f"\nDenied: {exc}")

    entries = store.query(fsg.AuditQuery.MATCH_ALL)
    print(f"\nAudit log: {len(entries)} entries")
    for entry in entries:
        print(f"  {entry.timestamp} {entry.category}/{entry.action} {entry.user_id} {entry.resource}")


if __name__ == "__main__":
    main()
