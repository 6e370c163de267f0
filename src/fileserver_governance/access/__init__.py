"""Path-based access control for the file server.

Example
-------
::

    from fileserver_governance.access import AccessPolicy, AccessResolver, RoleId

    resolver = AccessResolver([AccessPolicy.create("joe/**", "READ_WRITE", ["joe"])])
    assert resolver.can_read_and_write({RoleId("joe")}, "joe/data.txt")
    assert not resolver.can_read({RoleId("jane")}, "joe/data.txt")
"""
from __future__ import annotations

from fileserver_governance.access.path_matcher import compile_pattern, matches
from fileserver_governance.access.policy import AccessLevel, AccessPolicy, RoleId
from fileserver_governance.access.policy_loader import PolicyLoader
from fileserver_governance.access.resolver import AccessDecision, AccessResolver

__all__ = [
    "AccessDecision",
    "AccessLevel",
    "AccessPolicy",
    "AccessResolver",
    "PolicyLoader",
    "RoleId",
    "compile_pattern",
    "matches",
]
