"""Audit query evaluation shared by every audit store."""
from __future__ import annotations

from collections.abc import Iterable

from fileserver_governance.access.path_matcher import matches
from fileserver_governance.audit.query import AuditQuery
from fileserver_governance.audit.record import AuditRecord


def evaluate(record: AuditRecord, query: AuditQuery) -> bool:
    """Return True if *record* satisfies every constraint set on *query*.

    - ``from_ts`` / ``to_ts`` are inclusive bounds on the timestamp.
    - ``category``, ``action`` and ``user_id`` must be equal.
    - ``resource_pattern`` must glob-match the whole resource.
    - ``message_pattern`` must regex-match the whole message.
    """
    if query.from_ts is not None and record.timestamp < query.from_ts:
        return False
    if query.to_ts is not None and record.timestamp > query.to_ts:
        return False
    if query.category is not None and record.category != query.category:
        return False
    if query.action is not None and record.action != query.action:
        return False
    if query.user_id is not None and record.user_id != query.user_id:
        return False
    if query.resource_pattern is not None and not matches(record.resource, query.resource_pattern):
        return False
    regex = query.message_regex
    if regex is not None and regex.fullmatch(record.message) is None:
        return False
    return True


def select(records: Iterable[AuditRecord], query: AuditQuery) -> list[AuditRecord]:
    """Return the records satisfying *query*, preserving input order."""
    if query.is_match_all:
        return list(records)
    return [record for record in records if evaluate(record, query)]
