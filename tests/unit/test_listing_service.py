from __future__ import annotations

import pytest

from conftest import ADMINISTRATORS, REMOTE_USER, USERS, build_store
from user_rights.domain.entities.assignment import UserRightEntry
from user_rights.errors import ConnectionStateError
from user_rights.services.listing_service import ListingService


def test_list_assignments_sorts_and_tolerates_unknown_principals() -> None:
    store = build_store(
        {
            "SeServiceLogonRight": [REMOTE_USER],
            "sebatchlogonright": [REMOTE_USER, USERS],
        }
    )

    entries = ListingService().list_assignments(store)

    assert entries == [
        UserRightEntry(privilege="sebatchlogonright", security_id=REMOTE_USER.sid, account_name=""),
        UserRightEntry(privilege="sebatchlogonright", security_id=USERS.sid, account_name="BUILTIN\\Users"),
        UserRightEntry(privilege="SeServiceLogonRight", security_id=REMOTE_USER.sid, account_name=""),
    ]


def test_list_assignments_orders_by_principal_within_privilege() -> None:
    store = build_store({"SeBackupPrivilege": [USERS, ADMINISTRATORS]})

    entries = ListingService().list_assignments(store)

    assert [e.security_id for e in entries] == [ADMINISTRATORS.sid, USERS.sid]
    assert [e.account_name for e in entries] == ["BUILTIN\\Administrators", "BUILTIN\\Users"]


def test_list_assignments_is_read_only() -> None:
    store = build_store({"SeBackupPrivilege": [USERS]})
    before = store.snapshot()

    ListingService().list_assignments(store)

    assert store.snapshot() == before
    assert store.operations == []


def test_list_assignments_empty_store() -> None:
    assert ListingService().list_assignments(build_store({})) == []


def test_list_assignments_requires_connection() -> None:
    with pytest.raises(ConnectionStateError):
        ListingService().list_assignments(build_store({}, connect=False))
