from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from user_rights.domain.entities.assignment import UserRightEntry
from user_rights.utils.serialization import to_csv, to_json

ENTRIES = [
    UserRightEntry(privilege="SeBatchLogonRight", security_id="S-1-5-32-545", account_name="BUILTIN\\Users"),
    UserRightEntry(privilege="SeServiceLogonRight", security_id="S-1-5-21-1-2-3-1001"),
]


def test_to_csv_quotes_every_field() -> None:
    assert to_csv(ENTRIES).splitlines() == [
        '"Privilege","SecurityId","AccountName"',
        '"SeBatchLogonRight","S-1-5-32-545","BUILTIN\\Users"',
        '"SeServiceLogonRight","S-1-5-21-1-2-3-1001",""',
    ]


def test_to_csv_writes_header_for_empty_listing() -> None:
    assert to_csv([]).splitlines() == ['"Privilege","SecurityId","AccountName"']


def test_to_json_uses_pascal_case_fields() -> None:
    assert json.loads(to_json(ENTRIES)) == [
        {"Privilege": "SeBatchLogonRight", "SecurityId": "S-1-5-32-545", "AccountName": "BUILTIN\\Users"},
        {"Privilege": "SeServiceLogonRight", "SecurityId": "S-1-5-21-1-2-3-1001", "AccountName": ""},
    ]


def test_entry_normalizes_missing_account_name() -> None:
    assert UserRightEntry(privilege="SeBatchLogonRight", security_id="S-1-5-32-545", account_name=None).account_name == ""
    assert UserRightEntry(privilege="SeBatchLogonRight", security_id="S-1-5-32-545", account_name="  ").account_name == ""


@pytest.mark.parametrize("field", ["privilege", "security_id"])
def test_entry_requires_privilege_and_sid(field) -> None:
    values = {"privilege": "SeBatchLogonRight", "security_id": "S-1-5-32-545", field: " "}
    with pytest.raises(ValidationError):
        UserRightEntry(**values)


def test_entry_is_immutable() -> None:
    with pytest.raises(ValidationError):
        ENTRIES[0].privilege = "SeDebugPrivilege"
