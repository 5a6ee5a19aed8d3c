from __future__ import annotations

import pytest

from conftest import ADMINISTRATORS, USERS, build_store
from user_rights.domain.entities.principal import Principal
from user_rights.errors import ConnectionStateError, TranslationError
from user_rights.policy.memory_store import MemoryPolicyStore
from user_rights.policy.store import PolicyStore


def test_memory_store_satisfies_protocol() -> None:
    assert isinstance(MemoryPolicyStore(), PolicyStore)


def test_connect_twice_fails() -> None:
    store = build_store({})
    with pytest.raises(ConnectionStateError, match="already exists"):
        store.connect("remote-host")


def test_connect_after_close_fails() -> None:
    with MemoryPolicyStore() as store:
        store.connect()
    with pytest.raises(ConnectionStateError):
        store.connect()


@pytest.mark.parametrize(
    "call",
    [
        lambda s: s.list_privileges_of(USERS),
        lambda s: s.list_principals_with(),
        lambda s: s.list_principals_with("SeServiceLogonRight"),
        lambda s: s.grant(USERS, "SeServiceLogonRight"),
        lambda s: s.revoke(USERS, "SeServiceLogonRight"),
    ],
)
def test_operations_require_connection(call) -> None:
    with pytest.raises(ConnectionStateError):
        call(build_store({}, connect=False))


@pytest.mark.parametrize("method", ["grant", "revoke"])
def test_empty_privilege_list_is_rejected(method) -> None:
    store = build_store({})
    with pytest.raises(ValueError):
        getattr(store, method)(USERS)


def test_privileges_are_case_insensitive() -> None:
    store = build_store({"SeServiceLogonRight": [USERS]})

    store.grant(ADMINISTRATORS, "SESERVICELOGONRIGHT")

    assert store.list_principals_with("seservicelogonright") == {USERS, ADMINISTRATORS}
    assert store.list_privileges_of(ADMINISTRATORS) == {"SeServiceLogonRight"}


def test_list_principals_without_privilege_enumerates_everyone() -> None:
    store = build_store({"SeServiceLogonRight": [USERS], "SeBatchLogonRight": [ADMINISTRATORS, USERS]})

    assert store.list_principals_with() == {USERS, ADMINISTRATORS}
    assert store.list_principals_with("SeDebugPrivilege") == set()


def test_grant_and_revoke_multiple_privileges() -> None:
    store = build_store({})

    store.grant(USERS, "SeServiceLogonRight", "SeBatchLogonRight")
    store.revoke(USERS, "SeBatchLogonRight")

    assert store.list_privileges_of(USERS) == {"SeServiceLogonRight"}


def test_translation() -> None:
    store = build_store({})

    assert store.resolve_principal("builtin\\users") == USERS
    assert store.resolve_principal("s-1-5-32-999") == Principal("S-1-5-32-999")
    assert store.resolve_display_name(ADMINISTRATORS) == "BUILTIN\\Administrators"

    with pytest.raises(TranslationError):
        store.resolve_principal("CONTOSO\\missing")
    with pytest.raises(TranslationError):
        store.resolve_display_name(Principal("S-1-5-21-1-2-3-4"))


def test_principal_identity_is_value_based() -> None:
    assert Principal("S-1-5-32-545") == USERS
    assert len({Principal("S-1-5-32-545"), USERS}) == 1
    with pytest.raises(ValueError):
        Principal("  ")
