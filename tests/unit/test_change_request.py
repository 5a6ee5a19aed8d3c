from __future__ import annotations

import pytest

from user_rights.domain.entities.change import (
    NoRemoval,
    PrincipalChangeRequest,
    PrivilegeChangeRequest,
    RevokeAll,
    RevokeExplicit,
    RevokeOthers,
    RevokePattern,
)


def test_principal_request_removal_modes() -> None:
    assert PrincipalChangeRequest("u", revoke_all=True).removal_mode() == RevokeAll()
    assert PrincipalChangeRequest("u", grants=("A",), revoke_others=True).removal_mode() == RevokeOthers()
    assert PrincipalChangeRequest("u", grants=("A",), revocations=("B",)).removal_mode() == RevokeExplicit(("B",))
    assert PrincipalChangeRequest("u", grants=("A",)).removal_mode() == NoRemoval()


def test_privilege_request_removal_modes() -> None:
    assert PrivilegeChangeRequest("p", revoke_pattern="^S-1-5-21-").removal_mode() == RevokePattern("^S-1-5-21-")
    assert PrivilegeChangeRequest("p", revoke_pattern="  ", grants=("u",)).removal_mode() == NoRemoval()


@pytest.mark.parametrize(
    "request_",
    [
        PrincipalChangeRequest("u", revoke_all=True, grants=("A",)),
        PrincipalChangeRequest("u", revoke_others=True),
        PrincipalChangeRequest("u", revoke_others=True, grants=("A",), revocations=("B",)),
        PrivilegeChangeRequest("p", revoke_all=True, revoke_pattern="x"),
        PrivilegeChangeRequest("p", revoke_others=True, grants=("u",), revoke_pattern="x"),
        PrivilegeChangeRequest("p", revocations=("u",), revoke_pattern="x"),
    ],
)
def test_contradictory_flags_raise_value_error(request_) -> None:
    with pytest.raises(ValueError):
        request_.removal_mode()
