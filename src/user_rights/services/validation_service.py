"""
Option-combination checks for change requests.

Every function here is pure: it inspects a request and returns the list of
violation messages, all of them, in a fixed order. An empty list means the
request can be handed to the reconciliation service.
"""

from __future__ import annotations

from typing import List, Sequence

import regex

from user_rights.domain.entities.change import PrincipalChangeRequest, PrivilegeChangeRequest
from user_rights.domain.entities.principal import privilege_key
from user_rights.utils.patterns import compile_pattern


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _entry_violations(grants: Sequence[str], revocations: Sequence[str]) -> List[str]:
    violations: List[str] = []

    if any(_is_blank(g) for g in grants):
        violations.append("The grants cannot contain empty or whitespace values.")

    if any(_is_blank(r) for r in revocations):
        violations.append("The revocations cannot contain empty or whitespace values.")

    grant_keys = {privilege_key(g) for g in grants if g is not None}
    revocation_keys = {privilege_key(r) for r in revocations if r is not None}

    if grant_keys & revocation_keys:
        violations.append("The grants and revocations cannot overlap.")

    if len(grants) != len(grant_keys):
        violations.append("The grants cannot contain duplicates.")

    if len(revocations) != len(revocation_keys):
        violations.append("The revocations cannot contain duplicates.")

    return violations


def validate_principal_change(request: PrincipalChangeRequest) -> List[str]:
    grants = tuple(request.grants or ())
    revocations = tuple(request.revocations or ())
    violations: List[str] = []

    if _is_blank(request.principal):
        violations.append("The principal cannot be empty or whitespace.")

    if not grants and not revocations and not request.revoke_all:
        violations.append("At least one of grant, revoke, or revoke all is required.")

    violations.extend(_entry_violations(grants, revocations))

    if request.revoke_all and (request.revoke_others or grants or revocations):
        violations.append("The revoke all option cannot be used with any other option.")

    if request.revoke_others and (request.revoke_all or not grants or revocations):
        violations.append("The revoke others option is only valid with grants.")

    return violations


def validate_privilege_change(request: PrivilegeChangeRequest) -> List[str]:
    grants = tuple(request.grants or ())
    revocations = tuple(request.revocations or ())
    pattern = request.pattern
    violations: List[str] = []

    if _is_blank(request.privilege):
        violations.append("The privilege cannot be empty or whitespace.")

    if not grants and not revocations and not request.revoke_all and pattern is None:
        violations.append(
            "At least one of grant, revoke, revoke all, or revoke pattern is required."
        )

    violations.extend(_entry_violations(grants, revocations))

    if request.revoke_all and (grants or revocations or request.revoke_others or pattern is not None):
        violations.append("The revoke all option cannot be used with any other option.")

    if request.revoke_others and (
        not grants or revocations or request.revoke_all or pattern is not None
    ):
        violations.append("The revoke others option is only valid with grants.")

    if pattern is not None and (revocations or request.revoke_all or request.revoke_others):
        violations.append(
            "The revoke pattern option is only valid when used alone or with grants."
        )

    if pattern is not None:
        try:
            compile_pattern(pattern)
        except regex.error as exc:
            violations.append(f"The revoke pattern must be a valid regular expression: {exc}.")

    return violations
