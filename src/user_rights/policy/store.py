"""Policy store abstraction consumed by the reconciliation and listing services."""

from __future__ import annotations

from typing import Optional, Protocol, Set, runtime_checkable

from user_rights.domain.entities.principal import Principal


@runtime_checkable
class PolicyStore(Protocol):
    """Connection to a security policy database holding user right assignments."""

    def connect(self, system_name: Optional[str] = None) -> None: ...

    def list_privileges_of(self, principal: Principal) -> Set[str]: ...

    def list_principals_with(self, privilege: Optional[str] = None) -> Set[Principal]: ...

    def grant(self, principal: Principal, *privileges: str) -> None: ...

    def revoke(self, principal: Principal, *privileges: str) -> None: ...

    def resolve_principal(self, name: str) -> Principal: ...

    def resolve_display_name(self, principal: Principal) -> str: ...

    def close(self) -> None: ...


def create_policy_store() -> PolicyStore:
    """Return the native store for this host (Windows LSA)."""
    from user_rights.policy.lsa_store import LsaPolicyStore

    return LsaPolicyStore()
