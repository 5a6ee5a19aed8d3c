from __future__ import annotations

import re
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

from user_rights.configs.logging_config import get_logger
from user_rights.domain.entities.principal import Principal, privilege_key
from user_rights.errors import ConnectionStateError, StoreOperationError, TranslationError

log = get_logger(__name__)

_SID_TEXT = re.compile(r"^S-\d+(-\d+)+$", re.IGNORECASE)


class MemoryPolicyStore:
    """
    In-process policy database.

    Privileges are keyed case-insensitively and keep the spelling they were
    first granted with. Account names map to principals for translation.
    """

    def __init__(
        self,
        assignments: Optional[Mapping[str, Iterable[Principal]]] = None,
        accounts: Optional[Mapping[str, Principal]] = None,
    ):
        self._database: Dict[str, Tuple[str, Set[Principal]]] = {}
        for privilege, principals in (assignments or {}).items():
            for principal in principals:
                self._add(principal, privilege)

        self._accounts: Dict[str, Tuple[str, Principal]] = {
            name.lower(): (name, principal) for name, principal in (accounts or {}).items()
        }
        self._failures: Set[Tuple[Principal, str]] = set()
        self._connected = False
        self._closed = False
        self.system_name: Optional[str] = None
        self.operations: List[Tuple[str, Principal, str]] = []

    # ----------------------------
    # Connection
    # ----------------------------

    def connect(self, system_name: Optional[str] = None) -> None:
        if self._closed:
            raise ConnectionStateError("The policy store has been closed.")
        if self._connected:
            raise ConnectionStateError("A connection to the policy database already exists.")
        self._connected = True
        self.system_name = system_name
        log.debug("store.memory.connect system_name=%s", system_name)

    def close(self) -> None:
        self._connected = False
        self._closed = True

    def __enter__(self) -> "MemoryPolicyStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _require_connection(self) -> None:
        if not self._connected:
            raise ConnectionStateError()

    # ----------------------------
    # Enumeration
    # ----------------------------

    def list_privileges_of(self, principal: Principal) -> Set[str]:
        self._require_connection()
        return {name for name, principals in self._database.values() if principal in principals}

    def list_principals_with(self, privilege: Optional[str] = None) -> Set[Principal]:
        self._require_connection()
        if privilege is None:
            return {p for _, principals in self._database.values() for p in principals}
        if not privilege.strip():
            raise ValueError("privilege cannot be empty or whitespace")
        entry = self._database.get(privilege_key(privilege))
        return set(entry[1]) if entry else set()

    # ----------------------------
    # Mutation
    # ----------------------------

    def grant(self, principal: Principal, *privileges: str) -> None:
        self._require_connection()
        if not privileges:
            raise ValueError("at least one privilege is required")
        for privilege in privileges:
            self._check_failure(principal, privilege, "grant")
            self._add(principal, privilege)
            self.operations.append(("grant", principal, privilege))

    def revoke(self, principal: Principal, *privileges: str) -> None:
        self._require_connection()
        if not privileges:
            raise ValueError("at least one privilege is required")
        for privilege in privileges:
            self._check_failure(principal, privilege, "revoke")
            key = privilege_key(privilege)
            entry = self._database.get(key)
            if entry:
                entry[1].discard(principal)
                if not entry[1]:
                    del self._database[key]
            self.operations.append(("revoke", principal, privilege))

    def _add(self, principal: Principal, privilege: str) -> None:
        if not privilege or not privilege.strip():
            raise ValueError("privilege cannot be empty or whitespace")
        _, principals = self._database.setdefault(privilege_key(privilege), (privilege, set()))
        principals.add(principal)

    # ----------------------------
    # Translation
    # ----------------------------

    def resolve_principal(self, name: str) -> Principal:
        if not name or not name.strip():
            raise ValueError("name cannot be empty or whitespace")
        found = self._accounts.get(name.lower())
        if found:
            return found[1]
        if _SID_TEXT.match(name):
            return Principal(name.upper())
        raise TranslationError(
            f"Error translating account name {name} to a security identifier (SID), "
            "the account may be unknown on the host."
        )

    def resolve_display_name(self, principal: Principal) -> str:
        for name, candidate in self._accounts.values():
            if candidate == principal:
                return name
        raise TranslationError(
            f"Error translating security identifier (SID) {principal.sid} to an account name, "
            "the SID may be unknown on the host."
        )

    # ----------------------------
    # Test helpers
    # ----------------------------

    def fail_on(self, principal: Principal, privilege: str) -> None:
        """Make every grant or revoke of this pair raise StoreOperationError."""
        self._failures.add((principal, privilege_key(privilege)))

    def _check_failure(self, principal: Principal, privilege: str, action: str) -> None:
        if (principal, privilege_key(privilege)) in self._failures:
            raise StoreOperationError(f"Failed to {action} {privilege} for {principal.sid}.")

    def snapshot(self) -> Dict[str, Set[str]]:
        """Privilege spelling -> SIDs, read without a connection."""
        return {name: {p.sid for p in principals} for name, principals in self._database.values()}
