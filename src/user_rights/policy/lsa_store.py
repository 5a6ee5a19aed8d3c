from __future__ import annotations

from typing import Optional, Set

import pywintypes
import win32security
import winerror

from user_rights.configs.logging_config import get_logger
from user_rights.domain.entities.principal import Principal
from user_rights.errors import ConnectionStateError, StoreOperationError, TranslationError

log = get_logger(__name__)


class LsaPolicyStore:
    """
    Windows Local Security Authority policy database.

    Wraps the LSA user right functions exposed by pywin32. Native failures are
    raised as StoreOperationError, translation failures as TranslationError.
    """

    def __init__(self):
        self._policy = None
        self._closed = False
        self._system_name: Optional[str] = None

    # ----------------------------
    # Connection
    # ----------------------------

    def connect(self, system_name: Optional[str] = None) -> None:
        if self._closed:
            raise ConnectionStateError("The policy store has been closed.")
        if self._policy is not None:
            raise ConnectionStateError("A connection to the policy database already exists.")

        try:
            self._policy = win32security.LsaOpenPolicy(system_name, win32security.POLICY_ALL_ACCESS)
        except pywintypes.error as exc:
            raise StoreOperationError(f"Error opening policy object: {exc.strerror}") from exc

        self._system_name = system_name
        log.debug("store.lsa.connect system_name=%s", system_name or "localhost")

    def close(self) -> None:
        if self._policy is not None:
            win32security.LsaClose(self._policy)
            self._policy = None
        self._closed = True

    def __enter__(self) -> "LsaPolicyStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _require_connection(self):
        if self._policy is None:
            raise ConnectionStateError()
        return self._policy

    # ----------------------------
    # Enumeration
    # ----------------------------

    def list_privileges_of(self, principal: Principal) -> Set[str]:
        policy = self._require_connection()
        try:
            rights = win32security.LsaEnumerateAccountRights(policy, self._to_sid(principal))
        except pywintypes.error as exc:
            # An account without rights has no LSA account object.
            if exc.winerror == winerror.ERROR_FILE_NOT_FOUND:
                return set()
            raise StoreOperationError(
                f"Error enumerating privileges for {principal.sid}: {exc.strerror}"
            ) from exc
        return set(rights)

    def list_principals_with(self, privilege: Optional[str] = None) -> Set[Principal]:
        policy = self._require_connection()
        if privilege is not None and not privilege.strip():
            raise ValueError("privilege cannot be empty or whitespace")
        try:
            sids = win32security.LsaEnumerateAccountsWithUserRight(policy, privilege)
        except pywintypes.error as exc:
            if exc.winerror == winerror.ERROR_NO_MORE_ITEMS:
                return set()
            raise StoreOperationError(
                f"Error enumerating principals with {privilege or 'any privilege'}: {exc.strerror}"
            ) from exc
        return {Principal(win32security.ConvertSidToStringSid(sid)) for sid in sids}

    # ----------------------------
    # Mutation
    # ----------------------------

    def grant(self, principal: Principal, *privileges: str) -> None:
        policy = self._require_connection()
        if not privileges:
            raise ValueError("at least one privilege is required")
        try:
            win32security.LsaAddAccountRights(policy, self._to_sid(principal), list(privileges))
        except pywintypes.error as exc:
            raise StoreOperationError(
                f"Error granting {', '.join(privileges)} to {principal.sid}: {exc.strerror}"
            ) from exc

    def revoke(self, principal: Principal, *privileges: str) -> None:
        policy = self._require_connection()
        if not privileges:
            raise ValueError("at least one privilege is required")
        try:
            win32security.LsaRemoveAccountRights(
                policy, self._to_sid(principal), False, list(privileges)
            )
        except pywintypes.error as exc:
            raise StoreOperationError(
                f"Error revoking {', '.join(privileges)} from {principal.sid}: {exc.strerror}"
            ) from exc

    # ----------------------------
    # Translation
    # ----------------------------

    def resolve_principal(self, name: str) -> Principal:
        if not name or not name.strip():
            raise ValueError("name cannot be empty or whitespace")
        try:
            sid, _, _ = win32security.LookupAccountName(self._system_name, name)
        except pywintypes.error:
            try:
                sid = win32security.ConvertStringSidToSid(name)
            except pywintypes.error as exc:
                raise TranslationError(
                    f"Error translating account name {name} to a security identifier (SID), "
                    "the account may be unknown on the host."
                ) from exc
        return Principal(win32security.ConvertSidToStringSid(sid))

    def resolve_display_name(self, principal: Principal) -> str:
        try:
            name, domain, _ = win32security.LookupAccountSid(
                self._system_name, self._to_sid(principal)
            )
        except pywintypes.error as exc:
            raise TranslationError(
                f"Error translating security identifier (SID) {principal.sid} to an account name, "
                "the SID may be unknown on the host."
            ) from exc
        return f"{domain}\\{name}" if domain else name

    @staticmethod
    def _to_sid(principal: Principal):
        try:
            return win32security.ConvertStringSidToSid(principal.sid)
        except pywintypes.error as exc:
            raise TranslationError(f"Invalid security identifier (SID) {principal.sid}.") from exc
