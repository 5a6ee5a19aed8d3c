from __future__ import annotations

from typing import List

from user_rights.configs.logging_config import get_logger
from user_rights.domain.entities.assignment import UserRightEntry
from user_rights.errors import TranslationError
from user_rights.policy.store import PolicyStore

log = get_logger(__name__)


class ListingService:
    def list_assignments(self, store: PolicyStore) -> List[UserRightEntry]:
        """
        Flatten the store into one entry per (privilege, principal) pair.

        Sorted by privilege, then SID, both case-insensitive. Principals whose
        SID cannot be translated (remote or deleted accounts) get an empty
        account name.
        """
        entries: List[UserRightEntry] = []

        for principal in store.list_principals_with():
            try:
                account_name = store.resolve_display_name(principal)
            except TranslationError as exc:
                log.debug("listing.translation_failed principal=%s error=%s", principal, exc.message)
                account_name = ""

            for privilege in store.list_privileges_of(principal):
                entries.append(
                    UserRightEntry(
                        privilege=privilege,
                        security_id=principal.sid,
                        account_name=account_name,
                    )
                )

        entries.sort(key=lambda e: (e.privilege.lower(), e.security_id.lower()))
        log.info("listing.done entries=%s", len(entries))
        return entries
