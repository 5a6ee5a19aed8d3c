from __future__ import annotations

from typing import Dict, Hashable, List, Mapping, Tuple

from user_rights.configs.logging_config import get_logger
from user_rights.domain.entities.assignment import PlannedChange
from user_rights.domain.entities.change import PrincipalChangeRequest, PrivilegeChangeRequest
from user_rights.domain.entities.principal import Principal, privilege_key
from user_rights.policy.store import PolicyStore
from user_rights.removal.removal_strategy import RemovalStrategy
from user_rights.removal.strategy_factory import StrategyFactory

log = get_logger(__name__)


class ReconciliationService:
    """
    Moves the assignments of one principal, or of one privilege, to the
    requested state.

    A plan is computed from a single read of the store and then applied in
    order: pattern/others removals, grants, explicit revocations. In dry-run
    mode the same plan is only logged. The first failing store call aborts
    the rest of the plan; nothing is retried or rolled back.
    """

    def __init__(self, factory: StrategyFactory | None = None):
        self._factory = factory or StrategyFactory()

    # ----------------------------
    # Public API
    # ----------------------------

    def reconcile_principal(
        self, store: PolicyStore, request: PrincipalChangeRequest
    ) -> List[PlannedChange]:
        plan = self.plan_principal(store, request)
        self._apply(store, plan, dry_run=request.dry_run)
        return plan

    def reconcile_privilege(
        self, store: PolicyStore, request: PrivilegeChangeRequest
    ) -> List[PlannedChange]:
        plan = self.plan_privilege(store, request)
        self._apply(store, plan, dry_run=request.dry_run)
        return plan

    def plan_principal(
        self, store: PolicyStore, request: PrincipalChangeRequest
    ) -> List[PlannedChange]:
        if not request.principal or not request.principal.strip():
            raise ValueError("principal cannot be empty or whitespace")

        strategy = self._factory.get(request.removal_mode(), key_of=privilege_key)
        principal = store.resolve_principal(request.principal)

        current: Dict[str, str] = {}
        for privilege in sorted(store.list_privileges_of(principal)):
            current.setdefault(privilege_key(privilege), privilege)

        grants: Dict[str, str] = {}
        for privilege in request.grants:
            grants.setdefault(privilege_key(privilege), privilege)

        log.info(
            "reconcile.principal.plan principal=%s strategy=%s held=%s grants=%s dry_run=%s",
            principal,
            strategy.name(),
            len(current),
            len(grants),
            request.dry_run,
        )
        return [
            PlannedChange(action, principal, privilege)
            for action, privilege in self._plan(strategy, current, grants)
        ]

    def plan_privilege(
        self, store: PolicyStore, request: PrivilegeChangeRequest
    ) -> List[PlannedChange]:
        if not request.privilege or not request.privilege.strip():
            raise ValueError("privilege cannot be empty or whitespace")

        strategy = self._factory.get(request.removal_mode(), key_of=store.resolve_principal)

        grants: Dict[Principal, Principal] = {}
        for name in request.grants:
            principal = store.resolve_principal(name)
            grants.setdefault(principal, principal)

        current = {p: p for p in store.list_principals_with(request.privilege)}

        log.info(
            "reconcile.privilege.plan privilege=%s strategy=%s held=%s grants=%s dry_run=%s",
            request.privilege,
            strategy.name(),
            len(current),
            len(grants),
            request.dry_run,
        )
        return [
            PlannedChange(action, principal, request.privilege)
            for action, principal in self._plan(strategy, current, grants)
        ]

    # ----------------------------
    # Internals
    # ----------------------------

    @staticmethod
    def _plan(
        strategy: RemovalStrategy,
        current: Mapping[Hashable, object],
        grants: Mapping[Hashable, object],
    ) -> List[Tuple[str, object]]:
        grant_keys = set(grants)
        plan: List[Tuple[str, object]] = [
            ("revoke", item) for item in strategy.before_grants(current, grant_keys)
        ]
        if strategy.stops_before_grants:
            return plan

        plan.extend(("grant", item) for key, item in grants.items() if key not in current)
        plan.extend(("revoke", item) for item in strategy.after_grants(current, grant_keys))
        return plan

    def _apply(self, store: PolicyStore, plan: List[PlannedChange], *, dry_run: bool) -> None:
        for change in plan:
            if dry_run:
                log.info(
                    "privilege.%s.dry_run principal=%s privilege=%s dry_run=true",
                    change.action,
                    change.principal,
                    change.privilege,
                )
                continue

            operation = store.grant if change.action == "grant" else store.revoke
            try:
                operation(change.principal, change.privilege)
            except Exception:
                log.error(
                    "privilege.%s.failure principal=%s privilege=%s",
                    change.action,
                    change.principal,
                    change.privilege,
                )
                raise

            log.info(
                "privilege.%s.success principal=%s privilege=%s",
                change.action,
                change.principal,
                change.privilege,
            )
