from typing import AbstractSet, Hashable, List, Mapping, Sequence

import regex

from user_rights.configs.logging_config import get_logger
from user_rights.removal.removal_strategy import RemovalStrategy, T
from user_rights.utils.patterns import pattern_matches

log = get_logger(__name__)


def _ordered(items) -> list:
    return sorted(items, key=lambda item: str(item).lower())


class NoRemovalStrategy(RemovalStrategy):
    def name(self):
        return "none"


class RevokeAllStrategy(RemovalStrategy):
    stops_before_grants = True

    def name(self):
        return "revoke-all"

    def before_grants(self, current: Mapping[Hashable, T], grant_keys: AbstractSet[Hashable]) -> List[T]:
        return _ordered(current.values())


class RevokeOthersStrategy(RemovalStrategy):
    def name(self):
        return "revoke-others"

    def before_grants(self, current: Mapping[Hashable, T], grant_keys: AbstractSet[Hashable]) -> List[T]:
        return _ordered(v for k, v in current.items() if k not in grant_keys)


class RevokePatternStrategy(RemovalStrategy):
    def __init__(self, pattern: "regex.Pattern", timeout: float):
        self._pattern = pattern
        self._timeout = timeout

    def name(self):
        return "revoke-pattern"

    def before_grants(self, current: Mapping[Hashable, T], grant_keys: AbstractSet[Hashable]) -> List[T]:
        matches = [
            v
            for k, v in current.items()
            if k not in grant_keys and pattern_matches(self._pattern, str(v), timeout=self._timeout)
        ]
        log.debug(
            "removal.pattern pattern=%s candidates=%s matches=%s",
            self._pattern.pattern,
            len(current),
            len(matches),
        )
        return _ordered(matches)


class RevokeExplicitStrategy(RemovalStrategy):
    def __init__(self, revocation_keys: Sequence[Hashable]):
        self._revocation_keys = list(revocation_keys)

    def name(self):
        return "revoke"

    def after_grants(self, current: Mapping[Hashable, T], grant_keys: AbstractSet[Hashable]) -> List[T]:
        # Only revoke what is actually held; keep the caller's order.
        seen = set()
        surplus = []
        for key in self._revocation_keys:
            if key in current and key not in seen:
                seen.add(key)
                surplus.append(current[key])
        return surplus
