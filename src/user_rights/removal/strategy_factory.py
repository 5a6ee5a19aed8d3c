from typing import Callable, Hashable

import regex

from user_rights.domain.entities.change import (
    NoRemoval,
    RemovalMode,
    RevokeAll,
    RevokeExplicit,
    RevokeOthers,
    RevokePattern,
)
from user_rights.removal.removal_strategies import (
    NoRemovalStrategy,
    RevokeAllStrategy,
    RevokeExplicitStrategy,
    RevokeOthersStrategy,
    RevokePatternStrategy,
)
from user_rights.removal.removal_strategy import RemovalStrategy
from user_rights.utils.patterns import compile_pattern


class StrategyFactory:
    def __init__(self, pattern_timeout: float = 1.0):
        self._pattern_timeout = pattern_timeout

    def get(self, mode: RemovalMode, key_of: Callable[[str], Hashable]) -> RemovalStrategy:
        """`key_of` turns a raw revocation token into the snapshot's comparison key."""
        if isinstance(mode, RevokeAll):
            return RevokeAllStrategy()
        if isinstance(mode, RevokeOthers):
            return RevokeOthersStrategy()
        if isinstance(mode, RevokePattern):
            try:
                pattern = compile_pattern(mode.expression)
            except regex.error as exc:
                raise ValueError(f"Invalid revoke pattern: {exc}") from exc
            return RevokePatternStrategy(pattern, self._pattern_timeout)
        if isinstance(mode, RevokeExplicit):
            return RevokeExplicitStrategy([key_of(token) for token in mode.tokens])
        if isinstance(mode, NoRemoval):
            return NoRemovalStrategy()
        raise ValueError(f"Unknown removal mode: {mode!r}")
