from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class RevokeAll:
    pass


@dataclass(frozen=True)
class RevokeOthers:
    pass


@dataclass(frozen=True)
class RevokePattern:
    expression: str


@dataclass(frozen=True)
class RevokeExplicit:
    tokens: Tuple[str, ...]


@dataclass(frozen=True)
class NoRemoval:
    pass


RemovalMode = Union[RevokeAll, RevokeOthers, RevokePattern, RevokeExplicit, NoRemoval]


@dataclass(frozen=True)
class PrincipalChangeRequest:
    principal: str
    grants: Tuple[str, ...] = ()
    revocations: Tuple[str, ...] = ()
    revoke_all: bool = False
    revoke_others: bool = False
    dry_run: bool = False

    def removal_mode(self) -> RemovalMode:
        """
        Collapse the removal flags into one mode.

        Raises ValueError when the flags contradict each other; callers are
        expected to have run validation first.
        """
        if self.revoke_all:
            if self.revoke_others or self.grants or self.revocations:
                raise ValueError("revoke_all cannot be combined with any other option")
            return RevokeAll()

        if self.revoke_others:
            if not self.grants or self.revocations:
                raise ValueError("revoke_others is only valid with grants")
            return RevokeOthers()

        if self.revocations:
            return RevokeExplicit(tuple(self.revocations))

        return NoRemoval()


@dataclass(frozen=True)
class PrivilegeChangeRequest:
    privilege: str
    grants: Tuple[str, ...] = ()
    revocations: Tuple[str, ...] = ()
    revoke_all: bool = False
    revoke_others: bool = False
    revoke_pattern: Optional[str] = None
    dry_run: bool = False

    @property
    def pattern(self) -> Optional[str]:
        # A blank pattern means no pattern.
        if self.revoke_pattern is None or not self.revoke_pattern.strip():
            return None
        return self.revoke_pattern

    def removal_mode(self) -> RemovalMode:
        pattern = self.pattern

        if self.revoke_all:
            if self.revoke_others or pattern or self.grants or self.revocations:
                raise ValueError("revoke_all cannot be combined with any other option")
            return RevokeAll()

        if self.revoke_others:
            if not self.grants or self.revocations or pattern:
                raise ValueError("revoke_others is only valid with grants")
            return RevokeOthers()

        if pattern:
            if self.revocations:
                raise ValueError("revoke_pattern is only valid alone or with grants")
            return RevokePattern(pattern)

        if self.revocations:
            return RevokeExplicit(tuple(self.revocations))

        return NoRemoval()
