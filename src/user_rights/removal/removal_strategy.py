from abc import ABC, abstractmethod
from typing import AbstractSet, Hashable, List, Mapping, TypeVar

T = TypeVar("T")


class RemovalStrategy(ABC):
    """
    Template-method base class for the removal modes of a reconciliation.

    The reconciliation service asks a strategy for the removals that run
    before any grant and the ones that run after all grants. Both hooks see
    the same snapshot: `current` maps comparison keys to the assignments the
    store holds right now, `grant_keys` are the keys being granted.
    """

    # When set, the plan ends after the pre-grant removals.
    stops_before_grants: bool = False

    # ----------------------------
    # Hooks
    # ----------------------------

    def before_grants(self, current: Mapping[Hashable, T], grant_keys: AbstractSet[Hashable]) -> List[T]:
        return []

    def after_grants(self, current: Mapping[Hashable, T], grant_keys: AbstractSet[Hashable]) -> List[T]:
        return []

    # ----------------------------
    # Mandatory override
    # ----------------------------

    @abstractmethod
    def name(self) -> str:
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name()}>"
