from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Principal:
    """
    Opaque, stable identity of a security principal (a SID string).

    The display name is resolved separately and never takes part in equality.
    """

    sid: str

    def __post_init__(self) -> None:
        if not self.sid or not self.sid.strip():
            raise ValueError("principal identity cannot be empty or whitespace")

    def __str__(self) -> str:
        return self.sid


def privilege_key(privilege: str) -> str:
    """Comparison key for privilege tokens, which are case-insensitive."""
    return privilege.lower()
