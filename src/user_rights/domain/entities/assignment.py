from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_pascal

from user_rights.domain.entities.principal import Principal


@dataclass(frozen=True)
class PlannedChange:
    action: Literal["grant", "revoke"]
    principal: Principal
    privilege: str


class UserRightEntry(BaseModel):
    """
    One (privilege, principal) pair in a listing.

    Serialized as ``Privilege``, ``SecurityId`` and ``AccountName``. The account
    name is empty when the SID cannot be translated on this host.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_pascal, populate_by_name=True)

    privilege: str
    security_id: str
    account_name: str = ""

    @field_validator("privilege", "security_id")
    @classmethod
    def require_text(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("value cannot be empty or whitespace")
        return v

    @field_validator("account_name", mode="before")
    @classmethod
    def blank_account_name(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return ""
        return v
