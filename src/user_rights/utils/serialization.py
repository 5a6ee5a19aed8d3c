from __future__ import annotations

import csv
import io
from typing import List, Sequence

from pydantic import TypeAdapter
from pydantic.alias_generators import to_pascal

from user_rights.domain.entities.assignment import UserRightEntry
from user_rights.errors import SerializationError

_ENTRIES = TypeAdapter(List[UserRightEntry])


def _columns() -> list[str]:
    return [to_pascal(name) for name in UserRightEntry.model_fields]


def to_csv(entries: Sequence[UserRightEntry]) -> str:
    """Every field quoted, header row first."""
    try:
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=_columns(), quoting=csv.QUOTE_ALL, lineterminator="\r\n")
        writer.writeheader()
        for entry in entries:
            writer.writerow(entry.model_dump(by_alias=True))
        return buffer.getvalue()
    except (csv.Error, ValueError) as exc:
        raise SerializationError(f"Failed to serialize the data to a string in CSV format: {exc}") from exc


def to_json(entries: Sequence[UserRightEntry]) -> str:
    try:
        return _ENTRIES.dump_json(list(entries), indent=2, by_alias=True).decode("utf-8")
    except ValueError as exc:
        raise SerializationError(f"Failed to serialize the data to a string in JSON format: {exc}") from exc
