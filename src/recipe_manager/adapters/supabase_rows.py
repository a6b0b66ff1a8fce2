"""Row conversion shared by the Supabase repositories."""

from enum import Enum
from uuid import UUID


def to_row(payload: dict[str, object]) -> dict[str, object]:
    """Return payload with ids and enum members turned into JSON values."""
    row: dict[str, object] = {}
    for key, value in payload.items():
        if isinstance(value, UUID):
            row[key] = str(value)
        elif isinstance(value, Enum):
            row[key] = value.value
        else:
            row[key] = value
    return row


def optional_uuid(value: object) -> UUID | None:
    """Parse a nullable uuid column."""
    if value is None or value == "":
        return None
    return UUID(str(value))


def optional_float(value: object) -> float | None:
    """Parse a nullable numeric column."""
    if value is None:
        return None
    return float(value)  # type: ignore[arg-type]


def string_list(value: object) -> list[str]:
    """Parse a text[] column."""
    if not value:
        return []
    return [str(item) for item in value]  # type: ignore[union-attr]
