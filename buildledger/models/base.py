"""
Shared model plumbing.

Every persisted record is stored as JSON with camelCase keys
(``createdAt``, ``workerId``) so that data written by the mobile app and
data written here are interchangeable. Python code uses snake_case
attributes; the alias generator maps between the two.
"""

from datetime import date, datetime, timezone
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


def _strip_time(value: Any) -> Any:
    """Accept full ISO timestamps where only the calendar date matters."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    return value


# A calendar date that also tolerates "2025-01-06T00:00:00.000Z" input.
IsoDate = Annotated[date, BeforeValidator(_strip_time)]


class LedgerModel(BaseModel):
    """Base class for every record the ledger persists."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    def to_record(self) -> dict[str, Any]:
        """
        Serialize to the JSON-ready dict stored in the key-value store.

        Unset optional fields are dropped, matching what the app writes.
        """
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


class ReferenceModel(LedgerModel):
    """Read-only reference table entry."""

    model_config = ConfigDict(frozen=True)
