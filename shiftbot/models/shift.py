"""
Shift Models

Pydantic models for ShiftBoard shifts and their cached DynamoDB form.

Wire and storage names are PascalCase (ID, Name, StartDate, ...), matching the
table's hash key "ID" and TTL attribute "TTL". The ShiftBoard API's snake_case
spellings are accepted on input.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from shiftbot.dates import parse_shift_datetime


class Location(BaseModel):
    """Shift location; only used for state filtering and message text."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("Name", "name"),
        serialization_alias="Name",
    )
    city: str | None = Field(
        default=None,
        validation_alias=AliasChoices("City", "city"),
        serialization_alias="City",
    )
    state: str | None = Field(
        default=None,
        validation_alias=AliasChoices("State", "state"),
        serialization_alias="State",
    )

    def describe(self) -> str:
        """Human readable location, e.g. "Springfield, IL"."""
        parts = [p for p in (self.name, self.city, self.state) if p]
        return ", ".join(parts)


class Shift(BaseModel):
    """
    A scheduled work entry fetched from ShiftBoard.

    Immutable once fetched. Only id and updated take part in reconciliation.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(
        ...,
        validation_alias=AliasChoices("ID", "id"),
        serialization_alias="ID",
        description="ShiftBoard shift identifier",
    )
    name: str = Field(
        default="",
        validation_alias=AliasChoices("Name", "name"),
        serialization_alias="Name",
    )
    start_date: str = Field(
        ...,
        validation_alias=AliasChoices("StartDate", "start_date"),
        serialization_alias="StartDate",
        description="Start time, ISO-8601 without zone (UTC)",
    )
    end_date: str = Field(
        ...,
        validation_alias=AliasChoices("EndDate", "end_date"),
        serialization_alias="EndDate",
        description="End time, ISO-8601 without zone (UTC)",
    )
    created: datetime = Field(
        ...,
        validation_alias=AliasChoices("Created", "created"),
        serialization_alias="Created",
    )
    updated: datetime = Field(
        ...,
        validation_alias=AliasChoices("Updated", "updated"),
        serialization_alias="Updated",
    )
    location: Location | None = Field(
        default=None,
        validation_alias=AliasChoices("Location", "location"),
        serialization_alias="Location",
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # The API returns numeric ids; the table key is a string
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("start_date", "end_date")
    @classmethod
    def _check_timestamp(cls, value: str) -> str:
        # Kept as sent; the TTL is derived from end_date
        parse_shift_datetime(value)
        return value

    @field_validator("created", "updated")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @property
    def starts_at(self) -> datetime:
        return parse_shift_datetime(self.start_date)

    @property
    def ends_at(self) -> datetime:
        return parse_shift_datetime(self.end_date)

    def to_payload(self) -> dict[str, Any]:
        """JSON-safe dict used for Lambda payloads."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CachedShift(Shift):
    """
    Shift as persisted in DynamoDB, with its expiration attribute.

    TTL is a Unix timestamp; DynamoDB deletes the item some time after it passes.
    """

    ttl: int | None = Field(
        default=None,
        validation_alias=AliasChoices("TTL", "ttl"),
        serialization_alias="TTL",
    )

    def to_dynamodb(self) -> dict[str, Any]:
        """Convert to DynamoDB item."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_dynamodb(cls, item: dict[str, Any]) -> "CachedShift":
        """Parse from DynamoDB item (numbers arrive as Decimal)."""
        return cls.model_validate(item)
