"""
Change Event Models

A change event is produced by reconciliation for every shift that is new or
has been updated since the cached snapshot, and is consumed by the
notification function. Change events are never persisted.
"""

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from shiftbot.models.shift import Shift


class ChangeState(str, Enum):
    """Classification of a fetched shift relative to the cache."""

    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


class ChangeEvent(BaseModel):
    """
    A classified Created/Updated shift destined for notification.

    Payload shape: {"State": "created" | "updated", "Shift": {...}}
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    state: ChangeState = Field(
        ...,
        validation_alias=AliasChoices("State", "state"),
        serialization_alias="State",
    )
    shift: Shift = Field(
        ...,
        validation_alias=AliasChoices("Shift", "shift"),
        serialization_alias="Shift",
    )

    @field_validator("state")
    @classmethod
    def _reject_unchanged(cls, value: ChangeState) -> ChangeState:
        if value is ChangeState.UNCHANGED:
            raise ValueError("unchanged shifts do not produce change events")
        return value

    def to_payload(self) -> dict[str, Any]:
        """JSON-safe Lambda payload."""
        return {
            "State": self.state.value,
            "Shift": self.shift.to_payload(),
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ChangeEvent":
        """Parse a Lambda payload."""
        return cls.model_validate(payload)
