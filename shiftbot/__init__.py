# Shared Infrastructure for the ShiftBoard Bot
"""
Shared infrastructure for the retriever, worker and notification functions.

This package provides:
- Pydantic models for shifts and change events
- Tool implementations for DynamoDB, SSM, Lambda, SES and the ShiftBoard API
- Configuration management
- Custom exceptions
"""

from shiftbot.config import Settings, get_settings
from shiftbot.exceptions import (
    ConfigurationError,
    DynamoDBError,
    InvalidEmailFormatError,
    InvocationError,
    ParameterStoreError,
    SESError,
    ShiftBotError,
    ShiftboardAPIError,
    UnprocessedItemsError,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Exceptions
    "ShiftBotError",
    "ConfigurationError",
    "ParameterStoreError",
    "ShiftboardAPIError",
    "DynamoDBError",
    "UnprocessedItemsError",
    "InvocationError",
    "InvalidEmailFormatError",
    "SESError",
]
