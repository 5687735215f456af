"""
Custom Exceptions for the ShiftBoard Bot

Every AWS or HTTP failure is re-raised as one of these, carrying the
table, path or function involved so handler logs identify the failing step.
"""

from dataclasses import dataclass
from typing import Any


class ShiftBotError(Exception):
    """Base exception for the shift notification pipeline."""

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


@dataclass
class ConfigurationError(ShiftBotError):
    """Required configuration parameter missing or empty."""

    parameter: str
    path: str | None = None

    def __init__(self, parameter: str, path: str | None = None) -> None:
        self.parameter = parameter
        self.path = path
        location = f" under '{path}'" if path else ""
        super().__init__(
            f"Required parameter '{parameter}' not found{location}",
            parameter=parameter,
            path=path,
        )


@dataclass
class ParameterStoreError(ShiftBotError):
    """SSM Parameter Store read failed."""

    path: str

    def __init__(self, path: str, error_message: str | None = None) -> None:
        self.path = path
        super().__init__(
            f"Reading SSM parameters under '{path}' failed: {error_message or 'Unknown error'}",
            path=path,
            error_message=error_message,
        )


@dataclass
class ShiftboardAPIError(ShiftBotError):
    """ShiftBoard API call failed."""

    operation: str  # "list_sites", "login", "list_shifts"
    status_code: int | None = None

    def __init__(
        self,
        operation: str,
        status_code: int | None = None,
        error_message: str | None = None,
    ) -> None:
        self.operation = operation
        self.status_code = status_code
        super().__init__(
            f"ShiftBoard API {operation} failed: {error_message or 'Unknown error'}",
            operation=operation,
            status_code=status_code,
        )


@dataclass
class DynamoDBError(ShiftBotError):
    """DynamoDB operation failed."""

    operation: str  # "scan", "put", "batch_write"
    table_name: str

    def __init__(
        self,
        operation: str,
        table_name: str,
        error_message: str | None = None,
    ) -> None:
        self.operation = operation
        self.table_name = table_name
        super().__init__(
            f"DynamoDB {operation} failed on table '{table_name}': {error_message or 'Unknown error'}",
            operation=operation,
            table_name=table_name,
            error_message=error_message,
        )


@dataclass
class UnprocessedItemsError(DynamoDBError):
    """BatchWriteItem returned items it did not write."""

    unprocessed_count: int = 0

    def __init__(self, table_name: str, unprocessed_count: int) -> None:
        self.unprocessed_count = unprocessed_count
        super().__init__(
            operation="batch_write",
            table_name=table_name,
            error_message=f"{unprocessed_count} unprocessed batch items",
        )


@dataclass
class InvocationError(ShiftBotError):
    """Lambda invocation failed."""

    function_name: str

    def __init__(self, function_name: str, error_message: str | None = None) -> None:
        self.function_name = function_name
        super().__init__(
            f"Invoking function '{function_name}' failed: {error_message or 'Unknown error'}",
            function_name=function_name,
            error_message=error_message,
        )


@dataclass
class InvalidEmailFormatError(ShiftBotError):
    """Configured email address is invalid."""

    email_address: str

    def __init__(self, email_address: str) -> None:
        self.email_address = email_address
        super().__init__(
            f"Invalid email format: '{email_address}'",
            email_address=email_address,
        )


@dataclass
class SESError(ShiftBotError):
    """SES email operation failed."""

    operation: str  # "send"
    recipient: str | None = None

    def __init__(
        self,
        operation: str,
        recipient: str | None = None,
        error_message: str | None = None,
    ) -> None:
        self.operation = operation
        self.recipient = recipient
        super().__init__(
            f"SES {operation} failed{f' for {recipient}' if recipient else ''}: "
            f"{error_message or 'Unknown error'}",
            operation=operation,
            recipient=recipient,
            error_message=error_message,
        )
