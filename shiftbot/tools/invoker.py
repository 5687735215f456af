"""
Lambda Invocation Tools

Fire-and-forget (InvocationType=Event) invocation of the downstream
functions: retriever -> worker, worker -> notification.
"""

import json
from typing import Any

import boto3
from botocore.exceptions import ClientError
import structlog

from shiftbot.config import Settings
from shiftbot.exceptions import InvocationError
from shiftbot.models.events import ChangeEvent

log = structlog.get_logger()


def _get_client(settings: Settings):
    """Get Lambda client."""
    return boto3.client("lambda", **settings.client_config)


def invoke_async(function_name: str, payload: Any, settings: Settings, *, client=None) -> int:
    """
    Invoke a function asynchronously with a JSON payload.

    Args:
        function_name: Function name or ARN
        payload: JSON-serializable payload
        settings: Application settings
        client: Optional Lambda client

    Returns:
        Invocation status code (202 for accepted events)

    Raises:
        InvocationError: If the invoke call fails or is rejected
    """
    lambda_client = client or _get_client(settings)
    body = json.dumps(payload)

    log.debug(
        "invoking_function",
        function_name=function_name,
        payload_size=len(body),
    )

    try:
        response = lambda_client.invoke(
            FunctionName=function_name,
            InvocationType="Event",
            Payload=body.encode("utf-8"),
        )
    except ClientError as e:
        log.error(
            "lambda_invoke_failed",
            function_name=function_name,
            error_code=e.response["Error"]["Code"],
            error=str(e),
        )
        raise InvocationError(function_name=function_name, error_message=str(e)) from e

    status_code = response.get("StatusCode", 0)
    if response.get("FunctionError") or not 200 <= status_code < 300:
        error_message = response.get("FunctionError") or f"status code {status_code}"
        log.error(
            "lambda_invoke_rejected",
            function_name=function_name,
            status_code=status_code,
            error=error_message,
        )
        raise InvocationError(function_name=function_name, error_message=error_message)

    log.info(
        "function_invoked",
        function_name=function_name,
        status_code=status_code,
        payload_size=len(body),
    )
    return status_code


class LambdaChangeDispatcher:
    """Forwards each change event to the notification function."""

    def __init__(self, settings: Settings, *, client=None) -> None:
        self.function_name = settings.notification_function
        self._settings = settings
        self._client = client or _get_client(settings)

    def dispatch(self, event: ChangeEvent) -> None:
        invoke_async(self.function_name, event.to_payload(), self._settings, client=self._client)
