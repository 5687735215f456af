"""
Notification Lambda Handler

Main entry point for shift change emails.
Renders one change event and sends it through SES.

Trigger: Asynchronous invoke from the worker function, one per change event
Output: One SES email to the configured recipients

Flow:
1. Parse the {"State", "Shift"} payload
2. Read sender and recipient from SSM Parameter Store
3. Render subject, text and HTML bodies
4. Send via SES
"""

from dataclasses import dataclass
from typing import Any

import structlog

from lambdas.notification.templates import NotificationMessage, construct_message
from shiftbot.config import Settings, get_settings
from shiftbot.exceptions import ConfigurationError
from shiftbot.logs import configure_logging
from shiftbot.models.events import ChangeEvent
from shiftbot.tools.email import parse_recipients, send_ses_email, validate_email_address
from shiftbot.tools.ssm import get_parameters_by_path, require_parameter

configure_logging(get_settings().log_level)

log = structlog.get_logger()


@dataclass(frozen=True)
class NotificationParameters:
    """Sender and recipients for shift notifications."""

    sender: str
    recipients: list[str]


def load_notification_parameters(settings: Settings, *, client=None) -> NotificationParameters:
    """
    Read and validate sender/recipient from SSM.

    Raises:
        ConfigurationError: If sender or recipient is missing
        InvalidEmailFormatError: If an address is malformed
        ParameterStoreError: On SSM failure
    """
    path = settings.notification_parameter_path
    parameters = get_parameters_by_path(path, settings, client=client)

    sender = validate_email_address(require_parameter(parameters, "sender", path))
    recipients = parse_recipients(require_parameter(parameters, "recipient", path))
    if not recipients:
        raise ConfigurationError(parameter="recipient", path=path)

    return NotificationParameters(sender=sender, recipients=recipients)


def send_notification(
    message: NotificationMessage,
    params: NotificationParameters,
    settings: Settings,
    *,
    client=None,
) -> str:
    """Send a rendered message; returns the SES message ID."""
    return send_ses_email(
        params.sender,
        params.recipients,
        message.subject,
        message.text_body,
        settings,
        body_html=message.html_body,
        client=client,
    )


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """
    Main Lambda handler for change notifications.

    Args:
        event: ChangeEvent payload {"State": ..., "Shift": {...}}
        context: Lambda context

    Returns:
        Dict with statusCode and body

    Raises:
        ShiftBotError: Configuration or SES failure
    """
    settings = get_settings()

    try:
        change = ChangeEvent.from_payload(event)

        log.info(
            "notification_started",
            state=change.state.value,
            shift_id=change.shift.id,
        )

        params = load_notification_parameters(settings)
        message = construct_message(change, settings)
        message_id = send_notification(message, params, settings)
    except Exception as e:
        log.exception("notification_failed", error=str(e), error_type=type(e).__name__)
        raise

    log.info(
        "notification_sent",
        message_id=message_id,
        shift_id=change.shift.id,
        recipients=len(params.recipients),
    )

    return {
        "statusCode": 200,
        "body": {
            "message": "Success",
            "message_id": message_id,
            "state": change.state.value,
            "shift_id": change.shift.id,
        },
    }
