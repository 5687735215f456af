"""
Email Tools

SES sending and address validation for shift notifications.
"""

from collections.abc import Sequence

import boto3
from botocore.exceptions import ClientError
from email_validator import EmailNotValidError, validate_email
import structlog

from shiftbot.config import Settings
from shiftbot.exceptions import InvalidEmailFormatError, SESError

log = structlog.get_logger()

CHARSET = "UTF-8"


def _get_client(settings: Settings):
    """Get SES client."""
    return boto3.client("ses", **settings.client_config)


def validate_email_address(email: str) -> str:
    """
    Validate an email address format.

    Uses email-validator library for RFC compliance.

    Returns:
        The address, stripped of surrounding whitespace

    Raises:
        InvalidEmailFormatError: If invalid
    """
    address = email.strip()
    try:
        validate_email(address, check_deliverability=False)
    except EmailNotValidError as e:
        raise InvalidEmailFormatError(email_address=address) from e
    return address


def parse_recipients(value: str) -> list[str]:
    """Split a comma-separated recipient list, validating each address."""
    return [validate_email_address(part) for part in value.split(",") if part.strip()]


def send_ses_email(
    sender: str,
    recipients: Sequence[str],
    subject: str,
    body_text: str,
    settings: Settings,
    *,
    body_html: str | None = None,
    client=None,
) -> str:
    """
    Send an email via SES.

    Args:
        sender: Verified source address
        recipients: To addresses
        subject: Email subject
        body_text: Plain text body
        settings: Application settings
        body_html: Optional HTML body
        client: Optional SES client

    Returns:
        SES message ID

    Raises:
        SESError: If send fails
    """
    ses = client or _get_client(settings)

    message_body = {"Text": {"Data": body_text, "Charset": CHARSET}}
    if body_html:
        message_body["Html"] = {"Data": body_html, "Charset": CHARSET}

    log.info(
        "sending_ses_email",
        to=list(recipients),
        subject=subject[:50],
    )

    try:
        response = ses.send_email(
            Source=sender,
            Destination={"ToAddresses": list(recipients), "CcAddresses": []},
            Message={
                "Subject": {"Data": subject, "Charset": CHARSET},
                "Body": message_body,
            },
        )
    except ClientError as e:
        error_code = e.response["Error"]["Code"]
        error_message = e.response["Error"]["Message"]

        log.error(
            "ses_send_failed",
            to=list(recipients),
            error_code=error_code,
            error_message=error_message,
        )

        raise SESError(
            operation="send",
            recipient=", ".join(recipients),
            error_message=f"{error_code}: {error_message}",
        ) from e

    message_id = response["MessageId"]
    log.info("ses_email_sent", message_id=message_id, to=list(recipients))
    return message_id
