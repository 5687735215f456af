"""
Notification Lambda

Emails one shift change event to the configured recipients via SES.

Components:
- handler: Lambda entry point, SSM parameters, SES send
- templates: Jinja2 subject/body templates
"""

from lambdas.notification.handler import (
    NotificationParameters,
    lambda_handler,
    load_notification_parameters,
    send_notification,
)
from lambdas.notification.templates import NotificationMessage, construct_message

__all__ = [
    "lambda_handler",
    "NotificationMessage",
    "NotificationParameters",
    "construct_message",
    "load_notification_parameters",
    "send_notification",
]
