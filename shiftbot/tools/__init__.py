# Shared Tools
"""
AWS and ShiftBoard integrations used by the Lambda functions.
"""

from shiftbot.tools.dynamodb import ShiftTable
from shiftbot.tools.email import parse_recipients, send_ses_email, validate_email_address
from shiftbot.tools.invoker import LambdaChangeDispatcher, invoke_async
from shiftbot.tools.shiftboard import ShiftboardClient, Site
from shiftbot.tools.ssm import get_parameters_by_path, require_parameter

__all__ = [
    # DynamoDB tools
    "ShiftTable",
    # Email tools
    "parse_recipients",
    "send_ses_email",
    "validate_email_address",
    # Lambda tools
    "LambdaChangeDispatcher",
    "invoke_async",
    # ShiftBoard API
    "ShiftboardClient",
    "Site",
    # SSM tools
    "get_parameters_by_path",
    "require_parameter",
]
