"""
Pytest Configuration and Shared Fixtures

Provides moto AWS mocking, sample shifts, and test utilities.
"""

import os
from datetime import datetime, timezone
from typing import Any, Callable

import boto3
import pytest
from moto import mock_aws

# Set test environment before importing application modules
os.environ["SHIFTBOT_TABLE_NAME"] = "TestShifts"
os.environ["SHIFTBOT_WORKER_FUNCTION"] = "TestWorkerFunction"
os.environ["SHIFTBOT_NOTIFICATION_FUNCTION"] = "TestNotificationFunction"
os.environ["SHIFTBOT_AWS_REGION"] = "us-west-2"
os.environ["SHIFTBOT_ENVIRONMENT"] = "test"
os.environ["AWS_DEFAULT_REGION"] = "us-west-2"
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ.pop("AWS_SAM_LOCAL", None)
os.environ.pop("SHIFTBOT_AWS_ENDPOINT_URL", None)

from shiftbot.config import Settings  # noqa: E402
from shiftbot.models.shift import Shift  # noqa: E402

TABLE_NAME = "TestShifts"
SENDER = "no-reply@example.com"
RECIPIENTS = "john.doe@example.com,jane.doe@example.com"


# --- Time Fixtures ---


@pytest.fixture
def frozen_datetime() -> datetime:
    """Fixed datetime for deterministic tests."""
    return datetime(2022, 6, 1, 9, 30, tzinfo=timezone.utc)


# --- Settings Fixtures ---


@pytest.fixture
def settings() -> Settings:
    """Settings built from the test environment."""
    return Settings()


# --- AWS Mocking Fixtures ---


@pytest.fixture
def aws_credentials():
    """Mock AWS credentials for moto."""
    return {
        "aws_access_key_id": "testing",
        "aws_secret_access_key": "testing",
        "region_name": "us-west-2",
    }


@pytest.fixture
def mock_aws_env():
    """Single moto context shared by the service fixtures below."""
    with mock_aws():
        yield


@pytest.fixture
def mock_dynamodb(mock_aws_env, aws_credentials):
    """
    Create a mocked shift table.

    Hash key "ID", expiration attribute "TTL".
    """
    dynamodb = boto3.resource("dynamodb", **aws_credentials)
    table = dynamodb.create_table(
        TableName=TABLE_NAME,
        KeySchema=[{"AttributeName": "ID", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "ID", "AttributeType": "S"}],
        BillingMode="PAY_PER_REQUEST",
    )
    table.meta.client.get_waiter("table_exists").wait(TableName=TABLE_NAME)
    table.meta.client.update_time_to_live(
        TableName=TABLE_NAME,
        TimeToLiveSpecification={"Enabled": True, "AttributeName": "TTL"},
    )
    yield table


@pytest.fixture
def mock_ssm(mock_aws_env, aws_credentials):
    """Create mocked SSM parameters for the API and notifications."""
    ssm = boto3.client("ssm", **aws_credentials)
    ssm.put_parameter(Name="/shiftboard/api/email", Value="bot@example.com", Type="SecureString")
    ssm.put_parameter(Name="/shiftboard/api/password", Value="hunter2", Type="SecureString")
    ssm.put_parameter(Name="/shiftboard/notifications/sender", Value=SENDER, Type="String")
    ssm.put_parameter(Name="/shiftboard/notifications/recipient", Value=RECIPIENTS, Type="String")
    yield ssm


@pytest.fixture
def mock_ses(mock_aws_env, aws_credentials):
    """Create a mocked SES client with verified identity."""
    ses = boto3.client("ses", **aws_credentials)
    # Verify sender identity
    ses.verify_email_identity(EmailAddress=SENDER)
    yield ses


# --- Shift Fixtures ---


@pytest.fixture
def shift_data() -> dict[str, Any]:
    """Sample shift as returned by the ShiftBoard API."""
    return {
        "id": 1001,
        "name": "Stage Crew - Evening Load In",
        "start_date": "2022-06-15T08:00:00",
        "end_date": "2022-06-15T12:00:00",
        "created": "2022-05-01T00:00:00Z",
        "updated": "2022-06-01T00:00:00Z",
        "location": {"name": "Arena", "city": "Springfield", "state": "IL"},
    }


@pytest.fixture
def make_shift() -> Callable[..., Shift]:
    """
    Factory for shifts with sensible defaults.

    `updated` accepts a day-of-June-2022 integer for readable ordering tests.
    """

    def _make(shift_id: str = "1", *, updated: int | str = 1, **overrides: Any) -> Shift:
        if isinstance(updated, int):
            updated = f"2022-06-{updated:02d}T00:00:00Z"
        data = {
            "id": shift_id,
            "name": f"Shift {shift_id}",
            "start_date": "2022-06-15T08:00:00",
            "end_date": "2022-06-15T12:00:00",
            "created": "2022-05-01T00:00:00Z",
            "updated": updated,
        }
        data.update(overrides)
        return Shift.model_validate(data)

    return _make
