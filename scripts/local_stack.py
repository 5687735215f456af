#!/usr/bin/env python3
"""
LocalStack Helpers

Seeds and manipulates a LocalStack environment for manual end-to-end runs of
the deployed functions (e.g. via `samlocal deploy`).

Usage:
    # Create the table, SSM parameters and SES identity
    python scripts/local_stack.py seed

    # Drop and recreate the table (next run is a cold start)
    python scripts/local_stack.py purge

    # Delete a random cached shift; the next run reports it as created
    python scripts/local_stack.py simulate-new

    # Backdate a random cached shift; the next run reports it as updated
    python scripts/local_stack.py simulate-update

Seed values come from the environment, falling back to test defaults:
SHIFTBOARD_USERNAME, SHIFTBOARD_PASSWORD, STATE_FILTER, SMTP_SENDER,
SMTP_RECIPIENT.
"""

import argparse
import os
import random
import sys
from pathlib import Path

import boto3
from botocore.exceptions import ClientError
import structlog

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from shiftbot.config import Settings
from shiftbot.logs import configure_logging

log = structlog.get_logger()

DEFAULT_ENDPOINT = "http://localhost:4566"
BACKDATED_UPDATED = "2022-01-01T00:00:00Z"

SEED_DEFAULTS = {
    "SHIFTBOARD_USERNAME": "testuser",
    "SHIFTBOARD_PASSWORD": "testpassword",
    "STATE_FILTER": "IL,Illinois",
    "SMTP_SENDER": "no-reply@example.com",
    "SMTP_RECIPIENT": "john.doe@example.com,jane.doe@example.com",
}


def seed_value(name: str) -> str:
    return os.environ.get(name) or SEED_DEFAULTS[name]


class LocalStack:
    """boto3 handles pointed at a LocalStack endpoint."""

    def __init__(self, settings: Settings, endpoint_url: str) -> None:
        config = {"region_name": settings.aws_region, "endpoint_url": endpoint_url}
        self.settings = settings
        self.dynamodb = boto3.client("dynamodb", **config)
        self.ssm = boto3.client("ssm", **config)
        self.ses = boto3.client("ses", **config)

    @property
    def table_name(self) -> str:
        return self.settings.table_name

    def create_table(self) -> None:
        try:
            self.dynamodb.create_table(
                TableName=self.table_name,
                KeySchema=[{"AttributeName": "ID", "KeyType": "HASH"}],
                AttributeDefinitions=[{"AttributeName": "ID", "AttributeType": "S"}],
                BillingMode="PAY_PER_REQUEST",
            )
        except ClientError as e:
            if e.response["Error"]["Code"] != "ResourceInUseException":
                raise
            log.info("table_exists", table=self.table_name)
            return

        self.dynamodb.get_waiter("table_exists").wait(TableName=self.table_name)
        self.dynamodb.update_time_to_live(
            TableName=self.table_name,
            TimeToLiveSpecification={"Enabled": True, "AttributeName": "TTL"},
        )
        log.info("table_created", table=self.table_name)

    def delete_table(self) -> None:
        try:
            self.dynamodb.delete_table(TableName=self.table_name)
        except ClientError as e:
            if e.response["Error"]["Code"] != "ResourceNotFoundException":
                raise
            return
        self.dynamodb.get_waiter("table_not_exists").wait(TableName=self.table_name)
        log.info("table_deleted", table=self.table_name)

    def put_parameter(self, name: str, value: str, *, secure: bool = False) -> None:
        self.ssm.put_parameter(
            Name=name,
            Value=value,
            Type="SecureString" if secure else "String",
            Overwrite=True,
        )
        log.info("parameter_written", name=name, secure=secure)

    def random_item(self) -> dict:
        """Pick a random cached shift."""
        items: list[dict] = []
        scan_kwargs: dict[str, object] = {"TableName": self.table_name}
        while True:
            response = self.dynamodb.scan(**scan_kwargs)
            items.extend(response.get("Items", []))
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            scan_kwargs["ExclusiveStartKey"] = last_key

        if not items:
            raise SystemExit(f"Table '{self.table_name}' is empty; invoke the retriever first")
        return random.choice(items)


def seed(stack: LocalStack) -> None:
    api_path = stack.settings.api_parameter_path
    notification_path = stack.settings.notification_parameter_path
    sender = seed_value("SMTP_SENDER")

    stack.create_table()
    stack.put_parameter(f"{api_path}/email", seed_value("SHIFTBOARD_USERNAME"), secure=True)
    stack.put_parameter(f"{api_path}/password", seed_value("SHIFTBOARD_PASSWORD"), secure=True)
    stack.put_parameter(f"{api_path}/state_filter", seed_value("STATE_FILTER"))
    stack.put_parameter(f"{notification_path}/sender", sender)
    stack.put_parameter(f"{notification_path}/recipient", seed_value("SMTP_RECIPIENT"))

    stack.ses.verify_email_identity(EmailAddress=sender)
    log.info("ses_identity_verified", sender=sender)


def purge(stack: LocalStack) -> None:
    stack.delete_table()
    stack.create_table()


def simulate_new(stack: LocalStack) -> None:
    item = stack.random_item()
    stack.dynamodb.delete_item(TableName=stack.table_name, Key={"ID": item["ID"]})
    print(item.get("Name", {}).get("S", item["ID"]["S"]))


def simulate_update(stack: LocalStack) -> None:
    item = stack.random_item()
    stack.dynamodb.update_item(
        TableName=stack.table_name,
        Key={"ID": item["ID"]},
        UpdateExpression="SET Updated = :u",
        ExpressionAttributeValues={":u": {"S": BACKDATED_UPDATED}},
    )
    print(item.get("Name", {}).get("S", item["ID"]["S"]))


COMMANDS = {
    "seed": seed,
    "purge": purge,
    "simulate-new": simulate_new,
    "simulate-update": simulate_update,
}


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Prepare a LocalStack environment for the ShiftBoard bot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s seed               Create table, parameters and SES identity
  %(prog)s purge              Recreate an empty table
  %(prog)s simulate-new       Delete a random shift from the cache
  %(prog)s simulate-update    Backdate a random shift in the cache
        """,
    )
    parser.add_argument("command", choices=sorted(COMMANDS))
    parser.add_argument(
        "--endpoint-url",
        default=DEFAULT_ENDPOINT,
        help="LocalStack endpoint (default: %(default)s)",
    )
    parser.add_argument(
        "--table-name",
        help="Override the DynamoDB table name",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    configure_logging("DEBUG" if args.verbose else "INFO")

    settings = Settings(environment="development")
    if args.table_name:
        settings = settings.model_copy(update={"table_name": args.table_name})

    COMMANDS[args.command](LocalStack(settings, args.endpoint_url))


if __name__ == "__main__":
    main()
