"""
Worker Lambda Handler

Main entry point for shift reconciliation.
Receives the retriever's shift list, diffs it against the DynamoDB snapshot
and invokes the notification function for every created or updated shift.

Trigger: Asynchronous invoke from the retriever function
Output: DynamoDB writes, notification function invocations

Flow:
1. Parse the shift list payload
2. Scan the cached snapshot from DynamoDB
3. Cold start: batch-write everything and stop
4. Otherwise: persist each created/updated shift, then invoke notification
5. Return summary of the cycle
"""

import time
from typing import Any

import structlog
from pydantic import TypeAdapter

from lambdas.worker.reconciler import Reconciler
from shiftbot.config import get_settings
from shiftbot.logs import configure_logging
from shiftbot.models.shift import Shift
from shiftbot.tools.dynamodb import ShiftTable
from shiftbot.tools.invoker import LambdaChangeDispatcher

configure_logging(get_settings().log_level)

log = structlog.get_logger()

_shift_list = TypeAdapter(list[Shift])


def parse_shift_payload(event: Any) -> list[Shift]:
    """
    Parse the invocation payload into shifts.

    Accepts the bare JSON list sent by the retriever, or {"shifts": [...]}
    for manual test invocations.
    """
    if isinstance(event, dict):
        event = event.get("shifts", [])
    return _shift_list.validate_python(event or [])


def lambda_handler(event: Any, context: Any) -> dict[str, Any]:
    """
    Main Lambda handler for shift reconciliation.

    Args:
        event: List of shifts from the retriever
        context: Lambda context

    Returns:
        Processing result summary

    Raises:
        ShiftBotError: Any store or dispatch failure aborts the invocation
    """
    start_time = time.time()
    settings = get_settings()

    try:
        shifts = parse_shift_payload(event)
        log.info("reconciliation_started", shifts=len(shifts), table=settings.table_name)

        reconciler = Reconciler(
            store=ShiftTable(settings),
            dispatcher=LambdaChangeDispatcher(settings),
        )
        result = reconciler.run(shifts)
    except Exception as e:
        log.exception("reconciliation_failed", error=str(e), error_type=type(e).__name__)
        raise

    duration_ms = (time.time() - start_time) * 1000

    return {
        "statusCode": 200,
        "body": {
            "message": "Success",
            **result.to_dict(),
            "duration_ms": round(duration_ms, 2),
        },
    }
