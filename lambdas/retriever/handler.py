"""
Retriever Lambda Handler

Main entry point for the scheduled ShiftBoard poll.
Fetches the current shift list and hands it to the worker function.

Trigger: EventBridge Scheduled Rule (rate(1 hour))
Output: Asynchronous invoke of the worker function with the shift list

Flow:
1. Read credentials and state filter from SSM Parameter Store
2. Log into the ShiftBoard API
3. Fetch shifts from one month back to six months ahead
4. Apply the state filter, if configured
5. Invoke the worker with the JSON shift list
"""

import time
from typing import Any

import structlog

from lambdas.retriever.fetcher import (
    api_login,
    filter_by_state,
    load_api_parameters,
    read_from_api,
)
from shiftbot.config import get_settings
from shiftbot.logs import configure_logging
from shiftbot.tools.invoker import invoke_async

configure_logging(get_settings().log_level)

log = structlog.get_logger()


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """
    Main Lambda handler for shift retrieval.

    Args:
        event: EventBridge scheduled event (contents unused)
        context: Lambda context

    Returns:
        Processing result summary

    Raises:
        ShiftBotError: Configuration, API or invocation failure
    """
    start_time = time.time()
    settings = get_settings()

    log.info("retrieval_started", worker_function=settings.worker_function)

    try:
        params = load_api_parameters(settings)
        client = api_login(params.email, params.password, settings)
        shifts = read_from_api(client, settings)

        if params.state_filter:
            shifts = filter_by_state(shifts, params.state_filter)

        payload = [shift.to_payload() for shift in shifts]
        invoke_async(settings.worker_function, payload, settings)
    except Exception as e:
        log.exception("retrieval_failed", error=str(e), error_type=type(e).__name__)
        raise

    duration_ms = (time.time() - start_time) * 1000

    log.info(
        "retrieval_completed",
        shifts_forwarded=len(shifts),
        duration_ms=duration_ms,
    )

    return {
        "statusCode": 200,
        "body": {
            "message": "Success",
            "shifts_forwarded": len(shifts),
            "duration_ms": round(duration_ms, 2),
        },
    }
