"""
Integration test fixtures and configuration.

Integration tests run the three functions in-process against moto-mocked
AWS services. Lambda-to-Lambda invocations are replaced by direct calls.
"""

import json
from typing import Any, Dict, List
from unittest.mock import MagicMock, patch

import pytest

from tests.utils.shift_generator import ShiftGenerator


class FakeShiftboardAPI:
    """Routes requests.Session.request calls to canned API responses."""

    def __init__(self, shifts: List[Dict[str, Any]]):
        self.shifts = shifts
        self.requests: List[tuple] = []

    def request(self, method: str, url: str, **kwargs: Any):
        endpoint = url.rstrip("/").rsplit("/", 1)[-1]
        self.requests.append((method, endpoint, kwargs.get("params")))

        if endpoint == "sites":
            body = {"data": {"sites": [{"org_id": 1234, "name": "Main"}]}}
        elif endpoint == "login":
            body = {"data": {"access_token": "integration-token"}}
        elif endpoint == "shifts":
            body = {"data": {"shifts": self.shifts}}
        else:
            raise AssertionError(f"unexpected endpoint {url}")

        response = MagicMock()
        response.status_code = 200
        response.json.return_value = body
        return response


class DirectDispatcher:
    """Delivers change events straight to the notification handler."""

    def __init__(self):
        self.results: List[Dict[str, Any]] = []

    def dispatch(self, event) -> None:
        from lambdas.notification.handler import lambda_handler

        payload = json.loads(json.dumps(event.to_payload()))
        self.results.append(lambda_handler(payload, None))


@pytest.fixture
def generator() -> ShiftGenerator:
    return ShiftGenerator(seed=42)


@pytest.fixture
def shiftboard_api(generator) -> FakeShiftboardAPI:
    api = FakeShiftboardAPI(generator.generate_shifts(30, state="IL"))
    session = MagicMock()
    session.headers = {}
    session.request.side_effect = api.request
    with patch("shiftbot.tools.shiftboard.requests.Session", return_value=session):
        yield api


@pytest.fixture
def notifications() -> DirectDispatcher:
    dispatcher = DirectDispatcher()
    with patch("lambdas.worker.handler.LambdaChangeDispatcher", return_value=dispatcher):
        yield dispatcher


@pytest.fixture
def run_pipeline(mock_dynamodb, mock_ssm, mock_ses, shiftboard_api, notifications):
    """
    Run retriever -> worker -> notification once.

    Returns the worker's result body.
    """
    from lambdas.retriever.handler import lambda_handler as retriever_handler
    from lambdas.worker.handler import lambda_handler as worker_handler

    def _run() -> Dict[str, Any]:
        with patch("lambdas.retriever.handler.invoke_async") as invoke:
            retriever_handler({"source": "aws.events"}, None)

        function_name, payload, _ = invoke.call_args.args
        assert function_name == "TestWorkerFunction"
        return worker_handler(json.loads(json.dumps(payload)), None)["body"]

    return _run
