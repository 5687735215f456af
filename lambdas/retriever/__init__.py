"""
Retriever Lambda

Scheduled Lambda that polls ShiftBoard and forwards the shift list to the
worker function.

Components:
- handler: Lambda entry point for scheduled trigger
- fetcher: SSM credentials, login, fetch window and state filter
"""

from lambdas.retriever.fetcher import (
    ApiParameters,
    api_login,
    fetch_window,
    filter_by_state,
    load_api_parameters,
    read_from_api,
)
from lambdas.retriever.handler import lambda_handler

__all__ = [
    "lambda_handler",
    "ApiParameters",
    "api_login",
    "fetch_window",
    "filter_by_state",
    "load_api_parameters",
    "read_from_api",
]
