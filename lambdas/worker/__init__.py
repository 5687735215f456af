"""
Worker Lambda

Reconciles the retriever's shift list against the cached DynamoDB snapshot
and forwards each change to the notification function.

Components:
- handler: Lambda entry point
- reconciler: classification, TTL annotation and persistence/dispatch ordering
"""

from lambdas.worker.handler import lambda_handler
from lambdas.worker.reconciler import (
    ReconcileResult,
    Reconciler,
    add_item_ttl,
    compare_data,
    get_state,
)

__all__ = [
    "lambda_handler",
    "ReconcileResult",
    "Reconciler",
    "add_item_ttl",
    "compare_data",
    "get_state",
]
