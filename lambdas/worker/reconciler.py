"""
Shift Reconciliation

Compares freshly fetched shifts against the cached snapshot, persists what
changed and hands each change event to a dispatcher.

Classification (by shift ID):
- not in cache                       -> created
- cached Updated strictly earlier    -> updated
- otherwise                          -> unchanged (no event, not rewritten)

The first run against an empty table writes the whole snapshot in batches and
emits nothing, so a fresh deployment does not mail every existing shift.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol

import structlog

from shiftbot.dates import add_months, parse_shift_datetime
from shiftbot.models.events import ChangeEvent, ChangeState
from shiftbot.models.shift import CachedShift, Shift

log = structlog.get_logger()

TTL_MONTHS = 1


class ShiftStore(Protocol):
    def scan_shifts(self) -> list[CachedShift]: ...

    def put_shift(self, shift: CachedShift) -> None: ...

    def write_all(self, shifts: Sequence[CachedShift]) -> int: ...


class ChangeDispatcher(Protocol):
    def dispatch(self, event: ChangeEvent) -> None: ...


@dataclass
class ReconcileResult:
    """Summary of one reconciliation cycle."""

    shifts_received: int = 0
    cached_count: int = 0
    cold_start: bool = False
    created: int = 0
    updated: int = 0
    written: int = 0

    @property
    def unchanged(self) -> int:
        if self.cold_start:
            return 0
        return self.shifts_received - self.created - self.updated

    def to_dict(self) -> dict[str, int | bool]:
        return {
            "shifts_received": self.shifts_received,
            "cached_count": self.cached_count,
            "cold_start": self.cold_start,
            "created": self.created,
            "updated": self.updated,
            "unchanged": self.unchanged,
            "written": self.written,
        }


def add_item_ttl(end_date: str) -> int:
    """
    Expiration timestamp for a cached shift: one calendar month past its end.

    Args:
        end_date: Shift end, ISO-8601 (a missing zone means UTC)

    Returns:
        Unix epoch seconds
    """
    return int(add_months(parse_shift_datetime(end_date), TTL_MONTHS).timestamp())


def to_cached(shift: Shift) -> CachedShift:
    """Attach the expiration attribute to a shift for persistence."""
    return CachedShift(
        **shift.model_dump(exclude={"ttl"}),
        ttl=add_item_ttl(shift.end_date),
    )


def _classify(shift: Shift, cached: Shift | None) -> ChangeState:
    if cached is None:
        return ChangeState.CREATED
    if cached.updated < shift.updated:
        return ChangeState.UPDATED
    return ChangeState.UNCHANGED


def get_state(shift: Shift, cache: Iterable[Shift]) -> ChangeState:
    """Classify one shift against the cache by linear scan."""
    cached = next((c for c in cache if c.id == shift.id), None)
    return _classify(shift, cached)


def compare_data(
    new_data: Sequence[Shift],
    cached_data: Sequence[Shift],
) -> list[ChangeEvent]:
    """
    Change events for every created or updated shift, in new_data order.

    Pure; lookups go through an ID index instead of a scan per shift.
    """
    index = {cached.id: cached for cached in cached_data}
    changes: list[ChangeEvent] = []

    for shift in new_data:
        state = _classify(shift, index.get(shift.id))
        if state is not ChangeState.UNCHANGED:
            changes.append(ChangeEvent(state=state, shift=shift))

    return changes


class Reconciler:
    """
    Persist and dispatch the changes between a fetch and the cached snapshot.

    Args:
        store: Snapshot storage (scan, put, batched write)
        dispatcher: Receives each change event after its shift is persisted
    """

    def __init__(self, store: ShiftStore, dispatcher: ChangeDispatcher) -> None:
        self.store = store
        self.dispatcher = dispatcher

    def reconcile(
        self,
        new_data: Sequence[Shift],
        cached_data: Sequence[Shift],
    ) -> list[ChangeEvent]:
        """
        Reconcile new_data against cached_data.

        Any store or dispatch error propagates immediately; shifts handled
        before the failure stay written.

        Returns:
            Change events in new_data order (empty on cold start)
        """
        if not cached_data:
            log.info("cold_start_detected", shifts=len(new_data))
            self.store.write_all([to_cached(shift) for shift in new_data])
            return []

        changes = compare_data(new_data, cached_data)

        for change in changes:
            # Persisted before dispatch
            self.store.put_shift(to_cached(change.shift))
            self.dispatcher.dispatch(change)

            log.info(
                "shift_change_dispatched",
                shift_id=change.shift.id,
                state=change.state.value,
            )

        return changes

    def run(self, new_data: Sequence[Shift]) -> ReconcileResult:
        """Load the cached snapshot, then reconcile new_data against it."""
        cached_data = self.store.scan_shifts()
        result = ReconcileResult(
            shifts_received=len(new_data),
            cached_count=len(cached_data),
            cold_start=not cached_data,
        )

        changes = self.reconcile(new_data, cached_data)

        if result.cold_start:
            result.written = len(new_data)
        else:
            result.created = sum(1 for c in changes if c.state is ChangeState.CREATED)
            result.updated = sum(1 for c in changes if c.state is ChangeState.UPDATED)
            result.written = len(changes)

        log.info("reconciliation_completed", **result.to_dict())
        return result
