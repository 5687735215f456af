"""
ShiftBoard Fetching

Credential loading, login and the rolling fetch window for the retriever.

The window runs from fetch_months_back before today to fetch_months_ahead
after it, so shifts that recently ended are still compared against the cache.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, timezone

import structlog

from shiftbot.config import Settings
from shiftbot.dates import add_months
from shiftbot.exceptions import ConfigurationError, ShiftboardAPIError
from shiftbot.models.shift import Shift
from shiftbot.tools.shiftboard import ShiftboardClient
from shiftbot.tools.ssm import get_parameters_by_path, require_parameter

log = structlog.get_logger()

DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class ApiParameters:
    """ShiftBoard credentials and the optional state filter."""

    email: str
    password: str
    state_filter: str = ""

    def __repr__(self) -> str:
        return f"ApiParameters(email={self.email!r}, password='***', state_filter={self.state_filter!r})"


def load_api_parameters(settings: Settings, *, client=None) -> ApiParameters:
    """
    Read API parameters from SSM (decrypted).

    Raises:
        ConfigurationError: If email or password is missing
        ParameterStoreError: On SSM failure
    """
    path = settings.api_parameter_path
    parameters = get_parameters_by_path(path, settings, with_decryption=True, client=client)
    if not parameters:
        raise ConfigurationError(parameter="email", path=path)

    return ApiParameters(
        email=require_parameter(parameters, "email", path),
        password=require_parameter(parameters, "password", path),
        state_filter=parameters.get("state_filter", "").strip(),
    )


def api_login(
    email: str,
    password: str,
    settings: Settings,
    *,
    session=None,
) -> ShiftboardClient:
    """
    Log into ShiftBoard using the org of the account's first site.

    Raises:
        ConfigurationError: If email or password is empty
        ShiftboardAPIError: If credentials are rejected or no site is found
    """
    if not email:
        raise ConfigurationError(parameter="email", path=settings.api_parameter_path)
    if not password:
        raise ConfigurationError(parameter="password", path=settings.api_parameter_path)

    client = ShiftboardClient(
        email,
        password,
        base_url=settings.shiftboard_base_url,
        timeout=settings.shiftboard_timeout_seconds,
        session=session,
    )

    sites = client.list_sites()
    if not sites:
        raise ShiftboardAPIError(
            operation="list_sites",
            error_message="no sites available for these credentials",
        )

    client.login(sites[0].org_id)
    return client


def fetch_window(
    today: date,
    months_back: int = 1,
    months_ahead: int = 6,
) -> tuple[str, str]:
    """Start and end dates (YYYY-MM-DD) of the fetch window around today."""
    start = add_months(today, -months_back)
    end = add_months(today, months_ahead)
    return start.strftime(DATE_FORMAT), end.strftime(DATE_FORMAT)


def read_from_api(
    client: ShiftboardClient,
    settings: Settings,
    *,
    now: datetime | None = None,
) -> list[Shift]:
    """Fetch every shift inside the configured window."""
    today = (now or datetime.now(timezone.utc)).date()
    start_date, end_date = fetch_window(
        today,
        months_back=settings.fetch_months_back,
        months_ahead=settings.fetch_months_ahead,
    )
    return client.list_shifts(start_date, end_date)


def filter_by_state(shifts: Sequence[Shift], state_filter: str) -> list[Shift]:
    """
    Keep shifts located in one of the comma-separated states.

    An empty filter keeps everything; shifts without a location are dropped
    once a filter is set.
    """
    states = {state.strip() for state in state_filter.split(",") if state.strip()}
    if not states:
        return list(shifts)

    filtered = [
        shift
        for shift in shifts
        if shift.location is not None and shift.location.state in states
    ]

    log.info(
        "shifts_filtered_by_state",
        states=sorted(states),
        before=len(shifts),
        after=len(filtered),
    )
    return filtered
