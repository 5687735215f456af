"""
ShiftBoard API Client

Thin requests-based client for the three calls the bot needs:
list_sites (credential check, yields the org id), login (access token) and
list_shifts (date-bounded shift listing).

Response envelopes follow the mobile API: {"data": {"sites": [...]}},
{"data": {"access_token": "..."}} and {"data": {"shifts": [...]}}.
"""

from dataclasses import dataclass
from typing import Any

import requests
import structlog
from pydantic import ValidationError

from shiftbot.exceptions import ShiftboardAPIError
from shiftbot.models.shift import Shift

log = structlog.get_logger()


@dataclass(frozen=True)
class Site:
    """A ShiftBoard site the account belongs to."""

    org_id: str
    name: str | None = None


class ShiftboardClient:
    """
    Authenticated ShiftBoard session.

    Args:
        email: Account email
        password: Account password
        base_url: API base URL
        timeout: Per-request timeout in seconds
        session: Optional requests.Session (injected in tests)
    """

    def __init__(
        self,
        email: str,
        password: str,
        *,
        base_url: str,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self.email = email
        self._password = password
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        self.org_id: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return "Authorization" in self.session.headers

    def _request(self, operation: str, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            body = response.json()
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            log.error(
                "shiftboard_request_failed",
                operation=operation,
                status_code=status_code,
                error=str(e),
            )
            raise ShiftboardAPIError(
                operation=operation,
                status_code=status_code,
                error_message=str(e),
            ) from e
        except (requests.RequestException, ValueError) as e:
            # ValueError covers non-JSON bodies
            log.error("shiftboard_request_failed", operation=operation, error=str(e))
            raise ShiftboardAPIError(operation=operation, error_message=str(e)) from e

        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict):
            raise ShiftboardAPIError(
                operation=operation,
                error_message="response is missing the 'data' object",
            )
        return data

    def list_sites(self) -> list[Site]:
        """List the sites visible to the account credentials."""
        data = self._request(
            "list_sites",
            "GET",
            "/sites",
            auth=(self.email, self._password),
        )
        sites = [
            Site(org_id=str(site["org_id"]), name=site.get("name"))
            for site in data.get("sites") or []
            if site.get("org_id") is not None
        ]
        log.debug("shiftboard_sites_listed", count=len(sites))
        return sites

    def login(self, org_id: str) -> None:
        """Exchange credentials for an access token scoped to an org."""
        data = self._request(
            "login",
            "POST",
            "/login",
            json={"email": self.email, "password": self._password, "org_id": org_id},
        )
        token = data.get("access_token")
        if not token:
            raise ShiftboardAPIError(operation="login", error_message="no access token returned")

        self.session.headers["Authorization"] = f"Bearer {token}"
        self.org_id = org_id
        log.info("shiftboard_logged_in", org_id=org_id)

    def list_shifts(self, start_date: str, end_date: str) -> list[Shift]:
        """
        List shifts between two YYYY-MM-DD dates.

        Raises:
            ShiftboardAPIError: If not logged in, on HTTP failure or malformed shifts
        """
        if not self.is_authenticated:
            raise ShiftboardAPIError(operation="list_shifts", error_message="not logged in")

        data = self._request(
            "list_shifts",
            "GET",
            "/shifts",
            params={"start_date": start_date, "end_date": end_date},
        )
        try:
            shifts = [Shift.model_validate(item) for item in data.get("shifts") or []]
        except ValidationError as e:
            raise ShiftboardAPIError(operation="list_shifts", error_message=str(e)) from e

        log.info(
            "shiftboard_shifts_listed",
            start_date=start_date,
            end_date=end_date,
            count=len(shifts),
        )
        return shifts
