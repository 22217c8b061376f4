"""Harvest API client using ``requests``.

Talks to the account-scoped Harvest API at
``https://<account>.harvestapp.com`` with HTTP basic auth:

- ``GET /people/<id>`` -- user details
- ``GET /people/<id>/entries?from=YYYYMMDD&to=YYYYMMDD`` -- time entries

Network errors, non-2xx responses and malformed payloads are logged and
turned into unsuccessful :class:`ApiResult` objects; nothing is raised
to the caller.  Throttled (503) and transient gateway responses are
retried by the transport adapter, honouring ``Retry-After``.
"""

import datetime
import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from harvest_blame import __version__
from harvest_blame.config import HarvestSettings
from harvest_blame.harvest.base import BaseTimeClient
from harvest_blame.models import ApiResult, DateRange, RawEntry, User

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30

RETRY_STATUSES = (502, 503, 504)


def _build_retry() -> Retry:
    return Retry(
        total=3,
        backoff_factor=1,
        status_forcelist=RETRY_STATUSES,
        allowed_methods=frozenset({"GET"}),
        respect_retry_after_header=True,
        raise_on_status=False,
    )


class HarvestClient(BaseTimeClient):
    """Client for the Harvest people and entries endpoints."""

    def __init__(
        self,
        base_url: str,
        user: str,
        password: str,
        proxy_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.auth = (user, password)
        self.session.headers.update({
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": f"harvest-blame/{__version__}",
        })
        if proxy_url:
            self.session.proxies.update({"http": proxy_url, "https": proxy_url})

        adapter = HTTPAdapter(max_retries=_build_retry())
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

    @classmethod
    def from_settings(cls, settings: HarvestSettings) -> "HarvestClient":
        return cls(
            base_url=settings.base_url,
            user=settings.user,
            password=settings.password,
            proxy_url=settings.proxy_url,
        )

    # ------------------------------------------------------------------
    # BaseTimeClient interface
    # ------------------------------------------------------------------

    def get_user(self, user_id: str) -> ApiResult[User]:
        status, payload = self._get(f"/people/{user_id}")
        if payload is None:
            return ApiResult.failed(status)

        try:
            user = self._user_from_payload(payload)
        except (KeyError, TypeError, AttributeError):
            logger.error("Malformed user payload for %s", user_id)
            return ApiResult.failed(status)
        return ApiResult.ok(user, status)

    def get_user_entries(
        self,
        user_id: str,
        date_range: DateRange,
    ) -> ApiResult[list[RawEntry]]:
        params = {
            "from": date_range.start.strftime("%Y%m%d"),
            "to": date_range.end.strftime("%Y%m%d"),
        }
        status, payload = self._get(f"/people/{user_id}/entries", params=params)
        if payload is None:
            return ApiResult.failed(status)

        try:
            entries = [
                self._entry_from_payload(user_id, item) for item in payload
            ]
        except (KeyError, TypeError, ValueError, AttributeError):
            logger.error("Malformed entries payload for %s", user_id)
            return ApiResult.failed(status)

        logger.debug("Fetched %d entries for %s", len(entries), user_id)
        return ApiResult.ok(entries, status)

    def close(self) -> None:
        self.session.close()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get(self, path: str, params: dict | None = None):
        """GET *path* and return ``(status_code, json)``.

        ``json`` is ``None`` when the request failed for any reason.
        """
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Request to %s failed: %s", url, exc)
            return None, None

        if not resp.ok:
            logger.error("Harvest returned HTTP %d for %s", resp.status_code, url)
            return resp.status_code, None

        try:
            return resp.status_code, resp.json()
        except ValueError:
            logger.error("Harvest returned non-JSON response for %s", url)
            return resp.status_code, None

    @staticmethod
    def _user_from_payload(payload: dict) -> User:
        """Convert a ``{"user": {...}}`` payload to a :class:`User`."""
        data = payload.get("user", payload)
        return User(
            id=str(data["id"]),
            first_name=(data.get("first_name") or "").strip(),
            last_name=(data.get("last_name") or "").strip(),
            email=(data.get("email") or "").strip(),
        )

    @staticmethod
    def _entry_from_payload(user_id: str, item: dict) -> RawEntry:
        """Convert a ``{"day_entry": {...}}`` item to a :class:`RawEntry`."""
        data = item.get("day_entry", item)
        return RawEntry(
            user_id=str(data.get("user_id", user_id)),
            spent_at=datetime.date.fromisoformat(data["spent_at"]),
            hours=float(data.get("hours") or 0),
        )
