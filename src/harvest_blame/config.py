"""Load and validate the harvest-blame configuration.

Settings come from environment variables (the CLI loads a ``.env`` file
first via ``python-dotenv``).  Everything is validated once, up front,
into a frozen :class:`BlameConfig`; a missing or malformed value raises
:class:`~harvest_blame.errors.ConfigError` before any remote call is
made.

See ``.env.example`` for the full list of variables.
"""

from __future__ import annotations

import datetime
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from harvest_blame.dates import parse_date_expression
from harvest_blame.errors import ConfigError
from harvest_blame.models import DateRange

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}

# Messages shown when a required key is absent.
_MISSING_MESSAGES = {
    "HARVEST_USER": "No Harvest User has been set to connect to the API with.",
    "HARVEST_PASSWORD": "No Harvest Password has been set to connect to the API with.",
    "HARVEST_ACCOUNT": "No Harvest API Account has been set.",
    "HARVEST_USE_SSL": "No Harvest API SSL configuration has been set.",
    "BLAME_START": "No start time has been set for the API to look at.",
    "BLAME_END": "No end time has been set for the API to look at.",
    "BLAME_USERS": "No users have been configured.",
    "EMAIL_FROM": "No address has been configured to send mail from.",
    "EMAIL_TO": "No address has been configured to send mail to.",
    "EMAIL_CC_USERS": "No configuration for whether to cc the users is set.",
}


@dataclass(frozen=True)
class HarvestSettings:
    """Connection settings for the Harvest API client."""

    user: str
    password: str
    account: str
    use_ssl: bool = True
    proxy_host: str | None = None
    proxy_port: int | None = None

    @property
    def base_url(self) -> str:
        scheme = "https" if self.use_ssl else "http"
        return f"{scheme}://{self.account}.harvestapp.com"

    @property
    def proxy_url(self) -> str | None:
        if not self.proxy_host or not self.proxy_port:
            return None
        return f"http://{self.proxy_host}:{self.proxy_port}"


@dataclass(frozen=True)
class SmtpSettings:
    """Outbound mail server settings."""

    host: str = "localhost"
    port: int = 25
    user: str = ""
    password: str = ""
    use_ssl: bool = False


@dataclass(frozen=True)
class EmailSettings:
    """Who the report is sent from and to."""

    from_address: str
    to_address: str
    cc: tuple[str, ...] = ()
    cc_users: bool = False
    smtp: SmtpSettings = field(default_factory=SmtpSettings)


@dataclass(frozen=True)
class BlameConfig:
    """Validated configuration for one run."""

    harvest: HarvestSettings
    date_range: DateRange
    user_ids: tuple[str, ...]
    email: EmailSettings
    timezone: str | None = None


# ------------------------------------------------------------------
# Value helpers
# ------------------------------------------------------------------

def _require(env: Mapping[str, str], name: str) -> str:
    """Return the stripped value of *name* or raise ConfigError."""
    value = env.get(name)
    if value is None or not value.strip():
        raise ConfigError(name, _MISSING_MESSAGES[name])
    return value.strip()


def _optional(env: Mapping[str, str], name: str, default: str = "") -> str:
    value = env.get(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def _parse_bool(name: str, value: str) -> bool:
    normalised = value.strip().lower()
    if normalised in _TRUE_VALUES:
        return True
    if normalised in _FALSE_VALUES:
        return False
    raise ConfigError(name, f"{name} must be a boolean (true/false), got {value!r}.")


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigError(name, f"{name} must be an integer, got {value!r}.") from None


def _split_list(value: str) -> tuple[str, ...]:
    """Split a comma-separated value, dropping blanks."""
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _today_in(timezone: str | None) -> datetime.date:
    if not timezone:
        return datetime.date.today()
    try:
        zone = ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError):
        raise ConfigError(
            "BLAME_TIMEZONE", f"Unknown timezone {timezone!r}."
        ) from None
    return datetime.datetime.now(zone).date()


def _parse_date(name: str, value: str, today: datetime.date) -> datetime.date:
    parsed = parse_date_expression(value, today)
    if parsed is None:
        raise ConfigError(
            name,
            f"{name} is not a recognised date: {value!r} "
            "(use YYYY-MM-DD, 'today', 'yesterday' or 'N days ago').",
        )
    return parsed


# ------------------------------------------------------------------
# Public API
# ------------------------------------------------------------------

def load_config(
    environ: Mapping[str, str] | None = None,
    today: datetime.date | None = None,
) -> BlameConfig:
    """Build a validated :class:`BlameConfig` from environment variables.

    Args:
        environ: Mapping to read from.  Defaults to ``os.environ``.
        today: Reference date for relative expressions such as
            ``"-7 days"``.  Defaults to the current date in
            ``BLAME_TIMEZONE`` (or local time when unset).

    Returns:
        The validated configuration.

    Raises:
        ConfigError: A required variable is missing or a value is invalid.
    """
    env = os.environ if environ is None else environ

    # --- Harvest account ----------------------------------------------
    proxy_host = _optional(env, "HARVEST_HTTP_PROXY") or None
    proxy_port_raw = _optional(env, "HARVEST_HTTP_PROXY_PORT")
    proxy_port = (
        _parse_int("HARVEST_HTTP_PROXY_PORT", proxy_port_raw)
        if proxy_port_raw else None
    )

    harvest = HarvestSettings(
        user=_require(env, "HARVEST_USER"),
        password=_require(env, "HARVEST_PASSWORD"),
        account=_require(env, "HARVEST_ACCOUNT"),
        use_ssl=_parse_bool("HARVEST_USE_SSL", _require(env, "HARVEST_USE_SSL")),
        proxy_host=proxy_host,
        proxy_port=proxy_port,
    )

    # --- Time window --------------------------------------------------
    timezone = _optional(env, "BLAME_TIMEZONE") or None
    if today is None:
        today = _today_in(timezone)

    start = _parse_date("BLAME_START", _require(env, "BLAME_START"), today)
    end = _parse_date("BLAME_END", _require(env, "BLAME_END"), today)
    if start > end:
        raise ConfigError(
            "BLAME_START",
            f"Start date {start.isoformat()} is after end date {end.isoformat()}.",
        )

    # --- Users --------------------------------------------------------
    user_ids = _split_list(_require(env, "BLAME_USERS"))
    if not user_ids:
        raise ConfigError("BLAME_USERS", _MISSING_MESSAGES["BLAME_USERS"])

    # --- Email --------------------------------------------------------
    smtp = SmtpSettings(
        host=_optional(env, "SMTP_HOST", "localhost"),
        port=_parse_int("SMTP_PORT", _optional(env, "SMTP_PORT", "25")),
        user=_optional(env, "SMTP_USER"),
        password=_optional(env, "SMTP_PASSWORD"),
        use_ssl=_parse_bool("SMTP_USE_SSL", _optional(env, "SMTP_USE_SSL", "false")),
    )
    email = EmailSettings(
        from_address=_require(env, "EMAIL_FROM"),
        to_address=_require(env, "EMAIL_TO"),
        cc=_split_list(_optional(env, "EMAIL_CC")),
        cc_users=_parse_bool("EMAIL_CC_USERS", _require(env, "EMAIL_CC_USERS")),
        smtp=smtp,
    )

    config = BlameConfig(
        harvest=harvest,
        date_range=DateRange(start, end),
        user_ids=user_ids,
        email=email,
        timezone=timezone,
    )
    logger.debug(
        "Configuration loaded: %d users, %s to %s",
        len(user_ids), start.isoformat(), end.isoformat(),
    )
    return config
