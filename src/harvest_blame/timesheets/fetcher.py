"""Fetch users and their time entries, and aggregate them per day.

Users are processed one at a time in configured order.  A failed lookup
for one user is logged and that user is skipped; only the case where no
user at all could be resolved is fatal.
"""

import datetime
import logging
from collections.abc import Iterable, Mapping

from harvest_blame.errors import NoUsersResolvedError
from harvest_blame.harvest.base import BaseTimeClient
from harvest_blame.models import DateRange, RawEntry, Timesheet, User

logger = logging.getLogger(__name__)


def fetch_users(
    client: BaseTimeClient,
    user_ids: Iterable[str],
) -> dict[str, User]:
    """Look up each configured user.

    Args:
        client: The time-tracking service client.
        user_ids: User identifiers, in the order they should appear in
            the report.

    Returns:
        A new dict mapping user id to :class:`User`, in configured
        order.  Users whose lookup failed are absent.
    """
    logger.info("Fetching user details:")

    users: dict[str, User] = {}
    for user_id in user_ids:
        result = client.get_user(user_id)
        if result.success and result.data is not None:
            users[user_id] = result.data
            logger.info("[OK]: %s", user_id)
        else:
            logger.warning("[FAILED]: %s", user_id)

    return users


def build_daily_hours(
    date_range: DateRange,
    entries: Iterable[RawEntry],
) -> dict[datetime.date, int]:
    """Aggregate entries into one integer bucket per day of *date_range*.

    Every day starts at 0, so days without entries still appear.  Each
    entry's hours are truncated to an integer before being added, and
    entries on the same day are summed.  Entries outside the range, and
    entries with negative hours, are ignored.
    """
    hours = {day: 0 for day in date_range}

    for entry in entries:
        if entry.spent_at not in hours:
            logger.warning(
                "Ignoring entry for %s dated %s, outside %s to %s",
                entry.user_id, entry.spent_at.isoformat(),
                date_range.start.isoformat(), date_range.end.isoformat(),
            )
            continue
        if entry.hours < 0:
            logger.warning(
                "Ignoring entry for %s dated %s with negative hours (%s)",
                entry.user_id, entry.spent_at.isoformat(), entry.hours,
            )
            continue
        hours[entry.spent_at] += int(entry.hours)

    return hours


def fetch_timesheets(
    client: BaseTimeClient,
    users: Mapping[str, User],
    date_range: DateRange,
) -> dict[str, Timesheet]:
    """Fetch and aggregate time entries for every resolved user.

    Args:
        client: The time-tracking service client.
        users: Resolved users, as returned by :func:`fetch_users`.
        date_range: Inclusive window of days to report on.

    Returns:
        A new dict mapping user id to :class:`Timesheet`, in the order
        of *users*.  Users whose entries request failed are absent.

    Raises:
        NoUsersResolvedError: *users* is empty.  No request is made.
    """
    if not users:
        raise NoUsersResolvedError()

    logger.info("Fetching timesheets:")

    timesheets: dict[str, Timesheet] = {}
    for user_id, user in users.items():
        result = client.get_user_entries(user_id, date_range)
        if not result.success:
            logger.warning("[FAILED]: %s", user_id)
            continue

        logger.info("[OK]: %s", user_id)
        timesheets[user_id] = Timesheet(
            user=user,
            hours=build_daily_hours(date_range, result.data or []),
        )

    return timesheets
