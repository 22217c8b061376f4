"""Run the whole blame job: fetch, render, dispatch."""

from __future__ import annotations

import logging

from harvest_blame.config import BlameConfig
from harvest_blame.harvest.base import BaseTimeClient
from harvest_blame.reporting.composer import compose_report
from harvest_blame.reporting.dispatcher import Transport, dispatch_report
from harvest_blame.timesheets.fetcher import fetch_timesheets, fetch_users

logger = logging.getLogger(__name__)


def run_blame(
    config: BlameConfig,
    client: BaseTimeClient,
    transport: Transport | None = None,
    dry_run: bool = False,
) -> dict:
    """Fetch timesheets, render the report and email it.

    Args:
        config: Validated run configuration.
        client: Time-tracking service client.  The caller owns it.
        transport: Mail transport override (see ``dispatch_report``).
        dry_run: Render the report but do not send it.

    Returns:
        The composed report dict, extended with ``email_sent`` (bool),
        ``user_count`` and ``timesheet_count``.

    Raises:
        NoUsersResolvedError: No configured user could be fetched.
            Nothing is rendered or sent in that case.
    """
    users = fetch_users(client, config.user_ids)
    timesheets = fetch_timesheets(client, users, config.date_range)

    report = compose_report(users, timesheets, config.date_range)
    report["user_count"] = len(users)
    report["timesheet_count"] = len(timesheets)

    if dry_run:
        logger.info("Dry run: not sending email.")
        report["email_sent"] = False
        return report

    report["email_sent"] = dispatch_report(
        report, config.email, users, transport=transport
    )
    return report
