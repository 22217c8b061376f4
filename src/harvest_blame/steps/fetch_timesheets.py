"""pypyr step: fetch and aggregate timesheets for the resolved users.

Raises ``NoUsersResolvedError`` when ``context['users']`` is empty, so
the pipeline stops before rendering or sending anything.

Usage in a pipeline YAML::

    steps:
      - name: harvest_blame.steps.fetch_timesheets

Context keys consumed:
    config (BlameConfig): The validated configuration.
    client (BaseTimeClient): Client created by ``fetch_users``.
    users (dict[str, User]): Resolved users.

Context keys produced:
    timesheets (dict[str, Timesheet]): Dense timesheets keyed by user id.
"""

import logging

from harvest_blame.timesheets.fetcher import fetch_timesheets

logger = logging.getLogger(__name__)


def run_step(context: dict) -> None:
    """pypyr entry-point: build ``context['timesheets']``.

    Args:
        context: The mutable pypyr context dictionary.
    """
    config = context["config"]

    timesheets = fetch_timesheets(
        context["client"],
        context.get("users") or {},
        config.date_range,
    )
    context["timesheets"] = timesheets

    logger.info("Fetched %d timesheets.", len(timesheets))
