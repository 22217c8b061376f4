"""pypyr step: render the hours report.

Usage in a pipeline YAML::

    steps:
      - name: harvest_blame.steps.compose_report

Context keys consumed:
    config (BlameConfig): The validated configuration.
    users (dict[str, User]): Resolved users.
    timesheets (dict[str, Timesheet]): Timesheets keyed by user id.

Context keys produced:
    report (dict): The composed report with keys ``subject``,
        ``html_body``, ``row_count`` and ``rows``.
"""

import logging

from harvest_blame.reporting.composer import compose_report

logger = logging.getLogger(__name__)


def run_step(context: dict) -> None:
    """pypyr entry-point: compose the report into ``context['report']``.

    Args:
        context: The mutable pypyr context dictionary.
    """
    config = context["config"]

    report = compose_report(
        context["users"],
        context["timesheets"],
        config.date_range,
    )
    context["report"] = report

    logger.info("Report composed: %s (%d rows)", report["subject"], report["row_count"])
