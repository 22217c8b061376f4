"""pypyr step: email the composed report.

Skips sending when ``dry_run`` is set in the context.  A failed send is
logged and recorded in ``email_sent``; it does not fail the pipeline.

Usage in a pipeline YAML::

    steps:
      - name: harvest_blame.steps.send_report

Context keys consumed:
    config (BlameConfig): The validated configuration.
    users (dict[str, User]): Resolved users (CC'd when enabled).
    report (dict): The composed report.
    dry_run (bool, optional): Render only.  Default ``False``.

Context keys produced:
    email_sent (bool): Whether the email was dispatched successfully.
"""

import logging

from harvest_blame.reporting.dispatcher import dispatch_report

logger = logging.getLogger(__name__)


def run_step(context: dict) -> None:
    """pypyr entry-point: send the report email.

    Args:
        context: The mutable pypyr context dictionary.
    """
    report = context.get("report")
    if not report:
        logger.warning("No report found in context; skipping email send.")
        context["email_sent"] = False
        return

    if context.get("dry_run"):
        logger.info("Dry run: not sending email.")
        context["email_sent"] = False
        return

    config = context["config"]
    context["email_sent"] = dispatch_report(
        report, config.email, context.get("users") or {}
    )
