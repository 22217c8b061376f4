"""Compose the hours ("shame") report.

Turns per-user dense timesheets into an HTML table with one column per
day, rendered with the Jinja2 template at ``templates/shame_report.html``.
Each cell is coloured by the band its hour count falls into.
"""

import enum
import logging
import pathlib
from collections.abc import Mapping

from jinja2 import Environment, FileSystemLoader

from harvest_blame.models import DateRange, Timesheet, User

logger = logging.getLogger(__name__)

# Locate the templates directory relative to this file.
_TEMPLATE_DIR = pathlib.Path(__file__).parent / "templates"

LOW_THRESHOLD = 4
HIGH_THRESHOLD = 6


class Band(enum.Enum):
    """How well a day's logged hours measure up."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# (background, foreground) per band.
BAND_COLOURS: dict[Band, tuple[str, str]] = {
    Band.LOW: ("#A63C45", "#FFF"),
    Band.MEDIUM: ("#F2CF63", "#000"),
    Band.HIGH: ("#88BF78", "#000"),
}


def classify_hours(hours: int) -> Band:
    """Classify an hour count into a colour band.

    Thresholds (first match wins):
        - < 4  -> LOW
        - < 6  -> MEDIUM
        - else -> HIGH
    """
    if hours < LOW_THRESHOLD:
        return Band.LOW
    if hours < HIGH_THRESHOLD:
        return Band.MEDIUM
    return Band.HIGH


def build_subject(date_range: DateRange) -> str:
    """Return the email subject line for *date_range*."""
    return (
        f"Harvest Hours for {date_range.start.strftime('%d/%m/%Y')} "
        f"to {date_range.end.strftime('%d/%m/%Y')}"
    )


def _build_rows(
    users: Mapping[str, User],
    timesheets: Mapping[str, Timesheet],
    date_range: DateRange,
) -> list[dict]:
    """Build one template row per user that has a timesheet."""
    rows = []
    for user_id, user in users.items():
        timesheet = timesheets.get(user_id)
        if timesheet is None:
            logger.debug("No timesheet for %s; leaving out of report", user_id)
            continue

        cells = []
        for day in date_range:
            hours = timesheet.hours.get(day, 0)
            band = classify_hours(hours)
            background, foreground = BAND_COLOURS[band]
            cells.append({
                "hours": hours,
                "band": band.value,
                "background": background,
                "foreground": foreground,
            })

        rows.append({
            "user_id": user_id,
            "name": user.display_name,
            "cells": cells,
        })
    return rows


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def compose_report(
    users: Mapping[str, User],
    timesheets: Mapping[str, Timesheet],
    date_range: DateRange,
) -> dict:
    """Build the hours report for a run.

    Rendering is pure: the same input always yields the same HTML.

    Args:
        users: Resolved users, in report order.
        timesheets: Timesheets keyed by user id.  Users without an
            entry here get no row.
        date_range: The days to show as columns.

    Returns:
        A dict with keys:
            - ``subject`` (str): The email subject line.
            - ``html_body`` (str): The rendered HTML report.
            - ``row_count`` (int): Number of user rows in the table.
            - ``rows`` (list[dict]): The rows passed to the template.
    """
    subject = build_subject(date_range)
    day_labels = [day.strftime("%d/%m") for day in date_range]
    rows = _build_rows(users, timesheets, date_range)

    template = _environment().get_template("shame_report.html")
    html_body = template.render(
        subject=subject,
        day_labels=day_labels,
        rows=rows,
    )

    logger.debug("Composed report: %d rows, %d days", len(rows), len(day_labels))

    return {
        "subject": subject,
        "html_body": html_body,
        "row_count": len(rows),
        "rows": rows,
    }
