"""Reporting sub-package for the harvest-blame project.

Exports the main public functions:

- ``compose_report`` -- build the HTML hours table from timesheets.
- ``dispatch_report`` -- resolve recipients and send the report.
- ``send_email`` -- deliver an HTML email via SMTP.

Usage::

    from harvest_blame.reporting import compose_report, dispatch_report

    report = compose_report(users, timesheets, config.date_range)
    dispatch_report(report, config.email, users)
"""

from harvest_blame.reporting.composer import compose_report
from harvest_blame.reporting.dispatcher import dispatch_report
from harvest_blame.reporting.sender import send_email

__all__ = ["compose_report", "dispatch_report", "send_email"]
