"""Timesheet sub-package for the harvest-blame project.

Exports the fetcher functions so other modules can do::

    from harvest_blame.timesheets import fetch_users, fetch_timesheets
"""

from harvest_blame.timesheets.fetcher import (
    build_daily_hours,
    fetch_timesheets,
    fetch_users,
)

__all__ = ["build_daily_hours", "fetch_timesheets", "fetch_users"]
