"""Harvest sub-package -- time-tracking service clients.

Public API
----------
- :class:`BaseTimeClient` -- the interface the fetcher depends on
- :class:`HarvestClient` -- ``requests``-based Harvest API client
"""

from harvest_blame.harvest.base import BaseTimeClient
from harvest_blame.harvest.client import HarvestClient

__all__ = [
    "BaseTimeClient",
    "HarvestClient",
]
