"""pypyr step: resolve the configured users.

Creates a :class:`HarvestClient` from the configuration unless the
context already carries a ``client`` (tests inject a fake one), then
looks up every configured user.

Usage in a pipeline YAML::

    steps:
      - name: harvest_blame.steps.fetch_users

Context keys consumed:
    config (BlameConfig): The validated configuration.
    client (BaseTimeClient, optional): Client to use.

Context keys produced:
    client (BaseTimeClient): The client, for the following steps.
    users (dict[str, User]): Resolved users in configured order.
"""

import logging

from harvest_blame.harvest.client import HarvestClient
from harvest_blame.timesheets.fetcher import fetch_users

logger = logging.getLogger(__name__)


def run_step(context: dict) -> None:
    """pypyr entry-point: fetch user details into ``context['users']``.

    Args:
        context: The mutable pypyr context dictionary.
    """
    config = context["config"]

    client = context.get("client")
    if client is None:
        client = HarvestClient.from_settings(config.harvest)
        context["client"] = client

    users = fetch_users(client, config.user_ids)
    context["users"] = users

    logger.info("Resolved %d of %d users.", len(users), len(config.user_ids))
