"""pypyr step: close the time-tracking client.

Runs as the last step of the ``blame`` pipeline and again from its
``on_failure`` group, so the HTTP session is released whether or not
the run got as far as sending.  Closing twice is harmless.

Usage in a pipeline YAML::

    steps:
      - name: harvest_blame.steps.close_client
    on_failure:
      - name: harvest_blame.steps.close_client

Context keys consumed:
    client (BaseTimeClient, optional): The client to close.
"""

import logging

logger = logging.getLogger(__name__)


def run_step(context: dict) -> None:
    """pypyr entry-point: close ``context['client']`` if one was created.

    Args:
        context: The mutable pypyr context dictionary.
    """
    client = context.get("client")
    if client is None:
        return

    client.close()
    logger.debug("Time-tracking client closed.")
