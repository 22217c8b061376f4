"""pypyr step: load and validate the configuration.

Reads the environment (the CLI has already loaded ``.env``), validates
it into a :class:`~harvest_blame.config.BlameConfig` and stores it in
the context.  Invalid configuration raises ``ConfigError``, which stops
the pipeline before any remote call is made.

Usage in a pipeline YAML::

    steps:
      - name: harvest_blame.steps.load_config

Context keys produced:
    config (BlameConfig): The validated configuration.
"""

import logging

from harvest_blame.config import load_config

logger = logging.getLogger(__name__)


def run_step(context: dict) -> None:
    """pypyr entry-point: validate configuration into ``context['config']``.

    Args:
        context: The mutable pypyr context dictionary.
    """
    config = load_config()
    context["config"] = config

    logger.info(
        "Configuration loaded for %s to %s",
        config.date_range.start.isoformat(),
        config.date_range.end.isoformat(),
    )
