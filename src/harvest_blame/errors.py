"""Fatal error types for the harvest-blame run.

Per-user fetch failures and mail failures are logged where they happen
and never raised.  Only conditions that make the rest of the run
meaningless derive from :class:`BlameError`.
"""

CONFIG_HINT = "Please refer to .env.example for configuration options."


class BlameError(Exception):
    """Base class for errors that terminate a run."""


class ConfigError(BlameError):
    """A required configuration key is missing or has an invalid value."""

    def __init__(self, key: str, message: str) -> None:
        self.key = key
        super().__init__(f"{message}\n{CONFIG_HINT}")


class NoUsersResolvedError(BlameError):
    """None of the configured users could be fetched."""

    def __init__(self) -> None:
        super().__init__(
            "Unable to fetch any user details, or no users are configured."
        )
