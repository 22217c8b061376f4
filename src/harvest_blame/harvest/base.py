"""Base client abstract class for time-tracking services."""

from abc import ABC, abstractmethod

from harvest_blame.models import ApiResult, DateRange, RawEntry, User


class BaseTimeClient(ABC):
    """Abstract interface to a time-tracking service.

    The timesheet fetcher only ever talks to this interface, so tests
    (or another service) can provide their own implementation.  Both
    methods report failure through :attr:`ApiResult.success` instead
    of raising.
    """

    # ------------------------------------------------------------------
    # Abstract interface
    # ------------------------------------------------------------------

    @abstractmethod
    def get_user(self, user_id: str) -> ApiResult[User]:
        """Fetch the details of one user.

        Args:
            user_id: The service's identifier for the user.

        Returns:
            A result whose ``data`` is a :class:`User` on success.
        """
        ...

    @abstractmethod
    def get_user_entries(
        self,
        user_id: str,
        date_range: DateRange,
    ) -> ApiResult[list[RawEntry]]:
        """Fetch every time entry a user logged within *date_range*.

        Args:
            user_id: The service's identifier for the user.
            date_range: Inclusive window of days to query.

        Returns:
            A result whose ``data`` is a list of :class:`RawEntry`.
        """
        ...

    # ------------------------------------------------------------------
    # Resource handling
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Release any held resources.  No-op by default."""

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
