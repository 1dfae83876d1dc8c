"""Exception hierarchy for rebound.

Every failure the session controller knows how to degrade gracefully
derives from ReboundError, so callers can separate expected chat failures
from programming errors.
"""


class ReboundError(Exception):
    """Base class for all rebound errors."""


class ValidationError(ReboundError):
    """A submission was rejected before reaching the log (e.g. blank text)."""


class ConfigurationError(ReboundError):
    """Required configuration is missing or invalid."""


class ProviderError(ReboundError):
    """The generation provider could not produce a reply.

    Covers network failures, non-success HTTP status codes and malformed
    or empty responses.
    """

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.status = status


class StaleResponseError(ReboundError):
    """A reply arrived for a log generation that has since been replaced."""

    def __init__(self, issued: int, current: int):
        super().__init__(
            f"Reply issued for generation {issued} discarded (current generation is {current})"
        )
        self.issued = issued
        self.current = current


class HistoryStoreError(ReboundError):
    """The history store failed to read or write an entry."""


class HistoryNotFoundError(ReboundError):
    """No history entry exists with the requested id."""

    def __init__(self, entry_id: str):
        super().__init__(f"History entry not found: {entry_id}")
        self.entry_id = entry_id
