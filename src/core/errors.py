"""
Error taxonomy shared by the store, the API and the client.
"""


class CalendarError(Exception):
    """Base class for calendar failures that callers are expected to handle."""


class ValidationError(CalendarError):
    """A new event is missing a required field or carries a malformed value."""


class NotFoundError(CalendarError):
    """The referenced event does not exist."""


class StoreUnavailableError(CalendarError):
    """The persistence layer could not be reached or failed mid-operation."""
