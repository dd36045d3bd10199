"""
Exceptions raised by the service layer.

Services never build HTTP responses themselves; endpoints catch these
and translate them into ``HTTPException`` with the matching status
code.
"""


class ServiceError(Exception):
    """Base class for expected failures of a service operation."""

    status_code = 500


class EventValidationError(ServiceError):
    """Required input is missing or malformed."""

    status_code = 400


class EventNotFoundError(ServiceError):
    """The referenced event does not exist (or the id is malformed)."""

    status_code = 404


class AlreadyJoinedError(ServiceError):
    """The participant already has a join record for the event."""

    # The front end checks for 400 on a repeated join, so 409 is not used.
    status_code = 400


class StorageError(ServiceError):
    """The database driver failed."""

    status_code = 500
