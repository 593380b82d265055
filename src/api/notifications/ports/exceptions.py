"""Domain exceptions for the notifications bounded context."""

from shared_kernel.exceptions import NotFoundError


class NotificationNotFoundError(NotFoundError):
    """Raised when a notification does not exist."""

    pass
