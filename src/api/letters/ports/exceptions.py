"""Domain exceptions for the letters bounded context."""

from shared_kernel.exceptions import ConflictError, NotFoundError


class LetterStatusNotFoundError(NotFoundError):
    """Raised when a letter thread does not exist or is not visible.

    Users who are neither the mentee nor the mentor of a thread get this
    error too, so that the existence of other users' letters is not leaked.
    """

    pass


class LetterAlreadyRepliedError(ConflictError):
    """Raised when a reply is attached to a thread that already has one."""

    pass
