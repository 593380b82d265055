"""Error taxonomy shared by every bounded context.

Context-specific exceptions in ``<context>.ports.exceptions`` subclass these,
so a calling boundary can translate whole families of failures at once
(e.g. every ``NotFoundError`` to HTTP 404) without importing each context.
"""


class NotFoundError(Exception):
    """Raised when a looked-up entity does not exist.

    Surfaced to the caller as a typed failure and never retried.
    """

    pass


class ConflictError(Exception):
    """Raised when a write conflicts with the current state of an entity.

    Examples are a second reply to an already answered letter or a role
    assignment for a user whose role is already fixed.
    """

    pass
