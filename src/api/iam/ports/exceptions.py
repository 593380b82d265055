"""Domain exceptions for the IAM bounded context.

These exceptions represent identity, registration and authentication
failures. They propagate to the calling boundary, which translates them
into user-visible responses.
"""

from shared_kernel.exceptions import ConflictError, NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when no user exists for the given identifier."""

    pass


class RoleNotFoundError(NotFoundError):
    """Raised when a role name does not match any known role."""

    pass


class BirdNotFoundError(NotFoundError):
    """Raised when a bird avatar cannot be found by name."""

    pass


class CategoryNotFoundError(NotFoundError):
    """Raised when a mentoring category cannot be found by name."""

    pass


class RoleAlreadyAssignedError(ConflictError):
    """Raised when a role is assigned to a user who already has one.

    A user's role is fixed at registration and never changes afterwards.
    """

    pass


class DuplicateNicknameError(ConflictError):
    """Raised when a nickname is already used by another user."""

    pass


class DuplicateProviderIdentityError(ConflictError):
    """Raised when two sign-ups race for the same provider identity.

    The unique (provider, provider_id) constraint rejected the second insert.
    """

    pass


class QuotaExceededError(Exception):
    """Raised when a user with no remaining quota tries to send a letter.

    This is a precondition violation; the quota is never driven below zero.
    """

    pass


class InvalidMentorError(Exception):
    """Raised when a letter is routed to a user who is not a mentor."""

    pass


class InvalidMenteeError(Exception):
    """Raised when a user who is not a mentee tries to submit a letter."""

    pass


class AuthError(Exception):
    """Base class for OAuth provider failures."""

    pass


class InvalidAuthorizationCodeError(AuthError):
    """Raised when the provider rejects the authorization code or token.

    Retrying with the same code will not succeed.
    """

    pass


class ProviderUnavailableError(AuthError):
    """Raised when the provider cannot be reached or answers with 5xx.

    The caller may retry; nothing is retried internally.
    """

    pass


class MalformedProfileError(AuthError):
    """Raised when the provider profile lacks the fields we depend on."""

    pass
