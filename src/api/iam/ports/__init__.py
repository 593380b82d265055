"""Ports (interfaces) for the IAM bounded context."""

from iam.ports.oauth import IOAuthProviderClient, OAuthProfile
from iam.ports.repositories import (
    IBirdRepository,
    ICategoryRepository,
    IUserRepository,
)

__all__ = [
    "IBirdRepository",
    "ICategoryRepository",
    "IOAuthProviderClient",
    "IUserRepository",
    "OAuthProfile",
]
