"""Domain-Oriented Observability for IAM infrastructure.

Probes for repository and OAuth client operations.
"""

from iam.infrastructure.observability.oauth_client_probe import (
    DefaultOAuthClientProbe,
    OAuthClientProbe,
)
from iam.infrastructure.observability.repository_probe import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)

__all__ = [
    "DefaultOAuthClientProbe",
    "OAuthClientProbe",
    "DefaultUserRepositoryProbe",
    "UserRepositoryProbe",
]
