"""Shared Kernel module.

This module contains foundational components that are explicitly shared across
multiple bounded contexts: the error taxonomy, pagination results and the
observation context used by every domain probe.
"""

from shared_kernel.exceptions import ConflictError, NotFoundError
from shared_kernel.observability_context import ObservationContext
from shared_kernel.pagination import Page

__all__ = [
    "ConflictError",
    "NotFoundError",
    "ObservationContext",
    "Page",
]
