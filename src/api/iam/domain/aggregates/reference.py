"""Reference data for IAM context: bird avatars and mentoring categories."""

from __future__ import annotations

from dataclasses import dataclass

from iam.domain.value_objects import BirdId, CategoryId


@dataclass(frozen=True)
class Bird:
    """A bird avatar a user picks at registration."""

    id: BirdId
    name: str


@dataclass(frozen=True)
class Category:
    """A mentoring category (e.g. "career") users are interested in."""

    id: CategoryId
    name: str
