"""Unit tests for IAM value objects."""

import pytest

from iam.domain.value_objects import OAuthProvider, ProviderIdentity, UserRole
from iam.ports.exceptions import RoleNotFoundError


class TestUserRole:
    @pytest.mark.parametrize("name", ["MENTEE", "mentee", "  Mentee "])
    def test_from_name_is_case_insensitive(self, name):
        assert UserRole.from_name(name) == UserRole.MENTEE

    def test_unknown_role(self):
        with pytest.raises(RoleNotFoundError):
            UserRole.from_name("ADMIN")


class TestProviderIdentity:
    def test_str(self):
        identity = ProviderIdentity(provider=OAuthProvider.KAKAO, provider_id="42")
        assert str(identity) == "kakao:42"

    def test_value_equality(self):
        assert ProviderIdentity(OAuthProvider.KAKAO, "42") == ProviderIdentity(
            OAuthProvider.KAKAO, "42"
        )
