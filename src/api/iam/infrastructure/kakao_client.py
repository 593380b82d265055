"""Kakao implementation of IOAuthProviderClient.

Talks to the Kakao REST API with httpx:

- ``POST {token_url}`` exchanges an authorization code for an access token
- ``GET {profile_url}`` returns the profile of the token's owner, shaped as
  ``{"id": ..., "kakao_account": {"email", "birthyear"},
  "properties": {"nickname"}}``
"""

from __future__ import annotations

from typing import Any

import httpx

from iam.domain.value_objects import OAuthProvider, ProviderIdentity
from iam.infrastructure.observability import (
    DefaultOAuthClientProbe,
    OAuthClientProbe,
)
from iam.ports.exceptions import (
    InvalidAuthorizationCodeError,
    MalformedProfileError,
    ProviderUnavailableError,
)
from iam.ports.oauth import IOAuthProviderClient, OAuthProfile
from infrastructure.settings import KakaoOAuthSettings

_PROVIDER = OAuthProvider.KAKAO.value


class KakaoOAuthClient(IOAuthProviderClient):
    """OAuth client for Kakao login."""

    def __init__(
        self,
        settings: KakaoOAuthSettings,
        http_client: httpx.AsyncClient | None = None,
        probe: OAuthClientProbe | None = None,
    ):
        """Initialize the client.

        Args:
            settings: Kakao application credentials and endpoints
            http_client: Optional shared client; a short-lived one is
                created per call when omitted
            probe: Optional domain probe for observability
        """
        self._settings = settings
        self._http_client = http_client
        self._probe = probe or DefaultOAuthClientProbe()

    async def exchange_code_for_token(self, code: str) -> str:
        """Exchange an authorization code for an access token.

        Raises:
            InvalidAuthorizationCodeError: If Kakao rejects the code
            ProviderUnavailableError: If Kakao cannot be reached or fails
        """
        form = {
            "grant_type": "authorization_code",
            "client_id": self._settings.client_id,
            "redirect_uri": self._settings.redirect_uri,
            "code": code,
        }
        client_secret = self._settings.client_secret.get_secret_value()
        if client_secret:
            form["client_secret"] = client_secret

        payload = await self._request(
            "token_exchange", "POST", self._settings.token_url, data=form
        )

        access_token = payload.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            raise InvalidAuthorizationCodeError(
                "Kakao token response did not contain an access token"
            )

        self._probe.token_exchanged(_PROVIDER)
        return access_token

    async def fetch_profile(self, access_token: str) -> OAuthProfile:
        """Fetch the Kakao profile for an access token.

        Raises:
            InvalidAuthorizationCodeError: If Kakao rejects the token
            ProviderUnavailableError: If Kakao cannot be reached or fails
            MalformedProfileError: If the payload has no user id
        """
        payload = await self._request(
            "profile_fetch",
            "GET",
            self._settings.profile_url,
            headers={"Authorization": f"Bearer {access_token}"},
        )

        profile = parse_kakao_profile(payload)
        self._probe.profile_fetched(_PROVIDER, profile.identity.provider_id)
        return profile

    async def _request(
        self, operation: str, method: str, url: str, **kwargs: Any
    ) -> dict[str, Any]:
        try:
            if self._http_client is not None:
                response = await self._http_client.request(
                    method, url, timeout=self._settings.timeout_seconds, **kwargs
                )
            else:
                async with httpx.AsyncClient(
                    timeout=self._settings.timeout_seconds
                ) as client:
                    response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            self._probe.provider_unavailable(_PROVIDER, operation, str(e))
            raise ProviderUnavailableError(
                f"Kakao {operation} failed: {e}"
            ) from e

        if response.status_code >= 500:
            self._probe.provider_unavailable(
                _PROVIDER, operation, f"HTTP {response.status_code}"
            )
            raise ProviderUnavailableError(
                f"Kakao {operation} answered HTTP {response.status_code}"
            )
        if response.status_code >= 400:
            self._probe.provider_rejected(_PROVIDER, operation, response.status_code)
            raise InvalidAuthorizationCodeError(
                f"Kakao rejected {operation} with HTTP {response.status_code}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedProfileError(
                f"Kakao {operation} returned a non-JSON body"
            ) from e

        if not isinstance(payload, dict):
            raise MalformedProfileError(f"Kakao {operation} returned {type(payload)}")
        return payload


def parse_kakao_profile(payload: dict[str, Any]) -> OAuthProfile:
    """Build an OAuthProfile from a ``/v2/user/me`` payload.

    Only ``id`` is required; email, birth year and nickname depend on the
    consent the user gave and may be missing.

    Raises:
        MalformedProfileError: If ``id`` is missing or the nested sections
            are not objects
    """
    provider_id = payload.get("id")
    if provider_id is None or str(provider_id) == "":
        raise MalformedProfileError("Kakao profile has no user id")

    account = payload.get("kakao_account") or {}
    properties = payload.get("properties") or {}
    if not isinstance(account, dict) or not isinstance(properties, dict):
        raise MalformedProfileError("Kakao profile sections must be objects")

    return OAuthProfile(
        identity=ProviderIdentity(
            provider=OAuthProvider.KAKAO, provider_id=str(provider_id)
        ),
        email=account.get("email"),
        nickname=properties.get("nickname"),
        birth_year=_parse_birth_year(account.get("birthyear")),
    )


def _parse_birth_year(raw: Any) -> int | None:
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise MalformedProfileError(f"Invalid birth year: {raw!r}") from e
