"""Contracts and shared types for the OAuth2 strategy stack."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeVar, Union, runtime_checkable

from pydantic import ConfigDict

from .models import StrategyBaseModel

UserT = TypeVar("UserT")


class ProviderError(Exception):
    """Standardized provider error with HTTP-style status information."""

    def __init__(self, error: str, description: str | None = None, status_code: int = 400):
        super().__init__(description or error)
        self.error = error
        self.description = description
        self.status_code = status_code


class TokenResult(StrategyBaseModel):
    """Result of exchanging an authorization code at the token endpoint.

    `extra_params` holds everything in the token response besides the access
    and refresh tokens (token type, expiry, granted scope, ID token and any
    provider-specific fields).
    """

    access_token: str
    refresh_token: str | None = None
    extra_params: dict[str, Any] = {}


class ProfileValue(StrategyBaseModel):
    value: str | None = None


class OAuth2Profile(StrategyBaseModel):
    """Normalized user profile returned by provider adapters."""

    provider: str
    id: str | None = None
    display_name: str | None = None
    emails: list[ProfileValue] | None = None
    photos: list[ProfileValue] | None = None
    raw_profile: dict[str, Any] | None = None


class VerifyParams(StrategyBaseModel):
    """Arguments handed to the application's verify callback."""

    # The request is whatever the host framework passes in.
    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    request: Any
    tokens: TokenResult
    profile: OAuth2Profile
    state: str | None = None


VerifyCallback = Callable[[VerifyParams], Union[UserT, Awaitable[UserT]]]


@runtime_checkable
class ProviderAdapter(Protocol):
    """Interface all provider adapters must implement.

    Adapters supply the provider-specific parts of the authorization-code
    flow. Redirects, code exchange and callback handling belong to the
    engine (`OAuth2Strategy`).
    """

    provider_name: str

    def authorization_params(self) -> dict[str, str]:
        """Return provider-specific query parameters for the authorize redirect."""

    async def user_profile(self, access_token: str) -> OAuth2Profile:
        """Fetch and normalize the profile associated with an access token."""


__all__ = [
    "OAuth2Profile",
    "ProfileValue",
    "ProviderAdapter",
    "ProviderError",
    "TokenResult",
    "VerifyCallback",
    "VerifyParams",
]
