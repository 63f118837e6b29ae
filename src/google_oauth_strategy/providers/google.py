"""Google OAuth ProviderAdapter implementation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx
from mcp.shared._httpx_utils import create_mcp_http_client
from pydantic import ConfigDict, ValidationError

from ..contracts import (
    OAuth2Profile,
    ProfileValue,
    ProviderAdapter,
    ProviderError,
    TokenResult,
    VerifyCallback,
)
from ..models import (
    GOOGLE_SCOPE_SEPARATOR,
    GoogleStrategyOptions,
    OAuth2StrategyConfigModel,
    StrategyBaseModel,
)
from ..strategy import OAuth2Strategy

logger = logging.getLogger(__name__)

GOOGLE_STRATEGY_NAME = "google"
GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v3/userinfo"


class GoogleUserInfo(StrategyBaseModel):
    """OpenID Connect userinfo response from Google."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    sub: str
    name: str | None = None
    given_name: str | None = None
    family_name: str | None = None
    picture: str | None = None
    locale: str | None = None
    email: str | None = None
    email_verified: bool | None = None
    hd: str | None = None


class GoogleExtraParams(StrategyBaseModel):
    """Typed view over the extra parameters of a Google token response."""

    model_config = ConfigDict(extra="allow", frozen=True)

    expires_in: int | None = None
    token_type: str | None = None
    scope: str | None = None
    id_token: str | None = None


class GoogleProfileName(StrategyBaseModel):
    family_name: str | None = None
    given_name: str | None = None


class GoogleProfile(OAuth2Profile):
    """Normalized Google profile; `raw_profile` keeps the userinfo payload verbatim."""

    id: str
    name: GoogleProfileName
    emails: list[ProfileValue]
    photos: list[ProfileValue]
    raw_profile: dict[str, Any]


class GoogleProviderAdapter(ProviderAdapter):
    """Google OAuth ProviderAdapter that uses real HTTP calls."""

    provider_name = GOOGLE_STRATEGY_NAME
    authorization_url = GOOGLE_AUTH_URL
    token_url = GOOGLE_TOKEN_URL
    user_info_url = GOOGLE_USERINFO_URL

    def __init__(self, options: GoogleStrategyOptions | Mapping[str, Any]):
        if not isinstance(options, GoogleStrategyOptions):
            options = GoogleStrategyOptions.model_validate(options)
        self.options = options

    def authorization_params(self) -> dict[str, str]:
        options = self.options
        params = {
            "scope": GOOGLE_SCOPE_SEPARATOR.join(options.scope),
            "access_type": options.access_type,
            "include_granted_scopes": "true" if options.include_granted_scopes else "false",
        }
        if options.prompt:
            params["prompt"] = options.prompt
        if options.hd:
            params["hd"] = options.hd
        if options.login_hint:
            params["login_hint"] = options.login_hint
        return params

    async def user_profile(self, access_token: str) -> GoogleProfile:
        raw = await self._fetch_user_info(access_token)
        try:
            info = GoogleUserInfo.model_validate(raw)
        except ValidationError as exc:
            logger.warning(
                "Google userinfo payload failed validation",
                extra={"provider": self.provider_name, "endpoint": "userinfo"},
            )
            raise ProviderError(
                "invalid_token",
                "Google userinfo payload was invalid",
                status_code=400,
            ) from exc

        return GoogleProfile(
            provider=self.provider_name,
            id=info.sub,
            display_name=info.name,
            name=GoogleProfileName(
                family_name=info.family_name,
                given_name=info.given_name,
            ),
            emails=[ProfileValue(value=info.email)],
            photos=[ProfileValue(value=info.picture)],
            raw_profile=raw,
        )

    # ── helpers ──────────────────────────────────────────────────────────────
    async def _fetch_user_info(self, token: str) -> dict[str, Any]:
        async with create_mcp_http_client() as client:
            try:
                resp = await client.get(
                    self.user_info_url,
                    headers={"Authorization": f"Bearer {token}"},
                )
            except httpx.RequestError as exc:
                logger.warning(
                    "Google userinfo request failed",
                    extra={
                        "provider": self.provider_name,
                        "endpoint": "userinfo",
                        "error_type": exc.__class__.__name__,
                    },
                )
                raise

        if resp.status_code != 200:
            logger.warning(
                "Google userinfo returned non-200",
                extra={
                    "provider": self.provider_name,
                    "endpoint": "userinfo",
                    "status_code": resp.status_code,
                },
            )
            raise ProviderError(
                "invalid_token",
                f"Google UserInfo failed: {resp.text or 'Unknown error'}",
                status_code=resp.status_code,
            )

        try:
            payload = resp.json()
        except ValueError as exc:
            logger.warning(
                "Google userinfo returned invalid JSON",
                extra={
                    "provider": self.provider_name,
                    "endpoint": "userinfo",
                    "status_code": resp.status_code,
                },
            )
            raise ProviderError(
                "invalid_token",
                "Google userinfo response was invalid",
                status_code=resp.status_code,
            ) from exc

        if not isinstance(payload, dict):
            logger.warning(
                "Google userinfo returned a non-object body",
                extra={
                    "provider": self.provider_name,
                    "endpoint": "userinfo",
                    "status_code": resp.status_code,
                },
            )
            raise ProviderError(
                "invalid_token",
                "Google userinfo response was not a JSON object",
                status_code=resp.status_code,
            )
        return payload

    @staticmethod
    def extra_params(tokens: TokenResult) -> GoogleExtraParams:
        """Typed view over the extra parameters of a Google token response."""
        return GoogleExtraParams.model_validate(tokens.extra_params)


def create_google_strategy(
    options: GoogleStrategyOptions | Mapping[str, Any],
    verify: VerifyCallback[Any],
) -> OAuth2Strategy[Any]:
    """Build an `OAuth2Strategy` wired to Google's endpoints.

    Example:
        >>> strategy = create_google_strategy(
        ...     {
        ...         "client_id": "cid",
        ...         "client_secret": "secret",
        ...         "callback_url": "https://app.example.com/auth/google/callback",
        ...         "access_type": "offline",
        ...     },
        ...     verify=lambda params: params.profile.id,
        ... )
    """
    if not isinstance(options, GoogleStrategyOptions):
        options = GoogleStrategyOptions.model_validate(options)

    adapter = GoogleProviderAdapter(options)
    config = OAuth2StrategyConfigModel(
        client_id=options.client_id,
        client_secret=options.client_secret,
        callback_url=options.callback_url,
        authorization_url=adapter.authorization_url,
        token_url=adapter.token_url,
    )
    return OAuth2Strategy(config, adapter, verify, name=GOOGLE_STRATEGY_NAME)


__all__ = [
    "GOOGLE_AUTH_URL",
    "GOOGLE_STRATEGY_NAME",
    "GOOGLE_TOKEN_URL",
    "GOOGLE_USERINFO_URL",
    "GoogleExtraParams",
    "GoogleProfile",
    "GoogleProfileName",
    "GoogleProviderAdapter",
    "GoogleUserInfo",
    "create_google_strategy",
]
