"""OAuth2 authorization-code engine.

`OAuth2Strategy` drives the authorization-code flow for a pluggable
`ProviderAdapter`:

1. Without a `code` in the request it redirects the user-agent to the
   provider's authorize endpoint, merging its own parameters (`client_id`,
   `redirect_uri`, `response_type`, `state`) with the adapter's
   `authorization_params()`.
2. On the callback it exchanges the code at the token endpoint, asks the
   adapter for the user's profile and hands both to the application's
   verify callback.

The strategy does NOT handle:
- State generation or validation (the caller supplies and checks `state`)
- Session or token persistence
- Token refresh

Example usage:
    from google_oauth_strategy import create_google_strategy

    strategy = create_google_strategy(options, verify=find_or_create_user)

    async def login(request: Request) -> Response:
        return await strategy.authenticate(request, state=new_state_for(request))

    async def callback(request: Request) -> Response:
        user = await strategy.authenticate(request)
        ...
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from typing import Any, Generic
from urllib.parse import urlencode

from mcp.shared._httpx_utils import create_mcp_http_client
from pydantic import ValidationError
from starlette.requests import Request
from starlette.responses import RedirectResponse

from .contracts import (
    ProviderAdapter,
    ProviderError,
    TokenResult,
    UserT,
    VerifyCallback,
    VerifyParams,
)
from .models import OAuth2StrategyConfigModel

logger = logging.getLogger(__name__)


class OAuth2Strategy(Generic[UserT]):
    """Authorization-code flow engine composed with a provider adapter.

    Attributes:
        name: Strategy name, defaults to the adapter's provider name.
        config: Client credentials, callback URL and provider endpoints.
        adapter: Provider-specific parameters and profile mapping.
    """

    def __init__(
        self,
        config: OAuth2StrategyConfigModel | Mapping[str, Any],
        adapter: ProviderAdapter,
        verify: VerifyCallback[UserT],
        *,
        name: str | None = None,
    ):
        if not isinstance(config, OAuth2StrategyConfigModel):
            config = OAuth2StrategyConfigModel.model_validate(config)
        self.config = config
        self.adapter = adapter
        self.name = name or adapter.provider_name
        self._verify = verify

    def authorization_url(self, state: str) -> str:
        """Build the provider authorize URL for a fresh redirect."""
        params = {
            "client_id": self.config.client_id,
            "redirect_uri": self.config.callback_url,
            "response_type": "code",
            "state": state,
        }
        params.update(self.adapter.authorization_params())
        return f"{self.config.authorization_url}?{urlencode(params)}"

    async def exchange_code(self, code: str) -> TokenResult:
        """Exchange an authorization code for provider tokens."""
        payload = {
            "grant_type": "authorization_code",
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "code": code,
            "redirect_uri": self.config.callback_url,
        }

        async with create_mcp_http_client() as client:
            resp = await client.post(
                self.config.token_url,
                data=payload,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )

        if resp.status_code != 200:
            self._log_token_failure("Token endpoint returned non-200", resp.status_code)
            raise ProviderError(
                "invalid_grant", resp.text or "Unknown error", status_code=resp.status_code
            )

        try:
            data = resp.json()
        except ValueError as exc:
            self._log_token_failure("Token endpoint returned invalid JSON", resp.status_code)
            raise ProviderError(
                "invalid_grant",
                "Invalid token response payload",
                status_code=resp.status_code,
            ) from exc

        if not isinstance(data, dict):
            self._log_token_failure("Token endpoint returned a non-object body", resp.status_code)
            raise ProviderError(
                "invalid_grant",
                "Token response was not a JSON object",
                status_code=resp.status_code,
            )

        if data.get("error") is not None:
            self._log_token_failure("Token endpoint returned an error", resp.status_code)
            raise ProviderError(
                str(data["error"]),
                data.get("error_description") or "Failed to exchange code",
                status_code=resp.status_code,
            )

        extra_params = dict(data)
        access_token = extra_params.pop("access_token", None)
        refresh_token = extra_params.pop("refresh_token", None)
        if not access_token:
            self._log_token_failure("Token response had no access_token", resp.status_code)
            raise ProviderError("invalid_grant", "No access_token in response", status_code=400)

        try:
            tokens = TokenResult(
                access_token=access_token,
                refresh_token=refresh_token,
                extra_params=extra_params,
            )
        except ValidationError as exc:
            self._log_token_failure("Token response had invalid fields", resp.status_code)
            raise ProviderError(
                "invalid_grant",
                "Invalid token response payload",
                status_code=resp.status_code,
            ) from exc

        logger.debug("Token exchange succeeded", extra={"provider": self.name})
        return tokens

    async def authenticate(self, request: Request, *, state: str | None = None) -> Any:
        """Run the leg of the flow that matches the incoming request.

        Returns a redirect to the provider when the request carries no
        authorization code, otherwise the verify callback's result.

        Raises:
            ProviderError: The provider reported an error or a call to it failed.
            ValueError: A redirect is needed but no `state` was supplied.
        """
        query = request.query_params

        error = query.get("error")
        if error:
            logger.info(
                "Provider returned an error on callback",
                extra={"provider": self.name, "error": error},
            )
            raise ProviderError(error, query.get("error_description"), status_code=401)

        code = query.get("code")
        if not code:
            if state is None:
                raise ValueError("state is required to redirect to the provider")
            return RedirectResponse(self.authorization_url(state), status_code=302)

        tokens = await self.exchange_code(code)
        profile = await self.adapter.user_profile(tokens.access_token)
        params = VerifyParams(
            request=request,
            tokens=tokens,
            profile=profile,
            state=query.get("state"),
        )

        result = self._verify(params)
        if inspect.isawaitable(result):
            result = await result
        logger.info(
            "Authenticated user via %s",
            self.name,
            extra={"provider": self.name, "user_id": profile.id},
        )
        return result

    def _log_token_failure(self, message: str, status_code: int) -> None:
        logger.warning(
            message,
            extra={
                "provider": self.name,
                "endpoint": "token",
                "status_code": status_code,
            },
        )
