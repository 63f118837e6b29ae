"""Pydantic models for strategy and provider configuration.

## Security-relevant configuration fields

- `callback_url`: the redirect URI registered with the provider.
- `scope`: what permissions are requested from the upstream IdP.
- `hd` / `login_hint`: forwarded to the provider as-is, without validation.

Example:
    >>> from google_oauth_strategy.models import GoogleStrategyOptions
    >>> options = GoogleStrategyOptions(
    ...     client_id="cid",
    ...     client_secret="secret",
    ...     callback_url="https://app.example.com/auth/google/callback",
    ...     scope="openid email",
    ... )
    >>> options.scope
    ['openid', 'email']
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator

# @see https://developers.google.com/identity/protocols/oauth2/scopes#oauth2
GoogleScope = Literal["openid", "email", "profile"]

GOOGLE_DEFAULT_SCOPES: list[GoogleScope] = ["openid", "profile", "email"]
GOOGLE_SCOPE_SEPARATOR = " "


def normalize_scope(scope: str | list[str] | tuple[str, ...] | None) -> list[str]:
    """Return the scope list for a string, sequence or missing value.

    A missing or empty string falls back to the default scopes, a string is
    split on the scope separator, and a sequence is kept as given.
    """
    if scope is None or scope == "":
        return list(GOOGLE_DEFAULT_SCOPES)
    if isinstance(scope, str):
        return scope.split(GOOGLE_SCOPE_SEPARATOR)
    return list(scope)


class StrategyBaseModel(BaseModel):
    """Base model for all configuration and profile models.

    - extra="forbid": Rejects any fields not defined in the model
    - frozen=True: Makes instances immutable so they can be shared
      between concurrent authentication attempts
    """

    model_config = ConfigDict(extra="forbid", frozen=True)


class OAuth2StrategyConfigModel(StrategyBaseModel):
    """Endpoint and client configuration consumed by the OAuth2 engine."""

    client_id: str
    client_secret: str
    callback_url: str
    authorization_url: str
    token_url: str


class GoogleStrategyOptions(StrategyBaseModel):
    """Google OAuth strategy options.

    Only the client credentials and callback URL are required. `scope` may be
    given as a list or a space-delimited string and is always stored as a list.
    """

    client_id: str
    client_secret: str
    callback_url: str
    scope: list[str] = list(GOOGLE_DEFAULT_SCOPES)
    access_type: Literal["online", "offline"] = "online"
    include_granted_scopes: bool = False
    prompt: Literal["none", "consent", "select_account"] | None = None
    hd: str | None = None
    login_hint: str | None = None

    @field_validator("scope", mode="before")
    @classmethod
    def _normalize_scope(cls, value: Any) -> Any:
        if value is None or isinstance(value, (str, list, tuple)):
            return normalize_scope(value)
        return value
