"""Google OAuth2 strategy - provider adapter and authorization-code engine.

This package provides:
- A generic authorization-code engine (`OAuth2Strategy`) composed with a
  pluggable `ProviderAdapter`
- The Google adapter: fixed endpoints, Google-specific authorize parameters
  and userinfo-to-profile mapping
- Pydantic models for options, tokens and profiles

## Quick Example

```python
from google_oauth_strategy import create_google_strategy

async def verify(params):
    return await users.find_or_create(
        google_id=params.profile.id,
        email=params.profile.emails[0].value,
    )

strategy = create_google_strategy(
    {
        "client_id": "your-client-id",
        "client_secret": "your-secret",
        "callback_url": "https://app.example.com/auth/google/callback",
        "scope": "openid email",
        "prompt": "select_account",
    },
    verify,
)
```
"""

from .contracts import (
    OAuth2Profile,
    ProfileValue,
    ProviderAdapter,
    ProviderError,
    TokenResult,
    VerifyCallback,
    VerifyParams,
)
from .models import (
    GOOGLE_DEFAULT_SCOPES,
    GOOGLE_SCOPE_SEPARATOR,
    GoogleScope,
    GoogleStrategyOptions,
    OAuth2StrategyConfigModel,
    StrategyBaseModel,
    normalize_scope,
)
from .providers.google import (
    GOOGLE_AUTH_URL,
    GOOGLE_STRATEGY_NAME,
    GOOGLE_TOKEN_URL,
    GOOGLE_USERINFO_URL,
    GoogleExtraParams,
    GoogleProfile,
    GoogleProfileName,
    GoogleProviderAdapter,
    GoogleUserInfo,
    create_google_strategy,
)
from .strategy import OAuth2Strategy

__all__ = [
    # Models
    "StrategyBaseModel",
    "OAuth2StrategyConfigModel",
    "GoogleStrategyOptions",
    "GoogleScope",
    "GOOGLE_DEFAULT_SCOPES",
    "GOOGLE_SCOPE_SEPARATOR",
    "normalize_scope",
    # Contracts
    "OAuth2Profile",
    "ProfileValue",
    "ProviderAdapter",
    "ProviderError",
    "TokenResult",
    "VerifyCallback",
    "VerifyParams",
    # Engine
    "OAuth2Strategy",
    # Google
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
