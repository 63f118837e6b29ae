"""
Global pytest configuration and fixtures.
"""

import pytest

from google_oauth_strategy.models import GoogleStrategyOptions

JANE_USERINFO = {
    "sub": "123",
    "name": "Jane Doe",
    "given_name": "Jane",
    "family_name": "Doe",
    "email": "jane@x.com",
    "picture": "http://p",
}


@pytest.fixture
def google_options() -> GoogleStrategyOptions:
    return GoogleStrategyOptions(
        client_id="cid",
        client_secret="secret",
        callback_url="https://app.example.com/auth/google/callback",
    )


@pytest.fixture
def jane_userinfo() -> dict[str, str]:
    return dict(JANE_USERINFO)
