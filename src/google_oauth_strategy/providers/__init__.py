"""OAuth provider implementations.

This module contains concrete implementations of provider adapters.
"""

from .google import GoogleProviderAdapter, create_google_strategy

__all__ = [
    "GoogleProviderAdapter",
    "create_google_strategy",
]
