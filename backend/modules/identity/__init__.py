"""
Identity provider module.

Wraps the external authentication backend (Supabase Auth): password
accounts, one-time codes, OAuth and password reset.

Public API:
- IIdentityProvider: Interface for provider operations
- SupabaseIdentityProvider: Supabase Auth implementation
- ProviderIdentity / ProviderSession / SocialMetadata: Provider-side models
- OAuthProvider: Enabled social login providers
- ProviderRejectedError / ProviderUnavailableError
"""

from .interfaces import IIdentityProvider
from .client import SupabaseIdentityProvider
from .models import OAuthProvider, ProviderIdentity, ProviderSession, SocialMetadata
from .exceptions import ProviderRejectedError, ProviderUnavailableError

__all__ = [
    # Interface
    "IIdentityProvider",
    "SupabaseIdentityProvider",
    # Models
    "OAuthProvider",
    "ProviderIdentity",
    "ProviderSession",
    "SocialMetadata",
    # Exceptions
    "ProviderRejectedError",
    "ProviderUnavailableError",
]
