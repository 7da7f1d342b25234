"""
Supabase client factory.

Provides the service-role client (profile table access and admin auth calls)
and short-lived anon-key auth clients for user-facing auth flows. The
service-role client is created once and handed to services by the
dependency container.
"""

from typing import Callable, Optional
import httpx
from supabase import create_client, Client, SupabaseAuthClient

from .config import get_settings

AuthClientFactory = Callable[[], SupabaseAuthClient]

# Module-level client cache
_service_client: Optional[Client] = None
_auth_http_client: Optional[httpx.Client] = None


def get_supabase_client() -> Client:
    """
    Get Supabase client with service role (bypasses RLS).

    Use this for backend operations that need full database access,
    such as creating profile rows and admin password updates.

    Returns:
        Supabase client configured with service role key
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def get_supabase_auth_client_factory() -> AuthClientFactory:
    """
    Get a factory for Supabase Auth clients (anon key).

    A Supabase Auth client remembers the last session it opened and the
    last PKCE verifier it generated, so every end-user auth call gets a
    fresh client from this factory. Only the HTTP connection pool is
    shared. Sessions are never persisted or refreshed.

    Returns:
        Callable that builds a new auth client per call

    Raises:
        RuntimeError: If SUPABASE_URL or SUPABASE_ANON_KEY is unset
    """
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise RuntimeError(
            "Supabase configuration missing. "
            "Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables."
        )

    auth_url = f"{settings.supabase_url.rstrip('/')}/auth/v1"
    headers = {
        "apiKey": settings.supabase_anon_key,
        "Authorization": f"Bearer {settings.supabase_anon_key}",
    }
    http_client = _get_auth_http_client()

    def new_auth_client() -> SupabaseAuthClient:
        return SupabaseAuthClient(
            url=auth_url,
            headers=dict(headers),
            auto_refresh_token=False,
            persist_session=False,
            http_client=http_client,
        )

    return new_auth_client


def _get_auth_http_client() -> httpx.Client:
    global _auth_http_client

    if _auth_http_client is None:
        _auth_http_client = httpx.Client(follow_redirects=True)

    return _auth_http_client


def reset_client_cache() -> None:
    """
    Reset the cached database clients.

    Useful for testing or when configuration changes.
    """
    global _service_client, _auth_http_client
    if _auth_http_client is not None:
        _auth_http_client.close()
    _service_client = None
    _auth_http_client = None
