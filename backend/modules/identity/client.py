"""
Supabase Auth implementation of the identity provider.

Thin wrapper: one Supabase Auth call per method, with the SDK's error
shapes normalized into ProviderRejectedError / ProviderUnavailableError
and its user objects mapped onto ProviderIdentity.
"""

import logging
from typing import Any, Callable, Optional, TypeVar

import httpx
from supabase import AuthError, AuthRetryableError, Client
from supabase_auth.helpers import generate_pkce_challenge, generate_pkce_verifier

from shared.database import AuthClientFactory

from .interfaces import IIdentityProvider
from .models import OAuthProvider, OAuthStart, ProviderIdentity, ProviderSession
from .exceptions import ProviderRejectedError, ProviderUnavailableError

logger = logging.getLogger(__name__)

R = TypeVar("R")


class SupabaseIdentityProvider(IIdentityProvider):
    """
    Identity provider backed by Supabase Auth.

    Two collaborators are injected:
    - auth_client_factory: builds a fresh anon-key auth client for each
      end-user call, so no session or PKCE verifier outlives its request
    - admin_client: service-role client for admin calls (password updates)

    Sessions returned by Supabase are read from each response and the
    client that held them is dropped.
    """

    def __init__(
        self,
        auth_client_factory: AuthClientFactory,
        admin_client: Client,
        redirect_base_url: str,
    ):
        self._new_auth_client = auth_client_factory
        self._admin = admin_client.auth.admin
        self._redirect_base = redirect_base_url.rstrip("/")

    # -------------------------------------------------------------------------
    # Password accounts
    # -------------------------------------------------------------------------

    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: Optional[dict[str, Any]] = None,
    ) -> ProviderIdentity:
        response = self._call(
            "sign up",
            lambda: self._new_auth_client().sign_up({
                "email": email,
                "password": password,
                "options": {
                    "data": metadata or {},
                    "email_redirect_to": self._redirect("/auth/verify"),
                },
            }),
        )
        if response.user is None:
            raise ProviderUnavailableError("Identity provider returned no user for sign up")
        return self._map_identity(response.user)

    async def sign_in_with_password(self, email: str, password: str) -> ProviderSession:
        response = self._call(
            "sign in",
            lambda: self._new_auth_client().sign_in_with_password(
                {"email": email, "password": password}
            ),
        )
        return self._map_session(response, "sign in")

    async def resend_signup_verification(self, email: str) -> None:
        self._call(
            "resend verification",
            lambda: self._new_auth_client().resend({
                "type": "signup",
                "email": email,
                "options": {"email_redirect_to": self._redirect("/auth/verify")},
            }),
        )

    async def send_password_reset(self, email: str) -> None:
        self._call(
            "send password reset",
            lambda: self._new_auth_client().reset_password_for_email(
                email,
                {"redirect_to": self._redirect("/auth/reset-password")},
            ),
        )

    async def update_password(self, user_id: str, new_password: str) -> ProviderIdentity:
        response = self._call(
            "update password",
            lambda: self._admin.update_user_by_id(user_id, {"password": new_password}),
        )
        return self._map_identity(response.user)

    # -------------------------------------------------------------------------
    # One-time codes
    # -------------------------------------------------------------------------

    async def verify_email_otp(self, email: str, token: str) -> ProviderSession:
        response = self._call(
            "verify email code",
            lambda: self._new_auth_client().verify_otp(
                {"email": email, "token": token, "type": "email"}
            ),
        )
        return self._map_session(response, "verify email code")

    async def verify_sms_otp(self, phone: str, token: str) -> ProviderSession:
        response = self._call(
            "verify SMS code",
            lambda: self._new_auth_client().verify_otp(
                {"phone": phone, "token": token, "type": "sms"}
            ),
        )
        return self._map_session(response, "verify SMS code")

    async def send_email_otp(self, email: str) -> None:
        self._call(
            "send email code",
            lambda: self._new_auth_client().sign_in_with_otp({
                "email": email,
                "options": {
                    "should_create_user": True,
                    "email_redirect_to": self._redirect("/auth/verify"),
                },
            }),
        )

    async def send_sms_otp(self, phone: str) -> None:
        self._call(
            "send SMS code",
            lambda: self._new_auth_client().sign_in_with_otp({
                "phone": phone,
                "options": {"should_create_user": True},
            }),
        )

    # -------------------------------------------------------------------------
    # OAuth
    # -------------------------------------------------------------------------

    async def get_oauth_url(self, provider: OAuthProvider) -> OAuthStart:
        """
        Start a PKCE social login.

        The verifier is generated here and returned to the caller instead
        of being left in the SDK client.
        """
        code_verifier = generate_pkce_verifier()
        response = self._call(
            f"start {provider.value} login",
            lambda: self._new_auth_client().sign_in_with_oauth({
                "provider": provider.value,
                "options": {
                    "redirect_to": self._redirect("/auth/callback"),
                    "query_params": {
                        "code_challenge": generate_pkce_challenge(code_verifier),
                        "code_challenge_method": "s256",
                    },
                },
            }),
        )
        return OAuthStart(url=response.url, code_verifier=code_verifier)

    async def exchange_code(self, code: str, code_verifier: str) -> ProviderSession:
        response = self._call(
            "exchange OAuth code",
            lambda: self._new_auth_client().exchange_code_for_session(
                {"auth_code": code, "code_verifier": code_verifier}
            ),
        )
        return self._map_session(response, "exchange OAuth code")

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _redirect(self, path: str) -> str:
        return f"{self._redirect_base}{path}"

    def _call(self, action: str, operation: Callable[[], R]) -> R:
        """Run one Supabase Auth call, normalizing its failures."""
        try:
            return operation()
        except AuthRetryableError as e:
            logger.warning("Identity provider unavailable during %s: %s", action, e.message)
            raise ProviderUnavailableError(
                f"Identity provider unavailable during {action}",
                original_error=e.message,
            ) from e
        except AuthError as e:
            status = getattr(e, "status", None)
            if status is None or status >= 500:
                logger.error("Identity provider failed during %s: %s", action, e.message)
                raise ProviderUnavailableError(
                    f"Identity provider failed during {action}",
                    original_error=e.message,
                ) from e
            logger.info("Identity provider rejected %s: %s", action, e.message)
            raise ProviderRejectedError(
                e.message,
                status=status,
                provider_code=getattr(e, "code", None),
            ) from e
        except httpx.HTTPError as e:
            logger.error("Identity provider unreachable during %s: %s", action, e)
            raise ProviderUnavailableError(
                f"Identity provider unreachable during {action}",
                original_error=str(e),
            ) from e

    def _map_session(self, response: Any, action: str) -> ProviderSession:
        if response.user is None:
            raise ProviderUnavailableError(f"Identity provider returned no user for {action}")
        session = response.session
        return ProviderSession(
            identity=self._map_identity(response.user),
            access_token=session.access_token if session is not None else None,
        )

    def _map_identity(self, user: Any) -> ProviderIdentity:
        """Map a Supabase User onto ProviderIdentity."""
        return ProviderIdentity(
            id=str(user.id),
            email=user.email or None,
            phone=user.phone or None,
            user_metadata=dict(user.user_metadata or {}),
            app_metadata=dict(user.app_metadata or {}),
        )
