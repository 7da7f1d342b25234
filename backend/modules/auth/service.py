"""
Authentication service implementation.

Reconciles the identity provider's accounts with the profile store and
issues session tokens. Every flow is a short sequential chain:

- duplicate checks read the profile store before anything is sent to the
  provider, so an obviously conflicting request never reaches it;
- account creation calls the provider first and writes the profile only
  after the provider succeeded, so a provider failure never leaves an
  orphan profile.

A profile write that fails after the provider succeeded is NOT compensated:
the provider account stays, the failure is logged with its id and the
caller gets a generic upstream error.
"""

import logging
from typing import Optional

from shared.models import AuthenticatedUser
from modules.identity.interfaces import IIdentityProvider
from modules.identity.models import OAuthProvider, ProviderIdentity
from modules.identity.exceptions import ProviderRejectedError
from modules.profiles.interfaces import IProfileStore
from modules.profiles.models import NewProfile, UserProfile
from modules.profiles.exceptions import (
    DuplicateProfileError,
    ProfileStoreUnavailableError,
)

from .interfaces import IAuthService
from .models import AuthResult, MessageResponse, OAuthUrlResponse, OtpSentResponse
from .tokens import SessionTokenIssuer
from .usernames import generate_username
from .exceptions import (
    AccountNotLinkedError,
    AlreadyVerifiedError,
    EmailAlreadyRegisteredError,
    EmailNotVerifiedError,
    InvalidCredentialsError,
    MissingEmailError,
    ProfileSyncError,
    UnknownEmailError,
    UserNotFoundError,
    UsernameTakenError,
)

logger = logging.getLogger(__name__)

# Provider error code for sign-in before the signup email was confirmed
EMAIL_NOT_CONFIRMED = "email_not_confirmed"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class AuthService(IAuthService):
    """
    Identity reconciliation engine.

    The provider client, profile store and token issuer are injected and
    never changed after construction. No method holds a lock across a
    remote call; concurrent signups for the same email are settled by the
    profile store's unique constraint.
    """

    def __init__(
        self,
        provider: IIdentityProvider,
        profiles: IProfileStore,
        tokens: SessionTokenIssuer,
    ):
        self._provider = provider
        self._profiles = profiles
        self._tokens = tokens

    # -------------------------------------------------------------------------
    # Password accounts
    # -------------------------------------------------------------------------

    async def sign_up(
        self,
        email: str,
        username: str,
        password: str,
        bio: Optional[str] = None,
    ) -> AuthResult:
        email = normalize_email(email)

        if self._profiles.get_by_email(email) is not None:
            raise EmailAlreadyRegisteredError(email)
        if self._profiles.get_by_username(username) is not None:
            raise UsernameTakenError(username)

        identity = await self._provider.sign_up(
            email,
            password,
            metadata={"username": username, "bio": bio},
        )

        profile = self._create_profile(
            NewProfile(
                id=identity.id,
                email=email,
                username=username,
                bio=bio,
                is_verified=False,
            ),
            flow="sign up",
        )
        logger.info("Created password account %s", profile.id)

        return AuthResult(
            message="Sign up complete. Check your email to verify your account.",
            user=profile.to_projection(),
        )

    async def sign_in(self, email: str, password: str) -> AuthResult:
        email = normalize_email(email)

        try:
            await self._provider.sign_in_with_password(email, password)
        except ProviderRejectedError as e:
            if e.provider_code == EMAIL_NOT_CONFIRMED:
                raise EmailNotVerifiedError(email) from e
            raise InvalidCredentialsError(e.message) from e

        profile = self._profiles.get_by_email(email)
        if profile is None:
            logger.warning("Provider accepted credentials for %s but no profile exists", email)
            raise AccountNotLinkedError(email)

        if not profile.is_verified:
            raise EmailNotVerifiedError(email)

        logger.info("User %s signed in with password", profile.id)
        return self._open_session("Signed in successfully.", profile)

    async def verify_email(self, email: str, token: str) -> AuthResult:
        email = normalize_email(email)

        profile = self._profiles.get_by_email(email)
        if profile is None:
            raise UnknownEmailError(email)
        if profile.is_verified:
            raise AlreadyVerifiedError(email)

        await self._provider.verify_email_otp(email, token)

        profile = self._mark_verified(profile)
        logger.info("Verified email for user %s", profile.id)

        return AuthResult(
            message="Email verified.",
            user=profile.to_projection(),
        )

    async def resend_verification(self, email: str) -> MessageResponse:
        email = normalize_email(email)

        profile = self._profiles.get_by_email(email)
        if profile is None:
            raise UnknownEmailError(email)
        if profile.is_verified:
            raise AlreadyVerifiedError(email)

        await self._provider.resend_signup_verification(email)
        return MessageResponse(message="Verification email sent.")

    async def reset_password(self, email: str) -> MessageResponse:
        await self._provider.send_password_reset(normalize_email(email))
        return MessageResponse(message="Password reset email sent.")

    async def update_password(self, user_id: str, new_password: str) -> MessageResponse:
        await self._provider.update_password(user_id, new_password)
        logger.info("Password updated for user %s", user_id)
        return MessageResponse(message="Password updated.")

    async def logout(self, user_id: str) -> MessageResponse:
        """
        Advisory sign-out.

        Issued session tokens stay valid until they expire, and no provider
        session is kept after sign-in, so there is nothing to revoke. Clients
        must discard their token; logout is not a security boundary.
        """
        logger.info("User %s signed out", user_id)
        return MessageResponse(message="Signed out.")

    # -------------------------------------------------------------------------
    # Social login
    # -------------------------------------------------------------------------

    async def social_sign_in(self, provider: OAuthProvider) -> OAuthUrlResponse:
        login = await self._provider.get_oauth_url(provider)
        return OAuthUrlResponse(
            message=f"{provider.display_name} login URL created.",
            url=login.url,
            state=self._tokens.issue_oauth_state(provider.value, login.code_verifier),
        )

    async def social_callback(self, code: str, state: Optional[str]) -> AuthResult:
        login = self._tokens.read_oauth_state(state)
        session = await self._provider.exchange_code(code, login.cv)
        identity = session.identity

        if not identity.email:
            raise MissingEmailError(identity.auth_provider or "social")

        profile = self._reconcile(identity, social=True)
        logger.info("User %s signed in with %s", profile.id, identity.auth_provider or "social login")
        return self._open_session("Social login complete.", profile)

    # -------------------------------------------------------------------------
    # One-time codes
    # -------------------------------------------------------------------------

    async def send_email_otp(self, email: str) -> OtpSentResponse:
        email = normalize_email(email)
        await self._provider.send_email_otp(email)
        return OtpSentResponse(message="Email code sent.", email=email)

    async def verify_email_otp(self, email: str, token: str) -> AuthResult:
        email = normalize_email(email)
        session = await self._provider.verify_email_otp(email, token)

        identity = session.identity
        if not identity.email:
            identity = identity.model_copy(update={"email": email})

        profile = self._reconcile(identity, social=False)
        if not profile.is_verified:
            profile = self._mark_verified(profile)

        logger.info("User %s signed in with email code", profile.id)
        return self._open_session("Email code verified.", profile)

    async def send_sms_otp(self, phone: str) -> OtpSentResponse:
        await self._provider.send_sms_otp(phone)
        return OtpSentResponse(message="SMS code sent.", phone_number=phone)

    async def verify_sms_otp(self, phone: str, token: str) -> AuthResult:
        session = await self._provider.verify_sms_otp(phone, token)

        identity = session.identity
        if not identity.email:
            raise MissingEmailError("phone")

        profile = self._reconcile(identity, social=False)
        logger.info("User %s signed in with SMS code", profile.id)
        return self._open_session("SMS code verified.", profile)

    # -------------------------------------------------------------------------
    # Session tokens
    # -------------------------------------------------------------------------

    async def validate_token(self, token: str) -> AuthenticatedUser:
        return self._tokens.validate(token)

    async def get_current_user(self, user_id: str) -> UserProfile:
        profile = self._profiles.get_by_id(user_id)
        if profile is None:
            raise UserNotFoundError(user_id)
        return profile

    # -------------------------------------------------------------------------
    # Private helpers
    # -------------------------------------------------------------------------

    def _open_session(self, message: str, profile: UserProfile) -> AuthResult:
        token = self._tokens.issue(profile.id, profile.email)
        return AuthResult.with_token(message, profile.to_projection(), token)

    def _reconcile(self, identity: ProviderIdentity, social: bool) -> UserProfile:
        """
        Map a provider identity onto its single profile, creating it if needed.

        The existing profile always wins: nothing from the provider's
        metadata is copied onto a profile that already exists.
        """
        email = normalize_email(identity.email)

        existing = self._profiles.get_by_email(email)
        if existing is not None:
            return existing

        metadata = identity.social_metadata
        preferred = metadata.preferred_username()
        new_profile = NewProfile(
            id=identity.id,
            email=email,
            username=preferred or generate_username(),
            bio=metadata.bio or "",
            profile_image=metadata.profile_image(),
            is_verified=True,
            social_provider=identity.auth_provider if social else None,
            social_id=(metadata.external_id() or identity.id) if social else None,
        )

        try:
            profile = self._create_profile(new_profile, flow="first login", reraise_duplicates=True)
        except DuplicateProfileError as e:
            if e.field == "email":
                # Another request created it between our read and write
                winner = self._profiles.get_by_email(email)
                if winner is not None:
                    return winner
                raise EmailAlreadyRegisteredError(email) from e
            if e.field == "username" and preferred:
                logger.warning(
                    "Username %r from provider is taken; generating one for %s",
                    preferred,
                    identity.id,
                )
                profile = self._create_profile(
                    new_profile.model_copy(update={"username": generate_username()}),
                    flow="first login",
                )
            else:
                raise self._conflict_for(e, new_profile) from e

        logger.info("Created %s account %s", new_profile.social_provider or "passwordless", profile.id)
        return profile

    def _create_profile(
        self,
        new_profile: NewProfile,
        flow: str,
        reraise_duplicates: bool = False,
    ) -> UserProfile:
        """
        Write the profile for an account the provider has already created.

        Any failure here leaves a provider account without a profile;
        it is logged with the provider id before being raised.
        """
        try:
            return self._profiles.create(new_profile)
        except DuplicateProfileError as e:
            if reraise_duplicates:
                raise
            logger.error(
                "Provider account %s has no profile after %s: duplicate %s",
                new_profile.id,
                flow,
                e.field or "key",
            )
            raise self._conflict_for(e, new_profile) from e
        except ProfileStoreUnavailableError as e:
            logger.error(
                "Provider account %s has no profile after %s: %s",
                new_profile.id,
                flow,
                e.message,
            )
            raise ProfileSyncError(new_profile.id, e.message) from e

    def _conflict_for(self, error: DuplicateProfileError, new_profile: NewProfile) -> Exception:
        if error.field == "email":
            return EmailAlreadyRegisteredError(new_profile.email)
        if error.field == "username":
            return UsernameTakenError(new_profile.username)
        return DuplicateProfileError(error.field)

    def _mark_verified(self, profile: UserProfile) -> UserProfile:
        updated = self._profiles.update(profile.id, {"is_verified": True})
        if updated is None:
            raise UnknownEmailError(profile.email)
        return updated
