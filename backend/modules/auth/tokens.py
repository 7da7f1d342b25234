"""
Session token issuer.

Signs and validates the bearer tokens this service hands out after a
successful sign-in. Tokens are stateless: validity is the HS256 signature
plus expiry, nothing is looked up server-side and nothing can revoke a
token before it expires. Logging out does not invalidate a token.

The same secret also signs the short-lived state values that carry a
social login's PKCE verifier from its start to its callback.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
import jwt
from pydantic import ValidationError as PydanticValidationError

from shared.models import AuthenticatedUser

from .exceptions import (
    ExpiredTokenError,
    InvalidOAuthStateError,
    InvalidTokenError,
    MissingTokenError,
)
from .models import OAuthStateClaims, SessionClaims

ALGORITHM = "HS256"
# Time allowed between starting a social login and its callback
OAUTH_STATE_TTL = timedelta(minutes=10)


class SessionTokenIssuer:
    """Issues and validates signed session tokens."""

    def __init__(self, secret: str, expires_in: int, audience: str = "photogram"):
        if not secret:
            raise RuntimeError(
                "Session token secret missing. Set the JWT_SECRET environment variable."
            )
        if expires_in <= 0:
            raise RuntimeError("JWT_EXPIRES_IN must be a positive number of seconds.")
        self._secret = secret
        self._expires_in = timedelta(seconds=expires_in)
        self._audience = audience
        # State values are signed for their own audience
        self._state_audience = f"{audience}:oauth-state"

    def issue(self, user_id: str, email: str, now: Optional[datetime] = None) -> str:
        """
        Sign a token for a user.

        Args:
            user_id: Profile id, stored as the subject
            email: Profile email
            now: Issue time (defaults to current UTC time)

        Returns:
            Encoded JWT
        """
        issued_at = now or datetime.now(timezone.utc)
        claims = SessionClaims(
            sub=user_id,
            email=email,
            aud=self._audience,
            iat=int(issued_at.timestamp()),
            exp=int((issued_at + self._expires_in).timestamp()),
        )
        return jwt.encode(claims.model_dump(), self._secret, algorithm=ALGORITHM)

    def validate(self, token: Optional[str]) -> AuthenticatedUser:
        """
        Validate a token and return the identity it carries.

        Raises:
            MissingTokenError: If token is empty
            ExpiredTokenError: If token has expired
            InvalidTokenError: If signature, audience or claims are wrong
        """
        if not token:
            raise MissingTokenError()

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                audience=self._audience,
                options={"require": ["sub", "email", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        try:
            claims = SessionClaims(**payload)
        except PydanticValidationError:
            raise InvalidTokenError("Invalid token: malformed claims")

        return AuthenticatedUser(
            id=claims.sub,
            email=claims.email,
            issued_at=datetime.fromtimestamp(claims.iat, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(claims.exp, tz=timezone.utc),
        )

    def issue_oauth_state(
        self,
        provider: str,
        code_verifier: str,
        now: Optional[datetime] = None,
    ) -> str:
        """
        Sign the PKCE verifier of one social login into its state value.

        The caller hands the state back with the authorization code; only
        the login that produced the code can complete the exchange.
        """
        issued_at = now or datetime.now(timezone.utc)
        claims = OAuthStateClaims(
            provider=provider,
            cv=code_verifier,
            aud=self._state_audience,
            iat=int(issued_at.timestamp()),
            exp=int((issued_at + OAUTH_STATE_TTL).timestamp()),
        )
        return jwt.encode(claims.model_dump(), self._secret, algorithm=ALGORITHM)

    def read_oauth_state(self, state: Optional[str]) -> OAuthStateClaims:
        """
        Validate a state value and return the login it belongs to.

        Raises:
            InvalidOAuthStateError: If state is empty, expired, forged or
                not a state value at all
        """
        if not state:
            raise InvalidOAuthStateError("Missing login state")

        try:
            payload = jwt.decode(
                state,
                self._secret,
                algorithms=[ALGORITHM],
                audience=self._state_audience,
                options={"require": ["provider", "cv", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidOAuthStateError("Login state has expired; start the login again")
        except jwt.InvalidTokenError:
            raise InvalidOAuthStateError()

        try:
            return OAuthStateClaims(**payload)
        except PydanticValidationError:
            raise InvalidOAuthStateError()
