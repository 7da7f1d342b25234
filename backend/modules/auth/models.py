"""
Authentication module data models.

Request bodies, responses, and the claim sets of the tokens this service signs.
"""

from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from modules.profiles.models import UserProjection

# Six-digit one-time codes
OTP_PATTERN = r"^\d{6}$"
# E.164 phone numbers, leading + optional
PHONE_PATTERN = r"^\+?[1-9]\d{1,14}$"


class SessionClaims(BaseModel):
    """Claim set of a session token issued by this service."""

    model_config = {"extra": "ignore"}

    sub: str = Field(..., description="Subject (user ID)")
    email: str = Field(..., description="User's email")
    aud: str = Field(..., description="Audience")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")


class OAuthStateClaims(BaseModel):
    """Claim set of the state value that carries one social login to its callback."""

    model_config = {"extra": "ignore"}

    provider: str = Field(..., description="Social provider the login was started with")
    cv: str = Field(..., description="PKCE code verifier")
    aud: str
    iat: int
    exp: int


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------


class SignUpRequest(BaseModel):
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=30)
    password: str = Field(..., min_length=6, max_length=100)
    bio: Optional[str] = Field(None, max_length=500)


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class VerifyEmailRequest(BaseModel):
    email: EmailStr
    code: str = Field(..., pattern=OTP_PATTERN)


class EmailRequest(BaseModel):
    """Body of endpoints that only take an email (resend, reset, OTP send)."""

    email: EmailStr


class UpdatePasswordRequest(BaseModel):
    new_password: str = Field(..., min_length=6, max_length=100)


class SendSmsOtpRequest(BaseModel):
    phone_number: str = Field(..., pattern=PHONE_PATTERN)


class VerifySmsOtpRequest(BaseModel):
    phone_number: str = Field(..., pattern=PHONE_PATTERN)
    token: str = Field(..., pattern=OTP_PATTERN)


class VerifyEmailOtpRequest(BaseModel):
    email: EmailStr
    token: str = Field(..., pattern=OTP_PATTERN)


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------


class MessageResponse(BaseModel):
    message: str


class AuthResult(BaseModel):
    """
    Outcome of a credential event.

    access_token is only present for flows that open a session
    (sign-in, social callback, OTP verification).
    """

    message: str
    user: UserProjection
    access_token: Optional[str] = None
    token_type: Optional[str] = None

    @classmethod
    def with_token(cls, message: str, user: UserProjection, token: str) -> "AuthResult":
        return cls(message=message, user=user, access_token=token, token_type="bearer")


class OAuthUrlResponse(BaseModel):
    message: str
    url: str
    state: str = Field(..., description="Opaque value to send back with the authorization code")


class OtpSentResponse(BaseModel):
    message: str
    email: Optional[str] = None
    phone_number: Optional[str] = None
