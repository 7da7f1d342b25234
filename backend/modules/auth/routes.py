"""
Auth API endpoints.

Maps the /auth routes one-to-one onto IAuthService operations. Errors are
raised as PhotogramError subclasses and rendered by the app's handler.
"""

from fastapi import APIRouter, Depends, Query

from api.middleware.auth import get_current_user
from api.dependencies import get_auth_service
from modules.identity.models import OAuthProvider
from modules.profiles.models import UserProfile, UserProjection

from .interfaces import IAuthService
from .models import (
    AuthResult,
    EmailRequest,
    MessageResponse,
    OAuthUrlResponse,
    OtpSentResponse,
    SendSmsOtpRequest,
    SignInRequest,
    SignUpRequest,
    UpdatePasswordRequest,
    VerifyEmailOtpRequest,
    VerifyEmailRequest,
    VerifySmsOtpRequest,
)

router = APIRouter()


@router.post("/signup", response_model=AuthResult, status_code=201)
async def sign_up(
    request: SignUpRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResult:
    """
    Register with email and password.

    No token is returned; the email must be verified first.
    """
    return await service.sign_up(
        email=request.email,
        username=request.username,
        password=request.password,
        bio=request.bio,
    )


@router.post("/signin", response_model=AuthResult)
async def sign_in(
    request: SignInRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResult:
    return await service.sign_in(request.email, request.password)


@router.post("/verify-email", response_model=AuthResult)
async def verify_email(
    request: VerifyEmailRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResult:
    return await service.verify_email(request.email, request.code)


@router.post("/resend-verification", response_model=MessageResponse)
async def resend_verification(
    request: EmailRequest,
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    return await service.resend_verification(request.email)


@router.get("/profile", response_model=UserProfile)
async def get_profile(
    user: UserProfile = Depends(get_current_user),
) -> UserProfile:
    """Full profile record of the authenticated user."""
    return user


@router.get("/me", response_model=UserProjection)
async def get_me(
    user: UserProfile = Depends(get_current_user),
) -> UserProjection:
    """Public projection of the authenticated user."""
    return user.to_projection()


@router.post("/logout", response_model=MessageResponse)
async def logout(
    user: UserProfile = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    """
    Sign out at the provider.

    The session token itself stays valid until it expires.
    """
    return await service.logout(user.id)


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    request: EmailRequest,
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    return await service.reset_password(request.email)


@router.post("/update-password", response_model=MessageResponse)
async def update_password(
    request: UpdatePasswordRequest,
    user: UserProfile = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    return await service.update_password(user.id, request.new_password)


@router.get("/callback", response_model=AuthResult)
async def social_callback(
    code: str = Query(..., min_length=1, description="Authorization code from the provider"),
    state: str = Query(..., min_length=1, description="State returned when the login was started"),
    service: IAuthService = Depends(get_auth_service),
) -> AuthResult:
    """
    Complete a social login.

    The client sends back the state it received from POST /auth/{provider}
    together with the provider's code. Creates the profile on first login;
    an existing profile is used as-is.
    """
    return await service.social_callback(code, state)


@router.post("/sms/send", response_model=OtpSentResponse)
async def send_sms_otp(
    request: SendSmsOtpRequest,
    service: IAuthService = Depends(get_auth_service),
) -> OtpSentResponse:
    return await service.send_sms_otp(request.phone_number)


@router.post("/sms/verify", response_model=AuthResult)
async def verify_sms_otp(
    request: VerifySmsOtpRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResult:
    return await service.verify_sms_otp(request.phone_number, request.token)


@router.post("/email-otp/send", response_model=OtpSentResponse)
async def send_email_otp(
    request: EmailRequest,
    service: IAuthService = Depends(get_auth_service),
) -> OtpSentResponse:
    return await service.send_email_otp(request.email)


@router.post("/email-otp/verify", response_model=AuthResult)
async def verify_email_otp(
    request: VerifyEmailOtpRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResult:
    return await service.verify_email_otp(request.email, request.token)


# Registered last so the fixed paths above take precedence
@router.post("/{provider}", response_model=OAuthUrlResponse)
async def social_sign_in(
    provider: OAuthProvider,
    service: IAuthService = Depends(get_auth_service),
) -> OAuthUrlResponse:
    """
    Start a social login.

    Returns the provider's authorization URL for the client to open and a
    state value the client keeps for the callback.
    """
    return await service.social_sign_in(provider)
