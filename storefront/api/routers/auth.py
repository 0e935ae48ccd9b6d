# storefront/api/routers/auth.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_auth_client, get_notifier
from storefront.data.database import get_db
from storefront.domain.schemas import (
    SignupIn,
    LoginIn,
    EmailIn,
    ResetPasswordIn,
    VerifyEmailIn,
    ResendOtpIn,
    AuthUserOut,
)
from storefront.services.auth_client import AuthClient
from storefront.services.auth_service import AuthService
from storefront.services.notification_service import NotificationService

router = APIRouter(tags=["auth"])


def get_service(
    db: Session = Depends(get_db),
    auth_client: AuthClient = Depends(get_auth_client),
    notifier: NotificationService = Depends(get_notifier),
) -> AuthService:
    return AuthService(db=db, auth_client=auth_client, notifier=notifier)


@router.post("/signup")
def signup(payload: SignupIn, svc: AuthService = Depends(get_service)):
    user = svc.signup(payload.email, payload.password, payload.username)
    return {
        "message": "Signup successful! Please verify your email using the OTP sent to your email.",
        "user": AuthUserOut(**user),
    }


@router.post("/login")
def login(payload: LoginIn, svc: AuthService = Depends(get_service)):
    result = svc.login(payload.email, payload.password)
    return {
        "message": "Login successful.",
        "token": result["token"],
        "user": AuthUserOut(**result["user"]),
    }


@router.post("/superuser-login")
def superuser_login(payload: LoginIn, svc: AuthService = Depends(get_service)):
    result = svc.superuser_login(payload.email, payload.password)
    return {
        "message": "Superuser login successful.",
        "token": result["token"],
        "user": AuthUserOut(**result["user"]),
    }


@router.post("/request-password-reset-otp")
def request_password_reset_otp(payload: EmailIn, svc: AuthService = Depends(get_service)):
    svc.request_password_reset(payload.email)
    return {"message": "OTP sent for password reset. Please check your email."}


@router.post("/reset-password-with-otp")
def reset_password_with_otp(payload: ResetPasswordIn, svc: AuthService = Depends(get_service)):
    svc.reset_password(payload.email, payload.otp, payload.new_password)
    return {"message": "Password reset successful!"}


@router.post("/verify-email-with-otp")
def verify_email_with_otp(payload: VerifyEmailIn, svc: AuthService = Depends(get_service)):
    svc.verify_email(payload.email, payload.otp)
    return {"message": "Email verified successfully!"}


@router.post("/resend-otp")
def resend_otp(payload: ResendOtpIn, svc: AuthService = Depends(get_service)):
    purpose = svc.resend_otp(payload.email, payload.purpose)
    what = "password reset" if purpose == "password_reset" else "email verification"
    return {"message": f"A new OTP has been sent for {what}. Please check your email."}
