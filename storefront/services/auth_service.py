# storefront/services/auth_service.py
from datetime import datetime, timezone, timedelta

import bcrypt
import jwt
from sqlalchemy.orm import Session

from storefront.data.models.otp import PURPOSE_EMAIL_VERIFICATION, PURPOSE_PASSWORD_RESET
from storefront.data.models.user import UserModel
from storefront.data.transaction import store_errors
from storefront.domain.errors import InvalidInput, Unauthorized, NotFound
from storefront.repos.user_repo import UserRepo, SuperuserRepo
from storefront.services.auth_client import AuthClient, AuthProviderError
from storefront.services.notification_service import NotificationService
from storefront.services.otp_service import OtpService
from storefront.utils.settings import JWT_SECRET, JWT_EXPIRES_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

OTP_PURPOSES = (PURPOSE_EMAIL_VERIFICATION, PURPOSE_PASSWORD_RESET)


def issue_token(claims: dict) -> str:
    payload = dict(claims)
    payload["exp"] = datetime.now(timezone.utc) + timedelta(seconds=JWT_EXPIRES_SECONDS)
    return jwt.encode(payload, JWT_SECRET, algorithm="HS256")


def decode_token(token: str) -> dict:
    return jwt.decode(token, JWT_SECRET, algorithms=["HS256"])


class AuthService:
    """
    Sign-up / login against the hosted auth provider, OTP flows for email
    verification and password reset, and the local superuser login.

    Emails are compared lower-cased everywhere.
    """

    def __init__(
        self,
        db: Session,
        auth_client: AuthClient,
        notifier: NotificationService | None = None,
    ):
        self.db = db
        self.auth = auth_client
        self.notifier = notifier or NotificationService()
        self.otps = OtpService(db)
        self.users = UserRepo(db)
        self.superusers = SuperuserRepo(db)

    def signup(self, email: str, password: str, username: str) -> dict:
        email = email.strip().lower()
        try:
            user = self.auth.sign_up(
                email,
                password,
                {"username": username, "email_verified": False},
            )
        except AuthProviderError as e:
            if e.status and 400 <= e.status < 500:
                raise InvalidInput(e.message) from e
            raise

        with store_errors(self.db, "save the user"):
            if self.users.get_user(user["id"]) is None:
                self.users.create_user(UserModel(id=user["id"], email=email, username=username))

        code = self.otps.issue(email, PURPOSE_EMAIL_VERIFICATION)
        self.notifier.send_otp_email(email, code, PURPOSE_EMAIL_VERIFICATION)

        logger.info(f"Signup for {email} ({user['id']}), verification OTP sent")
        return {"id": user["id"], "email": user.get("email", email), "username": username}

    def login(self, email: str, password: str) -> dict:
        email = email.strip().lower()
        try:
            user = self.auth.sign_in_with_password(email, password)
        except AuthProviderError as e:
            logger.warning(f"Authentication error for {email}: {e.message}")
            if e.status and 400 <= e.status < 500:
                raise Unauthorized("Invalid email or password.") from e
            raise

        metadata = user.get("user_metadata") or {}
        if not user.get("email_confirmed_at") or not metadata.get("email_verified"):
            logger.warning(f"Unverified email login attempt: {email}")
            raise Unauthorized("Email not verified. Please verify your email first.")

        username = metadata.get("username") or "Unknown User"
        token = issue_token({"id": user["id"], "email": user["email"], "username": username})

        logger.info(f"Login for {email}")
        return {
            "token": token,
            "user": {"id": user["id"], "username": username, "email": user["email"]},
        }

    def superuser_login(self, email: str, password: str) -> dict:
        if not email or not password:
            raise InvalidInput("Email and password are required.")

        with store_errors(self.db, "log in"):
            superuser = self.superusers.get_by_email(email.strip())

        if superuser is None:
            logger.warning(f"Superuser not found: {email}")
            raise Unauthorized("Invalid email or password.")

        if not bcrypt.checkpw(password.encode("utf-8"), superuser.password.encode("utf-8")):
            logger.warning(f"Invalid password attempt for superuser {email}")
            raise Unauthorized("Invalid email or password.")

        user = {
            "id": superuser.id,
            "email": superuser.email,
            "username": superuser.username,
            "is_superuser": True,
        }
        logger.info(f"JWT token generated for superuser {email}")
        return {"token": issue_token(user), "user": user}

    def request_password_reset(self, email: str) -> None:
        email = email.strip().lower()
        code = self.otps.issue(email, PURPOSE_PASSWORD_RESET)
        self.notifier.send_otp_email(email, code, PURPOSE_PASSWORD_RESET)

    def reset_password(self, email: str, otp: str, new_password: str) -> None:
        email = email.strip().lower()
        record = self.otps.validate(email, PURPOSE_PASSWORD_RESET, otp)

        user = self.auth.find_user_by_email(email)
        if user is None:
            raise NotFound("User not found.")

        # the provider hashes the password itself
        self.auth.update_user(user["id"], {"password": new_password})
        self.otps.consume(record)
        logger.info(f"Password reset for {email}")

    def verify_email(self, email: str, otp: str) -> None:
        email = email.strip().lower()
        record = self.otps.validate(email, PURPOSE_EMAIL_VERIFICATION, otp)

        user = self.auth.find_user_by_email(email)
        if user is None:
            raise NotFound("User not found.")

        metadata = dict(user.get("user_metadata") or {})
        metadata["email_verified"] = True
        self.auth.update_user(user["id"], {"user_metadata": metadata, "email_confirm": True})
        self.otps.consume(record)
        logger.info(f"Email verified for {email}")

    def resend_otp(self, email: str | None, purpose: str | None) -> str:
        if not email or not purpose:
            raise InvalidInput("Email and purpose are required.")
        if purpose not in OTP_PURPOSES:
            raise InvalidInput(f"Purpose must be one of: {', '.join(OTP_PURPOSES)}.")

        email = email.strip().lower()
        code = self.otps.reissue(email, purpose)
        self.notifier.send_otp_email(email, code, purpose)
        return purpose
