# storefront/services/notification_service.py
import resend
from resend.exceptions import ResendError
from kombu.exceptions import OperationalError

from storefront.celery_worker import celery_app
from storefront.domain.errors import ExternalServiceError
from storefront.utils.settings import RESEND_API_KEY, EMAIL_FROM, OTP_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PURPOSE_LABELS = {
    "email_verification": "Email Verification",
    "password_reset": "Password Reset",
}


def build_otp_email_html(otp: str, purpose_label: str) -> str:
    minutes = OTP_TTL_SECONDS // 60
    return f"""
    <div style="font-family: Arial, sans-serif; text-align: center; color: #333; padding: 20px;">
      <h1 style="font-size: 24px; margin-bottom: 20px;">Here's your verification code</h1>
      <div style="font-size: 35px; font-weight: bold; background-color: #f7f7f7; padding: 15px; border-radius: 8px; display: inline-block; margin: 20px auto;">
        {otp}
      </div>
      <p style="font-size: 14px; color: #666;">The code expires in <strong>{minutes} minutes</strong>.</p>
      <p style="font-size: 18px;">Continue with <strong>{purpose_label}</strong> by entering the code.</p>
    </div>
    """


class NotificationService:
    """
    Sends one-time codes by email.
    The HTTP request only enqueues; the Celery task talks to the mail API.
    """

    @staticmethod
    def send_otp_email(email: str, otp: str, purpose: str):
        label = PURPOSE_LABELS.get(purpose, purpose)
        try:
            send_otp_email_task.delay(email, otp, label)
        except OperationalError as e:
            logger.error(f"Could not enqueue OTP email for {email}: {e}")
            raise ExternalServiceError("Failed to send OTP email.") from e
        logger.info(f"OTP email for {email} ({purpose}) queued")


@celery_app.task(
    name="storefront.services.notification_service.send_otp_email_task",
    autoretry_for=(ResendError,),
    retry_backoff=True,
    max_retries=3,
)
def send_otp_email_task(email: str, otp: str, purpose_label: str):
    resend.api_key = RESEND_API_KEY
    payload = {
        "from": EMAIL_FROM,
        "to": [email],
        "subject": f"Your OTP for {purpose_label}",
        "html": build_otp_email_html(otp, purpose_label),
        "text": f"Your code for {purpose_label} is {otp}.",
    }
    response = resend.Emails.send(payload)
    logger.info(f"OTP sent to {email}")
    return {"email": email, "id": response.get("id") if isinstance(response, dict) else None}
