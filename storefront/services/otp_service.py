# storefront/services/otp_service.py
import secrets
from datetime import datetime, timezone, timedelta

from sqlalchemy.orm import Session

from storefront.data.models.otp import OtpModel
from storefront.data.transaction import store_errors
from storefront.domain.errors import InvalidInput
from storefront.repos.otp_repo import OtpRepo
from storefront.utils.settings import OTP_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

OTP_LENGTH = 6


def generate_otp() -> str:
    # 100000-999999, never a leading zero
    return str(100000 + secrets.randbelow(900000))


def _aware(value: datetime) -> datetime:
    # sqlite hands back naive datetimes; everything is stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class OtpService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = OtpRepo(db)

    def issue(self, email: str, purpose: str) -> str:
        code = generate_otp()
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=OTP_TTL_SECONDS)

        with store_errors(self.db, "generate OTP"):
            self.repo.add(OtpModel(email=email, otp=code, purpose=purpose, expires_at=expires_at))

        logger.info(f"OTP issued for {email} ({purpose}), expires {expires_at.isoformat()}")
        return code

    def reissue(self, email: str, purpose: str) -> str:
        with store_errors(self.db, "generate OTP"):
            removed = self.repo.delete_for(email, purpose)
        logger.info(f"Dropped {removed} old OTP(s) for {email} ({purpose})")
        return self.issue(email, purpose)

    def validate(self, email: str, purpose: str, code: str) -> OtpModel:
        """Latest code for (email, purpose); must match and not be past expiry."""
        with store_errors(self.db, "verify OTP"):
            record = self.repo.latest(email, purpose)

        if record is None:
            logger.warning(f"No OTP record for {email} ({purpose})")
            raise InvalidInput("Invalid or expired OTP.")

        now = datetime.now(timezone.utc)
        if record.otp != code or now > _aware(record.expires_at):
            raise InvalidInput("Invalid or expired OTP.")
        return record

    def consume(self, record: OtpModel) -> None:
        with store_errors(self.db, "delete used OTP"):
            self.repo.delete(record.id)

    def purge_expired(self) -> int:
        with store_errors(self.db, "purge expired OTPs"):
            return self.repo.purge_expired(datetime.now(timezone.utc))
