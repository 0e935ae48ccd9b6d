# storefront/tasks/expire.py
from storefront.celery_worker import celery_app
from storefront.data.database import SessionLocal
from storefront.services.otp_service import OtpService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@celery_app.task(name="storefront.tasks.expire.purge_expired_otps_task")
def purge_expired_otps_task():
    logger.info("Purge expired OTPs task started")

    db = SessionLocal()
    try:
        removed = OtpService(db).purge_expired()
        logger.info(f"Removed {removed} expired OTPs")
        return removed
    finally:
        db.close()
