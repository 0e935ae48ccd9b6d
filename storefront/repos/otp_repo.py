from datetime import datetime

from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from storefront.data.models.otp import OtpModel


class OtpRepo:
    def __init__(self, db: Session):
        self.db = db

    def add(self, otp: OtpModel) -> OtpModel:
        self.db.add(otp)
        self.db.commit()
        self.db.refresh(otp)
        return otp

    def latest(self, email: str, purpose: str) -> OtpModel | None:
        return self.db.execute(
            select(OtpModel)
            .where(OtpModel.email == email, OtpModel.purpose == purpose)
            .order_by(OtpModel.expires_at.desc())
            .limit(1)
        ).scalar_one_or_none()

    def delete(self, otp_id: int) -> None:
        self.db.execute(delete(OtpModel).where(OtpModel.id == otp_id))
        self.db.commit()

    def delete_for(self, email: str, purpose: str) -> int:
        res = self.db.execute(
            delete(OtpModel).where(OtpModel.email == email, OtpModel.purpose == purpose)
        )
        self.db.commit()
        return res.rowcount

    def purge_expired(self, now: datetime) -> int:
        res = self.db.execute(delete(OtpModel).where(OtpModel.expires_at < now))
        self.db.commit()
        return res.rowcount
