from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime

from storefront.data.database import Base


class UserModel(Base):
    __tablename__ = "users"

    # auth-provider user id (uuid as text)
    id = Column(String, primary_key=True)
    email = Column(String, nullable=False, index=True)
    username = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))


class SuperuserModel(Base):
    __tablename__ = "superusers"

    id = Column(String, primary_key=True)
    email = Column(String, nullable=False, unique=True)
    username = Column(String, nullable=True)
    password = Column(String, nullable=False)  # bcrypt hash
