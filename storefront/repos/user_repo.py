from sqlalchemy import select, func
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel, SuperuserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: str) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user


class SuperuserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: str) -> SuperuserModel | None:
        return self.db.get(SuperuserModel, user_id)

    def get_by_email(self, email: str) -> SuperuserModel | None:
        # case-insensitive; an exact match wins if two rows differ only in case
        return self.db.execute(
            select(SuperuserModel)
            .where(func.lower(SuperuserModel.email) == email.lower())
            .order_by((SuperuserModel.email == email).desc())
            .limit(1)
        ).scalars().first()
