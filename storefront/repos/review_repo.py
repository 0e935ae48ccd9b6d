# storefront/repos/review_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.review import ReviewModel, ReplyModel


class ReviewRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_review(self, review: ReviewModel) -> ReviewModel:
        self.db.add(review)
        self.db.commit()
        self.db.refresh(review)
        return review

    def add_reply(self, reply: ReplyModel) -> ReplyModel:
        self.db.add(reply)
        self.db.commit()
        self.db.refresh(reply)
        return reply

    def get_review(self, review_id: int) -> ReviewModel | None:
        return self.db.get(ReviewModel, review_id)

    def list_for_product(self, product_id: int) -> list[ReviewModel]:
        # newest first
        return list(
            self.db.execute(
                select(ReviewModel)
                .where(ReviewModel.product_id == product_id)
                .order_by(ReviewModel.created_at.desc(), ReviewModel.id.desc())
            ).scalars().all()
        )

    def list_by_user(self, user_id: str) -> list[ReviewModel]:
        return list(
            self.db.execute(
                select(ReviewModel).where(ReviewModel.user_id == user_id).order_by(ReviewModel.id)
            ).scalars().all()
        )

    def replies_by_user(self, user_id: str) -> list[ReplyModel]:
        return list(
            self.db.execute(
                select(ReplyModel).where(ReplyModel.user_id == user_id).order_by(ReplyModel.id)
            ).scalars().all()
        )
