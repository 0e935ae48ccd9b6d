from sqlalchemy.orm import Session

from storefront.data.models.review import ReviewModel, ReplyModel
from storefront.data.transaction import store_errors
from storefront.domain.errors import InvalidInput, NotFound
from storefront.repos.review_repo import ReviewRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ReviewService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ReviewRepo(db)

    def add_review(self, user_id, name, product_id, rating, feedback) -> ReviewModel:
        if not user_id or not name or not product_id or not rating or not feedback:
            raise InvalidInput(
                "All fields (user_id, name, product_id, rating, feedback) are required."
            )

        with store_errors(self.db, "submit the review"):
            review = self.repo.add_review(
                ReviewModel(
                    user_id=user_id,
                    username=name,
                    product_id=product_id,
                    rating=float(rating),
                    feedback=feedback,
                )
            )

        logger.info(f"Review {review.id} on product {product_id} by {user_id}")
        return review

    def add_reply(self, review_id, product_id, user_id, name, reply) -> ReplyModel:
        if not review_id or not product_id or not user_id or not name or not reply:
            raise InvalidInput(
                "All fields (review_id, product_id, user_id, name, reply) are required."
            )

        with store_errors(self.db, "submit the reply"):
            if self.repo.get_review(review_id) is None:
                raise NotFound("Review not found.")
            created = self.repo.add_reply(
                ReplyModel(
                    review_id=review_id,
                    product_id=product_id,
                    user_id=user_id,
                    username=name,
                    reply=reply,
                )
            )

        logger.info(f"Reply {created.id} on review {review_id} by {user_id}")
        return created

    def list_reviews(self, product_id) -> list[ReviewModel]:
        if not product_id:
            raise InvalidInput("Product ID is required to fetch reviews.")

        with store_errors(self.db, "fetch reviews"):
            return self.repo.list_for_product(product_id)
