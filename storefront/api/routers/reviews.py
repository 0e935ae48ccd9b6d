from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import ReviewIn, ReplyIn, ReviewOut, ReplyOut, ReviewWithRepliesOut
from storefront.services.review_service import ReviewService

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


def get_service(db: Session = Depends(get_db)) -> ReviewService:
    return ReviewService(db)


@router.post("/add", status_code=201)
def add_review(payload: ReviewIn, svc: ReviewService = Depends(get_service)):
    review = svc.add_review(
        payload.user_id, payload.name, payload.product_id, payload.rating, payload.feedback
    )
    return {"message": "Review submitted successfully!", "review": ReviewOut.model_validate(review)}


@router.post("/reply", status_code=201)
def add_reply(payload: ReplyIn, svc: ReviewService = Depends(get_service)):
    reply = svc.add_reply(
        payload.review_id, payload.product_id, payload.user_id, payload.name, payload.reply
    )
    return {"message": "Reply submitted successfully!", "reply": ReplyOut.model_validate(reply)}


@router.get("/reviews")
def list_reviews(
    product_id: int | None = Query(None),
    svc: ReviewService = Depends(get_service),
):
    reviews = svc.list_reviews(product_id)
    return {
        "message": "Reviews fetched successfully!",
        "reviews": [ReviewWithRepliesOut.model_validate(r) for r in reviews],
    }
