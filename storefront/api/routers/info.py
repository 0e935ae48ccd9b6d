from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import UserInfoIn, UserRead, ReviewOut, ReplyOut, MessageOut
from storefront.services.info_service import InfoService

router = APIRouter(prefix="/api/info", tags=["info"])


@router.post("/get-detailed-info")
def get_detailed_info(payload: UserInfoIn, db: Session = Depends(get_db)):
    info = InfoService(db).detailed_info(payload.user_id)
    return {
        "user": UserRead.model_validate(info["user"]),
        "reviews": [ReviewOut.model_validate(r) for r in info["reviews"]],
        "replies": [ReplyOut.model_validate(r) for r in info["replies"]],
        "messages": [MessageOut.model_validate(m) for m in info["messages"]],
        "orders": info["orders"],
    }
