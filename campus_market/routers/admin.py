from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from campus_market.db.session import get_db
from campus_market.schemas.items import ItemOut
from campus_market.schemas.profiles import UserOut
from campus_market.core.security import require_admin
from campus_market.core.logging import log_event, request_id
from campus_market.services import moderation

router = APIRouter(prefix="/admin", tags=["admin"])

@router.get("/items", response_model=list[ItemOut])
def list_items(db: Session = Depends(get_db), user=Depends(require_admin)):
	return moderation.list_all_items(db)

@router.get("/users", response_model=list[UserOut])
def list_users(db: Session = Depends(get_db), user=Depends(require_admin)):
	return [
		{
			"id": u.id,
			"email": u.email,
			"display_name": u.profile.display_name if u.profile else None,
			"role": u.role,
			"created_at": u.created_at,
		}
		for u in moderation.list_users(db)
	]

@router.delete("/items/{item_id}")
def delete_item(request: Request, item_id: int, db: Session = Depends(get_db), user=Depends(require_admin)):
	moderation.delete_item(db, item_id)
	log_event("admin_item_deleted", item_id=item_id, actor=user.email, request_id=request_id(request))
	return {"status": "OK", "id": item_id, "message": "The listing has been successfully removed"}

@router.get("/stats")
def stats(db: Session = Depends(get_db), user=Depends(require_admin)):
	return moderation.marketplace_stats(db)
