from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, File, HTTPException, Query, Request, UploadFile
from sqlalchemy.orm import Session

from campus_market.db.session import get_db, get_session_factory
from campus_market.db.models import CATEGORIES, ALL_CATEGORIES
from campus_market.schemas.items import (
	ItemSearch, ItemCreate, ItemUpdate, ItemOut, ItemDetail,
	ContactRequest, ContactResponse, ImagePreview,
)
from campus_market.core.config import settings
from campus_market.core.security import get_current_user, get_optional_user
from campus_market.core.logging import log_event, request_id
from campus_market.services.items import ItemService, item_card, send_seller_message, to_data_url
from campus_market.services.saved_items import SavedItemsTracker
from campus_market.services.search import count_items, recent_items, search_items
from campus_market.services.search_history import record_search, should_record

router = APIRouter(prefix="/items", tags=["items"])

@router.get("/categories")
def list_categories():
	return {"all": ALL_CATEGORIES, "categories": list(CATEGORIES)}

@router.get("/search")
def search(
	request: Request,
	spec: Annotated[ItemSearch, Query()],
	background_tasks: BackgroundTasks,
	db: Session = Depends(get_db),
	session_factory=Depends(get_session_factory),
	user=Depends(get_optional_user),
):
	rows = search_items(db, spec)
	total = count_items(db, spec)
	user_id = user.id if user else None
	if should_record(user_id, spec.term):
		background_tasks.add_task(record_search, session_factory, user_id, spec.term)

	log_event("item_search", term=spec.term, category=spec.category, sort=spec.sort.value, results=len(rows), request_id=request_id(request))
	response = {
		"items": [item_card(row) for row in rows],
		"count": len(rows),
		"total": total,
	}
	if not rows:
		response["message"] = "No items found matching your search."
	return response

@router.get("/recent")
def list_recent(limit: int = Query(8, ge=1, le=50), db: Session = Depends(get_db)):
	return [item_card(row) for row in recent_items(db, limit=limit)]

@router.post("/image-preview", response_model=ImagePreview)
async def image_preview(file: UploadFile = File(...), user=Depends(get_current_user)):
	content_type = file.content_type or ""
	if not content_type.startswith("image/"):
		raise HTTPException(status_code=415, detail="Only image files can be previewed")
	content = await file.read(settings.MAX_IMAGE_BYTES + 1)
	if len(content) > settings.MAX_IMAGE_BYTES:
		raise HTTPException(status_code=413, detail="Image is too large")
	return {
		"filename": file.filename,
		"content_type": content_type,
		"size": len(content),
		"data_url": to_data_url(content, content_type),
	}

@router.get("/{item_id}", response_model=ItemDetail)
def get_item(item_id: int, db: Session = Depends(get_db), user=Depends(get_optional_user)):
	saved = SavedItemsTracker(db, user).is_saved(item_id)
	return ItemService(db).item_detail(item_id, saved=saved)

@router.post("", response_model=ItemOut, status_code=201)
def create_item(
	request: Request,
	payload: ItemCreate,
	db: Session = Depends(get_db),
	user=Depends(get_current_user),
):
	item = ItemService(db).create_item(payload, user)
	log_event("listing_created", item_id=item.id, owner=user.email, request_id=request_id(request))
	return item

@router.put("/{item_id}", response_model=ItemOut)
def update_item(
	item_id: int,
	payload: ItemUpdate,
	db: Session = Depends(get_db),
	user=Depends(get_current_user),
):
	return ItemService(db).update_item(item_id, payload, user)

@router.delete("/{item_id}")
def delete_item(
	request: Request,
	item_id: int,
	db: Session = Depends(get_db),
	user=Depends(get_current_user),
):
	ItemService(db).delete_item(item_id, user)
	log_event("listing_deleted", item_id=item_id, actor=user.email, request_id=request_id(request))
	return {"status": "OK", "message": "Deleted"}

@router.post("/{item_id}/contact", response_model=ContactResponse, status_code=202)
def contact_seller(
	item_id: int,
	payload: ContactRequest,
	background_tasks: BackgroundTasks,
	db: Session = Depends(get_db),
	session_factory=Depends(get_session_factory),
	user=Depends(get_current_user),
):
	service = ItemService(db)
	item = service.get_item(item_id)
	if item.user_id == user.id:
		raise HTTPException(status_code=400, detail="You cannot message yourself about your own listing")
	background_tasks.add_task(send_seller_message, session_factory, item.id, user.id, payload.message)
	return {"status": "OK", "queued": True, "contact": service.seller_contact(item)["contact"]}
