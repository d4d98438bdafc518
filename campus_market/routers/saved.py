from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campus_market.db.session import get_db
from campus_market.core.security import get_current_user, get_optional_user
from campus_market.services.items import item_card
from campus_market.services.saved_items import SavedItemsTracker

router = APIRouter(prefix="/saved", tags=["saved"])

@router.get("")
def list_saved(db: Session = Depends(get_db), user=Depends(get_current_user)):
	tracker = SavedItemsTracker(db, user)
	items = tracker.saved_items()
	return {"item_ids": sorted(tracker.saved_ids()), "items": [item_card(item) for item in items]}

@router.get("/{item_id}")
def is_saved(item_id: int, db: Session = Depends(get_db), user=Depends(get_optional_user)):
	return {"item_id": item_id, "saved": SavedItemsTracker(db, user).is_saved(item_id)}

@router.post("/{item_id}/toggle")
def toggle_saved(item_id: int, db: Session = Depends(get_db), user=Depends(get_optional_user)):
	saved = SavedItemsTracker(db, user).toggle(item_id)
	return {
		"item_id": item_id,
		"saved": saved,
		"message": "Item added to your saved items" if saved else "Item removed from your saved items",
	}
