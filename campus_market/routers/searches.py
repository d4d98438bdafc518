from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from campus_market.db.session import get_db
from campus_market.core.security import get_current_user, get_optional_user
from campus_market.schemas.profiles import SearchEntryOut
from campus_market.services.items import item_card
from campus_market.services.recommendations import recommend_items
from campus_market.services.search_history import clear_history, recent_searches

router = APIRouter(tags=["searches"])

@router.get("/searches/recent", response_model=list[SearchEntryOut])
def list_recent_searches(
	limit: int = Query(5, ge=1, le=50),
	db: Session = Depends(get_db),
	user=Depends(get_current_user),
):
	return recent_searches(db, user.id, limit=limit)

@router.delete("/searches")
def delete_search_history(db: Session = Depends(get_db), user=Depends(get_current_user)):
	return {"status": "OK", "deleted": clear_history(db, user.id)}

@router.get("/recommendations")
def recommendations(db: Session = Depends(get_db), user=Depends(get_optional_user)):
	return [item_card(item) for item in recommend_items(db, user)]
