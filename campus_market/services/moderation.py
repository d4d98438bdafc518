import logging
from decimal import Decimal
from typing import Dict, List

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from campus_market.core.errors import NotFoundError, StoreUnavailable
from campus_market.core.logging import log_event
from campus_market.db.models import CATEGORIES, Item, SavedItem, User


def list_all_items(db: Session) -> List[Item]:
	return db.query(Item).order_by(Item.created_at.desc(), Item.id.desc()).all()


def list_users(db: Session) -> List[User]:
	return db.query(User).options(joinedload(User.profile)).order_by(User.created_at.asc(), User.id.asc()).all()


def _remove_saved_refs(db: Session, item_id: int) -> int:
	return db.query(SavedItem).filter(SavedItem.item_id == item_id).delete(synchronize_session=False)


def delete_item(db: Session, item_id: int) -> None:
	"""
	Remove an item and the saved-item rows pointing at it.

	The saved-item cleanup runs in a savepoint; if it fails the failure is
	logged and the item row is still deleted.
	"""
	item = db.get(Item, item_id)
	if item is None:
		raise NotFoundError("Item not found")

	try:
		with db.begin_nested():
			removed = _remove_saved_refs(db, item_id)
	except SQLAlchemyError as exc:
		log_event("saved_items_cleanup_failed", level=logging.WARNING, item_id=item_id, error=str(exc))
		removed = 0

	try:
		db.delete(item)
		db.commit()
	except SQLAlchemyError as exc:
		db.rollback()
		log_event("item_delete_failed", level=logging.ERROR, item_id=item_id, error=str(exc))
		raise StoreUnavailable("Failed to delete item") from exc
	log_event("item_deleted", item_id=item_id, saved_refs_removed=removed)


def marketplace_stats(db: Session) -> Dict:
	per_category = dict(db.query(Item.category, func.count(Item.id)).group_by(Item.category).all())
	average = db.query(func.avg(Item.price)).scalar()
	return {
		"total_items": db.query(func.count(Item.id)).scalar() or 0,
		"total_users": db.query(func.count(User.id)).scalar() or 0,
		"items_per_category": {name: per_category.get(name, 0) for name in CATEGORIES},
		"average_price": Decimal(str(average)).quantize(Decimal("0.01")) if average is not None else None,
	}
