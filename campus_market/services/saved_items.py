import logging
from typing import List, Optional, Set

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from campus_market.core.errors import AuthenticationRequired, NotFoundError, StoreUnavailable
from campus_market.core.logging import log_event
from campus_market.db.models import Item, SavedItem, User


class SavedItemsTracker:
	"""
	The set of item ids bookmarked by one user, kept in step with the
	saved_items table. Built per request from an explicit session and user.
	"""

	def __init__(self, db: Session, user: Optional[User]):
		self.db = db
		self.user = user
		self._ids: Optional[Set[int]] = None

	def _require_user(self) -> User:
		if self.user is None:
			raise AuthenticationRequired("Please log in to save items")
		return self.user

	def saved_ids(self) -> Set[int]:
		if self.user is None:
			return set()
		if self._ids is None:
			rows = self.db.query(SavedItem.item_id).filter(SavedItem.user_id == self.user.id).all()
			self._ids = {item_id for (item_id,) in rows}
		return self._ids

	def is_saved(self, item_id: int) -> bool:
		return item_id in self.saved_ids()

	def saved_items(self) -> List[Item]:
		user = self._require_user()
		return (
			self.db.query(Item)
			.join(SavedItem, SavedItem.item_id == Item.id)
			.filter(SavedItem.user_id == user.id)
			.order_by(SavedItem.created_at.desc(), SavedItem.id.desc())
			.all()
		)

	def toggle(self, item_id: int) -> bool:
		"""Flip the saved state of an item and return the new state."""
		user = self._require_user()
		if self.db.get(Item, item_id) is None:
			raise NotFoundError("Item not found")

		ids = self.saved_ids()
		try:
			if item_id in ids:
				self.db.query(SavedItem).filter(
					SavedItem.user_id == user.id, SavedItem.item_id == item_id
				).delete(synchronize_session=False)
				self.db.commit()
				ids.discard(item_id)
				log_event("item_unsaved", user_id=user.id, item_id=item_id)
				return False

			self.db.add(SavedItem(user_id=user.id, item_id=item_id))
			self.db.commit()
		except IntegrityError:
			# Another request saved the same pair first.
			self.db.rollback()
			self._ids = None
			return self.is_saved(item_id)
		except SQLAlchemyError as exc:
			self.db.rollback()
			log_event("saved_item_toggle_failed", level=logging.ERROR, user_id=user.id, item_id=item_id, error=str(exc))
			raise StoreUnavailable("Failed to update saved items") from exc

		ids.add(item_id)
		log_event("item_saved", user_id=user.id, item_id=item_id)
		return True
