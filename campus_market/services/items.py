import base64
import logging
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campus_market.core.display import contact_links, format_price, format_relative_time
from campus_market.core.emailer import send_email
from campus_market.core.errors import NotFoundError, PermissionDenied, StoreUnavailable
from campus_market.core.logging import log_event
from campus_market.core.security import is_admin
from campus_market.db.models import Item, Profile, User
from campus_market.schemas.items import ItemCreate, ItemUpdate
from campus_market.services.feed import item_feed
from campus_market.services.moderation import delete_item


def item_card(item: Item, now: Optional[datetime] = None) -> dict:
	return {
		"id": item.id,
		"title": item.title,
		"price": item.price,
		"price_label": format_price(item.price),
		"category": item.category,
		"location": item.location,
		"image_url": item.image_url,
		"created_at": item.created_at,
		"posted": format_relative_time(item.created_at, now),
	}


def to_data_url(content: bytes, content_type: str) -> str:
	encoded = base64.b64encode(content).decode("ascii")
	return f"data:{content_type};base64,{encoded}"


class ItemService:
	def __init__(self, db: Session):
		self.db = db

	def get_item(self, item_id: int) -> Item:
		item = self.db.get(Item, item_id)
		if item is None:
			raise NotFoundError("Item not found")
		return item

	def _check_can_modify(self, item: Item, user: User) -> None:
		if item.user_id != user.id and not is_admin(user):
			raise PermissionDenied("Only the seller or an administrator can change this item")

	def create_item(self, payload: ItemCreate, user: User) -> Item:
		item = Item(**payload.model_dump(), user_id=user.id)
		try:
			self.db.add(item)
			self.db.commit()
		except SQLAlchemyError as exc:
			self.db.rollback()
			log_event("item_create_failed", level=logging.ERROR, user_id=user.id, error=str(exc))
			raise StoreUnavailable("Failed to create item") from exc
		self.db.refresh(item)
		log_event("item_created", item_id=item.id, user_id=user.id)
		item_feed.publish("item_created", item_card(item))
		return item

	def update_item(self, item_id: int, payload: ItemUpdate, user: User) -> Item:
		item = self.get_item(item_id)
		self._check_can_modify(item, user)
		for key, value in payload.model_dump(exclude_unset=True).items():
			if value is None and key != "image_url":
				continue
			setattr(item, key, value)
		try:
			self.db.commit()
		except SQLAlchemyError as exc:
			self.db.rollback()
			log_event("item_update_failed", level=logging.ERROR, item_id=item_id, actor_id=user.id, error=str(exc))
			raise StoreUnavailable("Failed to update item") from exc
		self.db.refresh(item)
		log_event("item_updated", item_id=item.id, actor_id=user.id)
		return item

	def delete_item(self, item_id: int, user: User) -> None:
		item = self.get_item(item_id)
		self._check_can_modify(item, user)
		delete_item(self.db, item_id)

	def seller_contact(self, item: Item) -> dict:
		seller = self.db.get(User, item.user_id)
		profile = self.db.get(Profile, item.user_id)
		if seller is None:
			return {"id": item.user_id, "name": "Unknown seller", "contact": contact_links(None, None)}
		return {
			"id": seller.id,
			"name": profile.display_name if profile else seller.email.split("@")[0],
			"contact": contact_links(seller.email, profile.phone if profile else None, subject=item.title),
		}

	def item_detail(self, item_id: int, saved: bool = False) -> dict:
		item = self.get_item(item_id)
		detail = {
			"id": item.id,
			"title": item.title,
			"price": item.price,
			"category": item.category,
			"description": item.description,
			"location": item.location,
			"image_url": item.image_url,
			"user_id": item.user_id,
			"created_at": item.created_at,
			"price_label": format_price(item.price),
			"posted": format_relative_time(item.created_at),
			"seller": self.seller_contact(item),
			"is_saved": saved,
		}
		return detail

	def my_listings(self, user: User):
		return (
			self.db.query(Item)
			.filter(Item.user_id == user.id)
			.order_by(Item.created_at.desc(), Item.id.desc())
			.all()
		)


def send_seller_message(session_factory: Callable[[], Session], item_id: int, sender_id: int, message: str) -> bool:
	"""Email a buyer's message to the seller. Runs as a background task."""
	db = session_factory()
	try:
		item = db.get(Item, item_id)
		sender = db.get(User, sender_id)
		if item is None or sender is None:
			log_event("seller_message_skipped", level=logging.WARNING, item_id=item_id, sender_id=sender_id)
			return False
		seller = db.get(User, item.user_id)
		sender_profile = db.get(Profile, sender_id)
		sender_name = sender_profile.display_name if sender_profile else sender.email
		error = send_email(
			seller.email,
			f"Question about your listing: {item.title}",
			f"{sender_name} wrote about \"{item.title}\":\n\n{message}\n\nReply to {sender.email}.",
			reply_to=sender.email,
		)
		if error:
			log_event("seller_message_failed", level=logging.WARNING, item_id=item_id, error=error)
			return False
		log_event("seller_message_sent", item_id=item_id, sender_id=sender_id)
		return True
	except SQLAlchemyError as exc:
		log_event("seller_message_failed", level=logging.WARNING, item_id=item_id, error=str(exc))
		return False
	finally:
		db.close()
