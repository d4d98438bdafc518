"""Item query composition: filter state in, ordered item query out."""

import logging
from typing import List

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from campus_market.core.errors import StoreUnavailable
from campus_market.core.logging import log_event
from campus_market.core.unicode_utils import LIKE_ESCAPE, contains_pattern
from campus_market.db.models import ALL_CATEGORIES, Item
from campus_market.schemas.items import ItemSearch, SortKey

_ORDERINGS = {
	SortKey.newest: (Item.created_at.desc(), Item.id.desc()),
	SortKey.relevance: (Item.created_at.desc(), Item.id.desc()),
	SortKey.oldest: (Item.created_at.asc(), Item.id.asc()),
	SortKey.price_asc: (Item.price.asc(), Item.id.asc()),
	SortKey.price_desc: (Item.price.desc(), Item.id.desc()),
}


def build_item_query(db: Session, spec: ItemSearch) -> Query:
	query = db.query(Item)
	if spec.term:
		query = query.filter(func.lower(Item.title).like(contains_pattern(spec.term), escape=LIKE_ESCAPE))
	if spec.category != ALL_CATEGORIES:
		query = query.filter(Item.category == spec.category)
	query = query.filter(Item.price >= spec.min_price, Item.price <= spec.max_price)
	return query.order_by(*_ORDERINGS[spec.sort])


def search_items(db: Session, spec: ItemSearch) -> List[Item]:
	"""Run one search. An inverted price range short-circuits to no results."""
	if spec.is_empty_range:
		return []
	try:
		return build_item_query(db, spec).offset(spec.offset).limit(spec.limit).all()
	except SQLAlchemyError as exc:
		log_event("item_search_failed", level=logging.ERROR, term=spec.term, error=str(exc))
		raise StoreUnavailable("Could not load items") from exc


def count_items(db: Session, spec: ItemSearch) -> int:
	if spec.is_empty_range:
		return 0
	try:
		return build_item_query(db, spec).order_by(None).count()
	except SQLAlchemyError as exc:
		log_event("item_count_failed", level=logging.ERROR, term=spec.term, error=str(exc))
		raise StoreUnavailable("Could not load items") from exc


def recent_items(db: Session, limit: int = 8) -> List[Item]:
	return db.query(Item).order_by(Item.created_at.desc(), Item.id.desc()).limit(limit).all()
