"""
"Recommended for you": recent search keywords OR the user's campus.

This is keyword OR-filtering, not a relevance model. Items match when
their title or category contains any keyword from the last few searches,
or their location contains the profile's university string.
"""

import logging
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campus_market.core.config import settings
from campus_market.core.logging import log_event
from campus_market.core.unicode_utils import LIKE_ESCAPE, contains_pattern, split_keywords
from campus_market.db.models import Item, Profile, User
from campus_market.services.search_history import recent_searches


def recommendation_filters(keywords: List[str], affiliation: Optional[str]) -> list:
	clauses = []
	for keyword in keywords:
		pattern = contains_pattern(keyword)
		clauses.append(func.lower(Item.title).like(pattern, escape=LIKE_ESCAPE))
		clauses.append(func.lower(Item.category).like(pattern, escape=LIKE_ESCAPE))
	if affiliation and affiliation.strip():
		clauses.append(func.lower(Item.location).like(contains_pattern(affiliation.strip()), escape=LIKE_ESCAPE))
	return clauses


def recommend_items(db: Session, user: Optional[User], limit: Optional[int] = None) -> List[Item]:
	if user is None:
		return []
	limit = limit or settings.RECOMMENDATION_LIMIT
	try:
		searches = recent_searches(db, user.id, limit=settings.SEARCH_HISTORY_DEPTH)
		profile = db.get(Profile, user.id)
		keywords = split_keywords(s.search_query for s in searches)
		clauses = recommendation_filters(keywords, profile.university if profile else None)

		query = db.query(Item)
		if clauses:
			query = query.filter(or_(*clauses))
		return query.order_by(Item.created_at.desc(), Item.id.desc()).limit(limit).all()
	except SQLAlchemyError as exc:
		log_event("recommendations_failed", level=logging.ERROR, user_id=user.id, error=str(exc))
		return []
