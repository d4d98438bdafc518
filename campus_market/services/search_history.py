import logging
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campus_market.core.logging import log_event
from campus_market.core.unicode_utils import normalize_for_search
from campus_market.db.models import SearchHistoryEntry


def should_record(user_id: Optional[int], query: Optional[str]) -> bool:
	return user_id is not None and bool(query and query.strip())


def record_search(session_factory: Callable[[], Session], user_id: Optional[int], query: Optional[str]) -> bool:
	"""
	Append one normalized search to the user's history.

	Runs after the response has been sent, so it owns its session and never
	raises: failures are logged and dropped.
	"""
	if not should_record(user_id, query):
		return False
	db = session_factory()
	try:
		db.add(SearchHistoryEntry(user_id=user_id, search_query=normalize_for_search(query)))
		db.commit()
		return True
	except SQLAlchemyError as exc:
		db.rollback()
		log_event("search_history_failed", level=logging.WARNING, user_id=user_id, error=str(exc))
		return False
	finally:
		db.close()


def recent_searches(db: Session, user_id: int, limit: int = 5) -> List[SearchHistoryEntry]:
	return (
		db.query(SearchHistoryEntry)
		.filter(SearchHistoryEntry.user_id == user_id)
		.order_by(SearchHistoryEntry.created_at.desc(), SearchHistoryEntry.id.desc())
		.limit(limit)
		.all()
	)


def clear_history(db: Session, user_id: int) -> int:
	count = db.query(SearchHistoryEntry).filter(SearchHistoryEntry.user_id == user_id).delete(synchronize_session=False)
	db.commit()
	return count
