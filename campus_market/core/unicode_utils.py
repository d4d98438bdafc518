"""Text normalization helpers for search terms."""

import unicodedata
from typing import Iterable, List, Optional

LIKE_ESCAPE = "!"


def fold_case(text: Optional[str]) -> Optional[str]:
	"""NFC + lowercase over the full Unicode range. Registered as SQLite's `lower`."""
	if text is None:
		return None
	return unicodedata.normalize("NFC", text).lower()


def normalize_for_search(text: str) -> str:
	"""
	Normalize text for case-insensitive search (NFC + trim + lowercase).

	Args:
		text: Input text

	Returns:
		Normalized text for search
	"""
	return fold_case(text.strip())


def escape_like(value: str) -> str:
	"""Escape LIKE wildcards so user input only matches literally."""
	return (
		value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
		.replace("%", LIKE_ESCAPE + "%")
		.replace("_", LIKE_ESCAPE + "_")
	)


def contains_pattern(value: str) -> str:
	return f"%{escape_like(normalize_for_search(value))}%"


def split_keywords(queries: Iterable[str]) -> List[str]:
	"""
	Split stored search queries into unique keywords, keeping first-seen order.

	Args:
		queries: Normalized search queries, most recent first

	Returns:
		Keywords with empty fragments removed
	"""
	seen = set()
	keywords = []
	for query in queries:
		for word in normalize_for_search(query).split():
			if word in seen:
				continue
			seen.add(word)
			keywords.append(word)
	return keywords
