from decimal import Decimal

import pytest

from campus_market.db.seed import DEMO_ITEMS
from campus_market.schemas.items import ItemSearch, SortKey
from campus_market.services.search import search_items

from conftest import add_item


def _titles(res):
	assert res.status_code == 200, res.text
	return [item["title"] for item in res.json()["items"]]


def _expected(term="", category=None, lo=Decimal("0"), hi=Decimal("1000")):
	return {
		title
		for title, price, cat, _, _ in DEMO_ITEMS
		if term.lower() in title.lower()
		and (category is None or cat == category)
		and lo <= Decimal(price) <= hi
	}


def test_calc_textbooks_price_ascending(client, catalog):
	res = client.get("/items/search", params={
		"term": "calc",
		"category": "Textbooks",
		"min_price": 0,
		"max_price": 100,
		"sort": "price_asc",
	})
	assert _titles(res) == ["Calculus Textbook"]
	assert res.json()["items"][0]["price"] == 45.0


def test_empty_term_matches_everything(client, catalog):
	res = client.get("/items/search")
	assert set(_titles(res)) == {title for title, *_ in DEMO_ITEMS}
	assert res.json()["total"] == len(DEMO_ITEMS)


def test_term_is_case_insensitive(client, catalog):
	assert _titles(client.get("/items/search", params={"term": "TEXTBOOK"})) == [
		"Physics Textbooks (Set)",
		"Calculus Textbook",
	]


@pytest.mark.parametrize("term,lo,hi", [
	("", 0, 1000),
	("e", 10, 60),
	("book", 0, 50),
	("o", 20, 900),
])
def test_all_categories_only_applies_term_and_price(client, catalog, term, lo, hi):
	res = client.get("/items/search", params={
		"term": term, "category": "All Categories", "min_price": lo, "max_price": hi,
	})
	assert set(_titles(res)) == _expected(term, None, Decimal(lo), Decimal(hi))


@pytest.mark.parametrize("lo,hi", [(0, 20), (15.5, 15.5), (25, 75), (50, 1000), (900, 1000)])
def test_price_bounds_are_inclusive(client, catalog, lo, hi):
	res = client.get("/items/search", params={"min_price": lo, "max_price": hi})
	assert res.status_code == 200
	for item in res.json()["items"]:
		assert lo <= item["price"] <= hi
	assert set(_titles(res)) == _expected(lo=Decimal(str(lo)), hi=Decimal(str(hi)))


def test_inverted_price_range_is_empty(client, catalog):
	res = client.get("/items/search", params={"min_price": 100, "max_price": 10})
	assert res.status_code == 200
	body = res.json()
	assert body["items"] == []
	assert body["total"] == 0
	assert body["message"] == "No items found matching your search."


def test_category_filter(client, catalog):
	res = client.get("/items/search", params={"category": "Electronics", "sort": "price_desc"})
	assert _titles(res) == ["MacBook Pro 2019", "Mini Fridge", "Wireless Headphones"]


def test_sort_orders(client, catalog):
	newest = _titles(client.get("/items/search", params={"sort": "newest"}))
	assert newest[:3] == ["Physics Textbooks (Set)", "Mini Fridge", "Wireless Headphones"]
	assert newest[-1] == "Basketball"

	assert _titles(client.get("/items/search", params={"sort": "relevance"})) == newest
	assert _titles(client.get("/items/search", params={"sort": "oldest"})) == list(reversed(newest))

	cheapest = _titles(client.get("/items/search", params={"sort": "price_asc"}))
	assert cheapest[0] == "Basketball"
	assert cheapest[-1] == "MacBook Pro 2019"


def test_unknown_sort_key_is_rejected(client, catalog):
	res = client.get("/items/search", params={"sort": "cheapest"})
	assert res.status_code == 422
	assert res.json()["error"]["message"] == "Validation error"


def test_unknown_category_is_rejected(client, catalog):
	res = client.get("/items/search", params={"category": "Boats"})
	assert res.status_code == 422


def test_negative_price_is_rejected(client, catalog):
	res = client.get("/items/search", params={"min_price": -1})
	assert res.status_code == 422


def test_wildcards_in_term_match_literally(client, db, seller):
	add_item(db, seller["id"], "100% cotton hoodie", category="Clothing")
	add_item(db, seller["id"], "Plain hoodie", category="Clothing")
	assert _titles(client.get("/items/search", params={"term": "100%"})) == ["100% cotton hoodie"]
	assert _titles(client.get("/items/search", params={"term": "_"})) == []


def test_category_match_is_normalized():
	assert ItemSearch(category="textbooks").category == "Textbooks"
	assert ItemSearch(category="all categories").category == "All Categories"


def test_paging(db, catalog):
	first = search_items(db, ItemSearch(sort=SortKey.price_asc, limit=3))
	second = search_items(db, ItemSearch(sort=SortKey.price_asc, limit=3, offset=3))
	assert [i.title for i in first] == ["Basketball", "Desk Lamp", "Coffee Maker"]
	assert [i.title for i in second] == ["Calculus Textbook", "Wireless Headphones", "Physics Textbooks (Set)"]


@pytest.mark.parametrize("term", ["économie", "ÉCONOMIE", " Économie "])
def test_non_ascii_term_is_case_insensitive(client, db, seller, term):
	add_item(db, seller["id"], "ÉCONOMIE Textbook", category="Textbooks")
	add_item(db, seller["id"], "Economics Notes", category="Textbooks")
	assert _titles(client.get("/items/search", params={"term": term})) == ["ÉCONOMIE Textbook"]


def test_decomposed_title_matches_composed_term(client, db, seller):
	title = "Cafe\u0301 Table"
	add_item(db, seller["id"], title, category="Furniture")
	assert _titles(client.get("/items/search", params={"term": "CAF\u00c9"})) == [title]
	assert _titles(client.get("/items/search", params={"term": "café t"})) == [title]


def test_total_counts_past_the_page(client, catalog):
	body = client.get("/items/search", params={"limit": 3, "offset": 6}).json()
	assert body["count"] == 2
	assert body["total"] == len(DEMO_ITEMS)

	body = client.get("/items/search", params={"min_price": 100, "max_price": 10}).json()
	assert body["total"] == 0
