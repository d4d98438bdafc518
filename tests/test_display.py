from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from campus_market.core.display import (
	contact_links, distance_km, format_price, format_relative_time, map_link, parse_coordinates,
)
from campus_market.core.unicode_utils import contains_pattern, escape_like, fold_case, normalize_for_search, split_keywords

NOW = datetime(2026, 10, 18, 12, 0, 0)


@pytest.mark.parametrize("delta,expected", [
	(timedelta(seconds=30), "just now"),
	(timedelta(minutes=1), "1 minute ago"),
	(timedelta(hours=5), "5 hours ago"),
	(timedelta(days=1, hours=3), "1 day ago"),
	(timedelta(days=45), "1 month ago"),
	(timedelta(days=800), "2 years ago"),
	(-timedelta(hours=2), "in 2 hours"),
])
def test_relative_time(delta, expected):
	assert format_relative_time(NOW - delta, NOW) == expected


def test_price_label():
	assert format_price(Decimal("1234.5")) == "KSH 1,234.50"
	assert format_price(Decimal("0")) == "KSH 0.00"


def test_map_link_prefers_coordinates():
	assert map_link("Library", "Main Campus", "-1.28, 36.81") == "https://www.google.com/maps/search/?api=1&query=-1.28%2C36.81"
	assert map_link("Student Union", "North Campus") == (
		"https://www.google.com/maps/search/?api=1&query=Student%20Union%2C%20North%20Campus"
	)


@pytest.mark.parametrize("value,expected", [
	("-1.2795,36.8167", (-1.2795, 36.8167)),
	(" 10 , 20 ", (10.0, 20.0)),
	("", None),
	(None, None),
	("north", None),
	("1,2,3", None),
	("95,10", None),
])
def test_parse_coordinates(value, expected):
	assert parse_coordinates(value) == expected


def test_distance():
	assert distance_km((0.0, 0.0), (0.0, 0.0)) == 0
	assert round(distance_km((0.0, 0.0), (0.0, 1.0))) == 111


def test_contact_links():
	assert contact_links("a@b.edu", "+1 (123) 456-7890") == {
		"email": "mailto:a@b.edu",
		"whatsapp": "https://wa.me/11234567890",
	}
	assert contact_links(None, "call me") == {"email": None, "whatsapp": None}


def test_search_text_helpers():
	assert normalize_for_search("  Café LAMP ") == "café lamp"
	assert escape_like("50%_off!") == "50!%!_off!!"
	assert contains_pattern("Lamp") == "%lamp%"
	assert split_keywords(["desk lamp", "Lamp  shade", ""]) == ["desk", "lamp", "shade"]


def test_fold_case_handles_non_ascii_and_null():
	assert fold_case("ÉCONOMIE") == "économie"
	assert fold_case(None) is None
