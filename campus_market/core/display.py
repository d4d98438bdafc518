"""Formatting helpers for item cards, item details and pickup points."""

import math
import re
from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional, Tuple
from urllib.parse import quote, urlencode

MAPS_SEARCH_URL = "https://www.google.com/maps/search/"
WHATSAPP_URL = "https://wa.me/"

_UNITS = (
	("year", 365 * 24 * 3600),
	("month", 30 * 24 * 3600),
	("day", 24 * 3600),
	("hour", 3600),
	("minute", 60),
)


def format_relative_time(moment: datetime, now: Optional[datetime] = None) -> str:
	now = now or datetime.utcnow()
	seconds = int((now - moment).total_seconds())
	future = seconds < 0
	seconds = abs(seconds)
	if seconds < 60:
		return "just now"
	for name, size in _UNITS:
		if seconds >= size:
			count = seconds // size
			label = f"{count} {name}{'' if count == 1 else 's'}"
			return f"in {label}" if future else f"{label} ago"
	return "just now"


def format_price(price: Decimal, currency: str = "KSH") -> str:
	return f"{currency} {Decimal(price):,.2f}"


def map_link(name: str, location: str, coordinates: Optional[str] = None) -> str:
	if coordinates:
		query = coordinates.replace(" ", "")
	else:
		query = f"{name}, {location}"
	return f"{MAPS_SEARCH_URL}?{urlencode({'api': 1, 'query': query}, quote_via=quote)}"


def parse_coordinates(value: Optional[str]) -> Optional[Tuple[float, float]]:
	if not value:
		return None
	parts = value.split(",")
	if len(parts) != 2:
		return None
	try:
		lat, lng = float(parts[0]), float(parts[1])
	except ValueError:
		return None
	if not (-90 <= lat <= 90 and -180 <= lng <= 180):
		return None
	return lat, lng


def distance_km(a: Tuple[float, float], b: Tuple[float, float]) -> float:
	# haversine
	lat1, lng1 = map(math.radians, a)
	lat2, lng2 = map(math.radians, b)
	h = math.sin((lat2 - lat1) / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin((lng2 - lng1) / 2) ** 2
	return 2 * 6371.0 * math.asin(math.sqrt(h))


def contact_links(email: Optional[str], phone: Optional[str], subject: Optional[str] = None) -> Dict[str, Optional[str]]:
	links: Dict[str, Optional[str]] = {"email": None, "whatsapp": None}
	if email:
		mailto = f"mailto:{email}"
		if subject:
			mailto += f"?{urlencode({'subject': subject}, quote_via=quote)}"
		links["email"] = mailto
	digits = re.sub(r"[^0-9]", "", phone or "")
	if digits:
		links["whatsapp"] = f"{WHATSAPP_URL}{digits}"
	return links
