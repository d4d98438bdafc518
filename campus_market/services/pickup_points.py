from typing import List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from campus_market.core.display import distance_km, map_link, parse_coordinates
from campus_market.core.unicode_utils import LIKE_ESCAPE, contains_pattern
from campus_market.db.models import PickupPoint, Profile, User


def find_pickup_points(
	db: Session,
	user: Optional[User] = None,
	item_location: Optional[str] = None,
	origin: Optional[Tuple[float, float]] = None,
	limit: int = 3,
) -> List[dict]:
	"""
	Safe meeting places near the viewer's campus, or else near the item.

	`origin` is a best-effort browser position; when present, points with
	usable coordinates come first, nearest first.
	"""
	campus = ""
	if user is not None:
		profile = db.get(Profile, user.id)
		if profile and profile.university:
			campus = profile.university.strip()

	query = db.query(PickupPoint)
	if campus:
		pattern = contains_pattern(campus)
		query = query.filter(or_(
			func.lower(PickupPoint.campus).like(pattern, escape=LIKE_ESCAPE),
			func.lower(PickupPoint.location).like(pattern, escape=LIKE_ESCAPE),
		))
	elif item_location and item_location.strip():
		query = query.filter(
			func.lower(PickupPoint.location).like(contains_pattern(item_location.strip()), escape=LIKE_ESCAPE)
		)
	points = query.order_by(PickupPoint.id.asc()).all()

	results = []
	for point in points:
		coords = parse_coordinates(point.coordinates)
		results.append({
			"id": point.id,
			"name": point.name,
			"location": point.location,
			"description": point.description,
			"coordinates": point.coordinates,
			"campus": point.campus,
			"map_url": map_link(point.name, point.location, point.coordinates if coords else None),
			"distance_km": round(distance_km(origin, coords), 2) if origin and coords else None,
		})
	if origin:
		results.sort(key=lambda p: (p["distance_km"] is None, p["distance_km"] or 0.0))
	return results[:limit]
