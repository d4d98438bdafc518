from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from campus_market.core.security import hash_password
from campus_market.db.models import Item, PickupPoint, Profile, User

PICKUP_POINTS = [
	{
		"name": "Main Library Entrance",
		"location": "Library",
		"description": "Well lit, staffed front desk, CCTV coverage.",
		"coordinates": "-1.2795,36.8167",
		"campus": "University of Nairobi",
	},
	{
		"name": "Student Union Lobby",
		"location": "Student Union",
		"description": "Busy during the day, security desk by the doors.",
		"coordinates": "-1.2801,36.8155",
		"campus": "University of Nairobi",
	},
	{
		"name": "Campus Security Office",
		"location": "North Dorm",
		"description": "Meet outside the security office.",
		"coordinates": None,
		"campus": "Kenyatta University",
	},
	{
		"name": "Science Building Cafe",
		"location": "Science Building",
		"description": None,
		"coordinates": "-1.1804,36.9345",
		"campus": "Kenyatta University",
	},
]

DEMO_ITEMS = [
	("MacBook Pro 2019", "899.99", "Electronics", "North Dorm", timedelta(days=2)),
	("Calculus Textbook", "45", "Textbooks", "Library", timedelta(hours=5)),
	("Desk Lamp", "15.50", "Dorm Essentials", "West Campus", timedelta(days=1)),
	("Basketball", "12.99", "School Supplies", "Gym", timedelta(days=3)),
	("Mini Fridge", "75", "Electronics", "East Dorm", timedelta(hours=2)),
	("Physics Textbooks (Set)", "65", "Textbooks", "Science Building", timedelta(hours=1)),
	("Wireless Headphones", "50", "Electronics", "Student Union", timedelta(hours=4)),
	("Coffee Maker", "25", "Dorm Essentials", "South Dorm", timedelta(hours=6)),
]


def seed_pickup_points(db: Session, points: Iterable[dict] = PICKUP_POINTS) -> int:
	existing = {row.name for row in db.query(PickupPoint).all()}
	count = 0
	for point in points:
		if point["name"] in existing:
			continue
		db.add(PickupPoint(**point))
		count += 1
	if count:
		db.commit()
	return count


def ensure_super_admin(db: Session, email: str, password: str) -> Optional[User]:
	if not email or not password:
		return None
	email = email.lower()
	user = db.query(User).filter(User.email == email).first()
	if not user:
		user = User(email=email, password_hash=hash_password(password), role="admin")
		user.profile = Profile(display_name="Administrator")
		db.add(user)
	else:
		user.role = "admin"
		user.password_hash = hash_password(password)
	db.commit()
	return user


def seed_demo_items(db: Session, now: Optional[datetime] = None) -> int:
	if db.query(Item).count() > 0:
		return 0
	now = now or datetime.utcnow()
	seller = db.query(User).filter(User.email == "demo.seller@example.com").first()
	if not seller:
		seller = User(email="demo.seller@example.com", password_hash=hash_password("demo-seller-1"), role="user")
		seller.profile = Profile(display_name="Demo Seller", phone="+254 700 000 000", university="University of Nairobi")
		db.add(seller)
		db.flush()
	for title, price, category, location, age in DEMO_ITEMS:
		db.add(Item(
			title=title,
			price=Decimal(price),
			category=category,
			description=f"{title} in good condition.",
			location=location,
			user_id=seller.id,
			created_at=now - age,
		))
	db.commit()
	return len(DEMO_ITEMS)
