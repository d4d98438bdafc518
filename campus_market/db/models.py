from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, UniqueConstraint, Numeric
from sqlalchemy.orm import relationship
from datetime import datetime
from campus_market.db.base import Base

CATEGORIES = (
	"Electronics",
	"Textbooks",
	"Furniture",
	"Clothing",
	"School Supplies",
	"Dorm Essentials",
)
ALL_CATEGORIES = "All Categories"

class User(Base):
	__tablename__ = "users"

	id = Column(Integer, primary_key=True, index=True)
	email = Column(String, unique=True, index=True, nullable=False)
	password_hash = Column(String, nullable=False)
	role = Column(String, nullable=False, default="user")  # "user" or "admin"
	created_at = Column(DateTime, default=datetime.utcnow)

	profile = relationship("Profile", back_populates="user", uselist=False, cascade="all, delete-orphan")
	items = relationship("Item", back_populates="owner")

class Profile(Base):
	__tablename__ = "profiles"

	id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
	display_name = Column(String, nullable=False)
	phone = Column(String, nullable=True)
	university = Column(String, nullable=True)
	created_at = Column(DateTime, default=datetime.utcnow)

	user = relationship("User", back_populates="profile")

class Item(Base):
	__tablename__ = "items"

	id = Column(Integer, primary_key=True, index=True)
	title = Column(String, nullable=False, index=True)
	price = Column(Numeric(10, 2), nullable=False)
	category = Column(String, nullable=False, index=True)
	description = Column(Text, nullable=False, default="")
	location = Column(String, nullable=False, default="")
	image_url = Column(Text, nullable=True)
	user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
	created_at = Column(DateTime, default=datetime.utcnow, index=True)

	owner = relationship("User", back_populates="items")

class SavedItem(Base):
	__tablename__ = "saved_items"
	__table_args__ = (UniqueConstraint("user_id", "item_id", name="uq_saved_user_item"),)

	id = Column(Integer, primary_key=True, index=True)
	user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
	item_id = Column(Integer, ForeignKey("items.id", ondelete="CASCADE"), nullable=False, index=True)
	created_at = Column(DateTime, default=datetime.utcnow)

class SearchHistoryEntry(Base):
	__tablename__ = "user_searches"

	id = Column(Integer, primary_key=True, index=True)
	user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
	search_query = Column(Text, nullable=False)
	created_at = Column(DateTime, default=datetime.utcnow, index=True)

class PickupPoint(Base):
	__tablename__ = "pickup_points"

	id = Column(Integer, primary_key=True, index=True)
	name = Column(String, nullable=False)
	location = Column(String, nullable=False)
	description = Column(Text, nullable=True)
	coordinates = Column(String, nullable=True)  # "lat,lng"
	campus = Column(String, nullable=True)
