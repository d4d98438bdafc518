from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from campus_market.db.models import CATEGORIES, ALL_CATEGORIES

DEFAULT_MIN_PRICE = Decimal("0")
DEFAULT_MAX_PRICE = Decimal("1000")


def _check_category(value: str, allow_all: bool = False) -> str:
	allowed = CATEGORIES + ((ALL_CATEGORIES,) if allow_all else ())
	for name in allowed:
		if value.strip().lower() == name.lower():
			return name
	raise ValueError(f"Unknown category: {value}")


class SortKey(str, Enum):
	newest = "newest"
	oldest = "oldest"
	price_asc = "price_asc"
	price_desc = "price_desc"
	relevance = "relevance"


class ItemSearch(BaseModel):
	term: str = Field("", max_length=200)
	category: str = ALL_CATEGORIES
	min_price: Decimal = Field(DEFAULT_MIN_PRICE, ge=0)
	max_price: Decimal = Field(DEFAULT_MAX_PRICE, ge=0)
	sort: SortKey = SortKey.newest
	limit: int = Field(50, ge=1, le=200)
	offset: int = Field(0, ge=0)

	@field_validator("term")
	@classmethod
	def strip_term(cls, v):
		return v.strip()

	@field_validator("category")
	@classmethod
	def known_category(cls, v):
		return _check_category(v, allow_all=True)

	@property
	def is_empty_range(self) -> bool:
		return self.min_price > self.max_price


class ItemCreate(BaseModel):
	title: str = Field(min_length=2, max_length=120)
	price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
	category: str
	description: str = Field(min_length=1, max_length=5000)
	location: str = Field(min_length=1, max_length=200)
	image_url: Optional[str] = None

	@field_validator("category")
	@classmethod
	def known_category(cls, v):
		return _check_category(v)


class ItemUpdate(BaseModel):
	title: Optional[str] = Field(None, min_length=2, max_length=120)
	price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
	category: Optional[str] = None
	description: Optional[str] = Field(None, min_length=1, max_length=5000)
	location: Optional[str] = Field(None, min_length=1, max_length=200)
	image_url: Optional[str] = None

	@field_validator("category")
	@classmethod
	def known_category(cls, v):
		if v is None:
			return v
		return _check_category(v)


class ItemOut(BaseModel):
	id: int
	title: str
	price: Decimal
	category: str
	description: str
	location: str
	image_url: Optional[str] = None
	user_id: int
	created_at: datetime

	class Config:
		from_attributes = True


class ContactLinks(BaseModel):
	email: Optional[str] = None
	whatsapp: Optional[str] = None


class SellerOut(BaseModel):
	id: int
	name: str
	contact: ContactLinks


class ItemDetail(ItemOut):
	price_label: str
	posted: str
	seller: Optional[SellerOut] = None
	is_saved: bool = False


class ContactRequest(BaseModel):
	message: str = Field(min_length=1, max_length=2000)


class ContactResponse(BaseModel):
	status: str
	queued: bool
	contact: ContactLinks


class ImagePreview(BaseModel):
	filename: Optional[str] = None
	content_type: str
	size: int
	data_url: str
