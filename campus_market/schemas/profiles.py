from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ProfileOut(BaseModel):
	id: int
	email: str
	display_name: str
	phone: Optional[str] = None
	university: Optional[str] = None
	role: str
	is_admin: bool
	created_at: Optional[datetime] = None


class ProfileUpdate(BaseModel):
	display_name: Optional[str] = Field(None, min_length=1, max_length=100)
	phone: Optional[str] = Field(None, max_length=32)
	university: Optional[str] = Field(None, max_length=120)


class UserOut(BaseModel):
	id: int
	email: str
	display_name: Optional[str] = None
	role: str
	created_at: Optional[datetime] = None


class PickupPointOut(BaseModel):
	id: int
	name: str
	location: str
	description: Optional[str] = None
	coordinates: Optional[str] = None
	campus: Optional[str] = None
	map_url: str
	distance_km: Optional[float] = None


class SearchEntryOut(BaseModel):
	search_query: str
	created_at: datetime

	class Config:
		from_attributes = True
