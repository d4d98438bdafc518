from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from campus_market.db.session import get_db
from campus_market.db.models import Profile
from campus_market.schemas.items import ItemOut
from campus_market.schemas.profiles import ProfileOut, ProfileUpdate, PickupPointOut
from campus_market.core.config import settings
from campus_market.core.security import get_current_user, get_optional_user, is_admin
from campus_market.services.items import ItemService
from campus_market.services.pickup_points import find_pickup_points

router = APIRouter(tags=["profiles"])

def _profile_out(user) -> dict:
	profile = user.profile
	return {
		"id": user.id,
		"email": user.email,
		"display_name": profile.display_name if profile else user.email.split("@")[0],
		"phone": profile.phone if profile else None,
		"university": profile.university if profile else None,
		"role": user.role,
		"is_admin": is_admin(user),
		"created_at": user.created_at,
	}

@router.get("/profiles/me", response_model=ProfileOut)
def get_me(user=Depends(get_current_user)):
	return _profile_out(user)

@router.put("/profiles/me", response_model=ProfileOut)
def update_me(payload: ProfileUpdate, db: Session = Depends(get_db), user=Depends(get_current_user)):
	profile = db.get(Profile, user.id)
	if profile is None:
		profile = Profile(id=user.id, display_name=user.email.split("@")[0])
		db.add(profile)
	for key, value in payload.model_dump(exclude_unset=True).items():
		if key == "display_name" and not value:
			continue
		setattr(profile, key, value.strip() if isinstance(value, str) else value)
	db.commit()
	db.refresh(user)
	return _profile_out(user)

@router.get("/profiles/me/listings", response_model=list[ItemOut])
def my_listings(db: Session = Depends(get_db), user=Depends(get_current_user)):
	return ItemService(db).my_listings(user)

@router.get("/pickup-points", response_model=list[PickupPointOut])
def pickup_points(
	item_location: Optional[str] = None,
	lat: Optional[float] = Query(None, ge=-90, le=90),
	lng: Optional[float] = Query(None, ge=-180, le=180),
	db: Session = Depends(get_db),
	user=Depends(get_optional_user),
):
	origin = (lat, lng) if lat is not None and lng is not None else None
	return find_pickup_points(
		db,
		user=user,
		item_location=item_location,
		origin=origin,
		limit=settings.PICKUP_POINT_LIMIT,
	)
