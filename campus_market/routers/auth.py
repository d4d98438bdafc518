from fastapi import APIRouter, Depends, HTTPException, Request
from jose import JWTError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_market.db.session import get_db
from campus_market.db.models import User, Profile
from campus_market.schemas.auth import RegisterRequest, LoginRequest, TokenResponse, RefreshRequest
from campus_market.core.security import (
	hash_password, verify_password,
	create_access_token, create_refresh_token, decode_token,
)
from campus_market.core.logging import log_event, request_id

router = APIRouter(prefix="/auth", tags=["auth"])

def _optional_text(value: str | None) -> str | None:
	if value is None:
		return None
	value = value.strip()
	return value or None

@router.post("/register", status_code=201)
def register(request: Request, payload: RegisterRequest, db: Session = Depends(get_db)):
	email = payload.email.lower()
	exists = db.query(User).filter(User.email == email).first()
	if exists:
		raise HTTPException(status_code=409, detail="Email already registered")

	user = User(email=email, password_hash=hash_password(payload.password), role="user")
	user.profile = Profile(
		display_name=payload.display_name.strip(),
		phone=_optional_text(payload.phone),
		university=_optional_text(payload.university),
	)
	db.add(user)
	try:
		db.commit()
	except IntegrityError:
		db.rollback()
		raise HTTPException(status_code=409, detail="Email already registered")

	log_event("user_registered", email=email, request_id=request_id(request))
	return {"status": "OK", "id": user.id, "message": f"Registered: {email}"}

@router.post("/login", response_model=TokenResponse)
def login(request: Request, payload: LoginRequest, db: Session = Depends(get_db)):
	email = payload.email.lower()
	user = db.query(User).filter(User.email == email).first()

	if not user or not verify_password(payload.password, user.password_hash):
		log_event("login_failed", email=email, request_id=request_id(request))
		raise HTTPException(status_code=401, detail="Invalid credentials")

	access = create_access_token(email=email)
	refresh = create_refresh_token(email=email)

	log_event("user_login", email=email, request_id=request_id(request))
	return {"access_token": access, "refresh_token": refresh, "token_type": "bearer"}

@router.post("/refresh", response_model=TokenResponse)
def refresh(payload: RefreshRequest, db: Session = Depends(get_db)):
	try:
		p = decode_token(payload.refresh_token)
	except JWTError:
		raise HTTPException(status_code=401, detail="Invalid or expired refresh token")
	email = p.get("sub")
	if p.get("type") != "refresh" or not email:
		raise HTTPException(status_code=401, detail="Invalid refresh token")
	if not db.query(User).filter(User.email == email).first():
		raise HTTPException(status_code=401, detail="User not found")

	return {
		"access_token": create_access_token(email=email),
		"refresh_token": create_refresh_token(email=email),
		"token_type": "bearer",
	}
