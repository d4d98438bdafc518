from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from campus_market.core.config import settings
from campus_market.db.session import get_db
from campus_market.db.models import User

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
security = HTTPBearer(auto_error=False)

def _normalize_password(password: str) -> str:
	# bcrypt only considers the first 72 bytes; truncate consistently to avoid errors.
	raw = password.encode("utf-8")
	if len(raw) <= 72:
		return password
	return raw[:72].decode("utf-8", errors="ignore")

def hash_password(password: str) -> str:
	return pwd_context.hash(_normalize_password(password))

def verify_password(password: str, password_hash: str) -> bool:
	return pwd_context.verify(_normalize_password(password), password_hash)

def _create_token(subject: str, token_type: str, expires_delta: Optional[timedelta]) -> str:
	now = datetime.utcnow()
	payload = {
		"sub": subject,
		"type": token_type,  # "access" or "refresh"
		"iat": int(now.timestamp()),
	}
	if expires_delta and expires_delta.total_seconds() > 0:
		payload["exp"] = int((now + expires_delta).timestamp())
	return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALG)

def create_access_token(email: str) -> str:
	expires = settings.ACCESS_TOKEN_EXPIRES_MIN
	delta = None if expires <= 0 else timedelta(minutes=expires)
	return _create_token(email, "access", delta)

def create_refresh_token(email: str) -> str:
	expires = settings.REFRESH_TOKEN_EXPIRES_DAYS
	delta = None if expires <= 0 else timedelta(days=expires)
	return _create_token(email, "refresh", delta)

def decode_token(token: str) -> dict:
	return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])

def _user_from_token(token: str, db: Session) -> User:
	try:
		payload = decode_token(token)
	except JWTError:
		raise HTTPException(status_code=401, detail="Invalid or expired token")
	if payload.get("type") != "access":
		raise HTTPException(status_code=401, detail="Invalid token type")
	email = payload.get("sub")
	if not email:
		raise HTTPException(status_code=401, detail="Invalid token")

	user = db.query(User).filter(User.email == email).first()
	if not user:
		raise HTTPException(status_code=401, detail="User not found")
	return user

def get_current_user(
	creds: HTTPAuthorizationCredentials | None = Depends(security),
	db: Session = Depends(get_db),
) -> User:
	if not creds:
		raise HTTPException(
			status_code=401,
			detail="Please log in to continue",
			headers={"WWW-Authenticate": "Bearer"},
		)
	return _user_from_token(creds.credentials, db)

def get_optional_user(
	creds: HTTPAuthorizationCredentials | None = Depends(security),
	db: Session = Depends(get_db),
) -> User | None:
	if not creds:
		return None
	return _user_from_token(creds.credentials, db)

def is_super_admin(user: User) -> bool:
	if not settings.SUPER_ADMIN_EMAIL:
		return False
	return user.email.lower() == settings.SUPER_ADMIN_EMAIL.lower()

def is_admin(user: User | None) -> bool:
	if user is None:
		return False
	return user.role == "admin" or is_super_admin(user)

def require_admin(user: User = Depends(get_current_user)) -> User:
	if not is_admin(user):
		raise HTTPException(status_code=403, detail="Forbidden")
	return user
