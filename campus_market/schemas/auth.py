from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

class RegisterRequest(BaseModel):
	email: EmailStr
	password: str = Field(min_length=8, max_length=72)
	display_name: str = Field(min_length=1, max_length=100)
	phone: Optional[str] = Field(None, max_length=32)
	university: Optional[str] = Field(None, max_length=120)

	@field_validator("password")
	@classmethod
	def password_complexity(cls, v):
		if not any(c.isalpha() for c in v) or not any(c.isdigit() for c in v):
			raise ValueError("Password must contain at least one letter and one digit")
		return v

class LoginRequest(BaseModel):
	email: EmailStr
	password: str

class TokenResponse(BaseModel):
	access_token: str
	refresh_token: str
	token_type: str = "bearer"

class RefreshRequest(BaseModel):
	refresh_token: str
