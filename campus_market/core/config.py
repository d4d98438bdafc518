import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
	APP_NAME = os.getenv("APP_NAME", "Campus Market API")
	DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./market.db")

	JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret-change-me")
	JWT_ALG = "HS256"

	ACCESS_TOKEN_EXPIRES_MIN = int(os.getenv("ACCESS_TOKEN_EXPIRES_MIN", "30"))
	REFRESH_TOKEN_EXPIRES_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRES_DAYS", "14"))

	SUPER_ADMIN_EMAIL = os.getenv("SUPER_ADMIN_EMAIL", "admin@kuzamarket.com")
	SUPER_ADMIN_PASSWORD = os.getenv("SUPER_ADMIN_PASSWORD", "")

	ALLOW_ORIGINS = [o.strip() for o in os.getenv("ALLOW_ORIGINS", "*").split(",") if o.strip()]

	SEED_DEMO_DATA = os.getenv("SEED_DEMO_DATA", "false").lower() == "true"

	RECOMMENDATION_LIMIT = int(os.getenv("RECOMMENDATION_LIMIT", "6"))
	SEARCH_HISTORY_DEPTH = int(os.getenv("SEARCH_HISTORY_DEPTH", "5"))
	PICKUP_POINT_LIMIT = int(os.getenv("PICKUP_POINT_LIMIT", "3"))
	MAX_IMAGE_BYTES = int(os.getenv("MAX_IMAGE_BYTES", str(5 * 1024 * 1024)))

	SMTP_HOST = os.getenv("SMTP_HOST", "")
	SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
	SMTP_USER = os.getenv("SMTP_USER", "")
	SMTP_PASSWORD = os.getenv("SMTP_PASSWORD", "")
	SMTP_FROM = os.getenv("SMTP_FROM", "")
	SMTP_USE_TLS = os.getenv("SMTP_USE_TLS", "true").lower() == "true"

settings = Settings()
