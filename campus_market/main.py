from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from campus_market.core.config import settings
from campus_market.core.logging import request_id_middleware, log_event
from campus_market.core.errors import (
	MarketError, validation_exception_handler, http_exception_handler, market_exception_handler,
)
from campus_market.db.session import engine, SessionLocal
from campus_market.db.base import Base
from campus_market.db import models  # noqa: F401  (register tables)
from campus_market.db.seed import ensure_super_admin, seed_demo_items, seed_pickup_points

from campus_market.routers.auth import router as auth_router
from campus_market.routers.items import router as items_router
from campus_market.routers.saved import router as saved_router
from campus_market.routers.searches import router as searches_router
from campus_market.routers.profiles import router as profiles_router
from campus_market.routers.admin import router as admin_router
from campus_market.routers.feed import router as feed_router


def init_database(session_factory=SessionLocal, bind=engine) -> None:
	Base.metadata.create_all(bind=bind)
	db = session_factory()
	try:
		seed_pickup_points(db)
		ensure_super_admin(db, settings.SUPER_ADMIN_EMAIL, settings.SUPER_ADMIN_PASSWORD)
		if settings.SEED_DEMO_DATA:
			count = seed_demo_items(db)
			log_event("demo_items_seeded", count=count)
	finally:
		db.close()

def create_app(init_db: bool = True) -> FastAPI:
	app = FastAPI(title=settings.APP_NAME)

	if init_db:
		init_database()

	# Middleware
	app.middleware("http")(request_id_middleware)
	app.add_middleware(
		CORSMiddleware,
		allow_origins=settings.ALLOW_ORIGINS,
		allow_credentials=True,
		allow_methods=["*"],
		allow_headers=["*"],
	)

	# Consistent error envelope
	app.add_exception_handler(RequestValidationError, validation_exception_handler)
	app.add_exception_handler(StarletteHTTPException, http_exception_handler)
	app.add_exception_handler(MarketError, market_exception_handler)

	# Routers
	app.include_router(auth_router)
	app.include_router(items_router)
	app.include_router(saved_router)
	app.include_router(searches_router)
	app.include_router(profiles_router)
	app.include_router(admin_router)
	app.include_router(feed_router)

	@app.get("/health")
	def health():
		return {"status": "OK"}

	return app

app = create_app()
