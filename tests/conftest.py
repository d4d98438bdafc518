import os
from datetime import datetime
from decimal import Decimal

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SUPER_ADMIN_PASSWORD", "")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker

from campus_market.core.config import settings
from campus_market.db.base import Base
from campus_market.db.models import Item, User
from campus_market.db.seed import DEMO_ITEMS, seed_pickup_points
from campus_market.db.session import configure_sqlite, get_db, get_session_factory
from campus_market.main import create_app

NOW = datetime(2026, 10, 18, 12, 0, 0)
PASSWORD = "secret123"


@pytest.fixture
def engine(tmp_path):
	engine = create_engine(
		f"sqlite:///{tmp_path / 'test.db'}",
		connect_args={"check_same_thread": False},
	)
	configure_sqlite(engine)

	@event.listens_for(engine, "connect")
	def _wal(dbapi_connection, connection_record):
		# readers must not block the background history writer
		dbapi_connection.execute("PRAGMA journal_mode=WAL")

	Base.metadata.create_all(bind=engine)
	yield engine
	engine.dispose()


@pytest.fixture
def session_factory(engine):
	return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
	session = session_factory()
	yield session
	session.close()


@pytest.fixture
def client(session_factory):
	app = create_app(init_db=False)

	def _get_db():
		session = session_factory()
		try:
			yield session
		finally:
			session.close()

	app.dependency_overrides[get_db] = _get_db
	app.dependency_overrides[get_session_factory] = lambda: session_factory
	with TestClient(app) as c:
		yield c


def register(client, email, display_name="Test User", university=None, phone=None):
	payload = {"email": email, "password": PASSWORD, "display_name": display_name}
	if university is not None:
		payload["university"] = university
	if phone is not None:
		payload["phone"] = phone
	res = client.post("/auth/register", json=payload)
	assert res.status_code == 201, res.text
	return res.json()["id"]


def login(client, email):
	res = client.post("/auth/login", json={"email": email, "password": PASSWORD})
	assert res.status_code == 200, res.text
	return {"Authorization": f"Bearer {res.json()['access_token']}"}


@pytest.fixture
def seller(client):
	user_id = register(client, "seller@uni.edu", display_name="Sam Seller", phone="+254 (712) 345-678")
	return {"id": user_id, "email": "seller@uni.edu", "headers": login(client, "seller@uni.edu")}


@pytest.fixture
def buyer(client):
	user_id = register(client, "buyer@uni.edu", display_name="Bea Buyer")
	return {"id": user_id, "email": "buyer@uni.edu", "headers": login(client, "buyer@uni.edu")}


@pytest.fixture
def admin(client, db):
	user_id = register(client, "moderator@uni.edu", display_name="Mod")
	user = db.get(User, user_id)
	user.role = "admin"
	db.commit()
	return {"id": user_id, "email": "moderator@uni.edu", "headers": login(client, "moderator@uni.edu")}


@pytest.fixture
def catalog(db, seller):
	"""The eight demo listings, each with a fixed age relative to NOW."""
	items = []
	for title, price, category, location, age in DEMO_ITEMS:
		item = Item(
			title=title,
			price=Decimal(price),
			category=category,
			description=f"{title} in good condition.",
			location=location,
			user_id=seller["id"],
			created_at=NOW - age,
		)
		db.add(item)
		items.append(item)
	db.flush()
	ids = {item.title: item.id for item in items}
	db.commit()
	return ids


@pytest.fixture
def pickup_points(db):
	return seed_pickup_points(db)


def add_item(db, owner_id, title, price="10", category="Electronics", location="Library", created_at=None):
	item = Item(
		title=title,
		price=Decimal(price),
		category=category,
		description="desc",
		location=location,
		user_id=owner_id,
		created_at=created_at or NOW,
	)
	db.add(item)
	db.flush()
	item_id = item.id
	db.commit()
	return item_id


def count_rows(db, table):
	# end any open read transaction so the count sees committed writes
	db.commit()
	return db.execute(text(f"SELECT COUNT(*) FROM {table}")).scalar()


@pytest.fixture(autouse=True)
def _no_smtp(monkeypatch):
	monkeypatch.setattr(settings, "SMTP_HOST", "")
	monkeypatch.setattr(settings, "SMTP_FROM", "")
