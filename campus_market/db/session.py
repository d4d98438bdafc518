from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from campus_market.core.config import settings
from campus_market.core.unicode_utils import fold_case

def configure_sqlite(engine):
	# pysqlite's own transaction handling breaks SAVEPOINT; let SQLAlchemy emit BEGIN.
	@event.listens_for(engine, "connect")
	def _on_connect(dbapi_connection, connection_record):
		dbapi_connection.isolation_level = None
		# built-in lower() only folds ASCII
		dbapi_connection.create_function("lower", 1, fold_case, deterministic=True)
		cursor = dbapi_connection.cursor()
		cursor.execute("PRAGMA foreign_keys=ON")
		cursor.close()

	@event.listens_for(engine, "begin")
	def _on_begin(conn):
		conn.exec_driver_sql("BEGIN")

	return engine

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)
if settings.DATABASE_URL.startswith("sqlite"):
	configure_sqlite(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_db():
	db = SessionLocal()
	try:
		yield db
	finally:
		db.close()

def get_session_factory():
	return SessionLocal
