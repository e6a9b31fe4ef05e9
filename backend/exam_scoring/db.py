from __future__ import annotations
from typing import Iterator, Optional
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker, declarative_base
from .settings import settings


def _make_engine(url: str) -> Engine:
	# SQLite connections are shared with FastAPI's threadpool
	connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
	return create_engine(url, connect_args=connect_args, future=True)


DATABASE_URL = settings.database_url or "sqlite:///./exam_scoring.db"

engine = _make_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
Base = declarative_base()


def init_db(bind: Optional[Engine] = None) -> None:
	"""Create the results table if it does not exist yet."""
	from . import models  # noqa: F401  registers ExamResult on Base.metadata

	Base.metadata.create_all(bind=bind or engine)


def get_db() -> Iterator[Session]:
	"""Storage port for the routers; tests override it with their own session."""
	db = SessionLocal()
	try:
		yield db
	finally:
		db.close()
