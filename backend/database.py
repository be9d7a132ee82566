"""Database setup via SQLAlchemy (SQLite by default)."""
import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from backend.config import DATABASE_URL

_connect_args = {}
if DATABASE_URL.startswith("sqlite:///"):
    os.makedirs(os.path.dirname(os.path.abspath(DATABASE_URL[len("sqlite:///"):])), exist_ok=True)
    _connect_args = {"check_same_thread": False}

engine = create_engine(DATABASE_URL, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

class Base(DeclarativeBase):
    pass

def get_db():
    """FastAPI dependency for DB session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db():
    """Create all tables."""
    # Registers the ORM models on Base.metadata
    import backend.models_db  # noqa: F401
    Base.metadata.create_all(bind=engine)
