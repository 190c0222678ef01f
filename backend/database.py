"""Engine and per-request sessions for the transaction store."""

import os
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

# DATABASE_URL wins for a real server; otherwise a local SQLite file (DATABASE_PATH in Docker)
DATABASE_PATH = os.environ.get("DATABASE_PATH", "./db.sqlite3")
SQLALCHEMY_DATABASE_URL = os.environ.get("DATABASE_URL", f"sqlite:///{DATABASE_PATH}")


def connect_args_for(url: str) -> dict:
    # SQLite connections are shared with FastAPI's threadpool
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args=connect_args_for(SQLALCHEMY_DATABASE_URL),
    pool_pre_ping=True,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield a session for one request and always close it."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
