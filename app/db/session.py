"""Database session and engine management."""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.config import settings

_database_url = str(settings.DATABASE_URL)

if _database_url.startswith("sqlite"):
    engine = create_engine(_database_url, connect_args={"check_same_thread": False})
else:
    engine = create_engine(
        _database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        pool_recycle=3600,  # Recycle connections after 1 hour
    )

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False,  # Keep objects usable after commit
)

