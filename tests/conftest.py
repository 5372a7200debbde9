"""Pytest fixtures for API tests."""

import os
from collections.abc import AsyncGenerator, Callable, Generator
from datetime import datetime, timezone

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db
from app.core.scoring import score_reviews
from app.core.security import create_identity_token
from app.db import models  # noqa: F401  # Imported for side effects
from app.db.base import Base
from app.db.models import ProductAnalysis, User
from app.main import create_app
from app.utils.cache import cache_backend


@pytest.fixture(scope="session")
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db_session(db_engine) -> Generator[Session, None, None]:
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=db_engine, expire_on_commit=False
    )
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        for table in reversed(Base.metadata.sorted_tables):
            db.execute(table.delete())
        db.commit()
        db.close()


@pytest.fixture(autouse=True)
def clear_cache() -> Generator[None, None, None]:
    cache_backend.clear()
    try:
        yield
    finally:
        cache_backend.clear()


@pytest.fixture()
def client(db_session: Session) -> Generator[TestClient, None, None]:
    app = create_app()

    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture()
async def async_client(db_session: Session) -> AsyncGenerator[httpx.AsyncClient, None]:
    app = create_app()

    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture()
def auth_headers() -> Callable[..., dict[str, str]]:
    """Build an Authorization header for an identity-provider user id."""

    def _headers(user_id: str, **claims) -> dict[str, str]:
        token = create_identity_token(user_id, **claims)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    def _make(user_id: str = "user_1", email: str | None = None) -> User:
        user = User(id=user_id, email=email or f"{user_id}@example.com", name="Test Shopper")
        db_session.add(user)
        db_session.commit()
        return user

    return _make


@pytest.fixture()
def make_analysis(db_session: Session) -> Callable[..., ProductAnalysis]:
    """Insert an analysis directly, scoring ``reviews_text`` like the API does."""

    def _make(
        user_id: str,
        *,
        product_name: str = "Widget",
        reviews_text: str = "It arrived on time and does the job.",
        source: str = "manual",
        review_count: int = 0,
        created_at: datetime | None = None,
    ) -> ProductAnalysis:
        result = score_reviews(reviews_text)
        analysis = ProductAnalysis(
            user_id=user_id,
            source=source,
            product_name=product_name,
            reviews_text=reviews_text,
            review_count=review_count,
            score10=result.score10,
            sentiment=result.sentiment,
            summary=result.summary,
            keywords=result.keywords,
            aspect_scores={},
            created_at=created_at or datetime.now(timezone.utc),
        )
        db_session.add(analysis)
        db_session.commit()
        return analysis

    return _make
