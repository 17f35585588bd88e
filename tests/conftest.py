"""
Shared fixtures: in-memory database, API client and users of every role.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("RATE_LIMIT_MAX_CALLS", "10000")

from datetime import datetime, timedelta
from itertools import count

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.auth.deps import get_db
from app.db.session import Base, init_db
from app.main import app
from app.models.rating import Rating
from app.models.store import Store
from app.models.user import User, Role
from app.utils.security import hash_password, create_access_token

PASSWORD = "Secret@123"
BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


# ═══════════════════════════════════════════════════════════
# DATABASE
# ═══════════════════════════════════════════════════════════

@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
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
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# ═══════════════════════════════════════════════════════════
# FACTORIES
# ═══════════════════════════════════════════════════════════

@pytest.fixture(scope="session")
def password_hash():
    """Hashing is slow, so every fixture user shares one hash."""
    return hash_password(PASSWORD)


@pytest.fixture
def make_user(db, password_hash):
    seq = count(1)

    def _make(role: Role = Role.USER, name: str | None = None, email: str | None = None) -> User:
        n = next(seq)
        user = User(
            name=name or f"Fixture Person Number {n:04d}",
            email=email or f"{role.value}{n}@example.com",
            password=password_hash,
            address=f"{n} Main Street",
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_store(db):
    seq = count(1)

    def _make(owner: User, name: str | None = None, created_at: datetime | None = None) -> Store:
        n = next(seq)
        store = Store(
            name=name or f"Store {n}",
            email=f"store{n}@example.com",
            address=f"{n} Market Road",
            owner_id=owner.id,
            created_at=created_at or BASE_TIME + timedelta(minutes=n),
        )
        db.add(store)
        db.commit()
        db.refresh(store)
        return store

    return _make


@pytest.fixture
def make_rating(db):
    def _make(user: User, store: Store, value: int, review: str | None = None,
              created_at: datetime | None = None) -> Rating:
        rating = Rating(
            user_id=user.id,
            store_id=store.id,
            rating=value,
            review=review,
            created_at=created_at or datetime.utcnow(),
        )
        db.add(rating)
        db.commit()
        db.refresh(rating)
        return rating

    return _make


@pytest.fixture
def headers_for():
    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(str(user.id))}"}

    return _headers


@pytest.fixture
def admin(make_user):
    return make_user(Role.ADMIN)


@pytest.fixture
def owner(make_user):
    return make_user(Role.STORE_OWNER)


@pytest.fixture
def other_owner(make_user):
    return make_user(Role.STORE_OWNER)


@pytest.fixture
def user(make_user):
    return make_user(Role.USER)
