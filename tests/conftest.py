import os

# Must be set before app.database builds its engine
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.database import Base, get_db
from app.services.catalog_store import AddonStore, CategoryStore, PlanStore


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
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
def category_store(db):
    return CategoryStore(db)


@pytest.fixture
def plan_store(db):
    return PlanStore(db)


@pytest.fixture
def addon_store(db):
    return AddonStore(db)


@pytest.fixture
def internet(category_store):
    return category_store.create({"name": "Internet", "ts_flag": "true", "ts_percent": "5"})


@pytest.fixture
def basic_plan():
    return {
        "name": "Basic",
        "min_cost": "10",
        "max_cost": "50",
        "tier1_term": "12mo",
        "tier1_cost": "29.99",
        "tier1_sku": "BASIC-12",
    }


@pytest.fixture
def client(session_factory):
    from main import app as api

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    api.dependency_overrides[get_db] = override_get_db
    with TestClient(api) as test_client:
        yield test_client
    api.dependency_overrides.clear()
