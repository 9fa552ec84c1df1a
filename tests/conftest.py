"""
Pytest configuration and fixtures for the test suite.

The app is pointed at an in-memory SQLite database before any app module is
imported; the schema is recreated for every test.
"""

import os
import random
from typing import Callable, Generator, List, Optional, Sequence

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session

# Set test environment before importing app modules
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DATABASE_ECHO"] = "false"
os.environ.setdefault("DEFAULT_PAGE_SIZE", "10")
os.environ.pop("MAX_PAGE_SIZE", None)

from app.db import engine  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Product  # noqa: E402

fake = Faker()


@pytest.fixture(autouse=True)
def reset_schema() -> Generator[None, None, None]:
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session() -> Generator[Session, None, None]:
    with Session(engine) as s:
        yield s


@pytest.fixture
def seed_products(session: Session) -> Callable[..., List[Product]]:
    """Insert products in random order; prices default to 1.0, 2.0, ... count."""

    def _seed(count: int, prices: Optional[Sequence[float]] = None) -> List[Product]:
        prices = list(prices) if prices is not None else [float(i) for i in range(1, count + 1)]
        random.shuffle(prices)
        products = [Product(name=fake.word().title(), price=price) for price in prices]
        session.add_all(products)
        session.commit()
        for product in products:
            session.refresh(product)
        return products

    return _seed
