import os

os.environ.setdefault("JWT_SECRET_KEY", "test_secret_key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from decimal import Decimal
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from app.db.base import Base
from app.db.models import User, Product


DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine():
    engine = create_async_engine(DATABASE_URL, echo=False, future=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(engine):
    AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
async def user(db_session):
    user = User(
        email="shopper@example.com",
        name="Test Shopper",
        wallet_money=Decimal("100.00"),
        address="221B Baker Street, London NW1 6XE"
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def products(db_session):
    items = [
        Product(id="P1", name="Basketball", category="Sports", cost=Decimal("10.00"), rating=4.5),
        Product(id="P2", name="Tennis Ball", category="Sports", cost=Decimal("5.00"), rating=4.0),
        Product(id="P3", name="Yoga Mat", category="Fitness", cost=Decimal("25.00"), rating=3.5),
    ]
    db_session.add_all(items)
    await db_session.commit()
    return {product.id: product for product in items}
