from datetime import date, time, timedelta

import pytest
from fakeredis import FakeAsyncRedis
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cinebook.app import create_app
from cinebook.core.auth import CurrentUser
from cinebook.db.base import Base
from cinebook.db.session import getDB_session
from cinebook.models import FoodItem, Movie, Seat, Showtime, User, UserRole, UserSession, utcnow
from cinebook.redis import get_redis
from cinebook.services.seat_layout import generate_seat_grid

USER_TOKEN = "user-token"
OTHER_TOKEN = "other-token"
ADMIN_TOKEN = "admin-token"


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def db_engine(tmp_path):
    """
    Engine on a throwaway SQLite file.
    Function-scoped so it's created in the same event loop as the test.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/test.db", echo=False, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def db_session_factory(db_engine):
    """Factory to create separate sessions, one per simulated request."""
    return async_sessionmaker(
        bind=db_engine,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False
    )


@pytest.fixture
async def db_session(db_session_factory):
    async with db_session_factory() as session:
        yield session


@pytest.fixture
async def redis_client():
    redis = FakeAsyncRedis(decode_responses=True)
    yield redis
    await redis.flushall()
    await redis.aclose()


@pytest.fixture
def regular_user():
    return CurrentUser(id="user-1", role=UserRole.USER)


@pytest.fixture
def other_user():
    return CurrentUser(id="user-2", role=UserRole.USER)


@pytest.fixture
def admin_user():
    return CurrentUser(id="admin-1", role=UserRole.ADMIN)


@pytest.fixture
async def seeded_test_data(db_session_factory):
    """Users with sessions, one movie, one 20 seat showtime (A1-A10, B1-B10) and food items."""
    async with db_session_factory() as session:
        session.add_all([
            User(id="user-1", name="User One", email="one@test.local", role=UserRole.USER),
            User(id="user-2", name="User Two", email="two@test.local", role=UserRole.USER),
            User(id="admin-1", name="Admin", email="admin@test.local", role=UserRole.ADMIN),
        ])
        await session.flush()

        expires_at = utcnow() + timedelta(hours=1)
        session.add_all([
            UserSession(token=USER_TOKEN, user_id="user-1", expires_at=expires_at),
            UserSession(token=OTHER_TOKEN, user_id="user-2", expires_at=expires_at),
            UserSession(token=ADMIN_TOKEN, user_id="admin-1", expires_at=expires_at),
            UserSession(token="expired-token", user_id="user-1", expires_at=utcnow() - timedelta(hours=1)),
        ])

        movie = Movie(
            title="Test Movie",
            description="A test movie for testing",
            duration=120,
            genre="Drama",
            rating="PG",
            release_date=date(2024, 1, 1),
        )
        session.add(movie)
        await session.flush()

        showtime = Showtime(
            movie_id=movie.id,
            show_date=date(2030, 1, 1),
            show_time=time(18, 0),
            screen_number=1,
            total_seats=20,
            available_seats=20,
            price=1200,
        )
        session.add(showtime)
        await session.flush()

        seats = [
            Seat(showtime_id=showtime.id, row=row, seat_number=seat_number, is_booked=False)
            for row, seat_number in generate_seat_grid(20, 10)
        ]
        session.add_all(seats)

        popcorn = FoodItem(name="Popcorn", price=500, category="Snacks", available=True)
        cola = FoodItem(name="Cola", price=300, category="Drinks", available=True)
        sold_out = FoodItem(name="Nachos", price=450, category="Snacks", available=False)
        session.add_all([popcorn, cola, sold_out])
        await session.flush()
        await session.commit()

        yield {
            "movie_id": movie.id,
            "showtime_id": showtime.id,
            "seat_ids": [seat.id for seat in seats],
            "seat_labels": {seat.id: seat.label for seat in seats},
            "popcorn_id": popcorn.id,
            "cola_id": cola.id,
            "sold_out_id": sold_out.id,
        }


@pytest.fixture
async def client(db_session_factory, redis_client):
    app = create_app()

    async def override_db_session():
        async with db_session_factory() as session:
            yield session

    async def override_redis():
        yield redis_client

    app.dependency_overrides[getDB_session] = override_db_session
    app.dependency_overrides[get_redis] = override_redis

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client
