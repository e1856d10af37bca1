import asyncio
import logging
from datetime import date, time, timedelta

from cinebook.db.session import async_session as AsyncSessionLocal, init_db
from cinebook.models import FoodItem, Movie, Seat, Showtime, User, UserRole, UserSession, utcnow
from cinebook.services.seat_layout import generate_seat_grid

logger = logging.getLogger(__name__)

ADMIN_TOKEN = "admin-dev-token"
USER_TOKEN = "user-dev-token"


async def seed():
    async with AsyncSessionLocal() as session:

        # ------------------------------------------------------------------------------------
        # 1. Users and long lived dev sessions
        # ------------------------------------------------------------------------------------
        admin = User(id="admin-1", name="Admin", email="admin@cinebook.local", role=UserRole.ADMIN)
        user = User(id="user-1", name="Test User", email="user@cinebook.local", role=UserRole.USER)
        session.add_all([admin, user])
        await session.flush()

        expires_at = utcnow() + timedelta(days=30)
        session.add_all([
            UserSession(token=ADMIN_TOKEN, user_id=admin.id, expires_at=expires_at),
            UserSession(token=USER_TOKEN, user_id=user.id, expires_at=expires_at),
        ])

        # ------------------------------------------------------------------------------------
        # 2. Movies
        # ------------------------------------------------------------------------------------
        movie1 = Movie(
            title="Inception",
            description="A thief who steals corporate secrets through dream-sharing technology.",
            duration=148,
            genre="Sci-Fi",
            rating="PG-13",
            release_date=date(2010, 7, 16),
        )
        movie2 = Movie(
            title="Interstellar",
            description="A team of explorers travel through a wormhole in space.",
            duration=169,
            genre="Sci-Fi",
            rating="PG-13",
            release_date=date(2014, 11, 7),
        )
        movie3 = Movie(
            title="Coco",
            description="A boy is transported to the Land of the Dead.",
            duration=105,
            genre="Animation",
            rating="PG",
            release_date=date(2017, 11, 22),
        )
        session.add_all([movie1, movie2, movie3])
        await session.flush()

        # ------------------------------------------------------------------------------------
        # 3. Showtimes with their seat grids
        # ------------------------------------------------------------------------------------
        today = date.today()
        showtimes = [
            (Showtime(movie_id=movie1.id, show_date=today, show_time=time(18, 30), screen_number=1,
                      total_seats=50, available_seats=50, price=1200), 10),
            (Showtime(movie_id=movie2.id, show_date=today, show_time=time(21, 0), screen_number=2,
                      total_seats=40, available_seats=40, price=1500), 8),
            (Showtime(movie_id=movie3.id, show_date=today + timedelta(days=1), show_time=time(14, 0),
                      screen_number=1, total_seats=30, available_seats=30, price=900), 10),
        ]
        session.add_all([showtime for showtime, _ in showtimes])
        await session.flush()

        for showtime, seats_per_row in showtimes:
            session.add_all([
                Seat(showtime_id=showtime.id, row=row, seat_number=seat_number, is_booked=False)
                for row, seat_number in generate_seat_grid(showtime.total_seats, seats_per_row)
            ])

        # ------------------------------------------------------------------------------------
        # 4. Concessions
        # ------------------------------------------------------------------------------------
        session.add_all([
            FoodItem(name="Popcorn (Large)", price=600, category="Snacks", available=True),
            FoodItem(name="Nachos", price=550, category="Snacks", available=True),
            FoodItem(name="Cola", price=350, category="Drinks", available=True),
            FoodItem(name="Iced Tea", price=300, category="Drinks", available=False),
            FoodItem(name="Popcorn + Cola Combo", price=850, category="Combos", available=True),
        ])

        await session.commit()
        logger.info("Seeded %s movies, %s showtimes and dev tokens %s / %s",
                    3, len(showtimes), ADMIN_TOKEN, USER_TOKEN)


async def main():
    logging.basicConfig(level=logging.INFO)
    await init_db()
    await seed()


if __name__ == "__main__":
    asyncio.run(main())
