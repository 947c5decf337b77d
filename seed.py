import logging

from database.connection import SessionLocal, engine, Base
from models.room import Room
from models.user import User, UserRole

logger = logging.getLogger("roombooking.seed")

USERS = [
    {"username": "admin", "email": "admin@roombooking.com", "password": "Admin123!", "role": UserRole.ADMIN},
    {"username": "john_doe", "email": "john@example.com", "password": "User123!", "role": UserRole.USER},
    {"username": "jane_smith", "email": "jane@example.com", "password": "User123!", "role": UserRole.USER},
]

ROOMS = [
    {
        "name": "Conference Room A",
        "description": "Large conference room with projector and whiteboard",
        "capacity": 20,
        "location": "1st Floor, East Wing",
        "price_per_hour": 50,
    },
    {
        "name": "Meeting Room B",
        "description": "Small meeting room perfect for team discussions",
        "capacity": 8,
        "location": "2nd Floor, West Wing",
        "price_per_hour": 25,
    },
    {
        "name": "Board Room",
        "description": "Executive board room with video conferencing",
        "capacity": 12,
        "location": "3rd Floor",
        "price_per_hour": 100,
    },
]


def seed_database():
    """Populate empty users and rooms tables, leaving existing data alone"""
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        if db.query(User).first():
            logger.info("Users already exist. Skipping seed.")
        else:
            for info in USERS:
                db.add(User(
                    username=info["username"],
                    email=info["email"],
                    password_hash=User.hash_password(info["password"]),
                    role=info["role"],
                ))
            db.commit()
            logger.info("Seeded %d users", len(USERS))

        if db.query(Room).first():
            logger.info("Rooms already exist. Skipping seed.")
        else:
            for info in ROOMS:
                db.add(Room(is_available=True, **info))
            db.commit()
            logger.info("Seeded %d rooms", len(ROOMS))

    except Exception:
        logger.exception("Seeding failed")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    seed_database()
