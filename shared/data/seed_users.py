import logging
import os

from sqlalchemy.orm import Session

from shared.core.database import BookingSessionLocal, Base, booking_engine
from shared.models.users import Users
from shared.utils.enums import UserRole

logger = logging.getLogger(__name__)

INITIAL_USERS = [
    {
        "name": "Administrator",
        "username": "admin",
        "password": os.getenv("SEED_ADMIN_PASSWORD", "admin"),
        "role": UserRole.administrator,
    },
    {
        "name": "Staff Member",
        "username": "staff",
        "password": os.getenv("SEED_STAFF_PASSWORD", "staff"),
        "role": UserRole.staff,
    },
]


def seed_initial_users(db: Session):
    """Create the admin and staff accounts if they do not exist yet."""
    created = []
    for entry in INITIAL_USERS:
        existing = db.query(Users).filter(
            Users.username == entry["username"]).first()
        if existing:
            logger.info("User %s already exists", entry["username"])
            continue

        user = Users(
            name=entry["name"],
            username=entry["username"],
            role=entry["role"].value,
            is_active=True,
        )
        user.set_password(entry["password"])
        db.add(user)
        created.append(user)

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    for user in created:
        logger.info("Seeded user %s (%s)", user.username, user.role)
    return created


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    # registers every table the users table links to
    import booking_service.app.main  # noqa: F401

    Base.metadata.create_all(bind=booking_engine)
    db = BookingSessionLocal()
    try:
        seed_initial_users(db)
    finally:
        db.close()
