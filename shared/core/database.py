from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from shared.core.config import BOOKING_DATABASE_URL

Base = declarative_base()

POOL_SIZE = 5
MAX_OVERFLOW = 5

if BOOKING_DATABASE_URL.startswith("sqlite"):
    # In-memory databases live on a single shared connection
    in_memory = BOOKING_DATABASE_URL in ("sqlite://", "sqlite:///:memory:")
    booking_engine = create_engine(
        BOOKING_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool if in_memory else None,
    )
else:
    booking_engine = create_engine(
        BOOKING_DATABASE_URL,
        isolation_level="READ COMMITTED",
        pool_pre_ping=True,
        pool_recycle=300,
        pool_size=POOL_SIZE,          # max idle connections
        max_overflow=MAX_OVERFLOW,    # max temporary extra connections
        pool_timeout=30               # wait time before failing
    )

BookingSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=booking_engine)


# Dependency
def get_booking_db():
    db = BookingSessionLocal()
    try:
        yield db
    finally:
        db.close()
