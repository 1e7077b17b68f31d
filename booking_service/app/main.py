import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import booking_engine, Base
from shared.helpers.exception_handler import setup_exception_handlers
from shared.models import users
from shared.wrappers.response_wrapper import JsonResponseMiddleware

from .models import masters, bookings, financials
from .router.masters import customers_router, hotels_router, services_router
from .router.bookings import bookings_router, payments_router, expenses_router
from .router.financials import exchange_rates_router, reports_router, dashboard_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Booking Service API")

# Create all tables
Base.metadata.create_all(bind=booking_engine)

origins = [origin.strip()
           for origin in settings.CORS_ORIGINS.split(",") if origin.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(JsonResponseMiddleware)

setup_exception_handlers(app)

# Include routers
app.include_router(customers_router.router)
app.include_router(hotels_router.router)
app.include_router(services_router.router)
app.include_router(exchange_rates_router.router)
app.include_router(bookings_router.router)
app.include_router(payments_router.router)
app.include_router(expenses_router.router)
app.include_router(reports_router.router)
app.include_router(dashboard_router.router)


@app.get("/api/health")
def health():
    return {"status": "ok"}
