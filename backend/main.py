"""EV ChargeHub: FastAPI backend for charging station discovery, booking and registration."""
import logging
import os
import subprocess
import sys

from fastapi import FastAPI

from utils.config import CORS_ORIGINS, LOG_LEVEL, PORT, RUN_MIGRATIONS_ON_STARTUP, SEED_DEMO_STATIONS

# Domain events (SLOT_BOOKED, BUNK_APPROVED, ...) are logged at INFO.
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
from fastapi.middleware.cors import CORSMiddleware

from db import SessionLocal
from api.auth import router as auth_router
from api.bookings import router as bookings_router
from api.dashboard import router as dashboard_router
from api.errors import register_error_handlers
from api.profile import router as profile_router
from api.registrations import router as registrations_router
from api.routes import router
from api.stations import router as stations_router
from booking_core.seed import seed_demo_stations
from booking_core.transaction import retry_transient

LOG = logging.getLogger(__name__)

app = FastAPI(
    title="EV ChargeHub",
    description="EV charging station discovery, slot booking and station registration backend",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# API routes under /api
app.include_router(router, prefix="/api")
app.include_router(auth_router, prefix="/api")
app.include_router(profile_router, prefix="/api")
app.include_router(stations_router, prefix="/api")
app.include_router(bookings_router, prefix="/api")
app.include_router(registrations_router, prefix="/api")
app.include_router(dashboard_router, prefix="/api")


@app.on_event("startup")
def startup() -> None:
    """Run DB migrations and seed demo stations."""
    if RUN_MIGRATIONS_ON_STARTUP:
        backend_dir = os.path.dirname(os.path.abspath(__file__))
        result = subprocess.run(
            [sys.executable, "-m", "alembic", "upgrade", "head"],
            cwd=backend_dir,
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            raise RuntimeError(f"Alembic upgrade failed: {result.stderr or result.stdout}")
    if SEED_DEMO_STATIONS:
        retry_transient(_seed_stations_if_empty)


def _seed_stations_if_empty() -> int:
    db = SessionLocal()
    try:
        return seed_demo_stations(db)
    finally:
        db.close()


@app.get("/")
def root() -> dict:
    """Root redirect/info."""
    return {"service": "ev-chargehub", "docs": "/docs", "health": "/api/health"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=PORT)
