"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from socialeyes.config import settings
from socialeyes.database import Base, engine

# Import routers
from socialeyes.routers import users, groups, events, attendance

# Import all models so Base.metadata knows about them
from socialeyes.models.user import User                            # noqa: F401
from socialeyes.models.group import Group, Membership, Venue       # noqa: F401
from socialeyes.models.event import Event, EventImage              # noqa: F401
from socialeyes.models.attendance import Attendance                # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    logger.info("SocialEyes API started")
    yield
    logger.info("SocialEyes API shut down")


app = FastAPI(
    title="SocialEyes",
    description="Community events: groups host events at venues, members request attendance",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(groups.router, prefix="/api/groups", tags=["Groups"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(attendance.router, prefix="/api/events", tags=["Attendance"])


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
