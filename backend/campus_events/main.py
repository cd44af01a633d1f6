"""FastAPI application entry point."""
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from campus_events.config import settings
from campus_events.database import Base, engine
from campus_events.exceptions import CampusEventsError, StoreError

# Import routers
from campus_events.routers import users, societies, events, rsvps, checkins, reminders

# Import all models so Base.metadata knows about them
import campus_events.models  # noqa: F401

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Campus Events",
    description="Society events with RSVP capacity, waitlist promotion and QR check-in",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(societies.router, prefix="/api/societies", tags=["Societies"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(rsvps.router, prefix="/api/events", tags=["RSVPs"])
app.include_router(reminders.router, prefix="/api/events", tags=["Reminders"])
app.include_router(checkins.router, prefix="/api", tags=["Check-ins"])


@app.exception_handler(CampusEventsError)
async def handle_campus_events_error(request: Request, exc: CampusEventsError):
    """Render domain errors as a result body the UI can show verbatim."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.error_code},
    )


@app.exception_handler(StoreError)
async def handle_store_error(request: Request, exc: StoreError):
    logger.exception("Storage failure on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=503,
        content={"detail": "Storage is temporarily unavailable, please retry", "error": "store_error"},
    )


@app.on_event("startup")
def on_startup():
    """Configure logging and create tables on startup (for SQLite dev mode)."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
