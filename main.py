import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app import models  # noqa: F401  registers every table on Base.metadata
from app.core.config import Base, engine, settings
from app.core.exceptions import register_exception_handlers
from app.core.logger import configure_logging
from app.api.routers import (
    account,
    auth,
    chat,
    companion,
    insights,
    journal,
    moods,
    profile,
    stats,
)

configure_logging()
logger = logging.getLogger("mindmate")

# =====================================================================
# CREATE APP
# =====================================================================

app = FastAPI(
    title=settings.APP_NAME,
    debug=settings.DEBUG,
    description="Mood tracking, journaling and an AI wellness companion",
    version="1.0.0",
)

# =====================================================================
# CORS MIDDLEWARE - MUST BE FIRST!
# =====================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

logger.info(f"CORS allowed origins: {settings.CORS_ORIGINS}")

register_exception_handlers(app)

# =====================================================================
# DATABASE INITIALIZATION
# =====================================================================

Base.metadata.create_all(bind=engine)

# =====================================================================
# HEALTH CHECK (before routers)
# =====================================================================


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "companion_configured": bool(settings.GEMINI_API_KEY)}


# =====================================================================
# ROUTES
# =====================================================================

app.include_router(auth.router)
app.include_router(profile.router)
app.include_router(moods.router)
app.include_router(journal.router)
app.include_router(chat.router)
app.include_router(insights.router)
app.include_router(stats.router)
app.include_router(companion.router)
app.include_router(account.router)

logger.info("All routers included")

# =====================================================================
# ROOT ENDPOINT
# =====================================================================


@app.get("/")
def root():
    """API root endpoint."""
    return {
        "message": "Welcome to MindMate API",
        "version": "1.0.0",
        "docs": "/docs",
        "endpoints": {
            "auth": "/auth",
            "profile": "/profile",
            "moods": "/moods",
            "journal": "/journal",
            "chat": "/chat",
            "insights": "/insights",
            "stats": "/stats",
            "companion": "/companion",
            "account": "/account",
        },
    }
