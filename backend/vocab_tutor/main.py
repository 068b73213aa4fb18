import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from vocab_tutor.config import configure_logging, get_app_settings
from vocab_tutor.db import get_settings, verify_connection, close_client
from vocab_tutor.routers import lessons_router, review_router

load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    configure_logging()
    settings = get_settings()

    if settings.is_configured():
        if verify_connection():
            logger.info("Connected to Cosmos DB database %s", settings.database_name)
        else:
            logger.error("Failed to connect to Cosmos DB - check configuration")
    else:
        logger.warning("Cosmos DB not configured (COSMOS_ENDPOINT/COSMOS_EMULATOR not set)")

    yield

    # Shutdown
    close_client()
    logger.info("Cosmos DB connection closed")


app = FastAPI(
    title="Vocab Tutor API",
    description="Lesson vocabulary logging and spaced-repetition review",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_app_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(lessons_router)
app.include_router(review_router)


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Vocab Tutor API",
        "version": "1.0.0",
        "endpoints": {
            "health": "/healthz",
            "lessons": "/lessons",
            "lesson_words": "/lessons/{lesson_id}/words",
            "student_words": "/lessons/students/{student_id}/words",
            "due": "/review/due",
            "review": "/review/cards/{card_id}",
            "words": "/review/words",
        },
    }


@app.get("/healthz")
async def healthz():
    """Health check endpoint."""
    return {"status": "healthy"}
