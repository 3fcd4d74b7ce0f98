from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import firebase_admin
from firebase_admin import credentials
from slowapi.errors import RateLimitExceeded
import os

from lvlup.config import settings
from lvlup.database import init_db, get_pool_status
from lvlup.logging_config import configure_logging
from lvlup.middleware.rate_limit import limiter, rate_limit_exceeded_handler
from lvlup.middleware.request_id import RequestIDMiddleware
from lvlup.routers import users, habits, categories, goals, journal, timers, achievements, suggestions
from lvlup.utils.logger import get_logger

# Configure logging first
configure_logging()
logger = get_logger(__name__)


def init_firebase():
    """Initialize the Firebase Admin SDK used to verify ID tokens."""
    if firebase_admin._apps:
        return firebase_admin.get_app()
    firebase_json_path = settings.FIREBASE_SERVICE_ACCOUNT_JSON
    if os.path.exists(firebase_json_path):
        cred = credentials.Certificate(firebase_json_path)
        logger.info("Initialized Firebase Admin with provided service account JSON")
        return firebase_admin.initialize_app(cred)
    # Application Default Credentials from the environment
    logger.warning(f"FIREBASE_SERVICE_ACCOUNT_JSON not found at {firebase_json_path}. Initialized Firebase with default credentials.")
    return firebase_admin.initialize_app()


# Conditional docs configuration
if settings.DEBUG:
    docs_config = {
        "docs_url": "/docs",
        "redoc_url": "/redoc",
        "openapi_url": "/openapi.json"
    }
else:
    docs_config = {
        "docs_url": None,
        "redoc_url": None,
        "openapi_url": None
    }

app = FastAPI(
    title="Lvl'Up API",
    description="Backend API for Lvl'Up: habits, goals, journaling, focus timers and achievements",
    version="1.0.0",
    **docs_config
)

# Set up rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Add Request ID middleware first for proper request tracing
app.add_middleware(RequestIDMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users.router)
app.include_router(habits.router)
app.include_router(categories.router)
app.include_router(goals.router)
app.include_router(journal.router)
app.include_router(timers.router)
app.include_router(achievements.router)
app.include_router(suggestions.router)

@app.on_event("startup")
async def startup_event():
    """Create tables and connect the identity provider in this worker process."""
    init_db()

    if settings.FIREBASE_ENABLED:
        try:
            init_firebase()
        except Exception as e:
            logger.exception(f"Failed to initialize Firebase Admin SDK: {e}")
            raise
    else:
        logger.warning("FIREBASE_ENABLED is false: only X-User-ID authentication will succeed")

    if settings.DEBUG:
        logger.info("Lvl'Up API started in DEBUG mode - Docs available at /docs")
    else:
        logger.info("Lvl'Up API started in PRODUCTION mode - Docs disabled")

@app.get("/")
async def root():
    return {"message": "Lvl'Up API", "version": "1.0.0"}

@app.get("/health")
async def health_check():
    """Health check endpoint for load balancers and monitoring."""
    return {"status": "healthy", "service": "lvlup-api", "database_pool": get_pool_status()}
