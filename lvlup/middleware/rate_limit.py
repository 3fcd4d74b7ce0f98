from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request, Response
import redis
from lvlup.config import settings
from lvlup.utils.logger import get_logger

logger = get_logger(__name__)

# Redis connection for rate limiting, in-memory storage when unavailable
redis_client = None
if settings.REDIS_HOST:
    try:
        redis_client = redis.Redis(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            decode_responses=True,
            retry_on_timeout=True,
            socket_connect_timeout=5,
            socket_timeout=5
        )
        redis_client.ping()
        logger.info(f"Rate limiting Redis connected: {settings.REDIS_HOST}:{settings.REDIS_PORT}")
    except redis.RedisError as e:
        logger.warning(f"Rate limiting Redis connection failed: {e}. Using in-memory fallback.")
        redis_client = None

def get_user_id_or_ip(request: Request):
    """
    Rate-limit key: the authenticated user when known, else the client IP.
    """
    user_id = request.headers.get("X-User-ID") or getattr(request.state, 'user_id', None)
    if user_id:
        return f"user:{user_id}"
    return f"ip:{get_remote_address(request)}"

limiter = Limiter(
    key_func=get_user_id_or_ip,
    storage_uri=f"redis://{settings.REDIS_HOST}:{settings.REDIS_PORT}" if redis_client else "memory://",
    default_limits=[settings.RATE_LIMIT_DEFAULT]
)

RATE_LIMITS = {
    # Habit completions and other writes
    "api_write": "120/hour",
    # Reads
    "api_read": "600/hour",
    # Outbound email
    "suggestion": "3/minute;20/day",
}

def get_rate_limit_for_endpoint(endpoint: str) -> str:
    """Get rate limit configuration for specific endpoint."""
    return RATE_LIMITS.get(endpoint, "100/hour")

async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """
    Rate limit exceeded handler with a Retry-After hint.
    """
    return Response(
        content=f"Rate limit exceeded: {exc.detail}. Please try again later.",
        status_code=429,
        headers={"Retry-After": "60"}
    )

def rate_limit_api_write(func):
    """Rate limit for write API endpoints."""
    return limiter.limit(get_rate_limit_for_endpoint("api_write"))(func)

def rate_limit_suggestion(func):
    """Rate limit for endpoints that send email."""
    return limiter.limit(get_rate_limit_for_endpoint("suggestion"))(func)
