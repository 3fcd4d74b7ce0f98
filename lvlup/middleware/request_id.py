import uuid
from typing import Callable
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from lvlup.utils.logger import set_request_context, clear_request_context, get_logger

logger = get_logger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that generates and manages request IDs for logging correlation.

    This middleware:
    1. Checks for existing X-Correlation-ID or X-Request-ID headers
    2. Generates a new UUID4 if no ID is provided
    3. Stores the request ID in request.state and in the logging context
    4. Adds the request ID to response headers
    """

    async def dispatch(self, request: Request, call_next: Callable):
        request_id = (
            request.headers.get("X-Correlation-ID") or
            request.headers.get("X-Request-ID") or
            str(uuid.uuid4())
        )

        request.state.request_id = request_id
        set_request_context(request_id)

        logger.info(
            f"Request started: {request.method} {request.url.path}",
            request_id=request_id
        )

        try:
            response = await call_next(request)

            response.headers["X-Request-ID"] = request_id

            logger.info(
                f"Request completed: {request.method} {request.url.path} - Status: {response.status_code}",
                request_id=request_id
            )

            return response

        except Exception as e:
            logger.error(
                f"Request failed: {request.method} {request.url.path} - Error: {str(e)}",
                request_id=request_id
            )
            raise
        finally:
            clear_request_context()


def get_request_id(request: Request) -> str:
    """
    Get the current request ID from request state.

    Raises:
        RuntimeError: If called outside of a request context
    """
    if not hasattr(request.state, 'request_id'):
        raise RuntimeError("Request ID not available. Ensure RequestIDMiddleware is configured.")
    return request.state.request_id
