# Middleware package for Lvl'Up API

from .request_id import RequestIDMiddleware, get_request_id
from .rate_limit import limiter, rate_limit_api_write, rate_limit_suggestion

__all__ = [
    "RequestIDMiddleware",
    "get_request_id",
    "limiter",
    "rate_limit_api_write",
    "rate_limit_suggestion"
]
