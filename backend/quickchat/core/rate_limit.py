# quickchat/core/rate_limit.py

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from quickchat.core.config import AUTH_RATE_LIMIT, RATE_LIMIT_ENABLED

# Initialize limiter
limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)

# Applied to signup and login
AUTH_LIMIT = AUTH_RATE_LIMIT


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Same {success, message} envelope as every other failure."""
    return JSONResponse(
        status_code=429,
        content={"success": False, "message": f"Too many requests: {exc.detail}"},
    )
