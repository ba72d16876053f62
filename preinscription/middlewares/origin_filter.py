# preinscription/middlewares/origin_filter.py
from typing import Iterable, Optional

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware

from preinscription.platform.logger import get_logger
from preinscription.platform.response import error_response

logger = get_logger(__name__)


def is_origin_allowed(origin: Optional[str], allowed: Iterable[str]) -> bool:
    # Server-to-server calls and curl send no Origin header
    if not origin:
        return True
    allowed = list(allowed)
    # Permissive when no allow-list is configured
    if not allowed:
        return True
    return origin in allowed


class OriginFilterMiddleware(BaseHTTPMiddleware):
    """Rejects requests from origins outside the allow-list before routing."""

    def __init__(self, app, allowed_origins: Iterable[str] = ()):
        super().__init__(app)
        self.allowed_origins = list(allowed_origins)

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")

        if not is_origin_allowed(origin, self.allowed_origins):
            logger.warning(f"CORS blocked: {origin} {request.method} {request.url.path}")
            return error_response("origin_not_allowed", status_code=status.HTTP_403_FORBIDDEN)

        return await call_next(request)
