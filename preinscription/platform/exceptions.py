from fastapi import FastAPI, Request, status

from preinscription.platform.logger import get_logger
from preinscription.platform.response import error_response

logger = get_logger(__name__)


class APIError(Exception):
    """A failure with a stable, machine-readable code for the caller."""

    def __init__(self, code: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        super().__init__(code)
        self.code = code
        self.status_code = status_code


class DatabaseNotConfiguredError(RuntimeError):
    pass


def add_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        return error_response(exc.code, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
        return error_response("internal_error")
