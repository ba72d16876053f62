from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from preinscription.platform.schemas import ErrorOut


def error_response(
    code: str,
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
) -> JSONResponse:
    """
    Single source of truth for ALL error bodies: ``{"error": <code>}``.
    """
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(ErrorOut(error=code)),
    )
