from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from preinscription.features.signup.schemas.signup import CountOut, SignupIn, SignupOut
from preinscription.features.signup.services.signup import SignupService
from preinscription.features.signup.utils.email import is_valid_email, normalize_email
from preinscription.platform.db.session import get_db
from preinscription.platform.exceptions import APIError
from preinscription.platform.logger import get_logger
from preinscription.platform.schemas import ErrorOut

logger = get_logger(__name__)

router = APIRouter(tags=["Signup"])


async def read_signup(request: Request) -> SignupIn:
    """Parse the body leniently; anything but a JSON object counts as empty."""
    try:
        body = await request.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    return SignupIn.model_validate(body)


async def _count_or_fail(db: AsyncSession, route: str) -> CountOut:
    try:
        total = await SignupService(db).count()
    except Exception as e:
        logger.exception(f"{route} error: {e}")
        raise APIError("count_failed", status.HTTP_500_INTERNAL_SERVER_ERROR)
    return CountOut(count=total)


@router.get(
    "/count",
    response_model=CountOut,
    responses={500: {"model": ErrorOut}},
)
async def get_count(db: AsyncSession = Depends(get_db)):
    return await _count_or_fail(db, "GET /count")


# Alias kept for front-ends that call the API under /api
@router.get(
    "/api/count",
    response_model=CountOut,
    responses={500: {"model": ErrorOut}},
)
async def get_api_count(db: AsyncSession = Depends(get_db)):
    return await _count_or_fail(db, "GET /api/count")


@router.post(
    "/signup",
    response_model=SignupOut,
    responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
async def signup(
    payload: SignupIn = Depends(read_signup),
    db: AsyncSession = Depends(get_db),
):
    if not payload.email:
        raise APIError("email_required", status.HTTP_400_BAD_REQUEST)

    email = normalize_email(payload.email)
    if not is_valid_email(email):
        raise APIError("email_invalid", status.HTTP_400_BAD_REQUEST)

    try:
        total = await SignupService(db).register(
            email,
            country=payload.country,
            interest=payload.interest,
            lang=payload.lang,
        )
    except Exception as e:
        logger.exception(f"POST /signup error: {e}")
        raise APIError("signup_failed", status.HTTP_500_INTERNAL_SERVER_ERROR)

    return SignupOut(ok=True, count=total)
