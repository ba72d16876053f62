from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from preinscription.features.health.schemas.health import HealthOut

router = APIRouter(tags=["health"])


# Neither route touches the database: they must answer while it is down.
@router.get("/", response_class=PlainTextResponse)
async def root():
    return "OK"


@router.get("/health", response_model=HealthOut)
async def health_check():
    return HealthOut(ok=True)
