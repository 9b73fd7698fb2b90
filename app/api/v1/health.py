from fastapi import APIRouter

from app.core.ids import utc_now
from app.schemas.analysis import HealthResponse

router = APIRouter()

@router.get("/health", summary="Health Check", description="Check the health status of the application.", response_model=HealthResponse)
async def health_check():
    return HealthResponse(status="ok", timestamp=utc_now())
