from fastapi import APIRouter

from app.core.timeutils import isoformat_z, utcnow
from app.schemas.envelope import HealthOut

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthOut)
def health_check():
    return HealthOut(success=True, message="Server is running", timestamp=isoformat_z(utcnow()))
