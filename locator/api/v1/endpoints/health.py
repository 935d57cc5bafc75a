from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from locator.core.config import settings
from locator.db import database
from locator.db.database import get_db
from locator.schemas.health import HealthCheckResponse

router = APIRouter()


@router.get("/health")
async def health_check(db: Session = Depends(get_db)) -> HealthCheckResponse:
    """
    Health check endpoint that verifies catalog database connectivity.

    Returns 200 if the database is reachable, 503 otherwise.
    """
    database_health = database.health_check(db)

    response = HealthCheckResponse(
        service="locator",
        version=settings.VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        healthy=database_health.healthy,
        database=database_health,
    )

    if database_health.healthy:
        return response
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=response.model_dump()
    )
