import logging

from fastapi import HTTPException, status

from locator.services.location_store import (
    LocationDataError,
    LocationQueryError,
    LocationStoreError,
)

logger = logging.getLogger(__name__)


def store_error_response(e: LocationStoreError) -> HTTPException:
    """Translate a catalog failure into an HTTP error."""
    if isinstance(e, LocationQueryError):
        logger.error("Catalog unavailable: %s", str(e))
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Location catalog unavailable: {str(e)}",
        )
    if isinstance(e, LocationDataError):
        logger.error("Catalog data error: %s", str(e))
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Location catalog returned invalid data: {str(e)}",
        )
    logger.error("Location store error: %s", str(e))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Location store error: {str(e)}",
    )
