"""
Location and Coordinate Type Definitions

Pydantic models for representing geographic coordinates used throughout
the application.
"""

from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, Field


def round_half_up(value: float, places: int) -> float:
    """Round half away from zero on the decimal value, as SQL ROUND does."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


class Coordinates(BaseModel):
    """
    Geographic coordinates (latitude and longitude).

    Values are only required to be finite. Out-of-range degrees are passed
    through unchanged; the distance formula tolerates them.
    """

    latitude: float = Field(..., allow_inf_nan=False, description="Latitude in decimal degrees")
    longitude: float = Field(
        ..., allow_inf_nan=False, description="Longitude in decimal degrees"
    )

    def rounded(self, places: int = 4) -> "Coordinates":
        """Return a copy rounded to ``places`` decimals, halves away from zero."""
        return Coordinates(
            latitude=round_half_up(self.latitude, places),
            longitude=round_half_up(self.longitude, places),
        )

    def __str__(self) -> str:
        return f"({self.latitude}, {self.longitude})"
