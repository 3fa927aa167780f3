"""Location models for weather activity recommendations."""

from __future__ import annotations

import re
from typing import Self

from pydantic import BaseModel, Field, ValidationError


# Regex for parsing lat/long coordinates: "latitude,longitude"
# Supports optional +/- prefix for both values
COORDINATE_PATTERN = re.compile(
    r"^(?P<lat>[-+]?\d*\.?\d+)\s*,\s*(?P<lon>[-+]?\d*\.?\d+)$"
)

LOCATION_ID_SEPARATOR = ":"


class InvalidLocationIdError(ValueError):
    """Raised when a location identifier is malformed or out of range."""

    code = "INVALID_CITY_ID"

    def __init__(self, location_id: str):
        super().__init__(
            f'Invalid city ID format: "{location_id}". '
            'Expected format: "latitude:longitude" (e.g., "51.5074:-0.1278")'
        )
        self.location_id = location_id


class Coordinates(BaseModel):
    """Geographic coordinates (latitude/longitude).

    Latitude:
        - Negative (-) = south of equator
        - Positive (+) = north of equator
        - Range: -90 to +90

    Longitude:
        - Negative (-) = west of prime meridian
        - Positive (+) = east of prime meridian
        - Range: -180 to +180
    """

    model_config = {"frozen": True}

    latitude: float = Field(
        ..., ge=-90, le=90, allow_inf_nan=False, description="Latitude in decimal degrees"
    )
    longitude: float = Field(
        ..., ge=-180, le=180, allow_inf_nan=False, description="Longitude in decimal degrees"
    )

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Parse coordinates from string format 'latitude,longitude'.

        Examples:
            '40.7128,-74.0060' -> New York City
            '-33.8688,151.2093' -> Sydney
            '+51.5074,-0.1278' -> London
        """
        match = COORDINATE_PATTERN.match(value.strip())
        if not match:
            raise ValueError(
                f"Invalid coordinate format: '{value}'. "
                "Expected format: 'latitude,longitude' (e.g., '40.7128,-74.0060')"
            )
        return cls(
            latitude=float(match.group("lat")),
            longitude=float(match.group("lon")),
        )

    @classmethod
    def from_location_id(cls, location_id: str) -> Self:
        """Parse a location identifier of the form 'latitude:longitude'.

        This is the identifier used by the HTTP API, e.g. '-33.9249:18.4241'
        for Cape Town.

        Raises:
            InvalidLocationIdError: If the identifier is malformed or either
                value is outside its valid range
        """
        parts = location_id.split(LOCATION_ID_SEPARATOR)
        if len(parts) != 2:
            raise InvalidLocationIdError(location_id)

        try:
            latitude = float(parts[0])
            longitude = float(parts[1])
        except ValueError:
            raise InvalidLocationIdError(location_id) from None

        # float() accepts "nan" and "inf", which the model rejects
        try:
            return cls(latitude=latitude, longitude=longitude)
        except ValidationError:
            raise InvalidLocationIdError(location_id) from None

    @classmethod
    def parse(cls, value: str) -> Self:
        """Parse either the 'lat,lon' or the 'lat:lon' form."""
        if LOCATION_ID_SEPARATOR in value:
            return cls.from_location_id(value.strip())
        return cls.from_string(value)

    def to_location_id(self) -> str:
        """Format as a 'latitude:longitude' location identifier."""
        return f"{self.latitude}{LOCATION_ID_SEPARATOR}{self.longitude}"

    def display_name(self) -> str:
        """Short human-readable label, e.g. '51.51°, -0.13°'."""
        return f"{self.latitude:.2f}°, {self.longitude:.2f}°"

    def __str__(self) -> str:
        return f"{self.latitude},{self.longitude}"


class City(BaseModel):
    """A named place that activities can be ranked for."""

    id: str = Field(..., description="Location identifier")
    name: str = Field(..., description="Place name")
    country: str = Field(..., description="Country name")
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)

    @classmethod
    def from_coordinates(cls, coordinates: Coordinates) -> Self:
        """Build a coordinate-only city when no place name is known."""
        return cls(
            id=coordinates.to_location_id(),
            name=coordinates.display_name(),
            country="Unknown",
            latitude=coordinates.latitude,
            longitude=coordinates.longitude,
        )

    @property
    def coordinates(self) -> Coordinates:
        """Coordinates of this city."""
        return Coordinates(latitude=self.latitude, longitude=self.longitude)
