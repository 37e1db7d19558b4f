"""Geographic contracts."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class LatLon(BaseModel):
    lat: float = Field(ge=-90.0, le=90.0)
    lon: float = Field(ge=-180.0, le=180.0)

    model_config = {"frozen": True}


class BoundingBox(BaseModel):
    min_lat: float = Field(ge=-90.0, le=90.0)
    min_lon: float = Field(ge=-180.0, le=180.0)
    max_lat: float = Field(ge=-90.0, le=90.0)
    max_lon: float = Field(ge=-180.0, le=180.0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_corners(self) -> BoundingBox:
        if self.min_lat > self.max_lat:
            raise ValueError("min_lat must not exceed max_lat")
        if self.min_lon > self.max_lon:
            raise ValueError("min_lon must not exceed max_lon")
        return self

    def contains(self, position: LatLon) -> bool:
        return self.min_lat <= position.lat <= self.max_lat and self.min_lon <= position.lon <= self.max_lon

    def as_query(self) -> str:
        """Render as the ``left,bottom,right,top`` string used by the OSM API."""
        return f"{self.min_lon},{self.min_lat},{self.max_lon},{self.max_lat}"


class TileRect(BaseModel):
    """Inclusive range of slippy-map tiles at some zoom level."""

    left: int = Field(ge=0)
    top: int = Field(ge=0)
    right: int = Field(ge=0)
    bottom: int = Field(ge=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_range(self) -> TileRect:
        if self.left > self.right:
            raise ValueError("left must not exceed right")
        if self.top > self.bottom:
            raise ValueError("top must not exceed bottom")
        return self

    @property
    def key(self) -> str:
        return f"{self.left},{self.top},{self.right},{self.bottom}"
