"""Vertex - A point shared by one or more edges of the network.

A Vertex stores its coordinate and whether it lies outside the loaded
extract (a boundary vertex). The edges that include a vertex are NOT
stored on it: NetworkSnapshot keeps that referrer index so the vertex
never owns its edges.

Vertices compare by identity, so they can be used in sets while the
snapshot is being analysed.
"""

from dataclasses import dataclass, field
from typing import Any

import numpy as np


@dataclass(eq=False)
class Vertex:
    """A point in the network.

    Attributes:
        id: Unique identifier within the snapshot
        lon: Longitude in decimal degrees (WGS84)
        lat: Latitude in decimal degrees (WGS84)
        outside: True if the vertex lies outside the loaded extract
        tags: Optional tag mapping (e.g. amenity=parking_entrance)

    Example:
        vertex = Vertex(id=1, lon=10.295, lat=46.985)
    """

    id: int | str
    lon: float
    lat: float
    outside: bool = False
    tags: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate data after initialization."""
        if np.isnan(self.lon) or np.isnan(self.lat):
            raise ValueError(f"Vertex {self.id} cannot have NaN coordinates ({self.lon}, {self.lat})")

    @property
    def lon_lat(self) -> tuple[float, float]:
        """Return (lon, lat) tuple - GeoJSON/Shapely order."""
        return (self.lon, self.lat)

    def get(self, key: str) -> str | None:
        return self.tags.get(key)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Vertex":
        """Create Vertex from dictionary."""
        return cls(
            id=data["id"],
            lon=float(data["lon"]),
            lat=float(data["lat"]),
            outside=bool(data.get("outside", False)),
            tags=dict(data.get("tags", {})),
        )

    def __repr__(self) -> str:
        flag = ", outside" if self.outside else ""
        return f"Vertex({self.id}, lon={self.lon:.6f}, lat={self.lat:.6f}{flag})"
