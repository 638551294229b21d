"""Edge - A tagged road or waterway segment.

An Edge is an ordered, non-empty sequence of Vertex references plus a tag
mapping. Its classification (highway, waterway or neither) comes from the
tags. Edges are never modified by the detector.

Edges compare by identity, matching how the detector tracks them in
incoming/outgoing/ignored sets.
"""

from dataclasses import dataclass, field
from typing import Iterator

from routing_islands.constants import HighwayConfig
from routing_islands.model.vertex import Vertex


@dataclass(eq=False)
class Edge:
    """A road or waterway segment.

    Attributes:
        id: Unique identifier within the snapshot
        vertices: Ordered vertices of the edge (at least one)
        tags: Tag mapping, keys unique

    Example:
        a, b = Vertex(id=1, lon=0.0, lat=0.0), Vertex(id=2, lon=0.001, lat=0.0)
        edge = Edge(id="w1", vertices=(a, b), tags={"highway": "residential"})
    """

    id: int | str
    vertices: tuple[Vertex, ...]
    tags: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate data after initialization."""
        self.vertices = tuple(self.vertices)
        if not self.vertices:
            raise ValueError(f"Edge {self.id} must have at least one vertex")

    @property
    def first(self) -> Vertex:
        return self.vertices[0]

    @property
    def last(self) -> Vertex:
        return self.vertices[-1]

    @property
    def classification(self) -> str | None:
        """Primary classification key: "highway", "waterway" or None.

        highway takes precedence when both keys are present.
        """
        if HighwayConfig.HIGHWAY in self.tags:
            return HighwayConfig.HIGHWAY
        if HighwayConfig.WATERWAY in self.tags:
            return HighwayConfig.WATERWAY
        return None

    @property
    def is_closed(self) -> bool:
        """True if the edge forms a loop (first vertex repeated at the end)."""
        return len(self.vertices) > 2 and self.first is self.last

    @property
    def is_usable(self) -> bool:
        """True if the edge has enough vertices to be routed along."""
        return len(self.vertices) >= 2

    def contains(self, vertex: Vertex | None) -> bool:
        """Check whether a vertex is part of this edge (None is never contained)."""
        return vertex is not None and any(v is vertex for v in self.vertices)

    def unique_vertices(self) -> Iterator[Vertex]:
        """Iterate vertices once each, in order."""
        seen: set[int] = set()
        for vertex in self.vertices:
            if id(vertex) not in seen:
                seen.add(id(vertex))
                yield vertex

    def get(self, key: str) -> str | None:
        return self.tags.get(key)

    def has_key(self, key: str) -> bool:
        return key in self.tags

    def __repr__(self) -> str:
        return f"Edge({self.id}, {len(self.vertices)} vertices, {self.tags})"
