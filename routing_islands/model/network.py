"""NetworkSnapshot - Read-only view of a loaded network extract.

Owns all vertices, edges and relations of one extract and maintains the
derived lookup relations the detector needs:
- vertex -> edges that include it (referrers)
- edge -> relations that include it
- spatial lookup of edges and vertices by bounding box (Shapely STRtree)
- "is this vertex outside the loaded extract"

The extract is described by zero or more data-source bounds. A vertex is
outside the extract when it is flagged as such, or when bounds are declared
and none of them contains it. With no bounds declared only the flag counts.

The snapshot must not be modified while a detection pass runs.
"""

import json
import logging
from functools import cached_property
from pathlib import Path
from typing import Any, Iterable, Iterator

import numpy as np
from shapely import STRtree
from shapely.geometry import LineString, Point, box
from shapely.geometry.base import BaseGeometry

from routing_islands.model.edge import Edge
from routing_islands.model.relation import Relation, RelationMember
from routing_islands.model.vertex import Vertex

logger = logging.getLogger(__name__)

# (min_lon, min_lat, max_lon, max_lat)
BBox = tuple[float, float, float, float]


class NetworkSnapshot:
    """A partial, bounded extract of a road/waterway network.

    Example:
        network = NetworkSnapshot(vertices=[a, b], edges=[edge], bounds=[(0, 0, 1, 1)])
        network.referrers(a)  # (edge,)
    """

    def __init__(
        self,
        vertices: Iterable[Vertex],
        edges: Iterable[Edge],
        relations: Iterable[Relation] = (),
        bounds: Iterable[BBox] = (),
    ) -> None:
        self.vertices: list[Vertex] = list(vertices)
        self.edges: list[Edge] = list(edges)
        self.relations: list[Relation] = list(relations)
        self.bounds: list[BaseGeometry] = [box(*b) for b in bounds]

        self._referrers: dict[int, list[Edge]] = {id(v): [] for v in self.vertices}
        for edge in self.edges:
            for vertex in edge.unique_vertices():
                self._referrers.setdefault(id(vertex), []).append(edge)

        self._relations_of: dict[int, list[Relation]] = {}
        for relation in self.relations:
            for member in {id(m.member): m.member for m in relation.members}.values():
                self._relations_of.setdefault(id(member), []).append(relation)

    # =========================================================================
    # Iteration and lookup
    # =========================================================================

    def iter_edges(self) -> Iterator[Edge]:
        return iter(self.edges)

    def iter_vertices(self) -> Iterator[Vertex]:
        return iter(self.vertices)

    def referrers(self, vertex: Vertex) -> tuple[Edge, ...]:
        """Edges that include the vertex (each edge once)."""
        return tuple(self._referrers.get(id(vertex), ()))

    def relations_of(self, primitive: Edge | Vertex) -> tuple[Relation, ...]:
        """Relations that have the primitive as a member."""
        return tuple(self._relations_of.get(id(primitive), ()))

    def neighbours(self, edge: Edge) -> set[Edge]:
        """All other edges sharing at least one vertex with the edge."""
        result: set[Edge] = set()
        for vertex in edge.unique_vertices():
            result.update(self.referrers(vertex))
        result.discard(edge)
        return result

    # =========================================================================
    # Extract boundary
    # =========================================================================

    def is_outside(self, vertex: Vertex) -> bool:
        """Check if a vertex lies outside the loaded extract."""
        if vertex.outside:
            return True
        if not self.bounds:
            return False
        point = Point(vertex.lon, vertex.lat)
        return not any(bound.covers(point) for bound in self.bounds)

    def touches_boundary(self, edge: Edge) -> bool:
        """True if any vertex of the edge lies outside the extract."""
        return any(self.is_outside(v) for v in edge.vertices)

    def has_vertex_in_extract(self, edge: Edge) -> bool:
        """True if at least one vertex of the edge lies inside the extract."""
        return any(not self.is_outside(v) for v in edge.vertices)

    # =========================================================================
    # Spatial lookup
    # =========================================================================

    @cached_property
    def _edge_index(self) -> STRtree:
        return STRtree([self._edge_geometry(edge) for edge in self.edges])

    @cached_property
    def _vertex_index(self) -> STRtree:
        return STRtree([Point(v.lon, v.lat) for v in self.vertices])

    @staticmethod
    def _edge_geometry(edge: Edge) -> BaseGeometry:
        if len(edge.vertices) < 2:
            return Point(edge.first.lon, edge.first.lat)
        return LineString([v.lon_lat for v in edge.vertices])

    def edges_in_bbox(self, bbox: BBox) -> list[Edge]:
        """Edges whose geometry intersects the bounding box, in snapshot order."""
        if not self.edges:
            return []
        hits = self._edge_index.query(box(*bbox), predicate="intersects")
        return [self.edges[i] for i in np.sort(hits)]

    def vertices_in_bbox(self, bbox: BBox) -> list[Vertex]:
        """Vertices inside (or on the border of) the bounding box, in snapshot order."""
        if not self.vertices:
            return []
        hits = self._vertex_index.query(box(*bbox), predicate="intersects")
        return [self.vertices[i] for i in np.sort(hits)]

    # =========================================================================
    # Serialization
    # =========================================================================

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NetworkSnapshot":
        """Build a snapshot from a JSON-compatible dict.

        Format:
            {
                "bounds": [[min_lon, min_lat, max_lon, max_lat], ...],
                "vertices": [{"id": 1, "lon": 0.0, "lat": 0.0, "outside": false, "tags": {}}],
                "edges": [{"id": "w1", "vertices": [1, 2], "tags": {"highway": "residential"}}],
                "relations": [{"id": "r1", "tags": {...},
                               "members": [{"role": "from", "type": "edge", "ref": "w1"}]}]
            }

        Edges referencing unknown vertices, and relation members referencing
        unknown primitives, are skipped with a debug log.
        """
        vertices = {v["id"]: Vertex.from_dict(data=v) for v in data.get("vertices", [])}

        edges: dict[Any, Edge] = {}
        for edge_data in data.get("edges", []):
            refs = edge_data.get("vertices", [])
            missing = [ref for ref in refs if ref not in vertices]
            if missing or not refs:
                logger.debug(f"Skipping edge {edge_data.get('id')}: unknown or no vertices {missing}")
                continue
            edges[edge_data["id"]] = Edge(
                id=edge_data["id"],
                vertices=tuple(vertices[ref] for ref in refs),
                tags=dict(edge_data.get("tags", {})),
            )

        relations = []
        for rel_data in data.get("relations", []):
            members = []
            for member_data in rel_data.get("members", []):
                lookup = edges if member_data.get("type") == "edge" else vertices
                member = lookup.get(member_data.get("ref"))
                if member is None:
                    logger.debug(f"Relation {rel_data.get('id')}: skipping unresolved member {member_data}")
                    continue
                members.append(RelationMember(role=member_data.get("role", ""), member=member))
            relations.append(Relation(id=rel_data["id"], tags=dict(rel_data.get("tags", {})), members=tuple(members)))

        return cls(
            vertices=vertices.values(),
            edges=edges.values(),
            relations=relations,
            bounds=[tuple(b) for b in data.get("bounds", [])],
        )

    @classmethod
    def load_json(cls, path: Path | str) -> "NetworkSnapshot":
        """Load a snapshot from a JSON file in the from_dict format."""
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(data=json.load(f))

    def __repr__(self) -> str:
        return (
            f"NetworkSnapshot(vertices={len(self.vertices)}, edges={len(self.edges)}, "
            f"relations={len(self.relations)}, bounds={len(self.bounds)})"
        )
