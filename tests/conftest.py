"""Shared pytest fixtures for routing_islands tests.

Provides NetworkBuilder and reusable small networks for all tests.

COORDINATE SYSTEM:
    The loaded extract is the unit square EXTRACT_BOUNDS = (0, 0, 1, 1) in
    (lon, lat). Vertices inside it use coordinates in 0.1 .. 0.9, vertices
    outside it use lon >= 1.5. Nothing depends on real distances, so the
    exact values only matter for inside/outside.
"""

from typing import Iterable

import pytest

from routing_islands.core.access_model import DEFAULT_ACCESS_MODEL, AccessModel
from routing_islands.model.edge import Edge
from routing_islands.model.network import NetworkSnapshot
from routing_islands.model.relation import Relation, RelationMember
from routing_islands.model.settings import DetectionSettings
from routing_islands.model.vertex import Vertex

EXTRACT_BOUNDS = (0.0, 0.0, 1.0, 1.0)


# =============================================================================
# NETWORK BUILDER
# =============================================================================


class NetworkBuilder:
    """Small helper to assemble a NetworkSnapshot by id.

    Example:
        nb = NetworkBuilder()
        nb.vertex(1, 0.2, 0.5)
        nb.vertex(2, 1.5, 0.5)  # outside the extract
        nb.edge("w1", [1, 2], {"highway": "residential"})
        network = nb.build()
    """

    def __init__(self) -> None:
        self.vertices: dict[int, Vertex] = {}
        self.edges: dict[str, Edge] = {}
        self.relations: list[Relation] = []

    def vertex(self, vid: int, lon: float, lat: float, outside: bool = False, tags: dict | None = None) -> Vertex:
        vertex = Vertex(id=vid, lon=lon, lat=lat, outside=outside, tags=dict(tags or {}))
        self.vertices[vid] = vertex
        return vertex

    def edge(self, eid: str, vertex_ids: Iterable[int], tags: dict | None = None) -> Edge:
        edge = Edge(id=eid, vertices=tuple(self.vertices[v] for v in vertex_ids), tags=dict(tags or {}))
        self.edges[eid] = edge
        return edge

    def restriction(self, rid: str, from_id: str, to_id: str, tags: dict | None = None) -> Relation:
        relation = Relation(
            id=rid,
            tags={"type": "restriction", "restriction": "no_left_turn", **(tags or {})},
            members=(
                RelationMember(role="from", member=self.edges[from_id]),
                RelationMember(role="to", member=self.edges[to_id]),
            ),
        )
        self.relations.append(relation)
        return relation

    def build(self, bounds: Iterable[tuple[float, float, float, float]] = (EXTRACT_BOUNDS,)) -> NetworkSnapshot:
        return NetworkSnapshot(
            vertices=self.vertices.values(),
            edges=self.edges.values(),
            relations=self.relations,
            bounds=bounds,
        )


# =============================================================================
# GENERIC FIXTURES
# =============================================================================


@pytest.fixture
def model() -> AccessModel:
    """The default transport mode hierarchy."""
    return DEFAULT_ACCESS_MODEL


@pytest.fixture
def settings() -> DetectionSettings:
    """Default detection settings (cap 1000, default severities)."""
    return DetectionSettings()


@pytest.fixture
def builder() -> NetworkBuilder:
    return NetworkBuilder()


# =============================================================================
# NETWORK FIXTURES
# =============================================================================


@pytest.fixture
def two_squares_network() -> NetworkSnapshot:
    """Two closed residential squares sharing vertex 3, fully inside the extract.

        1---2
        |   |
        4---3---5
            |   |
            7---6

    Nothing touches the boundary.
    """
    nb = NetworkBuilder()
    nb.vertex(1, 0.1, 0.6)
    nb.vertex(2, 0.3, 0.6)
    nb.vertex(3, 0.3, 0.4)
    nb.vertex(4, 0.1, 0.4)
    nb.vertex(5, 0.5, 0.4)
    nb.vertex(6, 0.5, 0.2)
    nb.vertex(7, 0.3, 0.2)
    nb.edge("w1", [1, 2, 3, 4, 1], {"highway": "residential"})
    nb.edge("w2", [3, 5, 6, 7, 3], {"highway": "residential"})
    return nb.build()


@pytest.fixture
def lonely_way_network() -> NetworkSnapshot:
    """A single residential edge whose two vertices belong to nothing else."""
    nb = NetworkBuilder()
    nb.vertex(1, 0.2, 0.5)
    nb.vertex(2, 0.4, 0.5)
    nb.edge("w1", [1, 2], {"highway": "residential"})
    return nb.build()


@pytest.fixture
def connected_chain_network() -> NetworkSnapshot:
    """Residential chain leaving the extract on both sides.

        (outside) 10 --w1-- 1 --w2-- 2 --w3-- 11 (outside)

    Every edge is reachable from and can reach the outside.
    """
    nb = NetworkBuilder()
    nb.vertex(10, -0.5, 0.5)
    nb.vertex(1, 0.3, 0.5)
    nb.vertex(2, 0.6, 0.5)
    nb.vertex(11, 1.5, 0.5)
    nb.edge("w1", [10, 1], {"highway": "residential"})
    nb.edge("w2", [1, 2], {"highway": "residential"})
    nb.edge("w3", [2, 11], {"highway": "residential"})
    return nb.build()


@pytest.fixture
def dead_end_oneway_network() -> NetworkSnapshot:
    """A oneway tertiary road entering the extract and ending in a closed loop.

        (outside) 10 --w1--> 1 --w2--> 2, loop w3 = 2 -> 3 -> 4 -> 2

    All three edges are highway=tertiary, oneway=yes.

    Vehicles can drive in but never back out.
    """
    nb = NetworkBuilder()
    nb.vertex(10, -0.5, 0.5)
    nb.vertex(1, 0.3, 0.5)
    nb.vertex(2, 0.5, 0.5)
    nb.vertex(3, 0.7, 0.5)
    nb.vertex(4, 0.7, 0.7)
    nb.edge("w1", [10, 1], {"highway": "tertiary", "oneway": "yes"})
    nb.edge("w2", [1, 2], {"highway": "tertiary", "oneway": "yes"})
    nb.edge("w3", [2, 3, 4, 2], {"highway": "tertiary", "oneway": "yes"})
    return nb.build()
