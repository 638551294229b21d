"""Tests for per-mode oneway semantics and entry/exit vertices.

Tests: plain_oneway, oneway_direction, entry_vertex, exit_vertex
Focus: Plain oneway values, mode-specific :forward/:backward tags, foot exception
"""

import pytest

from routing_islands.core.direction import entry_vertex, exit_vertex, oneway_direction, plain_oneway
from routing_islands.model.edge import Edge
from routing_islands.model.vertex import Vertex


@pytest.fixture
def first() -> Vertex:
    return Vertex(id=1, lon=0.1, lat=0.1)


@pytest.fixture
def last() -> Vertex:
    return Vertex(id=2, lon=0.2, lat=0.1)


def road(first: Vertex, last: Vertex, **tags: str) -> Edge:
    return Edge(id="w1", vertices=(first, Vertex(id=3, lon=0.15, lat=0.15), last), tags=tags)


class TestPlainOneway:
    """The oneway tag alone, as used without a mode."""

    @pytest.mark.parametrize(
        "value,expected",
        [("yes", 1), ("true", 1), ("1", 1), ("-1", -1), ("reverse", -1), ("no", 0), ("alternating", 0)],
    )
    def test_values(self, first: Vertex, last: Vertex, value: str, expected: int) -> None:
        edge = road(first, last, highway="residential", oneway=value)
        assert plain_oneway(edge) == expected
        assert oneway_direction(edge, None) == expected
        assert oneway_direction(edge, "  ") == expected

    def test_untagged_is_bidirectional(self, first: Vertex, last: Vertex) -> None:
        assert oneway_direction(road(first, last, highway="residential"), None) == 0


class TestModeDirection:
    """Named modes with :forward/:backward overrides."""

    def test_oneway_applies_to_vehicles(self, first: Vertex, last: Vertex) -> None:
        edge = road(first, last, highway="residential", oneway="yes")
        assert oneway_direction(edge, "motorcar") == 1
        assert oneway_direction(edge, "bicycle") == 1

    def test_reverse_oneway(self, first: Vertex, last: Vertex) -> None:
        assert oneway_direction(road(first, last, highway="residential", oneway="-1"), "bicycle") == -1

    def test_backward_override_opens_contraflow(self, first: Vertex, last: Vertex) -> None:
        edge = road(first, last, highway="residential", oneway="yes", **{"bicycle:backward": "yes"})
        assert oneway_direction(edge, "bicycle") == 0
        assert oneway_direction(edge, "motorcar") == 1

    def test_forward_override_closes_direction(self, first: Vertex, last: Vertex) -> None:
        edge = road(first, last, highway="residential", **{"motorcar:forward": "no"})
        assert oneway_direction(edge, "motorcar") == -1

    def test_impassable_both_ways(self, first: Vertex, last: Vertex) -> None:
        edge = road(first, last, highway="residential", **{"motorcar:forward": "no", "motorcar:backward": "no"})
        assert oneway_direction(edge, "motorcar") is None


class TestFootException:
    """Pedestrians ignore oneway unless on a footway or with foot:* tags."""

    def test_foot_ignores_oneway_on_roads(self, first: Vertex, last: Vertex) -> None:
        assert oneway_direction(road(first, last, highway="residential", oneway="yes"), "foot") == 0

    def test_foot_respects_oneway_on_footway(self, first: Vertex, last: Vertex) -> None:
        assert oneway_direction(road(first, last, highway="footway", oneway="yes"), "foot") == 1

    def test_foot_direction_tag_is_honoured(self, first: Vertex, last: Vertex) -> None:
        edge = road(first, last, highway="residential", **{"foot:backward": "no"})
        assert oneway_direction(edge, "foot") == 1


class TestEntryExitVertex:
    """Direction-respecting endpoints."""

    def test_forward_edge(self, first: Vertex, last: Vertex) -> None:
        edge = road(first, last, highway="residential", oneway="yes")
        assert entry_vertex(edge, "motorcar") is first
        assert exit_vertex(edge, "motorcar") is last

    def test_backward_edge_swaps_endpoints(self, first: Vertex, last: Vertex) -> None:
        edge = road(first, last, highway="residential", oneway="-1")
        assert entry_vertex(edge, None) is last
        assert exit_vertex(edge, None) is first
        assert entry_vertex(edge, "motorcar") is last

    def test_bidirectional_edge(self, first: Vertex, last: Vertex) -> None:
        edge = road(first, last, highway="residential")
        assert entry_vertex(edge, "foot") is first
        assert exit_vertex(edge, "foot") is last

    def test_inaccessible_mode_has_no_endpoints(self, first: Vertex, last: Vertex) -> None:
        edge = road(first, last, highway="motorway")
        assert entry_vertex(edge, "foot") is None
        assert exit_vertex(edge, "foot") is None

    def test_blank_mode_skips_access_check(self, first: Vertex, last: Vertex) -> None:
        edge = road(first, last, highway="motorway")
        assert entry_vertex(edge, "") is first
        assert exit_vertex(edge, None) is last

    def test_impassable_direction_has_no_endpoints(self, first: Vertex, last: Vertex) -> None:
        edge = road(first, last, highway="residential", **{"motorcar:forward": "no", "motorcar:backward": "no"})
        assert entry_vertex(edge, "motorcar") is None
        assert exit_vertex(edge, "motorcar") is None

    def test_precomputed_state_is_used(self, first: Vertex, last: Vertex) -> None:
        edge = road(first, last, highway="motorway")
        assert entry_vertex(edge, "foot", state={"foot": "yes"}) is first
        assert exit_vertex(edge, "motorcar", state={}) is None
