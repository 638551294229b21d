"""Boundary reachability sets for one transport mode.

For a mode, two sets of edges are built from the edges touching the border
of the loaded extract and grown across directionally connected neighbours:
- incoming: edges a traveller can reach coming from outside the extract
- outgoing: edges from which a traveller can leave the extract
- ignored: edges the mode cannot use at all

Growth is an explicit fixpoint: grow() runs exactly one step and reports
whether it added anything, grow_until_stable() repeats it up to the
iteration cap. Hitting the cap is a trace note, not an error.
"""

import logging
from typing import Iterable, Literal

from routing_islands.constants import ValidationConfig
from routing_islands.core.access_model import DEFAULT_ACCESS_MODEL, AccessModel
from routing_islands.core.accessibility import AccessStateCache
from routing_islands.core.direction import entry_vertex, exit_vertex, oneway_direction
from routing_islands.core.turn_restrictions import is_reachable
from routing_islands.model.edge import Edge
from routing_islands.model.network import NetworkSnapshot
from routing_islands.model.settings import DetectionSettings
from routing_islands.model.vertex import Vertex

logger = logging.getLogger(__name__)

GrowDirection = Literal["incoming", "outgoing"]


class BoundaryReachabilitySet:
    """Incoming/outgoing/ignored edge sets of one mode in one pass.

    Example:
        sets = BoundaryReachabilitySet(network=network, mode="motorcar")
        sets.seed(candidates)
        sets.filter_inaccessible(candidates)
        sets.grow_until_stable("incoming")
        sets.grow_until_stable("outgoing")
    """

    def __init__(
        self,
        network: NetworkSnapshot,
        mode: str | None,
        model: AccessModel = DEFAULT_ACCESS_MODEL,
        settings: DetectionSettings | None = None,
        cache: AccessStateCache | None = None,
    ) -> None:
        self.network = network
        self.mode = mode
        self.model = model
        self.settings = settings if settings is not None else DetectionSettings()
        self.cache = cache if cache is not None else AccessStateCache(model=model)
        self.incoming: set[Edge] = set()
        self.outgoing: set[Edge] = set()
        self.ignored: set[Edge] = set()

    # =========================================================================
    # Per-mode helpers
    # =========================================================================

    def _named_mode(self) -> bool:
        return self.mode is not None and bool(self.mode.strip())

    def _entry(self, edge: Edge) -> Vertex | None:
        return entry_vertex(edge, self.mode, self.model, state=self.cache.get(edge))

    def _exit(self, edge: Edge) -> Vertex | None:
        return exit_vertex(edge, self.mode, self.model, state=self.cache.get(edge))

    def is_usable_by_mode(self, edge: Edge) -> bool:
        """True if the mode may use the edge (always True without a named mode)."""
        return not self._named_mode() or self.cache.is_positive(edge, self.mode)

    def is_outside_connection(self, vertex: Vertex | None) -> bool:
        """Check if a vertex connects the extract to the outside world."""
        if vertex is None:
            return False
        if self.network.is_outside(vertex):
            return True
        return (
            self.settings.amenity_outside_connections
            and vertex.get("amenity") in ValidationConfig.OUTSIDE_CONNECTION_AMENITIES
        )

    # =========================================================================
    # Seeding and filtering
    # =========================================================================

    def seed(self, candidates: Iterable[Edge]) -> None:
        """Add boundary edges to incoming and/or outgoing.

        Only edges with at least one outside vertex are considered:
        - entry vertex outside -> incoming
        - exit vertex outside -> outgoing
        - bidirectional with either endpoint outside -> both
        """
        for edge in candidates:
            if not any(self.is_outside_connection(v) for v in edge.vertices):
                continue
            first = self._entry(edge)
            last = self._exit(edge)
            if first is not None and self.is_outside_connection(first):
                self.incoming.add(edge)
            if last is not None and self.is_outside_connection(last):
                self.outgoing.add(edge)
            if (
                oneway_direction(edge, self.mode) == 0
                and first is not None
                and last is not None
                and (self.is_outside_connection(first) or self.is_outside_connection(last))
            ):
                self.incoming.add(edge)
                self.outgoing.add(edge)

    def filter_inaccessible(self, edges: Iterable[Edge]) -> None:
        """Move edges the mode cannot use into ignored."""
        for edge in edges:
            if self.is_usable_by_mode(edge):
                continue
            self.ignored.add(edge)
            self.incoming.discard(edge)
            self.outgoing.discard(edge)

    # =========================================================================
    # Fixpoint growth
    # =========================================================================

    def _members(self, direction: GrowDirection) -> set[Edge]:
        if direction == "incoming":
            return self.incoming
        if direction == "outgoing":
            return self.outgoing
        raise ValueError(f"Unknown grow direction '{direction}'")

    def _joins(self, member: Edge, neighbour: Edge, direction: GrowDirection) -> bool:
        if oneway_direction(neighbour, self.mode) == 0 or neighbour.is_closed:
            return True
        if direction == "incoming":
            return member.contains(self._entry(neighbour)) and is_reachable(
                self.network, member, neighbour, self.mode
            )
        return member.contains(self._exit(neighbour)) and is_reachable(self.network, neighbour, member, self.mode)

    def grow(self, direction: GrowDirection) -> bool:
        """Run one growth step.

        Every neighbour of a member edge (sharing a vertex) that the mode may
        use joins the set when it is bidirectional, closed, or directionally
        connected to the member and not blocked by a turn restriction.

        Returns:
            True if at least one edge was added.
        """
        members = self._members(direction)
        additions: set[Edge] = set()
        for member in members:
            for vertex in member.unique_vertices():
                for neighbour in self.network.referrers(vertex):
                    if neighbour in members or neighbour in additions or neighbour in self.ignored:
                        continue
                    if not self.is_usable_by_mode(neighbour):
                        continue
                    if self._joins(member, neighbour, direction):
                        additions.add(neighbour)
        members.update(additions)
        return bool(additions)

    def grow_until_stable(self, direction: GrowDirection) -> int:
        """Repeat grow() until nothing changes or the cap is reached.

        Returns:
            Number of growth steps run.
        """
        cap = self.settings.max_iterations
        steps = 0
        changed = True
        while changed and steps < cap:
            steps += 1
            changed = self.grow(direction)
        if changed:
            logger.debug(f"Growth of {direction} for mode {self.mode} stopped at the cap of {cap} steps")
        return steps

    def __repr__(self) -> str:
        return (
            f"BoundaryReachabilitySet(mode={self.mode}, incoming={len(self.incoming)}, "
            f"outgoing={len(self.outgoing)}, ignored={len(self.ignored)})"
        )


def expand_network(
    network: NetworkSnapshot,
    edges: Iterable[Edge],
    max_iterations: int = ValidationConfig.MAX_ITERATIONS,
) -> set[Edge]:
    """Transitive closure of edges sharing a vertex with the given ones.

    Used when a pool has no incoming or outgoing edge of its own, to find the
    boundary edges it connects to. Each step adds one ring of neighbours.

    Args:
        network: Snapshot providing the referrer lookup
        edges: Starting pool
        max_iterations: Maximum number of rings to add

    Returns:
        The starting edges plus every edge found within the cap.
    """
    connected = set(edges)
    frontier = set(connected)
    steps = 0
    while frontier and steps < max_iterations:
        steps += 1
        ring: set[Edge] = set()
        for edge in frontier:
            ring.update(n for n in network.neighbours(edge) if n not in connected)
        connected.update(ring)
        frontier = ring
    if frontier:
        logger.debug(f"Network expansion stopped at the cap of {max_iterations} steps ({len(connected)} edges)")
    return connected
