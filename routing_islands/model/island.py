"""Island - A group of edges cut off from the outside for one mode."""

from dataclasses import dataclass
from enum import Enum

from routing_islands.model.edge import Edge


class Directionality(Enum):
    """Which way the island is cut off from the rest of the network."""

    INCOMING_ONLY = "incoming-only"  # Reachable from outside, cannot leave
    OUTGOING_ONLY = "outgoing-only"  # Can leave, cannot be reached
    ISOLATED = "isolated"  # Neither

    @property
    def missing_connection(self) -> str:
        """Human-readable description of the missing connection."""
        return {
            Directionality.INCOMING_ONLY: "no outgoing connection",
            Directionality.OUTGOING_ONLY: "no incoming connection",
            Directionality.ISOLATED: "no incoming or outgoing connection",
        }[self]


@dataclass(frozen=True)
class Island:
    """Connected edges with no boundary-reachable path for a mode.

    Attributes:
        edges: Edges making up the island
        mode: Transport mode key the island was found for
        directionality: Which connection to the outside is missing
    """

    edges: frozenset[Edge]
    mode: str
    directionality: Directionality

    def sorted_edges(self) -> tuple[Edge, ...]:
        """Edges in deterministic (id) order."""
        return tuple(sorted(self.edges, key=lambda e: str(e.id)))
