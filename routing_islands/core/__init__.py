"""Core semantics of modes, access and reachability.

- AccessModel: Transport mode hierarchy (arena of TransportMode records)
- default_access: Implied access value per mode for an edge
- oneway_direction / entry_vertex / exit_vertex: Per-mode direction of an edge
- is_reachable: Turn restriction check between two edges
- BoundaryReachabilitySet: Incoming/outgoing sets grown from the boundary
- ConnectedComponentCollector: Groups leftover edges into islands
- GeoCalculator: Haversine distances for geometry checks
"""

from routing_islands.core.access_model import DEFAULT_ACCESS_MODEL, AccessModel, TransportMode, build_access_model
from routing_islands.core.accessibility import (
    AccessState,
    AccessStateCache,
    default_access,
    implied_tags,
    is_accessible_positive,
)
from routing_islands.core.components import ConnectedComponentCollector, edge_sort_key
from routing_islands.core.direction import entry_vertex, exit_vertex, oneway_direction, plain_oneway
from routing_islands.core.geo_calculator import GeoCalculator
from routing_islands.core.reachability import BoundaryReachabilitySet, expand_network
from routing_islands.core.turn_restrictions import is_reachable

__all__ = [
    # Access model
    "AccessModel",
    "TransportMode",
    "build_access_model",
    "DEFAULT_ACCESS_MODEL",
    # Accessibility
    "AccessState",
    "AccessStateCache",
    "default_access",
    "implied_tags",
    "is_accessible_positive",
    # Direction
    "oneway_direction",
    "plain_oneway",
    "entry_vertex",
    "exit_vertex",
    # Turn restrictions
    "is_reachable",
    # Reachability
    "BoundaryReachabilitySet",
    "expand_network",
    # Components
    "ConnectedComponentCollector",
    "edge_sort_key",
    # Geo calculator
    "GeoCalculator",
]
