"""Data model classes for a bounded network extract and its diagnostics.

Follows the separation of Geometry (where things are) vs Topology (how things connect):
- Vertex: Geometry atom (lon, lat, outside flag)
- Edge: Ordered vertex sequence with tags (a road or waterway)
- Relation: Tagged group of edges/vertices with roles (turn restrictions)
- NetworkSnapshot: Read-only extract owning all of the above plus lookups
- Island: Edges cut off from the outside for one mode
- Finding: Diagnostics produced by a detection pass
- DetectionSettings: Runtime configuration (cap, severities)
"""

from routing_islands.model.edge import Edge
from routing_islands.model.finding import Finding, LonelyWayFinding, RoutingIslandFinding, Severity
from routing_islands.model.island import Directionality, Island
from routing_islands.model.network import NetworkSnapshot
from routing_islands.model.relation import Relation, RelationMember
from routing_islands.model.settings import DetectionSettings
from routing_islands.model.vertex import Vertex

__all__ = [
    "Vertex",
    "Edge",
    "Relation",
    "RelationMember",
    "NetworkSnapshot",
    "Island",
    "Directionality",
    "Finding",
    "RoutingIslandFinding",
    "LonelyWayFinding",
    "Severity",
    "DetectionSettings",
]
