"""Finding - Diagnostics produced by a detection pass.

Findings are the product of the detector, not errors of it. Each finding
carries its error code, its severity (looked up in the settings severity
table when it is created), the affected edges and the vertices to highlight.

Subclasses store their specific parameters and compute the message as a
property, mirroring how the error code is fixed per subclass.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from routing_islands.constants import ErrorCode
from routing_islands.model.edge import Edge
from routing_islands.model.island import Directionality
from routing_islands.model.vertex import Vertex


class Severity(Enum):
    """Display level for findings."""

    ERROR = "error"
    WARNING = "warning"
    OTHER = "other"


@dataclass(frozen=True)
class Finding(ABC):
    """Abstract base class for detector findings.

    Use isinstance() or error_code to check the finding type.
    """

    severity: Severity
    affected_edges: tuple[Edge, ...]
    highlighted_vertices: tuple[Vertex, ...] = ()

    @property
    @abstractmethod
    def error_code(self) -> int:
        """Fixed code identifying the finding type."""

    @property
    @abstractmethod
    def message(self) -> str:
        """Human-readable description of the finding."""

    @property
    def edge_ids(self) -> frozenset:
        return frozenset(e.id for e in self.affected_edges)

    def __str__(self) -> str:
        return f"[{self.severity.value}] {self.error_code}: {self.message}"


@dataclass(frozen=True)
class RoutingIslandFinding(Finding):
    """A group of edges that cannot be reached from, or cannot reach, the outside.

    Attributes:
        modes: Transport modes the island was found for, in analysis order
            (empty for the mode-less default)
        directionality: Which connection is missing
    """

    modes: tuple[str, ...] = ()
    directionality: Directionality = Directionality.ISOLATED

    @property
    def mode(self) -> str | None:
        return self.modes[0] if self.modes else None

    @property
    def error_code(self) -> int:
        return ErrorCode.ROUTING_ISLAND

    @property
    def message(self) -> str:
        modes = ", ".join(self.modes) if self.modes else "default"
        return f"Routing island ({modes}): {self.directionality.missing_connection}"


@dataclass(frozen=True)
class LonelyWayFinding(Finding):
    """A routable edge with no connecting neighbours, fully inside the extract."""

    @property
    def error_code(self) -> int:
        return ErrorCode.LONELY_WAY

    @property
    def message(self) -> str:
        return "Routable way not connected to other ways"
