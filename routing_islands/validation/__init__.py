"""Detection pass: orchestrator and lifecycle state machine."""

from routing_islands.validation.routing_island_detector import RoutingIslandDetector, directionality_of
from routing_islands.validation.state_machine import (
    DetectionContext,
    DetectorStateMachine,
    ModeRegistry,
    TransitionLogListener,
)

__all__ = [
    "RoutingIslandDetector",
    "directionality_of",
    "DetectionContext",
    "DetectorStateMachine",
    "ModeRegistry",
    "TransitionLogListener",
]
