"""State machine for one routing island detection pass.

Uses python-statemachine for the pass lifecycle:
- Clear state definitions
- Entry hooks that reset the per-phase parts of the context
- Explicit event-driven transitions

The machine only tracks where a pass is. The work of each phase is done by
RoutingIslandDetector between the transitions, so transitions stay instant
and the detector can still report when a phase fails.

States:
    COLLECTING: Visiting edges, sorting them into candidate pools, lonely ways
    PER_MODE_ANALYSIS: Seed, filter, grow and collect islands for every mode
    REPORTING: Turning islands and lonely ways into findings
    DONE: Findings are final (terminal)

Transitions:
    COLLECTING -> PER_MODE_ANALYSIS: analyse
    COLLECTING -> REPORTING: report (collection failed, report what exists)
    PER_MODE_ANALYSIS -> REPORTING: report
    REPORTING -> DONE: finish
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from routing_islands.model.edge import Edge
from routing_islands.model.finding import Finding
from routing_islands.model.island import Island
from routing_islands.model.network import NetworkSnapshot

logger = logging.getLogger(__name__)


@dataclass
class ModeRegistry:
    """Candidate registries of one mode in one pass.

    incoming, outgoing and ignored are the final sets after growth. An edge
    may be in incoming and outgoing at once, but never in ignored as well.
    """

    mode: str
    incoming: frozenset[Edge] = frozenset()
    outgoing: frozenset[Edge] = frozenset()
    ignored: frozenset[Edge] = frozenset()
    islands: list[Island] = field(default_factory=list)


@dataclass
class DetectionContext:
    """Shared context/model for the detection state machine.

    Note: The 'state' field is managed by python-statemachine when this
    object is passed as the model. It stores the current state value.

    Attributes:
        network: Snapshot being analysed (None before a pass starts)
        highway_candidates: Highway edges eligible for per-mode analysis
        waterway_candidates: Waterway edges eligible for per-mode analysis
        lonely_ways: Edges with no connecting neighbour, in visit order
        registries: Per-mode results, keyed by mode
        failed_modes: Modes whose analysis raised and was skipped
        findings: Output of the reporting phase
    """

    # State managed by python-statemachine (model pattern)
    state: str | None = None

    network: NetworkSnapshot | None = None
    highway_candidates: list[Edge] = field(default_factory=list)
    waterway_candidates: list[Edge] = field(default_factory=list)
    lonely_ways: list[Edge] = field(default_factory=list)
    registries: dict[str, ModeRegistry] = field(default_factory=dict)
    failed_modes: list[str] = field(default_factory=list)
    findings: list[Finding] = field(default_factory=list)

    @property
    def islands(self) -> list[Island]:
        """All islands of the pass, in analysis order."""
        return [island for registry in self.registries.values() for island in registry.islands]

    def clear_analysis(self) -> None:
        self.registries = {}
        self.failed_modes = []

    def clear_findings(self) -> None:
        self.findings = []


class TransitionLogListener:
    """Listener that logs every transition of a detection pass.

    Usage:
        sm.add_listener(TransitionLogListener())
    """

    def after_transition(self, event: str, source: State, target: State) -> None:
        logger.debug(f"[STATE] {source.name} --({event})--> {target.name}")


class DetectorStateMachine(StateMachine):
    """Lifecycle of one detection pass. See module docstring for transitions."""

    # ==========================================================================
    # State Definitions
    # ==========================================================================

    collecting = State("Collecting", initial=True)
    per_mode_analysis = State("PerModeAnalysis")
    reporting = State("Reporting")
    done = State("Done", final=True)

    # ==========================================================================
    # Transitions
    # ==========================================================================

    analyse = collecting.to(per_mode_analysis)
    report = collecting.to(reporting) | per_mode_analysis.to(reporting)
    finish = reporting.to(done)

    # ==========================================================================
    # State Check Properties
    # ==========================================================================

    @property
    def is_collecting(self) -> bool:
        return self.collecting.is_active

    @property
    def is_analysing(self) -> bool:
        return self.per_mode_analysis.is_active

    @property
    def is_reporting(self) -> bool:
        return self.reporting.is_active

    @property
    def is_done(self) -> bool:
        return self.done.is_active

    # ==========================================================================
    # Entry Hooks
    # ==========================================================================

    def on_enter_per_mode_analysis(self) -> None:
        """Hook: Entering per-mode analysis."""
        self.context.clear_analysis()
        logger.debug(
            f"Analysing {len(self.context.highway_candidates)} highway and "
            f"{len(self.context.waterway_candidates)} waterway candidates"
        )

    def on_enter_reporting(self) -> None:
        """Hook: Entering reporting."""
        self.context.clear_findings()

    def on_enter_done(self) -> None:
        """Hook: Pass finished."""
        logger.info(f"Detection pass finished with {len(self.context.findings)} findings")

    # ==========================================================================
    # Initialization
    # ==========================================================================

    def __init__(self, context: DetectionContext | None = None, start_value: str | None = None) -> None:
        """Initialize state machine with model pattern.

        Args:
            context: Shared context/model (creates new if None)
            start_value: Optional initial state value
        """
        model = context or DetectionContext()
        super().__init__(model=model, start_value=start_value)

    # ==========================================================================
    # Utility Methods
    # ==========================================================================

    @property
    def context(self) -> DetectionContext:
        """Alias for model."""
        return self.model

    def get_state_name(self) -> str:
        return self.current_state.name

    def try_transition(self, event: str, **kwargs: Any) -> bool:
        """Attempt a transition, returning success/failure.

        Args:
            event: Transition event name
            **kwargs: Arguments for transition

        Returns:
            True if transition succeeded, False otherwise.
        """
        try:
            self.send(event, **kwargs)
            return True
        except TransitionNotAllowed:
            logger.warning(f"Transition '{event}' not allowed from {self.get_state_name()}")
            return False

    @staticmethod
    def create(
        network: NetworkSnapshot | None = None, log_transitions: bool = True
    ) -> tuple["DetectorStateMachine", DetectionContext]:
        """Factory method to create state machine with context and optional listener.

        Args:
            network: Snapshot the pass runs on
            log_transitions: If True, adds TransitionLogListener

        Returns:
            Tuple of (DetectorStateMachine, DetectionContext)
        """
        context = DetectionContext(network=network)
        sm = DetectorStateMachine(context=context)
        if log_transitions:
            sm.add_listener(TransitionLogListener())
        return sm, context

    def __repr__(self) -> str:
        return f"DetectorStateMachine(state={self.get_state_name()})"
