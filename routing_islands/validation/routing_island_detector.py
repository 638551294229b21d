"""RoutingIslandDetector - Finds edges a mode cannot reach or cannot leave.

One call to detect() runs a full pass over a NetworkSnapshot:

1. Collecting: every highway/waterway edge with a vertex inside the extract
   is either reported as a lonely way (no neighbour at all, not touching the
   boundary) or joins the highway and/or waterway candidate pool.
2. Per-mode analysis: for every leaf mode of the land family (highway pool)
   and then of the water family (waterway pool) the boundary reachability
   sets are seeded, filtered and grown. Pool edges the mode may use that are
   not both reachable and leavable are grouped into islands.
3. Reporting: islands and lonely ways become findings.

A failing mode is logged and skipped, the other modes still run. detect()
never raises.
"""

import logging

from routing_islands.constants import ErrorCode, HighwayConfig, ValidationConfig
from routing_islands.core.access_model import DEFAULT_ACCESS_MODEL, AccessModel
from routing_islands.core.accessibility import AccessStateCache
from routing_islands.core.components import ConnectedComponentCollector, edge_sort_key
from routing_islands.core.geo_calculator import GeoCalculator
from routing_islands.core.reachability import BoundaryReachabilitySet, expand_network
from routing_islands.model.edge import Edge
from routing_islands.model.finding import Finding, LonelyWayFinding, RoutingIslandFinding
from routing_islands.model.island import Directionality, Island
from routing_islands.model.network import NetworkSnapshot
from routing_islands.model.settings import DetectionSettings
from routing_islands.validation.state_machine import DetectionContext, DetectorStateMachine, ModeRegistry

logger = logging.getLogger(__name__)


def directionality_of(component: frozenset[Edge], incoming: set[Edge], outgoing: set[Edge]) -> Directionality:
    """Which connection to the outside a component lacks."""
    if component <= incoming:
        return Directionality.INCOMING_ONLY
    if component <= outgoing:
        return Directionality.OUTGOING_ONLY
    return Directionality.ISOLATED


class RoutingIslandDetector:
    """Detects routing islands and lonely ways in a network snapshot.

    Args:
        settings: Iteration cap, severity table and seeding options
        model: Transport mode registry

    Example:
        detector = RoutingIslandDetector(settings=DetectionSettings(max_iterations=200))
        for finding in detector.detect(network):
            print(finding)
    """

    def __init__(
        self,
        settings: DetectionSettings | None = None,
        model: AccessModel = DEFAULT_ACCESS_MODEL,
    ) -> None:
        self.settings = settings if settings is not None else DetectionSettings()
        self.model = model
        self.last_context: DetectionContext | None = None

    # =========================================================================
    # Pass
    # =========================================================================

    def detect(self, network: NetworkSnapshot) -> list[Finding]:
        """Run a full detection pass.

        Returns:
            Findings in deterministic order. On an unexpected failure the
            findings produced so far are returned.
        """
        sm, context = DetectorStateMachine.create(network=network)
        self.last_context = context
        cache = AccessStateCache(model=self.model)

        try:
            self.collect(context)
            sm.analyse()
            self.analyse_families(context, cache)
        except Exception:
            logger.exception(f"Routing island detection failed in state {sm.get_state_name()}")

        try:
            sm.report()
            context.findings = self.report(context)
            sm.finish()
        except Exception:
            logger.exception("Reporting routing island findings failed")

        return list(context.findings)

    # =========================================================================
    # Collecting
    # =========================================================================

    @staticmethod
    def _pools_of(edge: Edge) -> tuple[bool, bool]:
        if edge.classification is None:
            return False, False
        highway = edge.get(HighwayConfig.HIGHWAY)
        waterway = edge.get(HighwayConfig.WATERWAY)
        is_highway = highway is not None and highway not in HighwayConfig.IGNORE_HIGHWAY
        is_waterway = waterway is not None and waterway not in HighwayConfig.IGNORE_WATERWAY
        return is_highway, is_waterway

    @staticmethod
    def is_lonely(network: NetworkSnapshot, edge: Edge) -> bool:
        """True if no vertex is shared with another edge and none is outside."""
        if network.touches_boundary(edge):
            return False
        return all(network.referrers(v) == (edge,) for v in edge.unique_vertices())

    def collect(self, context: DetectionContext) -> None:
        """Sort the snapshot's edges into candidate pools and lonely ways."""
        network = context.network
        for edge in network.iter_edges():
            is_highway, is_waterway = self._pools_of(edge)
            if not (is_highway or is_waterway):
                continue
            if not network.has_vertex_in_extract(edge):
                continue
            if self.is_lonely(network, edge):
                context.lonely_ways.append(edge)
                continue
            if not edge.is_usable:
                logger.debug(f"Skipping edge {edge.id} with fewer than 2 vertices")
                continue

            zero_length = GeoCalculator.zero_length_segments(v.lon_lat for v in edge.vertices)
            if zero_length:
                logger.debug(f"Edge {edge.id} has {zero_length} zero-length segments")

            if is_highway:
                context.highway_candidates.append(edge)
            if is_waterway:
                context.waterway_candidates.append(edge)

        logger.debug(
            f"Collected {len(context.highway_candidates)} highway, {len(context.waterway_candidates)} waterway "
            f"candidates and {len(context.lonely_ways)} lonely ways"
        )

    # =========================================================================
    # Per-mode analysis
    # =========================================================================

    def analyse_families(self, context: DetectionContext, cache: AccessStateCache | None = None) -> None:
        """Analyse every leaf mode of each analysed family against its candidate pool."""
        cache = cache if cache is not None else AccessStateCache(model=self.model)
        pools = {"land": context.highway_candidates, "water": context.waterway_candidates}
        for family in ValidationConfig.ANALYSED_FAMILIES:
            pool = pools[family]
            if not pool:
                continue
            for mode in self.model.routable_modes(family):
                try:
                    context.registries[mode] = self.analyse_mode(context.network, mode, pool, cache)
                except Exception:
                    logger.exception(f"Routing island analysis failed for mode {mode}, skipping it")
                    context.failed_modes.append(mode)

    def analyse_mode(
        self,
        network: NetworkSnapshot,
        mode: str,
        pool: list[Edge],
        cache: AccessStateCache | None = None,
    ) -> ModeRegistry:
        """Find the islands of one mode within a candidate pool.

        Args:
            network: Snapshot the pool belongs to
            mode: Transport mode key
            pool: Candidate edges of the mode's family
            cache: Access states shared across the modes of one pass

        Returns:
            The final incoming/outgoing/ignored sets and the islands.
        """
        cache = cache if cache is not None else AccessStateCache(model=self.model)
        sets = BoundaryReachabilitySet(network=network, mode=mode, model=self.model, settings=self.settings, cache=cache)
        sets.seed(pool)
        if not sets.incoming or not sets.outgoing:
            expanded = expand_network(network, pool, self.settings.max_iterations)
            sets.seed(sorted(expanded, key=edge_sort_key))
        sets.filter_inaccessible(set(pool) | sets.incoming | sets.outgoing)

        sets.grow_until_stable("incoming")
        sets.grow_until_stable("outgoing")

        remaining = [
            edge
            for edge in pool
            if not (edge in sets.incoming and edge in sets.outgoing) and cache.is_positive(edge, mode)
        ]
        collector = ConnectedComponentCollector(network=network, model=self.model, settings=self.settings, cache=cache)
        islands = [
            Island(edges=component, mode=mode, directionality=directionality_of(component, sets.incoming, sets.outgoing))
            for component in collector.collect(remaining)
        ]
        if islands:
            logger.debug(f"Mode {mode}: {len(islands)} islands in {len(remaining)} unreachable edges")

        return ModeRegistry(
            mode=mode,
            incoming=frozenset(sets.incoming),
            outgoing=frozenset(sets.outgoing),
            ignored=frozenset(sets.ignored),
            islands=islands,
        )

    # =========================================================================
    # Reporting
    # =========================================================================

    def report(self, context: DetectionContext) -> list[Finding]:
        """Turn lonely ways and islands into findings.

        Islands with the same edges and directionality found for several
        modes become one finding listing those modes.
        """
        findings: list[Finding] = []

        lonely_severity = self.settings.get_error_level(ErrorCode.LONELY_WAY)
        for edge in sorted(context.lonely_ways, key=edge_sort_key):
            findings.append(LonelyWayFinding(severity=lonely_severity, affected_edges=(edge,)))

        grouped: dict[tuple[frozenset[Edge], Directionality], list[str]] = {}
        for island in context.islands:
            grouped.setdefault((island.edges, island.directionality), []).append(island.mode)

        island_severity = self.settings.get_error_level(ErrorCode.ROUTING_ISLAND)
        island_findings = [
            RoutingIslandFinding(
                severity=island_severity,
                affected_edges=tuple(sorted(edges, key=edge_sort_key)),
                modes=tuple(modes),
                directionality=directionality,
            )
            for (edges, directionality), modes in grouped.items()
        ]
        island_findings.sort(
            key=lambda f: (tuple(edge_sort_key(e) for e in f.affected_edges), f.directionality.value, f.modes)
        )
        findings.extend(island_findings)
        return findings

    def __repr__(self) -> str:
        return f"RoutingIslandDetector(max_iterations={self.settings.max_iterations}, model={self.model!r})"
