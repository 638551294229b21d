"""Grouping of leftover edges into connected components.

Two edges join the same component when they share a vertex and their
derived access states (over the whole mode tree) are equal. This is an
equality check, not a directional reachability check: two unrelated road
segments with identical tags that happen to touch end up in one component.
"""

import logging
from typing import Iterable

from routing_islands.core.access_model import DEFAULT_ACCESS_MODEL, AccessModel
from routing_islands.core.accessibility import AccessState, AccessStateCache
from routing_islands.model.edge import Edge
from routing_islands.model.network import NetworkSnapshot
from routing_islands.model.settings import DetectionSettings

logger = logging.getLogger(__name__)


def edge_sort_key(edge: Edge) -> str:
    """Deterministic ordering key for edges (ids may be int or str)."""
    return str(edge.id)


class ConnectedComponentCollector:
    """Splits a pool of edges into access-state-equal connected components."""

    def __init__(
        self,
        network: NetworkSnapshot,
        model: AccessModel = DEFAULT_ACCESS_MODEL,
        settings: DetectionSettings | None = None,
        cache: AccessStateCache | None = None,
    ) -> None:
        self.network = network
        self.settings = settings if settings is not None else DetectionSettings()
        self.cache = cache if cache is not None else AccessStateCache(model=model)

    def _grow(self, component: set[Edge], state: AccessState, pool: set[Edge]) -> bool:
        additions: set[Edge] = set()
        for edge in component:
            for vertex in edge.unique_vertices():
                for neighbour in self.network.referrers(vertex):
                    if neighbour in component or neighbour not in pool:
                        continue
                    if self.cache.get(neighbour) == state:
                        additions.add(neighbour)
        component.update(additions)
        return bool(additions)

    def collect(self, edges: Iterable[Edge]) -> list[frozenset[Edge]]:
        """Partition the edges into components.

        Seeds are taken in edge id order and every component is grown until
        stable or until the iteration cap is hit.

        Returns:
            Components in seed order. Every input edge is in exactly one.
        """
        ordered = sorted(set(edges), key=edge_sort_key)
        remaining = set(ordered)
        cap = self.settings.max_iterations
        components: list[frozenset[Edge]] = []

        for seed in ordered:
            if seed not in remaining:
                continue
            component = {seed}
            state = self.cache.get(seed)
            steps = 0
            changed = True
            while changed and steps < cap:
                steps += 1
                changed = self._grow(component, state, remaining)
            if changed:
                logger.debug(f"Component of {seed.id} stopped growing at the cap of {cap} steps")
            remaining.difference_update(component)
            components.append(frozenset(component))

        return components
