"""Implied access values for an edge.

default_access derives, for one edge, the access value per transport mode
from its raw tags. Classification-specific defaults are applied with
"set if absent" semantics, so explicitly tagged values always win. The
result is expanded through the mode hierarchy once per direction prefix
and flattened into a single mode -> value mapping (the AccessState), later
prefixes overwriting earlier ones.

The result is transient: it is never stored on the Edge.
"""

from typing import Mapping

from routing_islands.constants import AccessConfig, HighwayConfig
from routing_islands.core.access_model import DEFAULT_ACCESS_MODEL, AccessModel
from routing_islands.model.edge import Edge

AccessState = dict[str, str]

YES = AccessConfig.YES
NO = AccessConfig.NO


def _highway_defaults(tags: dict[str, str]) -> None:
    """Apply highway=* implications in place (set if absent)."""
    highway = tags.get(HighwayConfig.HIGHWAY)

    if AccessConfig.SIDEWALK_KEY in tags and tags[AccessConfig.SIDEWALK_KEY] != NO:
        tags.setdefault("foot", YES)

    if any(AccessConfig.CYCLEWAY_FRAGMENT in key and value != NO for key, value in tags.items()):
        tags.setdefault("bicycle", YES)

    if highway == "residential":
        tags.setdefault("vehicle", YES)
        tags.setdefault("foot", YES)
        tags.setdefault("bicycle", YES)
    elif highway in HighwayConfig.MINOR_ROADS or highway in HighwayConfig.SECONDARY_ROADS:
        tags.setdefault("vehicle", YES)
    elif highway in HighwayConfig.PRIMARY_ROADS:
        tags.setdefault("vehicle", YES)
        tags.setdefault("hgv", YES)
    elif highway in HighwayConfig.MOTORWAY_LIKE:
        tags.setdefault("vehicle", YES)
        tags.setdefault("bicycle", NO)
        tags.setdefault("foot", NO)
    elif highway == "steps":
        tags.setdefault(AccessConfig.ACCESS_KEY, NO)
        tags.setdefault("foot", YES)
    elif highway == "path":
        tags.setdefault("motor_vehicle", NO)
        tags.setdefault("emergency", AccessConfig.DESTINATION)
    elif highway == "footway":
        tags.setdefault("foot", AccessConfig.DESIGNATED)
    elif highway == "bus_guideway":
        tags.setdefault(AccessConfig.ACCESS_KEY, NO)
        tags.setdefault("bus", AccessConfig.DESIGNATED)
    elif highway == "road":
        # Unknown road type, not expected to be routable
        tags.setdefault(AccessConfig.ACCESS_KEY, NO)
    else:
        tags.setdefault(AccessConfig.ACCESS_KEY, YES)


def _waterway_defaults(tags: dict[str, str]) -> None:
    """Apply waterway=* implications in place (set if absent)."""
    if tags.get(HighwayConfig.WATERWAY) == "river":
        tags.setdefault("boat", YES)


def implied_tags(tags: Mapping[str, str]) -> dict[str, str]:
    """Copy of the tags with classification defaults added."""
    result = dict(tags)
    if HighwayConfig.HIGHWAY in result:
        _highway_defaults(result)
    elif HighwayConfig.WATERWAY in result:
        _waterway_defaults(result)
    return result


def default_access(edge: Edge, model: AccessModel = DEFAULT_ACCESS_MODEL) -> AccessState:
    """Derive the access value per mode for an edge.

    Args:
        edge: Edge to inspect (not modified)
        model: Mode registry used for inheritance expansion

    Returns:
        Mapping of mode key to access value. Prefixes are applied in order,
        so backward: overrides forward: overrides plain keys. Only known modes appear.

    Example:
        default_access(Edge(id=1, vertices=(a, b), tags={"highway": "motorway"}))["foot"]  # "no"
    """
    tags = implied_tags(edge.tags)
    state: AccessState = {}
    for prefix in AccessConfig.DIRECTION_PREFIXES:
        scoped = {
            key[len(prefix) :]: value
            for key, value in tags.items()
            if key.startswith(prefix) and key[len(prefix) :] in model
        }
        if not scoped:
            continue
        for mode, value in model.expand_values(scoped).items():
            if mode in model:
                state[mode] = value
    return state


def is_accessible_positive(
    state: Mapping[str, str],
    mode: str,
    model: AccessModel = DEFAULT_ACCESS_MODEL,
) -> bool:
    """True iff the mode's access value permits routing ("no" when absent)."""
    return state.get(mode, NO) in model.positive_values()


class AccessStateCache:
    """Memoised default_access per edge for the duration of one pass.

    Edges are immutable during a pass, so their state never changes while
    the cache is alive. Create a new cache for every pass.
    """

    def __init__(self, model: AccessModel = DEFAULT_ACCESS_MODEL) -> None:
        self.model = model
        self._states: dict[int, AccessState] = {}

    def get(self, edge: Edge) -> AccessState:
        state = self._states.get(id(edge))
        if state is None:
            state = default_access(edge, self.model)
            self._states[id(edge)] = state
        return state

    def is_positive(self, edge: Edge, mode: str) -> bool:
        return is_accessible_positive(self.get(edge), mode, self.model)

    def __len__(self) -> int:
        return len(self._states)
