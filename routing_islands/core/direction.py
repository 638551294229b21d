"""Per-mode oneway semantics and entry/exit vertices of an edge.

oneway_direction returns:
     0  traversable both ways
     1  forward only (first -> last vertex)
    -1  backward only (last -> first vertex)
  None  impassable in both directions for the mode

These helpers are public because other heuristics reuse the same oneway
and access semantics.
"""

from typing import Mapping

from routing_islands.constants import HighwayConfig, OnewayConfig
from routing_islands.core.access_model import DEFAULT_ACCESS_MODEL, AccessModel
from routing_islands.core.accessibility import default_access, is_accessible_positive
from routing_islands.model.edge import Edge
from routing_islands.model.vertex import Vertex


def _is_blank(mode: str | None) -> bool:
    return mode is None or not mode.strip()


def plain_oneway(edge: Edge) -> int:
    """Direction implied by the plain oneway tag alone (1, -1 or 0)."""
    value = edge.get(OnewayConfig.ONEWAY_KEY)
    if value in OnewayConfig.REVERSE_VALUES:
        return -1
    if value in OnewayConfig.FORWARD_VALUES:
        return 1
    return 0


def oneway_direction(edge: Edge, mode: str | None) -> int | None:
    """Check if an edge is oneway for a specific transport mode.

    Args:
        edge: The edge to look at
        mode: Transport mode key, or None/blank for the plain oneway tag

    Returns:
        0, 1, -1, or None if the mode cannot travel the edge in either direction.
    """
    if _is_blank(mode):
        return plain_oneway(edge)

    forward_key = f"{mode}:forward"
    backward_key = f"{mode}:backward"
    oneway = plain_oneway(edge)
    possible_forward = edge.get(forward_key) == "yes" or (not edge.has_key(forward_key) and oneway != -1)
    possible_backward = edge.get(backward_key) == "yes" or (not edge.has_key(backward_key) and oneway != 1)

    if (
        mode == OnewayConfig.FOOT
        and edge.get(HighwayConfig.HIGHWAY) != OnewayConfig.FOOTWAY
        and not edge.has_key("foot:forward")
        and not edge.has_key("foot:backward")
    ):
        # Pedestrians are almost never bound by oneway on generic roads
        return 0

    if possible_forward and not possible_backward:
        return 1
    if possible_backward and not possible_forward:
        return -1
    if not possible_forward and not possible_backward:
        return None
    return 0


def _routable(edge: Edge, mode: str | None, model: AccessModel, state: Mapping[str, str] | None) -> bool:
    if _is_blank(mode):
        return True
    if state is None:
        state = default_access(edge, model)
    return is_accessible_positive(state, mode, model)


def entry_vertex(
    edge: Edge,
    mode: str | None,
    model: AccessModel = DEFAULT_ACCESS_MODEL,
    state: Mapping[str, str] | None = None,
) -> Vertex | None:
    """First vertex of an edge for a traveller of the given mode.

    Pass an already derived access state to skip recomputing it.

    Returns:
        The vertex the mode enters the edge at (last vertex if the edge is
        backward-only), or None if the mode cannot use the edge.
    """
    direction = oneway_direction(edge, mode)
    if direction is None and not _is_blank(mode):
        return None
    if not _routable(edge, mode, model, state):
        return None
    return edge.last if direction == -1 else edge.first


def exit_vertex(
    edge: Edge,
    mode: str | None,
    model: AccessModel = DEFAULT_ACCESS_MODEL,
    state: Mapping[str, str] | None = None,
) -> Vertex | None:
    """Last vertex of an edge for a traveller of the given mode.

    Returns:
        The vertex the mode leaves the edge at (first vertex if the edge is
        backward-only), or None if the mode cannot use the edge.
    """
    direction = oneway_direction(edge, mode)
    if direction is None and not _is_blank(mode):
        return None
    if not _routable(edge, mode, model, state):
        return None
    return edge.first if direction == -1 else edge.last
