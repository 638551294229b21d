"""Turn restriction checks between two edges.

Only direct from -> to pairs are checked. Restrictions with a via way are
not modelled: the via member is ignored, so such a restriction is treated
as if it applied directly between its from and to edges.
"""

import logging

from routing_islands.model.edge import Edge
from routing_islands.model.network import NetworkSnapshot

logger = logging.getLogger(__name__)


def is_reachable(network: NetworkSnapshot, from_edge: Edge, to_edge: Edge, mode: str | None) -> bool:
    """Check if to_edge can be entered from from_edge.

    A restriction relation forbids the transition when its "from" member is
    from_edge, its "to" member is to_edge, and either no mode is given or the
    mode appears in the relation's except list.

    Args:
        network: Snapshot providing the edge -> relation lookup
        from_edge: Edge the traveller comes from
        to_edge: Edge the traveller turns into
        mode: Transport mode key (None or blank for unspecified)

    Returns:
        False if a restriction forbids the transition, True otherwise.
    """
    blank_mode = mode is None or not mode.strip()
    for relation in network.relations_of(from_edge):
        if not relation.is_turn_restriction:
            continue
        if not relation.members_with_role("from") or not relation.members_with_role("to"):
            logger.debug(f"Restriction {relation.id} lacks a from/to member, ignoring")
            continue
        applies = blank_mode or (relation.has_except() and mode in relation.except_modes)
        if not applies:
            continue
        if "from" in relation.roles_of(from_edge) and "to" in relation.roles_of(to_edge):
            return False
    return True
