"""Relation - A tagged grouping of edges and vertices.

Only turn restrictions (type=restriction) are consulted by the detector.
Their "from"/"via"/"to" members reference Edges or Vertices; the optional
"except" tag lists exempted modes separated by ';'.
"""

from dataclasses import dataclass, field

from routing_islands.constants import AccessConfig
from routing_islands.model.edge import Edge
from routing_islands.model.vertex import Vertex

Member = Edge | Vertex


@dataclass(frozen=True, eq=False)
class RelationMember:
    """A role plus the referenced primitive."""

    role: str
    member: Member


@dataclass(eq=False)
class Relation:
    """A tagged relation.

    Attributes:
        id: Unique identifier within the snapshot
        tags: Tag mapping (type=restriction, restriction=no_left_turn, except=bicycle, ...)
        members: Ordered members
    """

    id: int | str
    tags: dict[str, str] = field(default_factory=dict)
    members: tuple[RelationMember, ...] = ()

    def __post_init__(self) -> None:
        self.members = tuple(self.members)

    @property
    def is_turn_restriction(self) -> bool:
        return self.tags.get("type") == AccessConfig.RESTRICTION_TYPE

    @property
    def except_modes(self) -> frozenset[str]:
        """Modes listed in the except tag (empty if absent)."""
        raw = self.tags.get(AccessConfig.EXCEPT_KEY)
        if raw is None:
            return frozenset()
        return frozenset(part.strip() for part in raw.split(AccessConfig.EXCEPT_SEPARATOR) if part.strip())

    def has_except(self) -> bool:
        return AccessConfig.EXCEPT_KEY in self.tags

    def roles_of(self, primitive: Member) -> set[str]:
        """All roles under which a primitive is a member."""
        return {m.role for m in self.members if m.member is primitive}

    def members_with_role(self, role: str) -> list[Member]:
        return [m.member for m in self.members if m.role == role]

    def __repr__(self) -> str:
        return f"Relation({self.id}, {self.tags}, {len(self.members)} members)"
