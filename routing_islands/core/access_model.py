"""Transport mode hierarchy and access value semantics.

The hierarchy follows the OSM access inheritance:
https://wiki.openstreetmap.org/wiki/Key:access#Transport_mode_restrictions

Modes are stored as records in an arena (a tuple) and refer to each other
only by integer index:
- parent: the mode this one inherits access from (None only for the root "all")
- transport_type: the family the mode belongs to ("all", "land", "water", "rail")

Traversal walks indices up or down, never live references, so the tree
cannot contain cycles. The registry is built once by build_access_model()
and is immutable afterwards; DEFAULT_ACCESS_MODEL is that instance and is
passed by reference into every component.

Merge semantics (merge) are asymmetric on purpose and must stay as they
are: a map whose keys cover the other's keys is overridden by the narrower
map, otherwise the left map wins.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, Mapping

from routing_islands.constants import AccessConfig

ROOT = "all"


@dataclass(frozen=True)
class TransportMode:
    """One record of the mode arena.

    Attributes:
        key: Tag key of the mode (e.g. "motor_vehicle")
        index: Position in the arena
        parent: Arena index of the parent mode (None for the root)
        children: Keys of the direct children, in declaration order
        transport_type: Arena index of the family record (None for the root)
    """

    key: str
    index: int
    parent: int | None
    children: tuple[str, ...]
    transport_type: int | None


# (parent, family, children) in declaration order
_HIERARCHY: tuple[tuple[str | None, str | None, tuple[str, ...]], ...] = (
    (None, None, ("all",)),
    ("all", "all", ("access", "land", "water", "rail")),
    # Land
    ("access", "land", ("foot", "ski", "inline_skates", "ice_skates", "horse", "vehicle")),
    ("ski", "land", ("ski:nordic", "ski:alpine", "ski:telemark")),
    ("vehicle", "land", ("bicycle", "carriage", "trailer", "motor_vehicle")),
    ("trailer", "land", ("caravan",)),
    (
        "motor_vehicle",
        "land",
        (
            "motorcycle",
            "moped",
            "mofa",
            "motorcar",
            "motorhome",
            "tourist_bus",
            "coach",
            "goods",
            "hgv",
            "agricultural",
            "golf_cart",
            "atv",
            "snowmobile",
            "psv",
            "hov",
            "car_sharing",
            "emergency",
            "hazmat",
            "disabled",
        ),
    ),
    ("hgv", "land", ("hgv_articulated",)),
    ("psv", "land", ("bus", "minibus", "share_taxi", "taxi")),
    # Water
    ("access", "water", ("swimming", "boat", "fishing_vessel", "ship")),
    ("boat", "water", ("motorboat", "sailboat", "canoe")),
    ("ship", "water", ("passenger", "cargo", "isps")),
    ("cargo", "water", ("bulk", "tanker", "container", "imdg")),
    ("tanker", "water", ("tanker:gas", "tanker:oil", "tanker:chemical", "tanker:singlehull")),
    # Rail
    ("access", "rail", ("train",)),
)

# Family of the non-leaf records that are not covered by a _HIERARCHY row
_RECORD_FAMILY = {"all": None, "access": "all", "land": "all", "water": "all", "rail": "all"}


class AccessModel:
    """Immutable registry of transport modes.

    Example:
        model = build_access_model()
        model.expand("vehicle", "no")["bicycle"]  # "no"
        "foot" in model.modes_under("land")  # True
    """

    def __init__(self, modes: tuple[TransportMode, ...]) -> None:
        self._modes = modes
        self._by_key: Mapping[str, int] = MappingProxyType({m.key: m.index for m in modes})
        roots = [m for m in modes if m.parent is None]
        if len(roots) != 1 or roots[0].key != ROOT:
            raise ValueError(f"Mode tree must have the single root '{ROOT}'")

    # =========================================================================
    # Lookup
    # =========================================================================

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __iter__(self) -> Iterator[TransportMode]:
        return iter(self._modes)

    def __len__(self) -> int:
        return len(self._modes)

    def get(self, key: str) -> TransportMode | None:
        index = self._by_key.get(key)
        return None if index is None else self._modes[index]

    def parent_of(self, key: str) -> str | None:
        mode = self.get(key)
        if mode is None or mode.parent is None:
            return None
        return self._modes[mode.parent].key

    def depth(self, key: str) -> int:
        """Number of ancestors of a mode (0 for the root or unknown modes)."""
        mode = self.get(key)
        count = 0
        while mode is not None and mode.parent is not None and count < len(self._modes):
            mode = self._modes[mode.parent]
            count += 1
        return count

    def in_family(self, key: str, family: str) -> bool:
        """Check if a mode's transport family chain reaches the given family."""
        target = self._by_key.get(family)
        index = self._by_key.get(key)
        steps = 0
        while index is not None and index != target and steps <= len(self._modes):
            index = self._modes[index].transport_type
            steps += 1
        return index is not None and index == target

    def modes_under(self, family: str) -> frozenset[str]:
        """All mode keys in a transport family (land/water/rail/all), inclusive."""
        return frozenset(m.key for m in self._modes if self.in_family(m.key, family))

    def routable_modes(self, family: str) -> tuple[str, ...]:
        """Leaf modes of a family in declaration order.

        Category records (all, access, land, water, rail) always have
        children, so they never appear here.
        """
        return tuple(m.key for m in self._modes if not m.children and self.in_family(m.key, family))

    # =========================================================================
    # Access values
    # =========================================================================

    @staticmethod
    def positive_values() -> frozenset[str]:
        """Access values that permit routing."""
        return AccessConfig.POSITIVE_VALUES

    @staticmethod
    def restriction_values() -> frozenset[str]:
        """Basic restriction values (positive values plus private/no)."""
        return AccessConfig.RESTRICTION_VALUES

    def expand(self, mode: str, value: str, within: str = ROOT) -> dict[str, str]:
        """Apply an access value to a mode and its inheriting descendants.

        Args:
            mode: Mode key the value is tagged on
            value: Access value (yes, no, designated, ...)
            within: Only descendants in this transport family receive the value

        Returns:
            {mode: value} plus the value for every descendant within the family.
            Parents are never included. Unknown modes expand to themselves only.
        """
        expanded = {mode: value}
        start = self.get(mode)
        if start is None:
            return expanded
        stack = list(reversed(start.children))
        while stack:
            child = self._modes[self._by_key[stack.pop()]]
            if not self.in_family(child.key, within):
                continue
            expanded[child.key] = value
            stack.extend(reversed(child.children))
        return expanded

    @staticmethod
    def merge(a: Mapping[str, str], b: Mapping[str, str]) -> dict[str, str]:
        """Merge two access maps.

        If a's keys cover all of b's keys, b is the narrower map and its values
        win. Otherwise (disjoint maps, or b covering a) the values of a win.
        """
        if set(a).issuperset(b):
            merged = dict(a)
            merged.update(b)
        else:
            merged = dict(b)
            merged.update(a)
        return merged

    def expand_values(self, values: Mapping[str, str], within: str = ROOT) -> dict[str, str]:
        """Expand every entry of an access map and fold the results with merge.

        Expansions are merged broadest first (ties broken by key), so narrower
        tags override broader ones they are contained in.
        """
        expansions = sorted(
            (self.expand(mode, value, within) for mode, value in values.items()),
            key=lambda m: (-len(m), next(iter(m))),
        )
        merged: dict[str, str] = {}
        for expansion in expansions:
            merged = self.merge(merged, expansion)
        return merged

    def __repr__(self) -> str:
        return f"AccessModel({len(self._modes)} modes)"


def build_access_model() -> AccessModel:
    """Build the default mode arena from the OSM access hierarchy."""
    keys: list[str] = []
    parents: dict[str, str | None] = {}
    families: dict[str, str | None] = dict(_RECORD_FAMILY)
    children: dict[str, list[str]] = {}

    for parent, family, kids in _HIERARCHY:
        for kid in kids:
            if kid in parents:
                raise ValueError(f"Mode '{kid}' declared twice")
            parents[kid] = parent
            keys.append(kid)
            families.setdefault(kid, family)
            children.setdefault(kid, [])
            if parent is not None:
                children[parent].append(kid)

    index = {key: i for i, key in enumerate(keys)}
    modes = tuple(
        TransportMode(
            key=key,
            index=index[key],
            parent=None if parents[key] is None else index[parents[key]],
            children=tuple(children[key]),
            transport_type=None if families[key] is None else index[families[key]],
        )
        for key in keys
    )
    return AccessModel(modes=modes)


DEFAULT_ACCESS_MODEL = build_access_model()
