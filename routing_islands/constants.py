"""Configuration constants for the routing island detector.

All fixed parameters are centralized here for easy tuning.
Runtime-overridable values (iteration cap, severities) live in
routing_islands.model.settings.DetectionSettings and default to these.

Classes:
    ErrorCode: Fixed finding codes emitted by the detector
    ValidationConfig: Fixpoint caps and candidate filtering
    HighwayConfig: Classification keys and ignored classification values
    AccessConfig: Access values and tag keys used by the access resolver
    OnewayConfig: Values of the plain oneway tag
"""

from enum import IntEnum


class ErrorCode(IntEnum):
    """Finding codes. LONELY_WAY is always ROUTING_ISLAND + 1."""

    ROUTING_ISLAND = 55000
    LONELY_WAY = 55001


assert ErrorCode.LONELY_WAY == ErrorCode.ROUTING_ISLAND + 1


class ValidationConfig:
    """Fixpoint iteration and pass parameters."""

    # Sanity cap for every bounded fixpoint loop (growth, collection, expansion)
    MAX_ITERATIONS = 1000

    # Transport families analysed per pass, in order
    ANALYSED_FAMILIES = ("land", "water")

    # Amenity values on a vertex that count as a connection to the outside world
    OUTSIDE_CONNECTION_AMENITIES = frozenset(
        {"parking_entrance", "parking", "parking_space", "motorcycle_parking", "ferry_terminal"}
    )


class HighwayConfig:
    """Classification keys and values excluded from routing checks."""

    HIGHWAY = "highway"
    WATERWAY = "waterway"

    IGNORE_HIGHWAY = frozenset({"services", "rest_area", "platform"})
    IGNORE_WATERWAY = frozenset({"services", "rest_area", "dam"})

    MOTORWAY_LIKE = frozenset({"motorway", "trunk", "motorway_link", "trunk_link"})
    MINOR_ROADS = frozenset({"service", "unclassified", "tertiary", "tertiary_link"})
    SECONDARY_ROADS = frozenset({"secondary", "secondary_link"})
    PRIMARY_ROADS = frozenset({"primary", "primary_link"})


class AccessConfig:
    """Access tag keys and values.

    Reference: https://wiki.openstreetmap.org/wiki/Key:access
    """

    ACCESS_KEY = "access"

    YES = "yes"
    NO = "no"
    DESIGNATED = "designated"
    DESTINATION = "destination"

    # Values that permit routing
    POSITIVE_VALUES = frozenset(
        {
            "yes",
            "official",
            "designated",
            "destination",
            "delivery",
            "customers",
            "permissive",
            "agricultural",
            "forestry",
        }
    )

    # Basic restriction values (positive values plus the blocking ones)
    RESTRICTION_VALUES = POSITIVE_VALUES | frozenset({"private", "no"})

    # Direction prefixes flattened into a single access state; later ones overwrite earlier ones
    DIRECTION_PREFIXES = ("", "forward:", "backward:")

    SIDEWALK_KEY = "sidewalk"
    CYCLEWAY_FRAGMENT = "cycleway"

    RESTRICTION_TYPE = "restriction"
    EXCEPT_KEY = "except"
    EXCEPT_SEPARATOR = ";"


assert AccessConfig.YES in AccessConfig.POSITIVE_VALUES
assert AccessConfig.NO not in AccessConfig.POSITIVE_VALUES


class OnewayConfig:
    """Plain oneway tag values."""

    ONEWAY_KEY = "oneway"
    FORWARD_VALUES = frozenset({"yes", "true", "1"})
    REVERSE_VALUES = frozenset({"-1", "reverse"})

    # Modes that ignore the plain oneway tag unless they carry explicit direction tags
    FOOT = "foot"
    FOOTWAY = "footway"
