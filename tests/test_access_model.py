"""Tests for the transport mode hierarchy.

Tests: AccessModel lookup, family membership, expand, merge, expand_values
Focus: Inheritance semantics and the asymmetric merge rule
"""

import pytest

from routing_islands.core.access_model import AccessModel, TransportMode, build_access_model


class TestHierarchy:
    """Arena structure and lookups."""

    def test_single_root_all(self, model: AccessModel) -> None:
        roots = [m for m in model if m.parent is None]
        assert [m.key for m in roots] == ["all"]

    def test_parent_and_depth(self, model: AccessModel) -> None:
        assert model.parent_of("bicycle") == "vehicle"
        assert model.parent_of("vehicle") == "access"
        assert model.parent_of("all") is None
        assert model.depth("all") == 0
        assert model.depth("access") == 1
        assert model.depth("vehicle") == 2
        assert model.depth("hgv_articulated") == 5

    def test_unknown_mode(self, model: AccessModel) -> None:
        assert "hovercraft" not in model
        assert model.get("hovercraft") is None
        assert model.parent_of("hovercraft") is None
        assert model.depth("hovercraft") == 0

    def test_indices_match_arena_position(self, model: AccessModel) -> None:
        for position, mode in enumerate(model):
            assert mode.index == position
            if mode.parent is not None:
                assert mode.key in model.get(model.parent_of(mode.key)).children

    def test_two_roots_rejected(self) -> None:
        modes = (
            TransportMode(key="all", index=0, parent=None, children=(), transport_type=None),
            TransportMode(key="other", index=1, parent=None, children=(), transport_type=None),
        )
        with pytest.raises(ValueError):
            AccessModel(modes=modes)

    def test_empty_arena_rejected(self) -> None:
        with pytest.raises(ValueError):
            AccessModel(modes=())

    def test_build_is_deterministic(self, model: AccessModel) -> None:
        assert [m.key for m in build_access_model()] == [m.key for m in model]


class TestFamilies:
    """modes_under and routable_modes."""

    def test_land_family(self, model: AccessModel) -> None:
        land = model.modes_under("land")
        assert {"land", "foot", "vehicle", "bicycle", "motorcar", "ski:nordic"} <= land
        assert "boat" not in land
        assert "access" not in land

    def test_water_family(self, model: AccessModel) -> None:
        water = model.modes_under("water")
        assert {"boat", "canoe", "tanker:oil"} <= water
        assert "foot" not in water

    def test_all_family_covers_everything(self, model: AccessModel) -> None:
        assert model.modes_under("all") == frozenset(m.key for m in model)

    def test_routable_modes_are_leaves(self, model: AccessModel) -> None:
        land = model.routable_modes("land")
        assert "foot" in land and "bicycle" in land and "hgv_articulated" in land
        for category in ("all", "access", "land", "vehicle", "motor_vehicle", "hgv", "ski"):
            assert category not in land

    def test_routable_modes_keep_tree_order(self, model: AccessModel) -> None:
        land = model.routable_modes("land")
        assert land.index("foot") < land.index("bicycle") < land.index("motorcar")

    def test_water_routable_modes(self, model: AccessModel) -> None:
        water = model.routable_modes("water")
        assert "canoe" in water and "swimming" in water
        assert "boat" not in water
        assert set(water).isdisjoint(model.routable_modes("land"))


class TestExpand:
    """Value inheritance through children."""

    def test_vehicle_no_reaches_descendants(self, model: AccessModel) -> None:
        expanded = model.expand("vehicle", "no")
        assert expanded["vehicle"] == "no"
        assert expanded["bicycle"] == "no"
        assert expanded["hgv_articulated"] == "no"
        assert "foot" not in expanded
        assert "access" not in expanded

    def test_expand_within_family(self, model: AccessModel) -> None:
        expanded = model.expand("access", "yes", within="land")
        assert expanded["foot"] == "yes" and expanded["motorcar"] == "yes"
        assert "boat" not in expanded and "train" not in expanded

    def test_unknown_mode_expands_to_itself(self, model: AccessModel) -> None:
        assert model.expand("hovercraft", "yes") == {"hovercraft": "yes"}

    def test_leaf_expands_to_itself(self, model: AccessModel) -> None:
        assert model.expand("canoe", "designated") == {"canoe": "designated"}


class TestMerge:
    """The asymmetric merge rule."""

    def test_superset_left_is_overridden(self) -> None:
        merged = AccessModel.merge({"a": "yes", "b": "yes"}, {"a": "no"})
        assert merged == {"a": "no", "b": "yes"}

    def test_narrower_left_wins(self) -> None:
        merged = AccessModel.merge({"a": "yes"}, {"a": "no", "b": "no"})
        assert merged == {"a": "yes", "b": "no"}

    def test_disjoint_union(self) -> None:
        merged = AccessModel.merge({"a": "yes"}, {"b": "no"})
        assert merged == {"a": "yes", "b": "no"}

    def test_inputs_not_modified(self) -> None:
        a = {"a": "yes"}
        b = {"a": "no"}
        AccessModel.merge(a, b)
        assert a == {"a": "yes"} and b == {"a": "no"}


class TestExpandValues:
    """Folding several tagged modes into one access map."""

    def test_narrow_tag_overrides_broad_one(self, model: AccessModel) -> None:
        values = model.expand_values({"vehicle": "no", "bicycle": "yes"})
        assert values["bicycle"] == "yes"
        assert values["motorcar"] == "no"

    def test_access_no_with_foot_yes(self, model: AccessModel) -> None:
        values = model.expand_values({"access": "no", "foot": "yes"})
        assert values["foot"] == "yes"
        assert values["motorcar"] == "no"
        assert values["canoe"] == "no"

    def test_order_of_input_does_not_matter(self, model: AccessModel) -> None:
        a = model.expand_values({"bicycle": "yes", "vehicle": "no", "foot": "designated"})
        b = model.expand_values({"foot": "designated", "vehicle": "no", "bicycle": "yes"})
        assert a == b

    def test_empty(self, model: AccessModel) -> None:
        assert model.expand_values({}) == {}


class TestAccessValues:
    def test_positive_and_restriction_values(self, model: AccessModel) -> None:
        assert {"yes", "designated", "destination", "permissive"} <= model.positive_values()
        assert "no" not in model.positive_values()
        assert "private" not in model.positive_values()
        assert {"private", "no"} <= model.restriction_values()
        assert model.positive_values() <= model.restriction_values()
