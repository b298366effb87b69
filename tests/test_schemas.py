"""
Schema validation tests for GameCompiler.

Tests the Pydantic models to ensure they validate correctly.
"""

import pytest
from pydantic import TypeAdapter

from gamecompiler.schemas import (
    # Inventory
    InventoryKind,
    InventoryItem,
    InventoryInfo,
    ComputedInventoryItem,
    namespace_of,
    # Diagnostics
    Severity,
    HintPayload,
    PlainMessage,
    HintMessage,
    Diagnostic,
    BuildLocation,
    BuildMessage,
    # Units
    SetGame,
    AddWorld,
    SetLevelIndex,
    SetTitle,
    SetConclusion,
    GoalSignature,
    Unit,
    # Game
    Level,
    World,
)


class TestInventorySchemas:
    """Test inventory-related schemas."""

    def test_namespace_of(self):
        assert namespace_of("Nat.add_comm") == "Nat"
        assert namespace_of("Mathlib.Nat.succ_le") == "Mathlib.Nat"
        assert namespace_of("add_comm") == "General"

    def test_inventory_item_valid(self):
        item = InventoryItem(kind=InventoryKind.TACTIC, name="rw", display_name="rw")
        assert item.key == (InventoryKind.TACTIC, "rw")
        assert item.statement is None
        assert not item.placeholder

    def test_inventory_item_empty_name(self):
        with pytest.raises(ValueError):
            InventoryItem(kind=InventoryKind.TACTIC, name="", display_name="")

    def test_inventory_kind_from_string(self):
        item = InventoryItem(kind="lemma", name="foo", display_name="foo")
        assert item.kind == InventoryKind.LEMMA

    def test_inventory_info_disabled(self):
        info = InventoryInfo(disabled={"rw"})
        assert info.is_disabled("rw")
        assert not info.is_disabled("rfl")

    def test_inventory_info_only_overrides_disabled(self):
        info = InventoryInfo(disabled={"rw"}, only={"rw"})
        assert not info.is_disabled("rw")
        assert info.is_disabled("rfl")

    def test_inventory_info_defaults_not_shared(self):
        a, b = InventoryInfo(), InventoryInfo()
        a.new.add("rw")
        assert b.new == set()

    def test_inventory_info_serializes_sorted(self):
        info = InventoryInfo(new={"rw", "apply", "rfl"})
        assert info.model_dump(mode="json")["new"] == ["apply", "rfl", "rw"]

    def test_computed_item_defaults(self):
        item = ComputedInventoryItem(name="rw", display_name="rw", category="")
        assert item.locked
        assert not item.disabled
        assert not item.new


class TestDiagnosticSchemas:
    """Test checker diagnostics and build messages."""

    def test_diagnostic_union_by_tag(self):
        adapter = TypeAdapter(Diagnostic)
        plain = adapter.validate_python({"type": "plain", "text": "ok", "severity": "warning"})
        hint = adapter.validate_python({
            "type": "hint",
            "payload": {"strict": 1, "hidden": 0, "text": "t", "goal": "g"},
        })
        assert isinstance(plain, PlainMessage)
        assert plain.severity == Severity.WARNING
        assert isinstance(hint, HintMessage)
        assert hint.payload.strict == 1

    def test_hint_payload_flags_bounded(self):
        with pytest.raises(ValueError):
            HintPayload(hidden=3, text="t", goal="g")

    def test_build_location_str(self):
        assert str(BuildLocation(game="G", world="W", level=2)) == "G / W / level 2"
        assert str(BuildLocation()) == "<game>"

    def test_build_location_level_positive(self):
        with pytest.raises(ValueError):
            BuildLocation(level=0)

    def test_build_message_str(self):
        message = BuildMessage(
            severity=Severity.ERROR,
            text="boom",
            location=BuildLocation(game="G"),
        )
        assert str(message) == "[error] G: boom"


class TestUnitSchemas:
    """Test authoring unit schemas."""

    def test_unit_union_by_tag(self):
        adapter = TypeAdapter(list[Unit])
        units = adapter.validate_python([
            {"type": "set_game", "name": "G"},
            {"type": "add_world", "id": "W"},
            {"type": "set_level_index", "index": 1},
            {"type": "set_title", "text": "T"},
            {"type": "set_conclusion", "text": "C"},
        ])
        assert [type(u) for u in units] == [SetGame, AddWorld, SetLevelIndex, SetTitle, SetConclusion]

    def test_world_id_must_be_identifier(self):
        with pytest.raises(ValueError):
            AddWorld(id="not an id")

    def test_goal_signature_render(self):
        signature = GoalSignature(binders={"n": "ℕ", "h": "n = 1"}, conclusion="n + 1 = 2")
        assert signature.render() == "(n : ℕ) (h : n = 1) : n + 1 = 2"
        assert GoalSignature(conclusion="True").render() == ": True"

    def test_goal_signature_requires_conclusion(self):
        with pytest.raises(ValueError):
            GoalSignature(conclusion="")


class TestGameSchemas:
    """Test world and level schemas."""

    def test_level_has_inventory_per_kind(self):
        level = Level(world_id="W", index=1)
        assert set(level.inventory) == set(InventoryKind)
        assert level.info(InventoryKind.LEMMA).new == set()

    def test_level_index_positive(self):
        with pytest.raises(ValueError):
            Level(world_id="W", index=0)

    def test_world_ordered_levels(self):
        world = World(id="W")
        for index in (3, 1, 2):
            world.levels[index] = Level(world_id="W", index=index)
        assert [level.index for level in world.ordered_levels()] == [1, 2, 3]
