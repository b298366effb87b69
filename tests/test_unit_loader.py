"""Tests for loading unit streams and the compile_game script."""

import json
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from gamecompiler.schemas import AddPath, DeclareHint, DeclareStatement, InventoryKind, RegisterDoc
from gamecompiler.utils import load_units, parse_units
from scripts.compile_game import main

SAMPLE_GAME = Path(__file__).parent.parent / "data" / "sample_game.yaml"


class TestParseUnits:

    def test_units_typed_by_tag(self):
        unit_file = parse_units({
            "environment": {"foo": "1 = 1"},
            "units": [
                {"type": "register_doc", "kind": "lemma", "name": "foo"},
                {"type": "add_path", "from_id": "A", "to_id": "B"},
                {
                    "type": "declare_statement",
                    "signature": {"binders": {"x": "ℕ"}, "conclusion": "x = x"},
                    "script": ["rfl", {"type": "declare_hint", "text": "hi", "strict": True}],
                },
            ],
        })
        first, second, third = unit_file.units
        assert isinstance(first, RegisterDoc)
        assert first.kind == InventoryKind.LEMMA
        assert isinstance(second, AddPath)
        assert isinstance(third, DeclareStatement)
        assert third.script[0] == "rfl"
        assert isinstance(third.script[1], DeclareHint)
        assert third.script[1].strict
        assert unit_file.environment == {"foo": "1 = 1"}

    def test_empty_document(self):
        unit_file = parse_units({})
        assert unit_file.units == []
        assert unit_file.environment == {}

    def test_unknown_unit_type(self):
        with pytest.raises(ValidationError):
            parse_units({"units": [{"type": "teleport"}]})

    def test_unknown_kind(self):
        with pytest.raises(ValidationError):
            parse_units({"units": [{"type": "declare_new", "kind": "axiom", "names": []}]})


class TestLoadUnits:

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_units(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("units: [\n", encoding="utf-8")
        with pytest.raises(yaml.YAMLError):
            load_units(path)

    def test_sample_game(self):
        unit_file = load_units(SAMPLE_GAME)
        assert unit_file.source == SAMPLE_GAME
        assert "Nat.add_zero" in unit_file.environment
        assert len(unit_file.units) > 10


class TestCompileGameScript:

    def test_compiles_sample_game(self, tmp_path):
        status = main(["--input", str(SAMPLE_GAME), "--output-dir", str(tmp_path)])
        assert status == 0

        game = json.loads((tmp_path / "game.json").read_text(encoding="utf-8"))
        assert game["name"] == "NNG"
        assert [w["id"] for w in game["worlds"]] == ["Tutorial", "Implication"]

        implication = game["worlds"][1]["levels"]["1"]
        tactics = {t["name"]: t for t in implication["inventory"]["tactic"]["computed"]}
        assert not tactics["rw"]["locked"]
        assert tactics["rw"]["disabled"]
        assert not tactics["intro"]["disabled"]
        assert implication["hints"][0]["hidden"] is True

        tutorial_2 = game["worlds"][0]["levels"]["2"]
        assert tutorial_2["hints"][0]["strict"] is True
        assert tutorial_2["statement"]["preview"].startswith("add_zero_twice")

        assert (tmp_path / "game_report.md").exists()
        diagnostics = json.loads((tmp_path / "diagnostics.json").read_text(encoding="utf-8"))
        assert all(d["severity"] == "info" for d in diagnostics)

    def test_strict_fails_on_warnings(self, tmp_path):
        path = tmp_path / "game.yaml"
        path.write_text(yaml.safe_dump({"units": [
            {"type": "add_world", "id": "W"},
            {"type": "set_level_index", "index": 1},
            {"type": "declare_new", "kind": "tactic", "names": ["undocumented"]},
        ]}), encoding="utf-8")

        out = tmp_path / "out"
        assert main(["--input", str(path), "--output-dir", str(out)]) == 0
        assert main(["--input", str(path), "--output-dir", str(out), "--strict"]) == 1

    def test_cycle_fails(self, tmp_path):
        path = tmp_path / "game.yaml"
        path.write_text(yaml.safe_dump({"units": [
            {"type": "add_world", "id": "A"},
            {"type": "add_world", "id": "B"},
            {"type": "add_path", "from_id": "A", "to_id": "B"},
            {"type": "add_path", "from_id": "B", "to_id": "A"},
        ]}), encoding="utf-8")

        assert main(["--input", str(path), "--output-dir", str(tmp_path / "out")]) == 1
        assert not (tmp_path / "out" / "game.json").exists()

    def test_missing_input(self, tmp_path):
        assert main(["--input", str(tmp_path / "nope.yaml"), "--output-dir", str(tmp_path)]) == 1

    def test_units_after_mid_stream_run(self, tmp_path):
        path = tmp_path / "game.yaml"
        path.write_text(yaml.safe_dump({"units": [
            {"type": "add_world", "id": "A"},
            {"type": "set_level_index", "index": 1},
            {"type": "run_availability_compiler"},
            {"type": "add_world", "id": "B"},
            {"type": "add_path", "from_id": "A", "to_id": "B"},
            {"type": "set_level_index", "index": 1},
        ]}), encoding="utf-8")

        assert main(["--input", str(path), "--output-dir", str(tmp_path)]) == 0
        game = json.loads((tmp_path / "game.json").read_text(encoding="utf-8"))
        assert [w["id"] for w in game["worlds"]] == ["A", "B"]
