"""
Unit loader utility for GameCompiler.

Loads an authored unit stream from YAML. The file holds an optional
`environment` mapping (declarations that exist before the game is built,
name -> type) and the ordered `units` list.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import TypeAdapter

from gamecompiler.schemas import Unit


_UNITS_ADAPTER = TypeAdapter(list[Unit])


@dataclass
class UnitFile:
    units: list[Unit]
    environment: dict[str, str] = field(default_factory=dict)
    source: Path | None = None


def parse_units(data: dict[str, Any], source: Path | None = None) -> UnitFile:
    """
    Validate already-parsed YAML/JSON data into typed units.

    Raises:
        pydantic.ValidationError: If a unit does not match any unit schema
    """
    environment = data.get("environment") or {}
    units = _UNITS_ADAPTER.validate_python(data.get("units") or [])
    return UnitFile(
        units=units,
        environment={str(k): str(v) for k, v in environment.items()},
        source=source,
    )


def load_units(path: Path) -> UnitFile:
    """
    Load a unit stream from a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        pydantic.ValidationError: If a unit is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Unit file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return parse_units(data, source=path)
