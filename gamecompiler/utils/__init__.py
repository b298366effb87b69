"""GameCompiler utilities."""

from .unit_loader import load_units, parse_units, UnitFile

__all__ = ["load_units", "parse_units", "UnitFile"]
