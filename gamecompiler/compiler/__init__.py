"""
GameCompiler Compiler - Turns authored units into a compiled game.

This module provides:
- WorldGraph: worlds and prerequisite paths
- InventoryRegistry: documented tactics, lemmas and definitions
- GameBuilder: processes the unit stream level by level
- Theorem naming and hint extraction for statements
- AvailabilityCompiler: per-level locked/disabled/new inventory
- ProofChecker interface and the ReplayChecker implementation
"""

from .graph import WorldGraph

from .registry import InventoryRegistry

from .naming import (
    NameResolution,
    default_theorem_name,
    resolve_theorem_name,
)

from .hints import (
    HintExtraction,
    decode_flag,
    extract_hints,
    render_hint_text,
)

from .checker import (
    ElaborationRequest,
    ElaborationResult,
    ProofChecker,
    ReplayChecker,
    abstract_goal,
)

from .availability import AvailabilityCompiler

from .builder import (
    GameBuilder,
    GameCursor,
    Layer,
)

__all__ = [
    # Graph
    "WorldGraph",
    # Registry
    "InventoryRegistry",
    # Naming
    "NameResolution",
    "default_theorem_name",
    "resolve_theorem_name",
    # Hints
    "HintExtraction",
    "decode_flag",
    "extract_hints",
    "render_hint_text",
    # Checker
    "ElaborationRequest",
    "ElaborationResult",
    "ProofChecker",
    "ReplayChecker",
    "abstract_goal",
    # Availability
    "AvailabilityCompiler",
    # Builder
    "GameBuilder",
    "GameCursor",
    "Layer",
]
