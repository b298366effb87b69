"""
GameCompiler Schemas - Pydantic models for the tutorial game compiler.

This module exports all schema classes for:
- Inventory: documented vocabulary and per-level availability
- Diagnostics: checker messages, hint records, build messages
- Units: the authored declarative unit stream
- Game: worlds, levels, statements, hints, compiled bundle
"""

# Inventory schemas
from .inventory import (
    InventoryKind,
    InventoryItem,
    InventoryInfo,
    ComputedInventoryItem,
    DEFAULT_LEMMA_CATEGORY,
    namespace_of,
)

# Diagnostic schemas
from .diagnostics import (
    Severity,
    HintContext,
    HintPayload,
    PlainMessage,
    HintMessage,
    Diagnostic,
    BuildLocation,
    BuildMessage,
)

# Unit schemas
from .units import (
    SetGame,
    AddWorld,
    AddPath,
    SetLevelIndex,
    SetTitle,
    SetIntroduction,
    SetConclusion,
    RegisterDoc,
    DeclareNew,
    DeclareDisabled,
    DeclareOnly,
    DeclareHint,
    ScriptStep,
    GoalSignature,
    DeclareStatement,
    RunAvailabilityCompiler,
    Unit,
)

# Game schemas
from .game import (
    Hint,
    Statement,
    Level,
    World,
    Game,
    PathEdge,
    WorldGraphData,
    CompiledGame,
)

__all__ = [
    # Inventory
    'InventoryKind',
    'InventoryItem',
    'InventoryInfo',
    'ComputedInventoryItem',
    'DEFAULT_LEMMA_CATEGORY',
    'namespace_of',
    # Diagnostics
    'Severity',
    'HintContext',
    'HintPayload',
    'PlainMessage',
    'HintMessage',
    'Diagnostic',
    'BuildLocation',
    'BuildMessage',
    # Units
    'SetGame',
    'AddWorld',
    'AddPath',
    'SetLevelIndex',
    'SetTitle',
    'SetIntroduction',
    'SetConclusion',
    'RegisterDoc',
    'DeclareNew',
    'DeclareDisabled',
    'DeclareOnly',
    'DeclareHint',
    'ScriptStep',
    'GoalSignature',
    'DeclareStatement',
    'RunAvailabilityCompiler',
    'Unit',
    # Game
    'Hint',
    'Statement',
    'Level',
    'World',
    'Game',
    'PathEdge',
    'WorldGraphData',
    'CompiledGame',
]
