"""
Game structure schemas for GameCompiler.

Defines Pydantic models for the curriculum being built:
- Statements (the graded exercise of a level) and their hints
- Levels and worlds
- The world graph and the compiled game bundle handed to publishing
"""

from pydantic import BaseModel, Field
from typing import Optional

from .diagnostics import BuildMessage
from .inventory import InventoryInfo, InventoryItem, InventoryKind
from .units import GoalSignature


def _empty_inventory() -> dict[InventoryKind, InventoryInfo]:
    return {kind: InventoryInfo() for kind in InventoryKind}


# -----------------------------------------------------------------------------
# Exercise
# -----------------------------------------------------------------------------

class Hint(BaseModel):
    """Explanation bound to an intermediate proof state."""
    goal: str                # name-independent goal key
    text: str
    strict: bool = False     # only valid if the goal matches exactly
    hidden: bool = False     # shown only on request


class Statement(BaseModel):
    """
    The exercise of a level.

    name is what the author asked for; theorem_name is what was actually
    elaborated (the default name on collision or when name is None).
    """
    name: Optional[str] = None
    description: Optional[str] = None
    signature: GoalSignature
    scope: list[str] = []        # namespaces open during elaboration
    theorem_name: str
    success: bool = True
    preview: Optional[str] = None


# -----------------------------------------------------------------------------
# Levels and worlds
# -----------------------------------------------------------------------------

class Level(BaseModel):
    world_id: str
    index: int = Field(..., ge=1)
    title: Optional[str] = None
    introduction: Optional[str] = None
    conclusion: Optional[str] = None
    inventory: dict[InventoryKind, InventoryInfo] = Field(default_factory=_empty_inventory)
    statement: Optional[Statement] = None
    hints: list[Hint] = []
    diagnostics: list[BuildMessage] = []

    def info(self, kind: InventoryKind) -> InventoryInfo:
        return self.inventory[kind]


class World(BaseModel):
    id: str
    title: Optional[str] = None
    introduction: Optional[str] = None
    conclusion: Optional[str] = None
    levels: dict[int, Level] = {}  # insertion order, keyed by 1-based index

    def ordered_levels(self) -> list[Level]:
        return [self.levels[i] for i in sorted(self.levels)]


class Game(BaseModel):
    name: str
    title: Optional[str] = None
    introduction: Optional[str] = None
    conclusion: Optional[str] = None
    worlds: dict[str, World] = {}


# -----------------------------------------------------------------------------
# Compiled output
# -----------------------------------------------------------------------------

class PathEdge(BaseModel):
    from_id: str
    to_id: str


class WorldGraphData(BaseModel):
    nodes: list[str]
    edges: list[PathEdge] = []


class CompiledGame(BaseModel):
    """Everything the publishing layer needs for one game."""
    name: str
    title: Optional[str] = None
    introduction: Optional[str] = None
    conclusion: Optional[str] = None
    world_graph: WorldGraphData
    inventory: list[InventoryItem]
    worlds: list[World]
    meta: dict  # compiled_at, counts
