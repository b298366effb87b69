"""
Authoring unit schemas for GameCompiler.

An authored game is an ordered stream of declarative units. Units address
"the current game / world / level" implicitly, so order matters: the
builder processes them strictly in the order they were written.
"""

from pydantic import BaseModel, Field
from typing import Optional, Literal, Union

from .diagnostics import HintContext
from .inventory import InventoryKind


class UnitBase(BaseModel):
    type: str


# -----------------------------------------------------------------------------
# Structure
# -----------------------------------------------------------------------------

class SetGame(UnitBase):
    type: Literal["set_game"] = "set_game"
    name: str = Field(..., pattern=r'^[A-Za-z_][A-Za-z0-9_]*$')


class AddWorld(UnitBase):
    type: Literal["add_world"] = "add_world"
    id: str = Field(..., pattern=r'^[A-Za-z_][A-Za-z0-9_]*$')


class AddPath(UnitBase):
    """Prerequisite path: from_id must be played before to_id."""
    type: Literal["add_path"] = "add_path"
    from_id: str
    to_id: str


class SetLevelIndex(UnitBase):
    type: Literal["set_level_index"] = "set_level_index"
    index: int  # checked by the builder so the error carries a location


class SetTitle(UnitBase):
    type: Literal["set_title"] = "set_title"
    text: str


class SetIntroduction(UnitBase):
    type: Literal["set_introduction"] = "set_introduction"
    text: str


class SetConclusion(UnitBase):
    type: Literal["set_conclusion"] = "set_conclusion"
    text: str


# -----------------------------------------------------------------------------
# Inventory
# -----------------------------------------------------------------------------

class RegisterDoc(UnitBase):
    type: Literal["register_doc"] = "register_doc"
    kind: InventoryKind
    name: str = Field(..., min_length=1)
    display_name: Optional[str] = None
    category: Optional[str] = None
    content: str = ""


class DeclareNew(UnitBase):
    type: Literal["declare_new"] = "declare_new"
    kind: InventoryKind
    names: list[str]


class DeclareDisabled(UnitBase):
    type: Literal["declare_disabled"] = "declare_disabled"
    kind: InventoryKind
    names: list[str]


class DeclareOnly(UnitBase):
    type: Literal["declare_only"] = "declare_only"
    kind: InventoryKind
    names: list[str]


# -----------------------------------------------------------------------------
# Exercise
# -----------------------------------------------------------------------------

class DeclareHint(UnitBase):
    """
    Hint step inside a statement script.

    The checker turns each one into a tagged hint record carrying the proof
    state reached at that point.
    """
    type: Literal["declare_hint"] = "declare_hint"
    strict: bool = False
    hidden: bool = False
    context: HintContext = HintContext()
    text: str


ScriptStep = Union[str, DeclareHint]


class GoalSignature(BaseModel):
    """Bound variables/hypotheses (in order) and the proposition to prove."""
    binders: dict[str, str] = {}
    conclusion: str = Field(..., min_length=1)

    def render(self) -> str:
        binders = " ".join(f"({name} : {typ})" for name, typ in self.binders.items())
        return f"{binders} : {self.conclusion}" if binders else f": {self.conclusion}"


class DeclareStatement(UnitBase):
    type: Literal["declare_statement"] = "declare_statement"
    name: Optional[str] = None
    description: Optional[str] = None
    signature: GoalSignature
    script: list[ScriptStep] = []


class RunAvailabilityCompiler(UnitBase):
    type: Literal["run_availability_compiler"] = "run_availability_compiler"


Unit = Union[
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
    DeclareStatement,
    DeclareHint,
    RunAvailabilityCompiler,
]
