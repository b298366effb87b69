"""
Diagnostic schemas for GameCompiler.

Two families of messages live here:
- Checker diagnostics: what the proof checker emits while elaborating a
  statement. Either a plain message or a tagged hint record.
- Build messages: what the compiler reports back to the author, always
  tied to a game/world/level location.
"""

from pydantic import BaseModel, Field
from typing import Optional, Literal, Union
from enum import Enum


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


# -----------------------------------------------------------------------------
# Checker diagnostics (tagged variant)
# -----------------------------------------------------------------------------

class HintContext(BaseModel):
    """
    Proof state captured at the point a hint is invoked.

    bindings maps local names (variables, hypotheses, instantiated
    metavariables) to the text substituted for them in the hint.
    hypotheses maps the same names to their types.
    """
    bindings: dict[str, str] = {}
    hypotheses: dict[str, str] = {}
    goal: str = ""


class HintPayload(BaseModel):
    """Hint data carried by a tagged checker record. Flags are encoded 0/1."""
    strict: Literal[0, 1] = 0
    hidden: Literal[0, 1] = 0
    context: HintContext = HintContext()
    text: str                # placeholder template, e.g. "Use {h} here."
    goal: str                # opaque, name-independent goal key


class PlainMessage(BaseModel):
    type: Literal["plain"] = "plain"
    text: str
    severity: Severity = Severity.INFO


class HintMessage(BaseModel):
    type: Literal["hint"] = "hint"
    payload: HintPayload


Diagnostic = Union[PlainMessage, HintMessage]


# -----------------------------------------------------------------------------
# Build messages
# -----------------------------------------------------------------------------

class BuildLocation(BaseModel):
    game: Optional[str] = None
    world: Optional[str] = None
    level: Optional[int] = Field(default=None, ge=1)

    def __str__(self) -> str:
        parts = [p for p in (self.game, self.world) if p]
        if self.level is not None:
            parts.append(f"level {self.level}")
        return " / ".join(parts) or "<game>"


class BuildMessage(BaseModel):
    """A diagnostic surfaced to the author."""
    severity: Severity
    text: str
    location: BuildLocation = BuildLocation()

    def __str__(self) -> str:
        return f"[{self.severity.value}] {self.location}: {self.text}"
