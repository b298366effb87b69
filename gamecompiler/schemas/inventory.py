"""
Inventory schemas for GameCompiler.

Defines Pydantic models for the documented vocabulary of a game:
- Registry entries (tactics, lemmas, definitions) with display metadata
- Per-level inventory declarations (new / disabled / only)
- Computed per-level availability (locked / disabled / new)
"""

from pydantic import BaseModel, Field, field_serializer
from typing import Optional
from enum import Enum


class InventoryKind(str, Enum):
    """Vocabulary kinds a learner can be given."""
    TACTIC = "tactic"
    LEMMA = "lemma"
    DEFINITION = "definition"


# Namespace-less lemmas are grouped under this category
DEFAULT_LEMMA_CATEGORY = "General"


def namespace_of(name: str) -> str:
    """Namespace prefix of a dotted name ("Nat.add_comm" -> "Nat")."""
    prefix, _, _ = name.rpartition(".")
    return prefix or DEFAULT_LEMMA_CATEGORY


# -----------------------------------------------------------------------------
# Registry entries
# -----------------------------------------------------------------------------

class InventoryItem(BaseModel):
    """
    A documented vocabulary item, keyed by (kind, name).

    `statement` is only used for lemmas and is filled in by the
    availability compiler once the full environment is known.
    """
    kind: InventoryKind
    name: str = Field(..., min_length=1)
    display_name: str
    category: str = ""
    content: str = ""
    statement: Optional[str] = None
    placeholder: bool = False  # synthesized for a missing doc entry

    @property
    def key(self) -> tuple[InventoryKind, str]:
        return (self.kind, self.name)


class ComputedInventoryItem(BaseModel):
    """Level-relative projection of an InventoryItem."""
    name: str
    display_name: str
    category: str
    locked: bool = True
    disabled: bool = False
    new: bool = False


# -----------------------------------------------------------------------------
# Per-level declarations
# -----------------------------------------------------------------------------

class InventoryInfo(BaseModel):
    """
    Per-level, per-kind inventory declarations.

    A non-empty `only` overrides `disabled`. `computed` is written by the
    availability compiler and never authored by hand.
    """
    new: set[str] = set()
    disabled: set[str] = set()
    only: set[str] = set()
    computed: list[ComputedInventoryItem] = []

    @field_serializer("new", "disabled", "only")
    def _sorted_names(self, names: set[str]) -> list[str]:
        return sorted(names)

    def is_disabled(self, name: str) -> bool:
        if self.only:
            return name not in self.only
        return name in self.disabled
