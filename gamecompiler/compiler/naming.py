"""
Theorem naming for statements.

Every statement is elaborated as a theorem. Anonymous statements get a
positional default name; named statements keep the author's name unless it
is already taken, in which case they fall back to the default name.
"""

from dataclasses import dataclass
from typing import Optional, Protocol


class Environment(Protocol):
    def lookup_type(self, name: str) -> Optional[str]: ...


@dataclass
class NameResolution:
    """Outcome of resolving a statement's theorem name."""
    theorem_name: str            # name the theorem is elaborated under
    doc_name: Optional[str]      # inventory name to document (None if anonymous)
    collision: bool = False
    existing_type: Optional[str] = None

    def collision_message(self) -> Optional[str]:
        if not self.collision:
            return None
        return (
            f"'{self.doc_name}' is already defined with type `{self.existing_type}`; "
            f"elaborating this statement as '{self.theorem_name}' instead"
        )


def default_theorem_name(game: str, world: str, index: int) -> str:
    """TestGame, Logic, 16 -> TestGame.Logic.level16"""
    return f"{game}.{world}.level{index}"


def resolve_theorem_name(
    author_name: Optional[str],
    game: str,
    world: str,
    index: int,
    environment: Environment,
) -> NameResolution:
    default = default_theorem_name(game, world, index)
    if not author_name:
        return NameResolution(theorem_name=default, doc_name=None)

    existing_type = environment.lookup_type(author_name)
    if existing_type is None:
        return NameResolution(theorem_name=author_name, doc_name=author_name)

    return NameResolution(
        theorem_name=default,
        doc_name=author_name,
        collision=True,
        existing_type=existing_type,
    )
