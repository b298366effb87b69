"""Shared fixtures and unit-stream helpers for GameCompiler tests."""

import pytest

from gamecompiler.compiler import GameBuilder, ReplayChecker
from gamecompiler.schemas import (
    AddPath,
    AddWorld,
    DeclareNew,
    DeclareStatement,
    GoalSignature,
    InventoryKind,
    RegisterDoc,
    SetGame,
    SetLevelIndex,
)


def doc(kind: InventoryKind, name: str, **kwargs) -> RegisterDoc:
    return RegisterDoc(kind=kind, name=name, content=f"Docs for {name}", **kwargs)


def statement(name=None, conclusion="True", script=("trivial",), **kwargs) -> DeclareStatement:
    return DeclareStatement(
        name=name,
        signature=GoalSignature(conclusion=conclusion),
        script=list(script),
        **kwargs,
    )


def level(index: int, *units) -> list:
    return [SetLevelIndex(index=index), *units]


@pytest.fixture
def checker():
    return ReplayChecker({"Nat.add_zero": "(n : ℕ) : n + 0 = n"})


@pytest.fixture
def builder(checker):
    b = GameBuilder(checker=checker)
    b.process(SetGame(name="TestGame"))
    return b


@pytest.fixture
def chained_game(builder):
    """
    Two worlds A -> B with tactics introduced per level and named
    statements in A.
    """
    builder.process_all([
        doc(InventoryKind.TACTIC, "rfl"),
        doc(InventoryKind.TACTIC, "rw"),
        doc(InventoryKind.TACTIC, "simp"),
        doc(InventoryKind.TACTIC, "intro"),
        AddWorld(id="A"),
        *level(1, DeclareNew(kind=InventoryKind.TACTIC, names=["rfl"]), statement()),
        *level(2, DeclareNew(kind=InventoryKind.TACTIC, names=["rw"]), statement()),
        *level(3, DeclareNew(kind=InventoryKind.TACTIC, names=["simp"]), statement(name="T")),
        *level(4, statement(name="U")),
        AddWorld(id="B"),
        AddPath(from_id="A", to_id="B"),
        *level(1, DeclareNew(kind=InventoryKind.TACTIC, names=["intro"]), statement()),
        *level(2, statement()),
    ])
    return builder
