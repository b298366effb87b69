"""
Fatal compilation errors.

Anything recoverable is reported as a BuildMessage instead; these abort
the whole compilation run.
"""


class CompilationError(Exception):
    """Base class for errors that abort a compilation."""


class CyclicWorldGraphError(CompilationError):
    """The world graph contains a cycle."""

    def __init__(self, cycle: list[tuple[str, str]]):
        self.cycle = cycle
        path = " -> ".join([cycle[0][0]] + [v for _, v in cycle]) if cycle else "?"
        super().__init__(f"World graph contains a cycle: {path}")


class LevelIndexError(CompilationError):
    """Level indices of a world are not a contiguous run starting at 1."""

    def __init__(self, world_id: str, message: str):
        self.world_id = world_id
        super().__init__(f"World '{world_id}': {message}")


class UnknownWorldError(CompilationError):
    """A unit or path refers to a world that was never declared."""

    def __init__(self, world_id: str | None, message: str):
        self.world_id = world_id
        super().__init__(message)
