"""
AvailabilityCompiler - Computes what each level's inventory looks like.

Runs once, after every unit of the game has been processed:
- Validates the world graph (no cycles) and level numbering
- Collects what every world introduces, per vocabulary kind
- Unlocks everything introduced by a world's predecessors
- Walks each world's levels, carrying unlocks forward level to level
- Renders lemma signatures and statement previews
"""

import logging
from datetime import datetime
from typing import Optional

from gamecompiler.config import CompilerSettings
from gamecompiler.errors import LevelIndexError, UnknownWorldError
from gamecompiler.schemas import (
    BuildLocation,
    BuildMessage,
    CompiledGame,
    ComputedInventoryItem,
    Game,
    InventoryItem,
    InventoryKind,
    Severity,
    World,
)

from .checker import ProofChecker
from .graph import WorldGraph
from .registry import InventoryRegistry

logger = logging.getLogger(__name__)


def inventory_sort_key(item: ComputedInventoryItem) -> tuple[str, str, str]:
    """Category, then display name, then canonical name."""
    return (item.category.casefold(), item.display_name.casefold(), item.name)


class AvailabilityCompiler:
    """
    Computes ComputedInventoryItems for every level of a game.

    Results are written into each Level's InventoryInfo.computed and also
    returned as a CompiledGame. Recoverable problems are collected in
    self.messages; fatal ones raise CompilationError subclasses before
    anything is computed.
    """

    def __init__(
        self,
        game: Game,
        graph: WorldGraph,
        registry: InventoryRegistry,
        checker: ProofChecker,
        settings: Optional[CompilerSettings] = None,
    ):
        self.game = game
        self.graph = graph
        self.registry = registry
        self.checker = checker
        self.settings = settings or CompilerSettings()
        self.messages: list[BuildMessage] = []

    def run(self) -> CompiledGame:
        """
        Validate the game, then compute every level's inventory.

        Returns:
            CompiledGame with worlds in topological order

        Raises:
            CyclicWorldGraphError: If the world graph has a cycle
            UnknownWorldError: If a path names an undeclared world
            LevelIndexError: If a world's levels are not numbered 1..n
        """
        logger.info(f"Compiling availability for game {self.game.name}...")
        self.validate()

        self._render_lemma_statements()
        for kind in InventoryKind:
            self._compile_kind(kind)
        self._render_previews()

        compiled = self._bundle()
        logger.info(
            f"Compiled {compiled.meta['total_worlds']} worlds, "
            f"{compiled.meta['total_levels']} levels, "
            f"{compiled.meta['total_items']} inventory items"
        )
        return compiled

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self):
        """Fatal checks; nothing is computed if any of them fails."""
        self.graph.validate()

        for world_id in self.graph.worlds:
            if world_id not in self.game.worlds:
                raise UnknownWorldError(world_id, f"Path refers to undeclared world '{world_id}'")

        for world in self.game.worlds.values():
            indices = sorted(world.levels)
            expected = list(range(1, len(indices) + 1))
            if indices != expected:
                missing = sorted(set(range(1, max(indices) + 1)) - set(indices))
                raise LevelIndexError(world.id, f"levels must be numbered 1..n, missing {missing}")

    # -------------------------------------------------------------------------
    # Availability
    # -------------------------------------------------------------------------

    def _level_new_sets(self, world: World, kind: InventoryKind) -> list[set[str]]:
        """
        What each level introduces, in level order.

        For lemmas, a named statement becomes available from the next level on.
        """
        levels = world.ordered_levels()
        new_sets = [set(level.info(kind).new) for level in levels]

        if kind == InventoryKind.LEMMA:
            for i, level in enumerate(levels[:-1]):
                if level.statement is not None and level.statement.name:
                    new_sets[i + 1].add(level.statement.name)

        return new_sets

    def _world_new_set(self, world: World, kind: InventoryKind) -> set[str]:
        result: set[str] = set()
        for names in self._level_new_sets(world, kind):
            result |= names

        levels = world.ordered_levels()
        if kind == InventoryKind.LEMMA and levels:
            last = levels[-1].statement
            if last is not None and last.name:
                result.add(last.name)
        return result

    def _baseline(self, kind: InventoryKind) -> dict[str, bool]:
        """Locked state of every registered item of a kind: all locked."""
        return {item.name: True for item in self.registry.items(kind)}

    def _unlock(self, locked: dict[str, bool], names: set[str]):
        for name in names:
            if name in locked:
                locked[name] = False
            else:
                logger.debug(f"Cannot unlock unregistered item: {name}")

    def _compile_kind(self, kind: InventoryKind):
        world_new = {
            world_id: self._world_new_set(world, kind)
            for world_id, world in self.game.worlds.items()
        }
        baseline = self._baseline(kind)
        items = {item.name: item for item in self.registry.items(kind)}

        for world_id, world in self.game.worlds.items():
            # Available on entering the world
            locked = dict(baseline)
            for ancestor in self.graph.predecessors(world_id):
                self._unlock(locked, world_new[ancestor])

            levels = world.ordered_levels()
            for level, new_names in zip(levels, self._level_new_sets(world, kind)):
                self._unlock(locked, new_names)
                info = level.info(kind)
                info.computed = sorted(
                    (
                        self._project(items[name], is_locked, info.is_disabled(name), name in new_names)
                        for name, is_locked in locked.items()
                    ),
                    key=inventory_sort_key,
                )

    def _project(
        self, item: InventoryItem, locked: bool, disabled: bool, new: bool
    ) -> ComputedInventoryItem:
        return ComputedInventoryItem(
            name=item.name,
            display_name=item.display_name,
            category=item.category,
            locked=locked,
            disabled=disabled,
            new=new,
        )

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _warn(self, text: str, world: Optional[str] = None, level: Optional[int] = None) -> BuildMessage:
        message = BuildMessage(
            severity=Severity.WARNING,
            text=text,
            location=BuildLocation(game=self.game.name, world=world, level=level),
        )
        self.messages.append(message)
        logger.warning(str(message))
        return message

    def _render_lemma_statements(self):
        for item in self.registry.items(InventoryKind.LEMMA):
            rendered = self.checker.pretty_print(item.name)
            if rendered is None:
                self._warn(f"Could not find a declaration for lemma '{item.name}'")
                rendered = self.settings.not_found_text
            item.statement = rendered

    def _render_previews(self):
        for world in self.game.worlds.values():
            for level in world.ordered_levels():
                statement = level.statement
                if statement is None:
                    continue
                preview = self.checker.pretty_print(statement.theorem_name)
                if preview is None:
                    message = self._warn(
                        f"Could not find statement '{statement.theorem_name}' to preview",
                        world=world.id,
                        level=level.index,
                    )
                    level.diagnostics.append(message)
                    preview = self.settings.not_found_text
                statement.preview = preview

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def _bundle(self) -> CompiledGame:
        order = self.graph.topological_order()
        worlds = [self.game.worlds[world_id] for world_id in order]
        levels = [level for world in worlds for level in world.levels.values()]

        return CompiledGame(
            name=self.game.name,
            title=self.game.title,
            introduction=self.game.introduction,
            conclusion=self.game.conclusion,
            world_graph=self.graph.to_schema(),
            inventory=self.registry.all_items(),
            worlds=worlds,
            meta={
                "compiled_at": datetime.now().isoformat(),
                "total_worlds": len(worlds),
                "total_levels": len(levels),
                "total_items": len(self.registry),
                "total_hints": sum(len(level.hints) for level in levels),
            },
        )
