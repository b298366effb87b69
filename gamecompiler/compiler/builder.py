"""
GameBuilder - Processes the authored unit stream into a Game.

Units address the current game, world and level implicitly. The builder
keeps that cursor explicitly and applies each unit to whatever it points
at, accumulating per-level inventory declarations, statements and hints.

Usage:
    builder = GameBuilder(checker=ReplayChecker(environment))
    builder.process_all(units)
    compiled = builder.compile()
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from gamecompiler.config import CompilerSettings
from gamecompiler.errors import LevelIndexError, UnknownWorldError
from gamecompiler.schemas import (
    AddPath,
    AddWorld,
    BuildLocation,
    BuildMessage,
    CompiledGame,
    DeclareDisabled,
    DeclareHint,
    DeclareNew,
    DeclareOnly,
    DeclareStatement,
    Game,
    InventoryKind,
    Level,
    RegisterDoc,
    RunAvailabilityCompiler,
    SetConclusion,
    SetGame,
    SetIntroduction,
    SetLevelIndex,
    SetTitle,
    Severity,
    Statement,
    Unit,
    World,
)

from .availability import AvailabilityCompiler
from .checker import ElaborationRequest, ProofChecker, ReplayChecker
from .graph import WorldGraph
from .hints import extract_hints
from .naming import resolve_theorem_name
from .registry import InventoryRegistry

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


class Layer(str, Enum):
    """Which object title/introduction/conclusion units apply to."""
    GAME = "game"
    WORLD = "world"
    LEVEL = "level"


@dataclass
class GameCursor:
    world_id: Optional[str] = None
    level_index: Optional[int] = None
    layer: Layer = Layer.GAME


class GameBuilder:
    """
    Builds one game from its unit stream.

    One builder is one compilation run; reset() starts a fresh one.
    """

    def __init__(
        self,
        checker: Optional[ProofChecker] = None,
        settings: Optional[CompilerSettings] = None,
    ):
        self.settings = settings or CompilerSettings()
        self.checker: ProofChecker = checker or ReplayChecker()
        self._handlers = {
            SetGame: self._set_game,
            AddWorld: self._add_world,
            AddPath: self._add_path,
            SetLevelIndex: self._set_level_index,
            SetTitle: self._set_text,
            SetIntroduction: self._set_text,
            SetConclusion: self._set_text,
            RegisterDoc: self._register_doc,
            DeclareNew: self._declare_inventory,
            DeclareDisabled: self._declare_inventory,
            DeclareOnly: self._declare_inventory,
            DeclareStatement: self._declare_statement,
            DeclareHint: self._declare_hint,
            RunAvailabilityCompiler: self._run_availability_compiler,
        }
        self.reset()

    def reset(self):
        """Forget everything from the previous run."""
        self.game = Game(name=self.settings.default_game)
        self.graph = WorldGraph()
        self.registry = InventoryRegistry()
        self.cursor = GameCursor()
        self.messages: list[BuildMessage] = []
        self.compiled: Optional[CompiledGame] = None
        self._compile_messages: list[BuildMessage] = []

    # -------------------------------------------------------------------------
    # Cursor helpers
    # -------------------------------------------------------------------------

    def current_world(self) -> Optional[World]:
        if self.cursor.world_id is None:
            return None
        return self.game.worlds.get(self.cursor.world_id)

    def current_level(self) -> Optional[Level]:
        world = self.current_world()
        if world is None or self.cursor.level_index is None:
            return None
        return world.levels.get(self.cursor.level_index)

    def location(self) -> BuildLocation:
        return BuildLocation(
            game=self.game.name,
            world=self.cursor.world_id,
            level=self.cursor.level_index,
        )

    def _report(self, severity: Severity, text: str):
        self._attach(BuildMessage(severity=severity, text=text))

    def _attach(self, message: Optional[BuildMessage]):
        """Record a message at the cursor's location."""
        if message is None:
            return
        message = message.model_copy(update={"location": self.location()})
        self.messages.append(message)
        level = self.current_level()
        if level is not None:
            level.diagnostics.append(message)
        logger.log(_LOG_LEVELS[message.severity], str(message))

    def _require_level(self, what: str) -> Optional[Level]:
        if self.current_world() is None:
            raise UnknownWorldError(None, f"{what} appears before any world was declared")
        level = self.current_level()
        if level is None:
            self._report(Severity.ERROR, f"{what} must appear inside a level; ignoring it")
        return level

    # -------------------------------------------------------------------------
    # Processing
    # -------------------------------------------------------------------------

    def process(self, unit: Unit):
        """
        Apply one unit at the current cursor.

        Any unit other than RunAvailabilityCompiler invalidates an earlier
        compiled bundle, so a later compile() sees the whole stream.

        Args:
            unit: A parsed authoring unit

        Raises:
            TypeError: If the unit type has no handler
            CompilationError: On fatal structural errors
        """
        handler = self._handlers.get(type(unit))
        if handler is None:
            raise TypeError(f"Unsupported unit: {type(unit).__name__}")
        if not isinstance(unit, RunAvailabilityCompiler):
            self.compiled = None
        handler(unit)

    def process_all(self, units: list[Unit]):
        """Process units strictly in authoring order."""
        for unit in units:
            self.process(unit)

    def compile(self) -> CompiledGame:
        """
        Run the availability compiler over everything built so far.

        Messages from an earlier compile are replaced, not accumulated.

        Returns:
            The CompiledGame bundle, also stored as self.compiled

        Raises:
            CompilationError: If the graph or level numbering is invalid
        """
        self._discard_compile_messages()
        compiler = AvailabilityCompiler(
            self.game, self.graph, self.registry, self.checker, self.settings
        )
        self.compiled = compiler.run()
        self._compile_messages = list(compiler.messages)
        self.messages.extend(compiler.messages)
        return self.compiled

    def _discard_compile_messages(self):
        stale = {id(message) for message in self._compile_messages}
        if not stale:
            return
        self.messages = [m for m in self.messages if id(m) not in stale]
        for world in self.game.worlds.values():
            for level in world.levels.values():
                level.diagnostics = [m for m in level.diagnostics if id(m) not in stale]
        self._compile_messages = []

    # -------------------------------------------------------------------------
    # Structure units
    # -------------------------------------------------------------------------

    def _set_game(self, unit: SetGame):
        self.game.name = unit.name
        self.cursor = GameCursor()

    def _add_world(self, unit: AddWorld):
        if unit.id not in self.game.worlds:
            self.game.worlds[unit.id] = World(id=unit.id)
            logger.debug(f"Added world {unit.id}")
        self.graph.add_world(unit.id)
        self.cursor = GameCursor(world_id=unit.id, layer=Layer.WORLD)

    def _add_path(self, unit: AddPath):
        self.graph.add_edge(unit.from_id, unit.to_id)

    def _set_level_index(self, unit: SetLevelIndex):
        world = self.current_world()
        if world is None:
            raise UnknownWorldError(None, f"Level {unit.index} appears before any world was declared")
        if unit.index < 1:
            raise LevelIndexError(world.id, f"level index must be >= 1, got {unit.index}")
        if unit.index not in world.levels:
            world.levels[unit.index] = Level(world_id=world.id, index=unit.index)
        self.cursor.level_index = unit.index
        self.cursor.layer = Layer.LEVEL

    def _set_text(self, unit: SetTitle | SetIntroduction | SetConclusion):
        field = {
            SetTitle: "title",
            SetIntroduction: "introduction",
            SetConclusion: "conclusion",
        }[type(unit)]

        if self.cursor.layer == Layer.LEVEL:
            target = self.current_level()
        elif self.cursor.layer == Layer.WORLD:
            target = self.current_world()
        else:
            target = self.game
        setattr(target, field, unit.text)

    # -------------------------------------------------------------------------
    # Inventory units
    # -------------------------------------------------------------------------

    def _register_doc(self, unit: RegisterDoc):
        self._attach(self.registry.register(
            unit.kind,
            unit.name,
            display_name=unit.display_name,
            category=unit.category,
            content=unit.content,
        ))

    def _declare_inventory(self, unit: DeclareNew | DeclareDisabled | DeclareOnly):
        level = self._require_level(f"{type(unit).__name__} {unit.kind.value}")
        if level is None:
            return

        for name in unit.names:
            self._attach(self.registry.ensure(unit.kind, name))

        # Repeating the same declaration in a level replaces the earlier one
        info = level.info(unit.kind)
        if isinstance(unit, DeclareNew):
            info.new = set(unit.names)
        elif isinstance(unit, DeclareDisabled):
            info.disabled = set(unit.names)
        else:
            info.only = set(unit.names)

    # -------------------------------------------------------------------------
    # Exercise units
    # -------------------------------------------------------------------------

    def _declare_statement(self, unit: DeclareStatement):
        level = self._require_level("Statement")
        if level is None:
            return
        if level.statement is not None:
            self._report(Severity.ERROR, "Level already has a statement; ignoring the second one")
            return

        resolution = resolve_theorem_name(
            unit.name, self.game.name, level.world_id, level.index, self.checker
        )
        if resolution.collision:
            self._report(Severity.WARNING, resolution.collision_message())

        scope = [self.game.name, level.world_id]
        result = self.checker.elaborate(ElaborationRequest(
            theorem_name=resolution.theorem_name,
            signature=unit.signature,
            script=unit.script,
            scope=scope,
        ))

        extraction = extract_hints(result.diagnostics)
        for message in extraction.messages:
            self._report(message.severity, message.text)

        level.hints = extraction.hints
        level.statement = Statement(
            name=unit.name,
            description=unit.description,
            signature=unit.signature,
            scope=scope,
            theorem_name=resolution.theorem_name,
            success=result.success,
        )

        if resolution.doc_name:
            self._attach(self.registry.ensure(
                InventoryKind.LEMMA, resolution.doc_name, template=unit.description
            ))

    def _declare_hint(self, unit: DeclareHint):
        self._report(
            Severity.ERROR,
            "Hints must be written inside a statement's proof script; ignoring it",
        )

    def _run_availability_compiler(self, unit: RunAvailabilityCompiler):
        self.compile()
