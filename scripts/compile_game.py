#!/usr/bin/env python3
"""
compile_game.py - Compile an authored unit stream into a game bundle.

Processes the units in order, runs the availability compiler (unless the
stream already ends with one), and writes:
  - game.json: the compiled game for the publishing layer
  - diagnostics.json: every build message with its location
  - game_report.md: human-readable summary

Usage:
  python scripts/compile_game.py --input data/sample_game.yaml
  python scripts/compile_game.py --input game.yaml --output-dir out/ --strict
"""

import argparse
import json
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from gamecompiler.compiler import GameBuilder, ReplayChecker
from gamecompiler.config import configure_logging, load_settings
from gamecompiler.errors import CompilationError
from gamecompiler.schemas import BuildMessage, CompiledGame, InventoryKind, Severity
from gamecompiler.utils import load_units

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Report
# -----------------------------------------------------------------------------

def generate_game_report(
    compiled: CompiledGame,
    messages: list[BuildMessage],
    output_path: Path
):
    """Generate human-readable game report."""
    lines = [
        f"# {compiled.title or compiled.name}",
        "",
        f"Compiled: {compiled.meta['compiled_at']}",
        "",
        "## Summary",
        "",
        f"- **Worlds**: {compiled.meta['total_worlds']}",
        f"- **Levels**: {compiled.meta['total_levels']}",
        f"- **Inventory items**: {compiled.meta['total_items']}",
        f"- **Hints**: {compiled.meta['total_hints']}",
        f"- **Paths**: {len(compiled.world_graph.edges)}",
        "",
        "## Worlds",
        "",
    ]

    for world in compiled.worlds:
        lines.append(f"### {world.title or world.id}")
        lines.append("")
        for level in world.ordered_levels():
            statement = level.statement
            theorem = statement.theorem_name if statement else "(no statement)"
            lines.append(f"- **Level {level.index}**: {level.title or ''}")
            lines.append(f"  - Theorem: `{theorem}`")
            for kind in InventoryKind:
                computed = level.info(kind).computed
                unlocked = [item.name for item in computed if not item.locked]
                new = [item.name for item in computed if item.new]
                if unlocked:
                    lines.append(f"  - {kind.value.capitalize()}s: {', '.join(unlocked)}")
                if new:
                    lines.append(f"  - New {kind.value}s: {', '.join(new)}")
            lines.append(f"  - Hints: {len(level.hints)}")
        lines.append("")

    if messages:
        lines.extend(["## Diagnostics", ""])
        for message in messages:
            lines.append(f"- {message}")
        lines.append("")

    with open(output_path, 'w', encoding='utf-8') as f:
        f.write("\n".join(lines))


def exit_status(messages: list[BuildMessage], strict: bool) -> int:
    failing = {Severity.ERROR, Severity.WARNING} if strict else {Severity.ERROR}
    return 1 if any(m.severity in failing for m in messages) else 0


# -----------------------------------------------------------------------------
# Main
# -----------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    settings = load_settings()

    parser = argparse.ArgumentParser(
        description="Compile an authored unit stream into a game bundle.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/compile_game.py --input data/sample_game.yaml
  python scripts/compile_game.py --input game.yaml --output-dir out --strict
        """,
    )
    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="YAML file with the unit stream",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=PROJECT_ROOT / "data" / "compiled",
        help="Output directory (default: data/compiled)",
    )
    parser.add_argument(
        "--game-name",
        default=None,
        help=f"Game name if the units don't set one (default: {settings.default_game})",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help=f"Logging level (default: {settings.log_level})",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=settings.strict,
        help="Exit with status 1 on warnings, not just errors",
    )

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.game_name:
        settings.default_game = args.game_name

    if not args.input.exists():
        logger.error(f"Input file not found: {args.input}")
        return 1

    logger.info(f"Loading units from {args.input}...")
    unit_file = load_units(args.input)
    logger.info(f"  Loaded {len(unit_file.units)} units")

    builder = GameBuilder(checker=ReplayChecker(unit_file.environment), settings=settings)
    try:
        builder.process_all(unit_file.units)
        compiled = builder.compiled or builder.compile()
    except CompilationError as e:
        logger.error(f"Compilation failed: {e}")
        return 1

    args.output_dir.mkdir(parents=True, exist_ok=True)

    game_path = args.output_dir / "game.json"
    with open(game_path, "w", encoding="utf-8") as f:
        f.write(compiled.model_dump_json(indent=2))
    logger.info(f"Saved game to {game_path}")

    diagnostics_path = args.output_dir / "diagnostics.json"
    with open(diagnostics_path, "w", encoding="utf-8") as f:
        json.dump(
            [m.model_dump(mode="json") for m in builder.messages],
            f, ensure_ascii=False, indent=2,
        )
    logger.info(f"Saved {len(builder.messages)} diagnostics to {diagnostics_path}")

    report_path = args.output_dir / "game_report.md"
    generate_game_report(compiled, builder.messages, report_path)
    logger.info(f"Saved report to {report_path}")

    return exit_status(builder.messages, args.strict)


if __name__ == "__main__":
    sys.exit(main())
