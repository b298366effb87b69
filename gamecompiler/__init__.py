"""
GameCompiler - Compiles authored proof-assistant tutorial games.

Turns a stream of declarative units (worlds, paths, levels, vocabulary
docs, inventory declarations, statements with hints) into a world graph,
an inventory registry, and per-level locked/disabled/new inventories.
"""

__version__ = "0.1.0"
