"""
Hint extraction from a statement's checker diagnostics.

The checker reports hints through the same ordered stream as its ordinary
messages. Hint records are pulled out here and turned into Hints; the
remaining messages are handed back, in order, to be surfaced to the author.
"""

import logging
import re
from dataclasses import dataclass, field

from gamecompiler.schemas import (
    Diagnostic,
    Hint,
    HintContext,
    HintMessage,
    HintPayload,
    PlainMessage,
)

logger = logging.getLogger(__name__)

# {name} placeholders; {{ and }} are literal braces
PLACEHOLDER_PATTERN = re.compile(r'\{\{|\}\}|\{([A-Za-z_][A-Za-z0-9_\'.]*)\}')


@dataclass
class HintExtraction:
    hints: list[Hint] = field(default_factory=list)
    messages: list[PlainMessage] = field(default_factory=list)


def decode_flag(value: int) -> bool:
    """Decode a 0/1 flag from a hint record."""
    if value not in (0, 1):
        raise ValueError(f"Hint flag must be 0 or 1, got {value!r}")
    return value == 1


def render_hint_text(template: str, context: HintContext) -> str:
    """
    Evaluate a hint's placeholder text within its captured context.

    Placeholders naming a bound variable are replaced by its binding;
    anything unknown is left as written.
    """
    def substitute(match: re.Match) -> str:
        token = match.group(0)
        if token == "{{":
            return "{"
        if token == "}}":
            return "}"
        name = match.group(1)
        if name in context.bindings:
            return context.bindings[name]
        logger.debug(f"Unbound hint placeholder: {name}")
        return token

    return PLACEHOLDER_PATTERN.sub(substitute, template)


def resolve_hint(payload: HintPayload) -> Hint:
    return Hint(
        goal=payload.goal,
        text=render_hint_text(payload.text, payload.context),
        strict=decode_flag(payload.strict),
        hidden=decode_flag(payload.hidden),
    )


def extract_hints(diagnostics: list[Diagnostic]) -> HintExtraction:
    """
    Split a diagnostic stream into hints and ordinary messages.

    Both outputs keep the stream order. Repeated hints stay repeated.
    """
    result = HintExtraction()
    for diagnostic in diagnostics:
        if isinstance(diagnostic, HintMessage):
            result.hints.append(resolve_hint(diagnostic.payload))
        else:
            result.messages.append(diagnostic)

    logger.debug(f"Extracted {len(result.hints)} hints, {len(result.messages)} messages")
    return result
