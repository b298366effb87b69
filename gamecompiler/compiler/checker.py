"""
Proof checker interface.

The compiler never checks proofs itself. It hands each statement to a
ProofChecker and trusts the verdict and diagnostics that come back.

ReplayChecker is the bundled implementation: it replays authored scripts
step by step without doing any real type checking, which is enough to
drive the compiler from recorded content and in tests.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Protocol

from gamecompiler.schemas import (
    DeclareHint,
    Diagnostic,
    GoalSignature,
    HintContext,
    HintMessage,
    HintPayload,
    PlainMessage,
    ScriptStep,
    Severity,
)

logger = logging.getLogger(__name__)


@dataclass
class ElaborationRequest:
    theorem_name: str
    signature: GoalSignature
    script: list[ScriptStep] = field(default_factory=list)
    scope: list[str] = field(default_factory=list)


@dataclass
class ElaborationResult:
    success: bool
    diagnostics: list[Diagnostic] = field(default_factory=list)


class ProofChecker(Protocol):
    def elaborate(self, request: ElaborationRequest) -> ElaborationResult: ...

    def lookup_type(self, name: str) -> Optional[str]: ...

    def pretty_print(self, name: str) -> Optional[str]: ...


# -----------------------------------------------------------------------------
# Replay implementation
# -----------------------------------------------------------------------------

def abstract_goal(context: HintContext) -> str:
    """
    Name-independent key for a proof state.

    Local names are replaced by their position, so two states that differ
    only in how hypotheses are named produce the same key.
    """
    renaming = {name: f"_x{i}" for i, name in enumerate(context.hypotheses, start=1)}

    def rename(text: str) -> str:
        if not renaming:
            return text.strip()
        pattern = r"(?<![\w.'])(" + "|".join(re.escape(n) for n in renaming) + r")(?![\w'])"
        return re.sub(pattern, lambda m: renaming[m.group(1)], text).strip()

    hyps = [f"{renaming[name]} : {rename(typ)}" for name, typ in context.hypotheses.items()]
    return ", ".join(hyps + [f"⊢ {rename(context.goal)}"])


def render_declaration(name: str, typ: str) -> str:
    if typ.startswith(("(", ":", "{", "[")):
        return f"{name} {typ}"
    return f"{name} : {typ}"


class ReplayChecker:
    """
    ProofChecker that replays scripts instead of checking them.

    Script steps:
    - "sorry": accepted with a warning
    - "fail ...": rejected with an error; the statement fails
    - DeclareHint: emitted as a tagged hint record
    - anything else: accepted silently
    """

    def __init__(self, environment: Optional[dict[str, str]] = None):
        self.declarations: dict[str, str] = dict(environment or {})

    def lookup_type(self, name: str) -> Optional[str]:
        return self.declarations.get(name)

    def pretty_print(self, name: str) -> Optional[str]:
        typ = self.declarations.get(name)
        if typ is None:
            return None
        return render_declaration(name, typ)

    def _hint_record(self, step: DeclareHint, signature: GoalSignature) -> HintMessage:
        context = step.context
        if not context.goal:
            context = HintContext(
                bindings=context.bindings or {name: name for name in signature.binders},
                hypotheses=context.hypotheses or dict(signature.binders),
                goal=signature.conclusion,
            )
        return HintMessage(payload=HintPayload(
            strict=int(step.strict),
            hidden=int(step.hidden),
            context=context,
            text=step.text,
            goal=abstract_goal(context),
        ))

    def elaborate(self, request: ElaborationRequest) -> ElaborationResult:
        logger.debug(f"Elaborating {request.theorem_name}")
        diagnostics: list[Diagnostic] = []

        if not request.script:
            diagnostics.append(PlainMessage(
                text=f"unsolved goals: {request.signature.conclusion}",
                severity=Severity.ERROR,
            ))
            return ElaborationResult(success=False, diagnostics=diagnostics)

        for step in request.script:
            if isinstance(step, DeclareHint):
                diagnostics.append(self._hint_record(step, request.signature))
                continue

            tactic = step.strip()
            if tactic == "sorry":
                diagnostics.append(PlainMessage(
                    text="declaration uses 'sorry'",
                    severity=Severity.WARNING,
                ))
            elif tactic.startswith("fail"):
                diagnostics.append(PlainMessage(
                    text=f"tactic failed: {tactic}",
                    severity=Severity.ERROR,
                ))
                return ElaborationResult(success=False, diagnostics=diagnostics)

        self.declarations[request.theorem_name] = request.signature.render()
        return ElaborationResult(success=True, diagnostics=diagnostics)
