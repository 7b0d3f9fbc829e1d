"""
Composition Report

Records what the engine decided for every candidate member of every
trait: copied, kept, filled, excluded, reserved, or (in plans only)
conflicting.

The report is read-only bookkeeping. It never drives the composition;
the engine writes it as it goes and callers inspect or serialize it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from traitcomp.members import MemberKind


class Action(Enum):
    """Outcome of one candidate member."""

    COPIED = "copied"        # target had nothing at the effective name
    FILLED = "filled"        # replaced a requirement placeholder
    KEPT = "kept"            # target already had the same implementation
    EXCLUDED = "excluded"    # named in the descriptor's excludes
    RESERVED = "reserved"    # structural name, rejected by the member filter
    CONFLICT = "conflict"    # different implementation already present (plans only)


@dataclass
class MemberDecision:
    """
    One decision of the engine.

    Properties:
        trait: Display name of the trait source
        name: Member name in the trait
        effective_name: Name on the target after aliasing
        action: What happened
        kind: Variant of the trait member (None for reserved names)
    """

    trait: str
    name: str
    effective_name: str
    action: Action
    kind: Optional[MemberKind] = None


@dataclass
class CompositionReport:
    """All decisions taken while composing traits into one target."""

    target: str
    decisions: List[MemberDecision] = field(default_factory=list)

    def record(
        self,
        trait: str,
        name: str,
        effective_name: str,
        action: Action,
        kind: Optional[MemberKind] = None,
    ) -> MemberDecision:
        decision = MemberDecision(trait=trait, name=name, effective_name=effective_name, action=action, kind=kind)
        self.decisions.append(decision)
        return decision

    def by_action(self, action: Action) -> List[MemberDecision]:
        return [d for d in self.decisions if d.action is action]

    @property
    def written_names(self) -> List[str]:
        """Effective names written onto the target, in order."""
        return [d.effective_name for d in self.decisions if d.action in (Action.COPIED, Action.FILLED)]

    @property
    def conflicts(self) -> List[MemberDecision]:
        return self.by_action(Action.CONFLICT)

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

    @property
    def traits(self) -> List[str]:
        seen: List[str] = []
        for decision in self.decisions:
            if decision.trait not in seen:
                seen.append(decision.trait)
        return seen
