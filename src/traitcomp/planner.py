"""
Composition Planner — dry runs of trait composition.

Answers "what would apply_traits do?" without touching the target:
    - which members would be copied, kept or filled
    - what is excluded or reserved
    - every conflict, not just the first one

IMPORTANT: This module never mutates the target. The engine runs against
a detached snapshot of the target's member table.
"""

from __future__ import annotations

from typing import Any, Iterable, List

from traitcomp.engine import apply_trait
from traitcomp.members import Sameness, describe, table_for
from traitcomp.report import Action, CompositionReport


def plan_composition(
    target: Any,
    traits: Iterable[Any],
    *,
    sameness: Sameness = Sameness.STRUCTURAL,
) -> CompositionReport:
    """
    Simulate apply_traits(target, traits) and report every decision.

    Conflicts are recorded as Action.CONFLICT instead of raising, and the
    simulation carries on with the remaining members and traits.
    """
    shadow = table_for(target).snapshot()
    report = CompositionReport(target=describe(target))
    for trait in traits:
        apply_trait(shadow, trait, report, sameness=sameness, fail_fast=False)
    return report


def conflict_messages(report: CompositionReport) -> List[str]:
    """
    Explain each conflict of a plan, naming what already held the member.

    A clash with a member no trait wrote is blamed on the target itself.
    """
    messages: List[str] = []
    for index, decision in enumerate(report.decisions):
        if decision.action is not Action.CONFLICT:
            continue
        holder = f"{report.target} itself"
        for earlier in report.decisions[:index]:
            if earlier.effective_name == decision.effective_name and earlier.action in (Action.COPIED, Action.FILLED):
                holder = f"{earlier.trait}.{earlier.name}"
        messages.append(
            f"{decision.trait}.{decision.name} conflicts on {decision.effective_name!r} with {holder}"
        )
    return messages
