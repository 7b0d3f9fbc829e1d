"""
Composition Resolution Engine

Decides, for each candidate member of one trait, whether it is copied
onto the target, under which name, and whether its presence is an error.

Per member, in order:
    1. member filter (reserved structural names are skipped)
    2. exclusions
    3. aliasing -> effective name
    4. requirement placeholders count as absent
    5. conflict detection
    6. verbatim copy, or keep the identical existing member

IMPORTANT:
    Composition is fail-fast and non-transactional. A conflict stops the
    trait in progress; members copied before it stay on the target.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from traitcomp.descriptor import as_descriptor
from traitcomp.errors import CompositionConflict
from traitcomp.members import Member, Sameness, describe, is_eligible, same_implementation, table_for
from traitcomp.report import Action, CompositionReport
from traitcomp.requirements import Requirement, is_placeholder


logger = logging.getLogger(__name__)


def check_conflict(
    effective_name: str,
    incoming: Optional[Member],
    existing: Optional[Member],
    sameness: Sameness = Sameness.STRUCTURAL,
) -> None:
    """
    Fail if composing incoming would silently replace a different existing member.

    Args:
        effective_name: Name the member would take on the target
        incoming: Trait member at its original name
        existing: Target member at effective_name (None when absent or a placeholder)
        sameness: How implementations are compared

    Raises:
        CompositionConflict: both are present and their implementations differ
    """
    if incoming is None or existing is None:
        return
    if not same_implementation(incoming, existing, sameness):
        raise CompositionConflict(effective_name)


def apply_trait(
    target: Any,
    trait: Any,
    report: Optional[CompositionReport] = None,
    *,
    sameness: Sameness = Sameness.STRUCTURAL,
    fail_fast: bool = True,
) -> CompositionReport:
    """
    Compose one trait (or trait descriptor) into target, mutating it in place.

    With fail_fast=False a conflict is recorded in the report and the
    member skipped instead of raising. Only the planner composes that way,
    and only against a detached snapshot.

    Returns:
        The report the decisions were recorded in
    """
    table = table_for(target)
    descriptor = as_descriptor(trait)
    source = descriptor.member_table()
    trait_name = descriptor.name
    if report is None:
        report = CompositionReport(target=describe(table.owner))

    for name in source.names():
        incoming = source.get(name)

        if not is_eligible(name):
            report.record(trait_name, name, name, Action.RESERVED)
            continue

        if name in descriptor.excludes_set:
            report.record(trait_name, name, name, Action.EXCLUDED, incoming.kind)
            continue

        effective_name = descriptor.effective_name(name)
        existing = table.get(effective_name)
        declared = effective_name in table.requirements
        placeholder = is_placeholder(table, effective_name, existing)

        # A trait-side placeholder documents a need; it never displaces anything.
        if isinstance(incoming.raw, Requirement):
            if existing is None:
                table.put(effective_name, incoming)
                report.record(trait_name, name, effective_name, Action.COPIED, incoming.kind)
            else:
                report.record(trait_name, name, effective_name, Action.KEPT, incoming.kind)
            continue

        try:
            check_conflict(effective_name, incoming, None if placeholder else existing, sameness)
        except CompositionConflict:
            logger.debug(f"Conflict on {effective_name!r} composing {trait_name} into {table!r}")
            if fail_fast:
                raise
            report.record(trait_name, name, effective_name, Action.CONFLICT, incoming.kind)
            continue

        if existing is not None and not placeholder:
            report.record(trait_name, name, effective_name, Action.KEPT, incoming.kind)
            continue

        table.put(effective_name, incoming)
        if declared or placeholder:
            table.satisfy_requirement(effective_name)
            action = Action.FILLED
        else:
            action = Action.COPIED
        logger.debug(f"{action.value} {trait_name}.{name} as {effective_name!r}")
        report.record(trait_name, name, effective_name, action, incoming.kind)

    return report
