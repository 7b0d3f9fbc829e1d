"""
Trait Composition Package

Merges reusable behavior bundles (traits) into target classes or objects
at definition time, with aliasing, exclusion and explicit conflict
detection.

ARCHITECTURAL GUARANTEE:
------------------------
Two different implementations never silently share one member name.
Identical implementations composed twice are harmless.
Mixins are the only path with last-writer-wins semantics.

Layers:
    members      what a member is, which names are off limits, sameness
    descriptor   alias / exclude configuration around a trait
    engine       per-member resolution for one trait
    composition  drivers and class decorators
    planner      read-only dry runs
"""

from traitcomp.composition import apply_mixins, apply_traits, compose_all, mixins, traits
from traitcomp.descriptor import TraitDescriptor, alias_on, as_descriptor, configure_trait, exclude_from
from traitcomp.engine import apply_trait, check_conflict
from traitcomp.errors import AliasError, CompositionConflict, TraitCompositionError
from traitcomp.members import RESERVED_NAMES, Member, MemberKind, Sameness, is_eligible, same_implementation
from traitcomp.planner import plan_composition
from traitcomp.report import Action, CompositionReport, MemberDecision
from traitcomp.requirements import Requirement, mark_requirement, missing_requirements, requirements_of, requires

__version__ = "0.1.0"

__all__ = [
    "Action",
    "AliasError",
    "CompositionConflict",
    "CompositionReport",
    "Member",
    "MemberDecision",
    "MemberKind",
    "RESERVED_NAMES",
    "Requirement",
    "Sameness",
    "TraitCompositionError",
    "TraitDescriptor",
    "alias_on",
    "apply_mixins",
    "apply_trait",
    "apply_traits",
    "as_descriptor",
    "check_conflict",
    "compose_all",
    "configure_trait",
    "exclude_from",
    "is_eligible",
    "mark_requirement",
    "missing_requirements",
    "mixins",
    "plan_composition",
    "requirements_of",
    "requires",
    "same_implementation",
    "traits",
]
