"""
Composition Driver and the mixin path.

Public entry points:
    - apply_traits(target, traits): conflict-checked trait composition
    - apply_mixins(target, mixins): unconditional shallow copy, last wins
    - @traits / @mixins: the same, as class decorators

Traits are applied strictly in the given order. A later trait's conflict
check sees everything earlier traits wrote. A conflict ends the whole
call; nothing is rolled back, and the caller should discard the target.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, Iterable, List, Tuple

from traitcomp.descriptor import as_descriptor
from traitcomp.engine import apply_trait
from traitcomp.members import Sameness, describe, table_for
from traitcomp.report import CompositionReport


logger = logging.getLogger(__name__)


def compose_all(
    target: Any,
    traits: Iterable[Any],
    *,
    sameness: Sameness = Sameness.STRUCTURAL,
) -> CompositionReport:
    """Run the engine once per trait, in order, against one target or member table."""
    table = table_for(target)
    report = CompositionReport(target=describe(table.owner))
    for trait in traits:
        descriptor = as_descriptor(trait)
        apply_trait(table, descriptor, report, sameness=sameness)
        logger.info(f"Applied trait {descriptor.name} to {report.target}")
    return report


def apply_traits(
    target: Any,
    traits: Iterable[Any],
    *,
    sameness: Sameness = Sameness.STRUCTURAL,
) -> CompositionReport:
    """
    Compose traits into target.

    Args:
        target: Class, mutable mapping or object with a __dict__
        traits: Trait sources or TraitDescriptors, applied in order
        sameness: How identical implementations are recognised

    Returns:
        CompositionReport with one decision per candidate member

    Raises:
        CompositionConflict: on the first unresolved clash
    """
    return compose_all(table_for(target), traits, sameness=sameness)


def traits(*trait_list: Any, sameness: Sameness = Sameness.STRUCTURAL):
    """
    Class decorator applying all traits to the decorated class.

    Usage:
        @traits(TExample, alias_on(TOther, {"run": "run_other"}))
        class MyClass: ...
    """

    def decorator(cls):
        apply_traits(cls, trait_list, sameness=sameness)
        return cls

    return decorator


def _mixin_items(mixin: Any) -> List[Tuple[str, Any]]:
    if isinstance(mixin, Mapping):
        return list(mixin.items())
    try:
        namespace = vars(mixin)
    except TypeError:
        raise TypeError(f"Cannot use {mixin!r} as a mixin: it is neither a mapping nor has a __dict__") from None
    return [
        (name, value) for name, value in namespace.items()
        if not (name.startswith("__") and name.endswith("__"))
    ]


def apply_mixins(target: Any, mixins: Iterable[Any]) -> Any:
    """
    Copy every member of every mixin onto target by plain assignment.

    Later mixins overwrite earlier ones and anything already on target.
    No conflict detection, aliasing or exclusion.
    """
    for mixin in mixins:
        for name, value in _mixin_items(mixin):
            if isinstance(target, MutableMapping):
                target[name] = value
            else:
                setattr(target, name, value)
    return target


def mixins(*mixin_list: Any):
    """
    Class decorator applying all mixins to the decorated class.

    Usage:
        @mixins({"greeting": "hello"}, DefaultsMixin)
        class MyClass: ...
    """

    def decorator(cls):
        apply_mixins(cls, mixin_list)
        return cls

    return decorator
