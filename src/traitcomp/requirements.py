"""
Requirement placeholders.

A trait often needs its host to provide something (a ``collection``
attribute, a ``save()`` method). Requirements document that need. They
never check anything at composition time; their only effect is that a
trait may fill a placeholder slot without raising CompositionConflict.

Three spellings:

    class Host:
        collection = Requirement("items to print")   # placeholder value

    mark_requirement("collection", Host)            # declaration on a target

    @requires("collection")                          # decorator form
    class Host: ...
"""

from __future__ import annotations

import logging
from typing import Any, FrozenSet, List, Optional

from traitcomp.members import FUNCTION_REQUIREMENTS_SLOT, Member, MemberTable, table_for


logger = logging.getLogger(__name__)


class Requirement:
    """
    Placeholder for a member that a trait or the host is expected to supply.

    Reading it from an instance raises NotImplementedError naming the
    missing member.
    """

    def __init__(self, doc: Optional[str] = None, name: Optional[str] = None):
        self.doc = doc
        self.name = name

    def __set_name__(self, owner, name):
        if self.name is None:
            self.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        raise NotImplementedError(
            f"{type(instance).__name__} requires member {self.name!r}, which was never supplied"
        )

    def __eq__(self, other):
        if not isinstance(other, Requirement):
            return NotImplemented
        return (self.name, self.doc) == (other.name, other.doc)

    def __hash__(self):
        return hash((Requirement, self.name, self.doc))

    def __repr__(self):
        return f"Requirement(name={self.name!r}, doc={self.doc!r})"


def is_placeholder(table: MemberTable, name: str, member: Optional[Member]) -> bool:
    """True when the member at name is a requirement slot rather than a real implementation."""
    if member is None:
        return False
    return isinstance(member.raw, Requirement) or name in table.requirements


def mark_requirement(name: str, target: Any) -> None:
    """
    Record that target expects name to be supplied by a trait.

    The target's members are left alone. A trait composed later may
    replace whatever currently sits at name without a conflict.
    """
    try:
        table = table_for(target)
        table.declare_requirement(name)
    except TypeError as exc:
        logger.debug(f"Requirement {name!r} not recorded on {target!r}: {exc}")
        return
    logger.debug(f"Declared requirement {name!r} on {table!r}")


def requires(*names: str):
    """
    Decorator documenting what the host must provide.

    On a class, every name is declared with mark_requirement. On a
    function, the names are only recorded on ``__requires__``.

    Usage:
        class TPrintCollection:
            @requires("collection")
            def print_collection(self):
                print(self.collection)
    """

    def decorator(obj):
        if isinstance(obj, type):
            for name in names:
                mark_requirement(name, obj)
        else:
            recorded = tuple(getattr(obj, FUNCTION_REQUIREMENTS_SLOT, ()))
            setattr(obj, FUNCTION_REQUIREMENTS_SLOT, recorded + tuple(n for n in names if n not in recorded))
        return obj

    return decorator


def requirements_of(obj: Any) -> FrozenSet[str]:
    """Names declared as required by a target, or documented on a function."""
    if callable(obj) and not isinstance(obj, type):
        return frozenset(getattr(obj, FUNCTION_REQUIREMENTS_SLOT, ()))
    try:
        return table_for(obj).requirements
    except TypeError:
        return frozenset()


def missing_requirements(target: Any) -> List[str]:
    """
    Requirements of target that nothing has supplied yet.

    A name is missing when it is declared but absent, or when its member
    is still a Requirement placeholder.
    """
    table = table_for(target)
    missing = {name for name in table.requirements if table.get(name) is None}
    for name in table.names():
        member = table.get(name)
        if member is not None and isinstance(member.raw, Requirement):
            missing.add(name)
    return sorted(missing)
