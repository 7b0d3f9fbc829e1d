"""
Member Model

Defines how the library sees the members of a trait source or a target:

    - Member: one named entry of a member table, as a tagged variant
      (stored value or accessor) that remembers the exact raw object
    - MemberTable: uniform read/write view over a class dict, a mapping
      or an instance dict
    - The member filter (reserved structural names)
    - Implementation sameness, used by the conflict detector

ARCHITECTURAL RULE:
    Copying a member copies its raw object verbatim.
    A property stays a property, a staticmethod stays a staticmethod.
    Nothing here decides whether a copy is allowed; that belongs to the engine.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from inspect import CO_NESTED
from types import CodeType, FunctionType
from typing import Any, Dict, FrozenSet, Iterator, Optional, Tuple


REQUIREMENTS_SLOT = "__trait_requirements__"
FUNCTION_REQUIREMENTS_SLOT = "__requires__"

RESERVED_NAMES: FrozenSet[str] = frozenset({
    # Construction hooks
    "__init__",
    "__new__",
    "__init_subclass__",
    # Class plumbing
    "__class__",
    "__dict__",
    "__weakref__",
    "__module__",
    "__qualname__",
    "__name__",
    "__doc__",
    "__slots__",
    "__annotations__",
    "__annotate__",
    "__annotate_func__",
    "__annotations_cache__",
    "__type_params__",
    "__mro__",
    "__bases__",
    "__orig_bases__",
    "__parameters__",
    "__firstlineno__",
    "__static_attributes__",
    "__classcell__",
    "__abstractmethods__",
    "_abc_impl",
    # Object identity text
    "__repr__",
    "__str__",
    # Bookkeeping slots of this library
    REQUIREMENTS_SLOT,
    FUNCTION_REQUIREMENTS_SLOT,
})


def is_eligible(name: str) -> bool:
    """Return False for structural names that never take part in composition."""
    return name not in RESERVED_NAMES


class MemberKind(Enum):
    """Variant tag of a member."""

    VALUE = "value"
    ACCESSOR = "accessor"


class Sameness(Enum):
    """
    How the conflict detector decides that two implementations are the same.

    STRUCTURAL compares functions by their compiled structure, so two
    textually identical methods defined in different traits are the same.
    IDENTITY requires the very same underlying object.
    """

    STRUCTURAL = "structural"
    IDENTITY = "identity"


@dataclass(frozen=True)
class Member:
    """
    One named entry of a member table.

    Properties:
        name: Name the member is stored under in its table
        raw: The exact object stored in the table (written verbatim on copy)
        kind: VALUE for stored values (functions, static/class methods,
              plain data), ACCESSOR for properties
    """

    name: str
    raw: Any
    kind: MemberKind = MemberKind.VALUE

    @classmethod
    def from_raw(cls, name: str, raw: Any) -> Member:
        kind = MemberKind.ACCESSOR if isinstance(raw, property) else MemberKind.VALUE
        return cls(name=name, raw=raw, kind=kind)

    @property
    def getter(self):
        return self.raw.fget if self.kind is MemberKind.ACCESSOR else None

    @property
    def setter(self):
        return self.raw.fset if self.kind is MemberKind.ACCESSOR else None

    @property
    def deleter(self):
        return self.raw.fdel if self.kind is MemberKind.ACCESSOR else None

    @property
    def read_only(self) -> bool:
        return self.kind is MemberKind.ACCESSOR and self.setter is None

    @property
    def public(self) -> bool:
        return not self.name.startswith("_")

    @property
    def implementation(self) -> Any:
        """The callable or value behind the raw object."""
        if self.kind is MemberKind.ACCESSOR:
            return (self.getter, self.setter, self.deleter)
        if isinstance(self.raw, (staticmethod, classmethod)):
            return self.raw.__func__
        return self.raw


class MemberTable:
    """
    Read/write view over the member table of a source or target.

    Classes expose their own ``__dict__`` and are written with ``setattr``
    so descriptors land in the class unchanged. Mappings are used as the
    table itself. Any other object exposes its instance dict.
    """

    def __init__(self, owner: Any):
        self.owner = owner
        if isinstance(owner, type):
            self._members = vars(owner)
        elif isinstance(owner, Mapping):
            self._members = owner
        else:
            try:
                self._members = vars(owner)
            except TypeError:
                raise TypeError(f"Cannot use {owner!r} as a member table: it has no __dict__") from None

    def __repr__(self) -> str:
        return f"MemberTable({describe(self.owner)})"

    def names(self) -> Iterator[str]:
        return iter(list(self._members.keys()))

    def get(self, name: str) -> Optional[Member]:
        if name not in self._members:
            return None
        return Member.from_raw(name, self._members[name])

    def put(self, name: str, member: Member) -> None:
        self._write(name, member.raw)

    def _write(self, name: str, raw: Any) -> None:
        if isinstance(self.owner, type):
            setattr(self.owner, name, raw)
        else:
            self._members[name] = raw

    @property
    def requirements(self) -> FrozenSet[str]:
        return frozenset(self._members.get(REQUIREMENTS_SLOT, ()))

    def declare_requirement(self, name: str) -> None:
        self._write(REQUIREMENTS_SLOT, self.requirements | {name})

    def satisfy_requirement(self, name: str) -> None:
        if name in self.requirements:
            self._write(REQUIREMENTS_SLOT, self.requirements - {name})

    def snapshot(self) -> MemberTable:
        """Detached copy of the current table; writes never reach the owner."""
        return MemberTable(dict(self._members))


def table_for(obj: Any) -> MemberTable:
    if isinstance(obj, MemberTable):
        return obj
    return MemberTable(obj)


def describe(obj: Any) -> str:
    """Short human-readable label for a source or target, used in logs and reports."""
    qualname = getattr(obj, "__qualname__", None)
    if isinstance(qualname, str):
        return qualname
    if isinstance(obj, dict):
        return "<mapping>"
    return f"<{type(obj).__name__} instance>"


# =========================================================================
# Sameness
# =========================================================================

def _code_fingerprint(code: CodeType) -> Tuple:
    consts = tuple(
        _code_fingerprint(c) if isinstance(c, CodeType) else (type(c), c)
        for c in code.co_consts
    )
    # Positions (file name, line table) and scope nesting are not structure.
    return (
        code.co_name,
        code.co_code,
        consts,
        code.co_names,
        code.co_varnames,
        code.co_freevars,
        code.co_cellvars,
        code.co_argcount,
        code.co_posonlyargcount,
        code.co_kwonlyargcount,
        code.co_flags & ~CO_NESTED,
    )


def _function_fingerprint(func: FunctionType) -> Tuple:
    kwdefaults: Dict[str, Any] = func.__kwdefaults__ or {}
    return (
        _code_fingerprint(func.__code__),
        func.__defaults__,
        tuple(sorted(kwdefaults.items(), key=lambda item: item[0])),
    )


def _same(a: Any, b: Any, sameness: Sameness) -> bool:
    if a is b:
        return True
    if sameness is Sameness.IDENTITY:
        return False
    if type(a) is not type(b):
        return False
    if isinstance(a, FunctionType):
        return _function_fingerprint(a) == _function_fingerprint(b)
    try:
        return bool(a == b)
    except (TypeError, ValueError):
        # Values whose equality is ambiguous (array-likes) are never the same.
        return False


def same_implementation(a: Member, b: Member, sameness: Sameness = Sameness.STRUCTURAL) -> bool:
    """
    Decide whether two members carry the same implementation.

    Same-named presence is not enough: the underlying callables or values
    must match (structurally or by identity, see Sameness). Static and
    class methods additionally need the same wrapper type, accessors need
    matching getter, setter and deleter.
    """
    if a.raw is b.raw:
        return True
    if a.kind is not b.kind or type(a.raw) is not type(b.raw):
        return False
    if a.kind is MemberKind.ACCESSOR:
        return all(_same(x, y, sameness) for x, y in zip(a.implementation, b.implementation))
    return _same(a.implementation, b.implementation, sameness)
