"""
Trait Descriptors and the descriptor builders.

A TraitDescriptor wraps a trait source with composition metadata:
    - aliases: original member name -> effective member name
    - excludes: original member names to skip

The builders (exclude_from, alias_on, configure_trait) accept either a
bare trait source or a descriptor, and always hand back a descriptor so
calls chain left to right:

    alias_on(TGreeter, {"greet": "say_hi"}).excludes("debug")

Building a descriptor never touches the trait source itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional

from traitcomp.errors import AliasError
from traitcomp.members import MemberTable, describe, is_eligible, table_for


def validate_aliases(aliases: Mapping[str, str]) -> Dict[str, str]:
    """
    Check an alias mapping and return it as a plain dict.

    Raises:
        TypeError: if a key or value is not a string
        AliasError: if two original names share an effective name, or an
            effective name is reserved
    """
    claimed: Dict[str, str] = {}
    for original, effective in aliases.items():
        if not isinstance(original, str) or not isinstance(effective, str):
            raise TypeError(f"Alias entries must map str to str, got {original!r}: {effective!r}")
        if not is_eligible(effective):
            raise AliasError(f"Cannot alias {original!r} to reserved name {effective!r}")
        if effective in claimed:
            raise AliasError(
                f"Aliases {claimed[effective]!r} and {original!r} both map to {effective!r}"
            )
        claimed[effective] = original
    return dict(aliases)


@dataclass
class TraitDescriptor:
    """
    Metadata envelope over a trait source.

    Properties:
        reference: The wrapped trait source (class, mapping or object).
            Read-only once the descriptor exists.
        aliases: Original member name -> effective member name
        excludes: Original member names that are never composed
    """

    _reference: Any
    aliases: Dict[str, str] = field(default_factory=dict)
    excludes_set: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        if isinstance(self._reference, TraitDescriptor):
            raise TypeError("A TraitDescriptor cannot wrap another TraitDescriptor")
        self.aliases = validate_aliases(self.aliases)
        self.excludes_set = frozenset(self.excludes_set)

    @property
    def reference(self) -> Any:
        return self._reference

    @property
    def name(self) -> str:
        return describe(self._reference)

    def member_table(self) -> MemberTable:
        return table_for(self._reference)

    def effective_name(self, name: str) -> str:
        return self.aliases.get(name, name)

    def excludes(self, *names: str) -> TraitDescriptor:
        """Overwrite the exclusion set; returns self for chaining."""
        self.excludes_set = frozenset(names)
        return self

    def alias(self, aliases: Optional[Mapping[str, str]]) -> TraitDescriptor:
        """Overwrite the alias map; returns self for chaining."""
        self.aliases = validate_aliases(aliases or {})
        return self

    def configure(
        self,
        alias: Optional[Mapping[str, str]] = None,
        excludes: Iterable[str] = (),
    ) -> TraitDescriptor:
        """Shortcut for alias() followed by excludes()."""
        return self.alias(alias).excludes(*excludes)


def as_descriptor(trait: Any) -> TraitDescriptor:
    """Return trait unchanged if it is already a descriptor, else wrap it."""
    if isinstance(trait, TraitDescriptor):
        return trait
    return TraitDescriptor(trait)


def exclude_from(trait: Any, *names: str) -> TraitDescriptor:
    """
    Exclude members of a trait from composition.

    Usage:
        @traits(exclude_from(TExample, "method_one", "method_two"))
        class MyClass: ...
    """
    return as_descriptor(trait).excludes(*names)


def alias_on(trait: Any, aliases: Mapping[str, str]) -> TraitDescriptor:
    """
    Compose trait members under new names.

    Usage:
        @traits(alias_on(TExample, {"method_one": "parent_method_one"}))
        class MyClass: ...
    """
    return as_descriptor(trait).alias(aliases)


def configure_trait(
    trait: Any,
    alias: Optional[Mapping[str, str]] = None,
    excludes: Iterable[str] = (),
) -> TraitDescriptor:
    """
    Shortcut for alias_on and exclude_from on the same descriptor.

    Usage:
        @traits(configure_trait(TExample, alias={"method_one": "parent_method_one"},
                                excludes=["method_two"]))
        class MyClass: ...
    """
    return as_descriptor(trait).configure(alias=alias, excludes=excludes)
