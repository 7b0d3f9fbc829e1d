"""Exceptions raised while building descriptors or composing traits."""


class TraitCompositionError(Exception):
    """Base error for trait composition."""


class CompositionConflict(TraitCompositionError):
    """
    Raised when two different implementations would occupy the same
    effective member name on a target.

    The caller resolves it with an alias or an exclusion and reruns the
    whole composition on a fresh target.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Member named: {name} is defined twice with different implementations.")


class AliasError(TraitCompositionError, ValueError):
    """Raised when an alias mapping is ambiguous or targets a reserved name."""
