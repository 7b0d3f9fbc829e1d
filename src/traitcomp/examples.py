"""
Example traits and a composed host class.

Used by the demo script and the tests. Shows aliasing, exclusion, a
requirement filled by a trait, and an accessor member surviving the copy.
"""
from traitcomp.composition import apply_traits
from traitcomp.descriptor import configure_trait
from traitcomp.requirements import Requirement, requires


class TGreeter:
    """Greets by name; debug() is meant to be left out by hosts."""

    def greet(self):
        return f"Hello, {self.name}"

    def debug(self):
        return f"<{type(self).__name__} name={self.name!r}>"

    @property
    def name(self):
        return getattr(self, "_name", "anonymous")

    @name.setter
    def name(self, value):
        self._name = value


class TPrintCollection:
    """Renders a host-provided collection."""

    collection = Requirement("iterable of items to render")

    @requires("collection")
    def print_collection(self):
        return ", ".join(str(item) for item in self.collection)


class TCollection:
    """Supplies a collection backed by a list."""

    @property
    def collection(self):
        return getattr(self, "_items", [])

    def add(self, item):
        self._items = list(self.collection) + [item]
        return self


class TCount:

    def count(self):
        return len(list(self.collection))


def build_example_host():
    """
    Build a class composed from all example traits.

    greet is exposed as say_hi, debug is excluded, and the collection
    placeholder left by TPrintCollection is filled by TCollection.
    """

    class Host:
        pass

    report = apply_traits(Host, [
        configure_trait(TGreeter, alias={"greet": "say_hi"}, excludes=["debug"]),
        TPrintCollection,
        TCollection,
        TCount,
    ])
    return Host, report
