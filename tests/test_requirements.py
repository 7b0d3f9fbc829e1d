"""
Tests for requirement placeholders and markers.
"""

from types import MappingProxyType

import pytest
from traitcomp.members import MemberTable
from traitcomp.requirements import (
    Requirement,
    is_placeholder,
    mark_requirement,
    missing_requirements,
    requirements_of,
    requires,
)


class TestRequirement:
    """Test the Requirement placeholder value."""

    def test_picks_up_attribute_name(self):
        class Host:
            collection = Requirement("items to print")

        assert Host.collection.name == "collection"
        assert Host.collection.doc == "items to print"

    def test_explicit_name_wins(self):
        class Host:
            items = Requirement(name="collection")

        assert Host.items.name == "collection"

    def test_instance_access_raises(self):
        class Host:
            collection = Requirement()

        with pytest.raises(NotImplementedError) as excinfo:
            Host().collection
        assert "collection" in str(excinfo.value)

    def test_equality(self):
        assert Requirement("a", name="x") == Requirement("a", name="x")
        assert Requirement("a", name="x") != Requirement("b", name="x")


class TestMarkRequirement:
    """Test mark_requirement and @requires."""

    def test_declares_without_touching_members(self):
        class Host:
            pass

        before = {k: v for k, v in vars(Host).items()}
        mark_requirement("collection", Host)
        assert requirements_of(Host) == frozenset({"collection"})
        assert "collection" not in vars(Host)
        assert all(vars(Host)[k] is v for k, v in before.items())

    def test_accumulates_names(self):
        class Host:
            pass

        mark_requirement("a", Host)
        mark_requirement("b", Host)
        assert requirements_of(Host) == frozenset({"a", "b"})

    def test_not_inherited(self):
        """Requirements belong to the class they were declared on."""

        @requires("a")
        class Base:
            pass

        class Child(Base):
            pass

        assert requirements_of(Child) == frozenset()

    def test_requires_on_class(self):
        @requires("collection", "save")
        class Host:
            pass

        assert requirements_of(Host) == frozenset({"collection", "save"})

    def test_requires_on_function_is_documentary(self):
        @requires("collection")
        def print_collection(self):
            return self.collection

        assert print_collection.__requires__ == ("collection",)
        assert requirements_of(print_collection) == frozenset({"collection"})

    def test_requires_on_function_deduplicates(self):
        @requires("a", "b")
        @requires("a")
        def fn():
            pass

        assert fn.__requires__ == ("a", "b")

    def test_mapping_target(self):
        target = {}
        mark_requirement("x", target)
        assert MemberTable(target).requirements == frozenset({"x"})
        assert requirements_of(target) == frozenset({"x"})

    def test_instance_target(self):
        class Host:
            pass

        host = Host()
        mark_requirement("save", host)
        assert requirements_of(host) == frozenset({"save"})
        assert requirements_of(Host) == frozenset()

    def test_slotted_instance_is_left_alone(self):
        """A target without a __dict__ cannot record anything, and nothing fails."""

        class Slotted:
            __slots__ = ("value",)

        target = Slotted()
        assert mark_requirement("save", target) is None
        assert requirements_of(target) == frozenset()

    def test_read_only_mapping_is_left_alone(self):
        target = MappingProxyType({"x": 1})
        mark_requirement("save", target)
        assert dict(target) == {"x": 1}
        assert requirements_of(target) == frozenset()


class TestPlaceholderDetection:
    """Test is_placeholder and missing_requirements."""

    def test_requirement_value_is_placeholder(self):
        table = MemberTable({"x": Requirement()})
        assert is_placeholder(table, "x", table.get("x"))

    def test_declared_stub_is_placeholder(self):
        table = MemberTable({"x": 1})
        table.declare_requirement("x")
        assert is_placeholder(table, "x", table.get("x"))

    def test_real_member_is_not_placeholder(self):
        table = MemberTable({"x": 1})
        assert not is_placeholder(table, "x", table.get("x"))
        assert not is_placeholder(table, "y", None)

    def test_missing_requirements(self):
        class Host:
            collection = Requirement()

            def save(self):
                pass

        mark_requirement("save", Host)
        mark_requirement("load", Host)
        assert missing_requirements(Host) == ["collection", "load"]
