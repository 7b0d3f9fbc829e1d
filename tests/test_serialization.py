"""
Tests for report serialization and trait manifests.

Reports must survive a JSON/YAML round-trip unchanged. Manifests must
resolve their import paths back to the original trait sources.
"""

import pytest
from traitcomp.composition import apply_traits
from traitcomp.descriptor import configure_trait
from traitcomp.examples import TCollection, TGreeter, TPrintCollection
from traitcomp.report import Action
from traitcomp.serialization import (
    descriptor_from_dict,
    descriptor_to_dict,
    descriptors_from_yaml,
    descriptors_to_yaml,
    report_from_json,
    report_from_yaml,
    report_to_dict,
    report_to_json,
    report_to_yaml,
    resolve_reference,
)


def build_sample_report():
    class Target:
        pass

    return apply_traits(Target, [
        configure_trait(TGreeter, alias={"greet": "say_hi"}, excludes=["debug"]),
        TPrintCollection,
        TCollection,
    ])


def test_report_json_roundtrip():
    report = build_sample_report()
    restored = report_from_json(report_to_json(report))
    assert report_to_dict(restored) == report_to_dict(report)


def test_report_yaml_roundtrip():
    report = build_sample_report()
    restored = report_from_yaml(report_to_yaml(report))
    assert restored.decisions == report.decisions


def test_report_dict_shape():
    d = report_to_dict(build_sample_report())
    filled = [x for x in d["decisions"] if x["action"] == Action.FILLED.value]
    assert filled == [{
        "trait": "TCollection",
        "name": "collection",
        "effective_name": "collection",
        "action": "filled",
        "kind": "accessor",
    }]


def test_manifest_roundtrip():
    traits = [
        configure_trait(TGreeter, alias={"greet": "say_hi"}, excludes=["debug"]),
        TCollection,
    ]
    restored = descriptors_from_yaml(descriptors_to_yaml(traits))
    assert restored[0].reference is TGreeter
    assert restored[0].aliases == {"greet": "say_hi"}
    assert restored[0].excludes_set == frozenset({"debug"})
    assert restored[1].reference is TCollection
    assert restored[1].aliases == {}


def test_manifest_from_handwritten_yaml():
    text = """
traits:
  - trait: traitcomp.examples:TGreeter
    alias:
      greet: welcome
  - trait: traitcomp.examples:TCount
"""
    descriptors = descriptors_from_yaml(text)

    class Target:
        pass

    apply_traits(Target, descriptors)
    assert Target().welcome() == "Hello, anonymous"
    assert "count" in vars(Target)


def test_empty_manifest():
    assert descriptors_from_yaml("") == []


def test_descriptor_dict():
    d = descriptor_to_dict(TCollection)
    assert d == {"trait": "traitcomp.examples:TCollection", "alias": {}, "excludes": []}
    assert descriptor_from_dict(d).reference is TCollection


def test_local_class_cannot_be_serialized():
    class Local:
        pass

    with pytest.raises(TypeError):
        descriptor_to_dict(Local)


def test_mapping_reference_cannot_be_serialized():
    with pytest.raises(TypeError):
        descriptor_to_dict({"x": 1})


def test_malformed_reference():
    with pytest.raises(ValueError):
        resolve_reference("traitcomp.examples.TGreeter")


def test_unknown_reference():
    with pytest.raises(AttributeError):
        resolve_reference("traitcomp.examples:TMissing")
