"""
Serialization helpers for composition reports and trait manifests.

Reports round-trip through a plain dict representation, then JSON or YAML.

Trait manifests describe a composition declaratively:

    traits:
      - trait: myapp.traits:TGreeter
        alias: {greet: say_hi}
        excludes: [debug]

References are stored as import paths ("module:QualName") and resolved
with importlib when loading.
"""
from __future__ import annotations

import importlib
import json
from typing import Any, Dict, List

import yaml

from traitcomp.descriptor import TraitDescriptor, as_descriptor
from traitcomp.members import MemberKind
from traitcomp.report import Action, CompositionReport, MemberDecision


def decision_to_dict(d: MemberDecision) -> Dict[str, Any]:
    return {
        "trait": d.trait,
        "name": d.name,
        "effective_name": d.effective_name,
        "action": d.action.value,
        "kind": d.kind.value if d.kind is not None else None,
    }


def decision_from_dict(d: Dict[str, Any]) -> MemberDecision:
    kind = d.get("kind")
    return MemberDecision(
        trait=d["trait"],
        name=d["name"],
        effective_name=d.get("effective_name", d["name"]),
        action=Action(d["action"]),
        kind=MemberKind(kind) if kind is not None else None,
    )


def report_to_dict(r: CompositionReport) -> Dict[str, Any]:
    return {"target": r.target, "decisions": [decision_to_dict(d) for d in r.decisions]}


def report_from_dict(d: Dict[str, Any]) -> CompositionReport:
    r = CompositionReport(target=d.get("target", ""))
    r.decisions = [decision_from_dict(x) for x in d.get("decisions", [])]
    return r


def report_to_json(r: CompositionReport) -> str:
    return json.dumps(report_to_dict(r), sort_keys=True)


def report_from_json(s: str) -> CompositionReport:
    return report_from_dict(json.loads(s))


def report_to_yaml(r: CompositionReport) -> str:
    return yaml.safe_dump(report_to_dict(r))


def report_from_yaml(s: str) -> CompositionReport:
    return report_from_dict(yaml.safe_load(s))


# =========================================================================
# Trait manifests
# =========================================================================

def reference_path(obj: Any) -> str:
    """Import path of a class or function, as "module:QualName"."""
    module = getattr(obj, "__module__", None)
    qualname = getattr(obj, "__qualname__", None)
    if not isinstance(module, str) or not isinstance(qualname, str) or "<locals>" in qualname:
        raise TypeError(f"Cannot serialize trait reference {obj!r}: it has no importable path")
    return f"{module}:{qualname}"


def resolve_reference(path: str) -> Any:
    module_name, sep, qualname = path.partition(":")
    if not sep or not module_name or not qualname:
        raise ValueError(f"Trait reference must look like 'module:QualName', got {path!r}")
    obj: Any = importlib.import_module(module_name)
    for part in qualname.split("."):
        obj = getattr(obj, part)
    return obj


def descriptor_to_dict(trait: Any) -> Dict[str, Any]:
    descriptor = as_descriptor(trait)
    return {
        "trait": reference_path(descriptor.reference),
        "alias": dict(descriptor.aliases),
        "excludes": sorted(descriptor.excludes_set),
    }


def descriptor_from_dict(d: Dict[str, Any]) -> TraitDescriptor:
    return TraitDescriptor(
        resolve_reference(d["trait"]),
        aliases=d.get("alias") or {},
        excludes_set=frozenset(d.get("excludes") or ()),
    )


def descriptors_to_yaml(traits: List[Any]) -> str:
    return yaml.safe_dump({"traits": [descriptor_to_dict(t) for t in traits]}, sort_keys=False)


def descriptors_from_yaml(s: str) -> List[TraitDescriptor]:
    d = yaml.safe_load(s) or {}
    return [descriptor_from_dict(x) for x in d.get("traits", [])]
