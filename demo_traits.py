#!/usr/bin/env python3
"""
Demo: compose example traits into a host class.

Shows a dry-run plan with a conflict, the successful composition, and the
resulting report as YAML.
"""

import logging

from traitcomp import CompositionConflict, alias_on, apply_traits, plan_composition
from traitcomp.examples import TCollection, TGreeter, build_example_host
from traitcomp.planner import conflict_messages
from traitcomp.serialization import report_to_yaml


class TGreeterLoud:
    def greet(self):
        return "HELLO!"


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 80)
    print("TRAIT COMPOSITION DEMO")
    print("=" * 80)

    class Clashing:
        pass

    print("\nPLAN (TGreeter + TGreeterLoud):")
    print("-" * 80)
    plan = plan_composition(Clashing, [TGreeter, TGreeterLoud])
    for message in conflict_messages(plan):
        print(" ", message)

    try:
        apply_traits(Clashing, [TGreeter, TGreeterLoud])
    except CompositionConflict as exc:
        print(f"\napply_traits refused: {exc}")

    class Resolved:
        pass

    apply_traits(Resolved, [TGreeter, alias_on(TGreeterLoud, {"greet": "shout"}), TCollection])
    obj = Resolved()
    obj.name = "Ada"
    print(f"\nResolved with an alias: {obj.greet()} / {obj.shout()}")

    Host, report = build_example_host()
    host = Host().add("a").add("b")
    print(f"\nExample host prints: {host.print_collection()} ({host.count()} items)")

    print("\nREPORT:")
    print("-" * 80)
    print(report_to_yaml(report))
    print("=" * 80)


if __name__ == "__main__":
    main()
