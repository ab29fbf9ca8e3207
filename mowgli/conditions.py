"""
conditions.py - Condition resolver.

Turns an object's conditions into per-field effective specs. Conditions are
applied in declaration order and always evaluated against the object's
original field values; a later condition merges on top of an earlier one
for the same field.
"""
import os
import sys
from typing import Any, Callable, Dict, Mapping

from .errors import ExpressionError
from .expression import evaluate
from .merge import merge_specs
from .spec import Spec

_DEBUG_ENABLED = os.getenv("MOWGLI_DEBUG", "0") == "1"

ErrorSink = Callable[[str, str], None]


def _debug_print(*args):
    """Print to stderr only if MOWGLI_DEBUG=1."""
    if _DEBUG_ENABLED:
        print("[mowgli.conditions]", *args, file=sys.stderr)


def resolve_conditions(obj: Mapping[str, Any], spec: Spec, report: ErrorSink) -> Dict[str, Spec]:
    """
    Evaluate ``spec.conditions`` against ``obj`` and return field -> effective Spec.

    Only fields touched by a selected branch appear in the result; the
    caller falls back to the declared property spec for the rest.

    A condition whose expression fails to tokenize, parse or evaluate is
    reported through ``report("", message)`` and contributes nothing; the
    remaining conditions are still processed.
    """
    effective: Dict[str, Spec] = {}
    if not spec.conditions:
        return effective

    declared = spec.properties or {}

    for cond in spec.conditions:
        try:
            outcome = evaluate(cond.if_, obj)
        except ExpressionError as e:
            _debug_print(f"condition {cond.if_!r} failed: {e}")
            report("", f"error evaluating condition '{cond.if_}': {e}")
            continue

        overrides = cond.then if outcome else cond.else_
        _debug_print(f"condition {cond.if_!r} -> {outcome}")
        if not overrides:
            continue

        for name, override in overrides.items():
            if name in effective:
                effective[name] = merge_specs(effective[name], override)
            elif name in declared:
                effective[name] = merge_specs(declared[name], override)
            else:
                # Field not declared in properties: the override stands alone.
                effective[name] = override

    return effective
