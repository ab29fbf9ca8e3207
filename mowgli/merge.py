"""
merge.py - Spec merge (right-biased, pure)
"""
from dataclasses import replace
from typing import Optional

from .spec import Spec

# Fields where a present override value simply wins.
_OVERRIDE_FIELDS = (
    "type",
    "items",
    "required",
    "conditions",
    "min",
    "max",
    "min_length",
    "max_length",
    "pattern",
    "enum",
    "allow_empty",
)


def merge_specs(base: Optional[Spec], override: Optional[Spec]) -> Optional[Spec]:
    """
    Merge ``override`` onto ``base`` and return a new Spec.

    Rules:
        - Scalar constraints, type and items: override's value wins when
          present, otherwise base's is inherited.
        - required / conditions: override's value, when present, replaces
          base's entirely (no union).
        - properties: key-wise union; keys on both sides merge recursively.

    Neither input is modified.
    """
    if base is None:
        return override
    if override is None:
        return base

    changes = {}
    for name in _OVERRIDE_FIELDS:
        val = getattr(override, name)
        if val is not None:
            changes[name] = val

    if override.properties is not None:
        merged = dict(base.properties or {})
        for key, sub in override.properties.items():
            merged[key] = merge_specs(merged[key], sub) if key in merged else sub
        changes["properties"] = merged

    return replace(base, **changes)
