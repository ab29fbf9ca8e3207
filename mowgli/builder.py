"""
builder.py - Explicit Spec builders.

Shorthand for writing specs in Python instead of JSON:

    user = obj(
        {"enabled": boolean(), "value": string()},
        required=["enabled"],
        conditions=[when("enabled == true", then={"value": string(min_length=1)})],
    )

Keyword arguments map one-to-one onto Spec fields; anything left out is
absent (not checked).
"""
from typing import Any, Iterable, Mapping, Optional

from .spec import Condition, Spec


def string(*, min_length=None, max_length=None, pattern=None, enum=None, allow_empty=None) -> Spec:
    return Spec(
        type="string",
        min_length=min_length,
        max_length=max_length,
        pattern=pattern,
        enum=enum,
        allow_empty=allow_empty,
    )


def number(*, min=None, max=None, enum=None) -> Spec:
    return Spec(type="number", min=min, max=max, enum=enum)


def integer(*, min=None, max=None, enum=None) -> Spec:
    return Spec(type="integer", min=min, max=max, enum=enum)


def boolean(*, enum=None) -> Spec:
    return Spec(type="boolean", enum=enum)


def null() -> Spec:
    return Spec(type="null")


def array(items: Optional[Spec] = None, *, min_length=None, max_length=None) -> Spec:
    return Spec(type="array", items=items, min_length=min_length, max_length=max_length)


def obj(
    properties: Optional[Mapping[str, Spec]] = None,
    *,
    required: Optional[Iterable[str]] = None,
    conditions: Optional[Iterable[Condition]] = None,
) -> Spec:
    return Spec(
        type="object",
        properties=properties,
        required=tuple(required) if required is not None else None,
        conditions=tuple(conditions) if conditions is not None else None,
    )


def override(**constraints: Any) -> Spec:
    """A typeless override fragment, e.g. ``override(min_length=1)``."""
    return Spec(**constraints)


def when(
    expression: str,
    then: Optional[Mapping[str, Spec]] = None,
    otherwise: Optional[Mapping[str, Spec]] = None,
) -> Condition:
    return Condition(if_=expression, then=then, else_=otherwise)
