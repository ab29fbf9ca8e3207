"""
spec.py

Spec data model and its JSON wire format.

A Spec is an immutable schema node. Every field is optional and ``None``
means "absent": an absent constraint is never checked, and an absent type
skips type checking entirely (override fragments inside conditions rely on
this to carry only deltas).

Wire format field names:

    type, properties, items, required, conditions ({if, then, else}),
    min, max, minLength, maxLength, pattern, enum, allowEmpty
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import SpecError

SPEC_TYPES = ("string", "number", "integer", "boolean", "object", "array", "null")


def _freeze_specs(specs: Optional[Mapping[str, "Spec"]]) -> Optional[Mapping[str, "Spec"]]:
    if specs is None or isinstance(specs, MappingProxyType):
        return specs
    return MappingProxyType(dict(specs))


def _freeze_seq(seq):
    if seq is None or isinstance(seq, tuple):
        return seq
    return tuple(seq)


@dataclass(frozen=True)
class Condition:
    """
    A guarded set of per-field overrides.

    ``if_`` is evaluated against the object's own fields; ``then`` applies
    when it is true and ``else_`` (optional) when it is false.
    """
    if_: str
    then: Optional[Mapping[str, "Spec"]] = None
    else_: Optional[Mapping[str, "Spec"]] = None

    def __post_init__(self):
        object.__setattr__(self, "then", _freeze_specs(self.then))
        object.__setattr__(self, "else_", _freeze_specs(self.else_))

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"if": self.if_}
        out["then"] = {k: v.to_dict() for k, v in (self.then or {}).items()}
        if self.else_ is not None:
            out["else"] = {k: v.to_dict() for k, v in self.else_.items()}
        return out


@dataclass(frozen=True)
class Spec:
    """Declarative schema node: type, constraints and optional conditions."""
    type: Optional[str] = None
    properties: Optional[Mapping[str, "Spec"]] = None
    items: Optional["Spec"] = None
    required: Optional[Tuple[str, ...]] = None
    conditions: Optional[Tuple[Condition, ...]] = None

    min: Optional[float] = None
    max: Optional[float] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    enum: Optional[Tuple[Any, ...]] = None
    allow_empty: Optional[bool] = None

    def __post_init__(self):
        # Callers may pass dicts/lists; store read-only views so a Spec can be
        # shared between threads.
        object.__setattr__(self, "properties", _freeze_specs(self.properties))
        object.__setattr__(self, "required", _freeze_seq(self.required))
        object.__setattr__(self, "conditions", _freeze_seq(self.conditions))
        object.__setattr__(self, "enum", _freeze_seq(self.enum))

    def to_dict(self) -> Dict[str, Any]:
        """Dump to the JSON wire format, omitting absent fields."""
        out: Dict[str, Any] = {}
        if self.type is not None:
            out["type"] = self.type
        if self.properties is not None:
            out["properties"] = {k: v.to_dict() for k, v in self.properties.items()}
        if self.items is not None:
            out["items"] = self.items.to_dict()
        if self.required is not None:
            out["required"] = list(self.required)
        if self.conditions is not None:
            out["conditions"] = [c.to_dict() for c in self.conditions]
        for attr, key in _SCALAR_WIRE_NAMES:
            val = getattr(self, attr)
            if val is not None:
                out[key] = list(val) if attr == "enum" else val
        return out


_SCALAR_WIRE_NAMES = (
    ("min", "min"),
    ("max", "max"),
    ("min_length", "minLength"),
    ("max_length", "maxLength"),
    ("pattern", "pattern"),
    ("enum", "enum"),
    ("allow_empty", "allowEmpty"),
)


# -------------------------------------------------------------------------
# Wire format parsing
# -------------------------------------------------------------------------


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _parse_length(v: Any, path: str) -> int:
    if not _is_number(v):
        raise SpecError(path, "expected a non-negative integer")
    if isinstance(v, float):
        if not v.is_integer():
            raise SpecError(path, "expected a non-negative integer")
        v = int(v)
    if v < 0:
        raise SpecError(path, "expected a non-negative integer")
    return v


def _parse_overrides(data: Any, path: str) -> Optional[Dict[str, Spec]]:
    if data is None:
        return None
    if not isinstance(data, Mapping):
        raise SpecError(path, "expected an object of field specs")
    return {name: parse_spec(sub, _join(path, name)) for name, sub in data.items()}


def _parse_condition(data: Any, path: str) -> Condition:
    if not isinstance(data, Mapping):
        raise SpecError(path, "expected a condition object")
    expr = data.get("if", "")
    if not isinstance(expr, str):
        raise SpecError(_join(path, "if"), "expected an expression string")
    return Condition(
        if_=expr,
        then=_parse_overrides(data.get("then"), _join(path, "then")),
        else_=_parse_overrides(data.get("else"), _join(path, "else")),
    )


def parse_spec(data: Mapping[str, Any], path: str = "") -> Spec:
    """
    Build a Spec from its JSON wire format (an already-decoded mapping).

    Unknown keys are ignored; ``null`` values are treated as absent.

    Raises:
        SpecError: if a field has the wrong JSON kind.
    """
    if not isinstance(data, Mapping):
        raise SpecError(path, "expected a spec object")

    kwargs: Dict[str, Any] = {}

    t = data.get("type")
    if t is not None:
        if not isinstance(t, str):
            raise SpecError(_join(path, "type"), "expected a string")
        kwargs["type"] = t

    props = data.get("properties")
    if props is not None:
        if not isinstance(props, Mapping):
            raise SpecError(_join(path, "properties"), "expected an object")
        kwargs["properties"] = {
            name: parse_spec(sub, _join(_join(path, "properties"), name))
            for name, sub in props.items()
        }

    items = data.get("items")
    if items is not None:
        kwargs["items"] = parse_spec(items, _join(path, "items"))

    required = data.get("required")
    if required is not None:
        if not isinstance(required, list) or not all(isinstance(r, str) for r in required):
            raise SpecError(_join(path, "required"), "expected a list of field names")
        kwargs["required"] = tuple(required)

    conditions = data.get("conditions")
    if conditions is not None:
        if not isinstance(conditions, list):
            raise SpecError(_join(path, "conditions"), "expected a list of conditions")
        kwargs["conditions"] = tuple(
            _parse_condition(c, f"{_join(path, 'conditions')}[{i}]")
            for i, c in enumerate(conditions)
        )

    for key in ("min", "max"):
        v = data.get(key)
        if v is not None:
            if not _is_number(v):
                raise SpecError(_join(path, key), "expected a number")
            kwargs[key] = v

    for attr, key in (("min_length", "minLength"), ("max_length", "maxLength")):
        v = data.get(key)
        if v is not None:
            kwargs[attr] = _parse_length(v, _join(path, key))

    pattern = data.get("pattern")
    if pattern is not None:
        if not isinstance(pattern, str):
            raise SpecError(_join(path, "pattern"), "expected a string")
        kwargs["pattern"] = pattern

    enum = data.get("enum")
    if enum is not None:
        if not isinstance(enum, list):
            raise SpecError(_join(path, "enum"), "expected a list")
        kwargs["enum"] = tuple(enum)

    allow_empty = data.get("allowEmpty")
    if allow_empty is not None:
        if not isinstance(allow_empty, bool):
            raise SpecError(_join(path, "allowEmpty"), "expected a boolean")
        kwargs["allow_empty"] = allow_empty

    return Spec(**kwargs)


def parse_spec_string(text) -> Spec:
    """Parse a JSON document (str or bytes) into a Spec."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
        raise SpecError("", f"invalid JSON: {e}") from e
    return parse_spec(data)


def has_expressions(spec: Optional[Spec]) -> bool:
    """
    True if the spec, or any spec reachable through properties/items,
    carries a non-empty conditions list.

    Callers use this to decide whether local validation is enough or a
    server round-trip is needed.
    """
    if spec is None:
        return False
    if spec.conditions:
        return True
    if spec.properties:
        for sub in spec.properties.values():
            if has_expressions(sub):
                return True
    return has_expressions(spec.items)
