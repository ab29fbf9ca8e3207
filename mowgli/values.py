"""
values.py - JSON value kinds and coercion-aware equality.

Values are plain decoded JSON: None, bool, int/float, str, list, dict.
``bool`` is a subclass of ``int`` in Python, so every numeric check here
excludes it explicitly.
"""
import math
from typing import Any

NULL = "null"
BOOLEAN = "boolean"
NUMBER = "number"
STRING = "string"
ARRAY = "array"
OBJECT = "object"


def is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def kind_of(v: Any) -> str:
    """Map a Python value onto one of the six JSON kinds."""
    if v is None:
        return NULL
    if isinstance(v, bool):
        return BOOLEAN
    if is_number(v):
        return NUMBER
    if isinstance(v, str):
        return STRING
    if isinstance(v, (list, tuple)):
        return ARRAY
    if isinstance(v, dict):
        return OBJECT
    return type(v).__name__


def values_equal(a: Any, b: Any) -> bool:
    """
    Equality used by enum checks and the ``==``/``!=`` operators.

    Numbers compare across int/float (3 == 3.0); everything else must match
    in kind and value, so True is never 1 and None only equals None.
    Arrays and objects compare element-wise with the same rules.
    """
    ka, kb = kind_of(a), kind_of(b)
    if ka != kb:
        return False
    if ka == ARRAY:
        return len(a) == len(b) and all(values_equal(x, y) for x, y in zip(a, b))
    if ka == OBJECT:
        return a.keys() == b.keys() and all(values_equal(a[k], b[k]) for k in a)
    return a == b


def format_value(v: Any) -> str:
    """Render a value for error messages (integral floats print without '.0')."""
    if v is None:
        return "null"
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, float):
        if math.isfinite(v) and v.is_integer():
            return str(int(v))
        return repr(v)
    if isinstance(v, (list, tuple)):
        return "[" + ", ".join(format_value(x) for x in v) + "]"
    if isinstance(v, dict):
        return "{" + ", ".join(f"{k}: {format_value(x)}" for k, x in v.items()) + "}"
    return str(v)
