"""
validator.py

Structural validator.

Walks a decoded JSON value against a Spec tree and collects every
violation, each located by a path (``user.emails[2]``). Nothing here raises
for bad data: broken condition expressions and uncompilable patterns are
reported as ordinary errors at the node that owns them.

Per node:
    1. absent type          -> no checks at all
    2. None value           -> ok only for type "null"
    3. type-specific checks (objects resolve their conditions first)
    4. enum, independently of the outcome of 3
"""

import json
import os
import re
import sys
import threading
from collections import OrderedDict
from typing import Any, Optional

from .conditions import resolve_conditions
from .result import ValidationResult
from .spec import Spec
from .values import format_value, is_number, kind_of, values_equal

_DEBUG_ENABLED = os.getenv("MOWGLI_DEBUG", "0") == "1"


def _debug_print(*args):
    """Print to stderr only if MOWGLI_DEBUG=1."""
    if _DEBUG_ENABLED:
        print("[mowgli.validator]", *args, file=sys.stderr)


# ==========================================
# PERFORMANCE: PATTERN CACHING
# ==========================================
# Compiled patterns keyed by pattern text. Purely an optimization: a miss
# recompiles, which is deterministic.
PATTERN_CACHE_MAX_SIZE = 256
_PATTERN_CACHE = OrderedDict()
_PATTERN_CACHE_LOCK = threading.Lock()


def _compile_pattern(pattern: str):
    """Return a compiled regex for ``pattern``; raises re.error if invalid."""
    with _PATTERN_CACHE_LOCK:
        if pattern in _PATTERN_CACHE:
            _PATTERN_CACHE.move_to_end(pattern)
            return _PATTERN_CACHE[pattern]

    compiled = re.compile(pattern)

    with _PATTERN_CACHE_LOCK:
        if len(_PATTERN_CACHE) >= PATTERN_CACHE_MAX_SIZE:
            _PATTERN_CACHE.popitem(last=False)
        _PATTERN_CACHE[pattern] = compiled
    return compiled


def build_path(base: str, name: str) -> str:
    if not base:
        return name
    if not name:
        return base
    return f"{base}.{name}"


def build_array_path(base: str, index: int) -> str:
    return f"{base}[{index}]"


class _Walker:
    """Recursive checker bound to the result of a single validate() call."""

    def __init__(self, result: ValidationResult):
        self.result = result

    def error(self, path: str, message: str) -> None:
        self.result.add_error(path, message)

    def validate(self, path: str, value: Any, spec: Optional[Spec]) -> None:
        if spec is None or spec.type is None:
            return

        if value is None:
            if spec.type != "null":
                self.error(path, f"expected type {spec.type}, got null")
            return

        t = spec.type
        if t == "string":
            self._check_string(path, value, spec)
        elif t == "number":
            self._check_number(path, value, spec, "number")
        elif t == "integer":
            self._check_integer(path, value, spec)
        elif t == "boolean":
            if not isinstance(value, bool):
                self.error(path, f"expected boolean, got {kind_of(value)}")
        elif t == "object":
            self._check_object(path, value, spec)
        elif t == "array":
            self._check_array(path, value, spec)
        elif t == "null":
            self.error(path, "expected null, got non-null value")
        else:
            self.error(path, f"unknown type: {t}")

        if spec.enum:
            self._check_enum(path, value, spec.enum)

    # --- Scalars ---

    def _check_string(self, path, value, spec):
        if not isinstance(value, str):
            self.error(path, f"expected string, got {kind_of(value)}")
            return

        if spec.allow_empty and value == "":
            return

        n = len(value)
        if spec.min_length is not None and n < spec.min_length:
            self.error(path, f"string length {n} is less than minimum {spec.min_length}")
        if spec.max_length is not None and n > spec.max_length:
            self.error(path, f"string length {n} is greater than maximum {spec.max_length}")

        if spec.pattern is not None:
            try:
                regex = _compile_pattern(spec.pattern)
            except re.error as e:
                _debug_print(f"invalid pattern {spec.pattern!r} at {path!r}: {e}")
                self.error(path, f"invalid pattern: {e}")
            else:
                if regex.search(value) is None:
                    self.error(path, f"string does not match pattern: {spec.pattern}")

    def _check_range(self, path, num, spec, label):
        if spec.min is not None and num < spec.min:
            self.error(
                path,
                f"{label} {format_value(num)} is less than minimum {format_value(spec.min)}",
            )
        if spec.max is not None and num > spec.max:
            self.error(
                path,
                f"{label} {format_value(num)} is greater than maximum {format_value(spec.max)}",
            )

    def _check_number(self, path, value, spec, label):
        if not is_number(value):
            self.error(path, f"expected {label}, got {kind_of(value)}")
            return
        self._check_range(path, value, spec, label)

    def _check_integer(self, path, value, spec):
        if not is_number(value):
            self.error(path, f"expected integer, got {kind_of(value)}")
            return
        if isinstance(value, float) and not value.is_integer():
            self.error(path, f"expected integer, got float: {format_value(value)}")
            return
        self._check_range(path, value, spec, "integer")

    # --- Containers ---

    def _check_object(self, path, value, spec):
        if not isinstance(value, dict):
            self.error(path, f"expected object, got {kind_of(value)}")
            return

        effective = resolve_conditions(value, spec, self.error)

        # Required names come from the base spec only; conditions never add
        # or remove them.
        for name in spec.required or ():
            if name not in value:
                self.error(build_path(path, name), "required field is missing")

        for name, declared in (spec.properties or {}).items():
            if name not in value:
                continue
            self.validate(build_path(path, name), value[name], effective.get(name, declared))

    def _check_array(self, path, value, spec):
        if not isinstance(value, (list, tuple)):
            self.error(path, f"expected array, got {kind_of(value)}")
            return

        n = len(value)
        if spec.min_length is not None and n < spec.min_length:
            self.error(path, f"array length {n} is less than minimum {spec.min_length}")
        if spec.max_length is not None and n > spec.max_length:
            self.error(path, f"array length {n} is greater than maximum {spec.max_length}")

        if spec.items is not None:
            for i, item in enumerate(value):
                self.validate(build_array_path(path, i), item, spec.items)

    def _check_enum(self, path, value, allowed):
        for candidate in allowed:
            if values_equal(value, candidate):
                return
        listed = ", ".join(format_value(a) for a in allowed)
        self.error(path, f"value not in enum: {format_value(value)} (allowed: {listed})")


# ==========================================
# PUBLIC ENTRYPOINTS
# ==========================================

def validate(value: Any, spec: Optional[Spec]) -> ValidationResult:
    """
    Validate a decoded JSON value against a spec.

    Always returns a result; every violation in the tree is reported in
    one pass.
    """
    result = ValidationResult()
    if spec is None:
        result.add_error("", "spec is nil")
        return result
    try:
        _Walker(result).validate("", value, spec)
    except RecursionError:
        _debug_print("validation aborted: value nested too deeply")
        result.add_error("", "value nested too deeply")
    return result


def validate_json(text, spec: Optional[Spec]) -> ValidationResult:
    """
    Parse a JSON document (str or bytes) and validate it.

    A document that does not parse yields a single root-level error whose
    message starts with ``invalid JSON:``.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError, RecursionError) as e:
        result = ValidationResult()
        result.add_error("", f"invalid JSON: {e}")
        return result
    return validate(data, spec)
