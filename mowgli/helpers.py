"""
helpers.py

Framework-agnostic helpers for form-style callers: pick out the errors that
belong to one field and group a result's errors by top-level field.
"""
import re
from typing import Any, Dict, List, Mapping

from .result import ValidationError, ValidationResult
from .spec import Spec
from .validator import validate


def _top_level_field(path: str) -> str:
    return re.split(r"[.\[]", path, maxsplit=1)[0]


def _belongs_to(err: ValidationError, field: str) -> bool:
    return err.path == field or err.path.startswith((f"{field}.", f"{field}["))


def errors_for_field(result: ValidationResult, field: str) -> List[ValidationError]:
    """Errors located at ``field`` or anywhere below it."""
    return [e for e in result.errors if _belongs_to(e, field)]


def validate_field(field: str, value: Any, all_values: Mapping[str, Any], spec: Spec) -> ValidationResult:
    """
    Validate one field in the context of the whole form.

    The form is validated with ``value`` substituted for ``field`` so that
    conditions depending on sibling fields still apply; only the errors for
    that field are kept.
    """
    data = dict(all_values)
    data[field] = value
    full = validate(data, spec)
    return ValidationResult(errors_for_field(full, field))


def group_errors_by_field(result: ValidationResult) -> Dict[str, str]:
    """Map each top-level field to the message of its first error."""
    grouped: Dict[str, str] = {}
    for err in result.errors:
        grouped.setdefault(_top_level_field(err.path), err.message)
    return grouped


def group_all_errors_by_field(result: ValidationResult) -> Dict[str, List[ValidationError]]:
    """Map each top-level field to all of its errors, in reporting order."""
    grouped: Dict[str, List[ValidationError]] = {}
    for err in result.errors:
        grouped.setdefault(_top_level_field(err.path), []).append(err)
    return grouped
