"""
Mowgli - Declarative JSON validation with conditional rules.

Public API:
- validate / validate_json: Check a value against a Spec
- Spec / Condition: Schema model; parse_spec / parse_spec_string read the JSON wire format
- merge_specs: Right-biased spec merge used by conditions
- has_expressions: Whether a spec needs condition evaluation
- tokenize / evaluate: The condition expression language
"""

from .errors import (
    ExpressionError,
    ExpressionEvaluationError,
    ExpressionSyntaxError,
    MowgliError,
    SpecError,
    TestDataError,
)
from .expression import evaluate
from .merge import merge_specs
from .result import ValidationError, ValidationResult
from .spec import Condition, Spec, has_expressions, parse_spec, parse_spec_string
from .tokenize import Token, tokenize
from .validator import validate, validate_json

# Derive version from package metadata
try:
    from importlib.metadata import version
    __version__ = version("mowgli")
except Exception:
    __version__ = "1.0.0"

__all__ = [
    "Condition",
    "ExpressionError",
    "ExpressionEvaluationError",
    "ExpressionSyntaxError",
    "MowgliError",
    "Spec",
    "SpecError",
    "TestDataError",
    "Token",
    "ValidationError",
    "ValidationResult",
    "evaluate",
    "has_expressions",
    "merge_specs",
    "parse_spec",
    "parse_spec_string",
    "tokenize",
    "validate",
    "validate_json",
]
