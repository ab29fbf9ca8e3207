"""
errors.py

Exception hierarchy for mowgli.

Validation failures are never raised: they are collected as
ValidationError entries on a ValidationResult. The exceptions below cover
definition problems (a malformed spec document, a broken expression) and
are downgraded into ValidationError entries wherever the validator calls
into code that raises them.
"""


class MowgliError(Exception):
    """Base class for all mowgli errors."""


class SpecError(MowgliError):
    """Raised when a spec document is malformed."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}" if path else message)


class TestDataError(MowgliError):
    """Raised when a shared test-data file cannot be read or parsed."""

    __test__ = False  # keep pytest from collecting this as a test class


class ExpressionError(MowgliError):
    """Base class for condition expression errors."""


class ExpressionSyntaxError(ExpressionError):
    """
    Raised when an expression cannot be tokenized or parsed.

    Covers empty input, unterminated quotes, unbalanced parentheses,
    operators without a right operand and trailing tokens.
    """


class ExpressionEvaluationError(ExpressionError):
    """Raised when a well-formed expression cannot be evaluated."""
