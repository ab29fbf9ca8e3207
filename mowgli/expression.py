"""
expression.py

Condition expression grammar and evaluator.

Grammar (lowest to highest precedence):

    expression  -> conjunction (OR conjunction)*
    conjunction -> comparison (AND comparison)*
    comparison  -> '(' expression ')' | literal [operator literal]

AND binds tighter than OR and parentheses override both. Evaluation is a
single bottom-up pass over the parse tree, so both operands of AND/OR are
always evaluated (there are no side effects to skip, and an error in either
operand always surfaces).

Semantics:
    - A bare literal is ``true``/``false`` or a field lookup: a boolean
      field yields its value, any other present field yields ``value is not
      None``, an absent field yields False.
    - In ``left OP right`` the left side is always a field name. An absent
      field only satisfies ``== null`` / ``== nil``.
    - The right side is parsed as null/nil, true/false, a quoted string, a
      number, or else kept as raw text.
    - ``==``/``!=`` use coercing equality (3 == 3.0); ordering operators need
      two numbers.
"""

import os
import sys
import threading
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from arpeggio import EOF, NoMatch, Optional, ParserPython, PTNodeVisitor, Terminal, ZeroOrMore, visit_parse_tree

from .errors import ExpressionEvaluationError, ExpressionSyntaxError
from .lexicon import (
    BOOL_WORDS,
    NULL_WORDS,
    NUMBER_RE,
    QUOTES,
    WHITESPACE,
    and_kw,
    literal,
    lparen,
    operator,
    or_kw,
    rparen,
    unquote,
)
from .tokenize import LITERAL, LPAREN, OPERATOR, RPAREN, Token, tokenize
from .values import is_number, values_equal

_DEBUG_ENABLED = os.getenv("MOWGLI_DEBUG", "0") == "1"


def _debug_print(*args):
    """Print to stderr only if MOWGLI_DEBUG=1."""
    if _DEBUG_ENABLED:
        print("[mowgli.expression]", *args, file=sys.stderr)


# ==========================================
# GRAMMAR (arpeggio, PEG)
# ==========================================

def group():
    return lparen, expression, rparen


def comparison_tail():
    return operator, literal


def predicate():
    return literal, Optional(comparison_tail)


def comparison():
    return [group, predicate]


def conjunction():
    return comparison, ZeroOrMore(and_kw, comparison)


def expression():
    return conjunction, ZeroOrMore(or_kw, conjunction)


def condition():
    return expression, EOF


# ==========================================
# OPERANDS
# ==========================================

@dataclass(frozen=True)
class _Literal:
    text: str

    @property
    def quoted(self) -> bool:
        return self.text[:1] in QUOTES

    @property
    def name(self) -> str:
        """Field name when used as a lookup."""
        return unquote(self.text) if self.quoted else self.text

    def value(self) -> Any:
        """Constant value when used as a right-hand operand."""
        if self.quoted:
            return unquote(self.text)
        t = self.text
        if t in NULL_WORDS:
            return None
        if t in BOOL_WORDS:
            return BOOL_WORDS[t]
        if NUMBER_RE.fullmatch(t):
            if "." in t or "e" in t or "E" in t:
                return float(t)
            return int(t)
        return t


def _flatten(items):
    for item in items:
        if isinstance(item, list):
            yield from _flatten(item)
        else:
            yield item


def _truths(children):
    return [c for c in _flatten(children) if isinstance(c, bool)]


def _compare(op: str, left: Any, right: Any) -> bool:
    if op == "==":
        return values_equal(left, right)
    if op == "!=":
        return not values_equal(left, right)
    if not (is_number(left) and is_number(right)):
        raise ExpressionEvaluationError("cannot compare non-numeric values")
    if op == ">":
        return left > right
    if op == "<":
        return left < right
    if op == ">=":
        return left >= right
    if op == "<=":
        return left <= right
    raise ExpressionEvaluationError(f"unknown operator: {op}")


# ==========================================
# SEMANTIC EVALUATOR
# ==========================================

class ExpressionEvaluator(PTNodeVisitor):
    """Evaluates a parsed condition against one object's field values."""

    def __init__(self, context: Mapping[str, Any], debug=False):
        super().__init__(debug=debug)
        self.ctx = context if context is not None else {}

    def visit__default__(self, node, children):
        if isinstance(node, Terminal):
            return super().visit__default__(node, children)
        return list(_flatten(children))

    # --- Punctuation carries no value ---

    def visit_lparen(self, node, children):
        return None

    def visit_rparen(self, node, children):
        return None

    def visit_and_kw(self, node, children):
        return None

    def visit_or_kw(self, node, children):
        return None

    # --- Operands ---

    def visit_operator(self, node, children):
        return node.value

    def visit_quoted(self, node, children):
        return _Literal(node.value)

    def visit_bare(self, node, children):
        return _Literal(node.value)

    def visit_literal(self, node, children):
        return next(c for c in _flatten(children) if isinstance(c, _Literal))

    def visit_comparison_tail(self, node, children):
        items = list(_flatten(children))
        op = next(c for c in items if isinstance(c, str))
        right = next(c for c in items if isinstance(c, _Literal))
        return (op, right)

    def visit_predicate(self, node, children):
        items = list(_flatten(children))
        left = items[0]
        tails = [c for c in items[1:] if isinstance(c, tuple)]
        if not tails:
            return self._truth(left)
        op, right = tails[0]
        return self._compare(left, op, right)

    # --- Boolean structure ---

    def visit_group(self, node, children):
        return _truths(children)[0]

    def visit_comparison(self, node, children):
        return _truths(children)[0]

    def visit_conjunction(self, node, children):
        return all(_truths(children))

    def visit_expression(self, node, children):
        return any(_truths(children))

    def visit_condition(self, node, children):
        return _truths(children)[0]

    # -------------------------
    # Context helpers
    # -------------------------

    def _truth(self, lit: _Literal) -> bool:
        if not lit.quoted and lit.text in BOOL_WORDS:
            return BOOL_WORDS[lit.text]
        name = lit.name
        if name not in self.ctx:
            return False
        val = self.ctx[name]
        if isinstance(val, bool):
            return val
        return val is not None

    def _compare(self, left: _Literal, op: str, right: _Literal) -> bool:
        name = left.name
        if name not in self.ctx:
            return op == "==" and right.text in NULL_WORDS
        return _compare(op, self.ctx[name], right.value())


# ==========================================
# STRUCTURE CHECKS (token level)
# ==========================================

def _check_structure(tokens: Sequence[Token]) -> None:
    depth = 0
    for tok in tokens:
        if tok.kind == LPAREN:
            depth += 1
        elif tok.kind == RPAREN:
            depth -= 1
            if depth < 0:
                raise ExpressionSyntaxError(
                    f"unbalanced parentheses: unexpected ')' at position {tok.position}"
                )
    if depth > 0:
        raise ExpressionSyntaxError("unbalanced parentheses: missing ')'")

    for i, tok in enumerate(tokens):
        if tok.kind != OPERATOR:
            continue
        nxt = tokens[i + 1] if i + 1 < len(tokens) else None
        if nxt is None or nxt.kind != LITERAL:
            raise ExpressionSyntaxError(
                f"operator '{tok.text}' at position {tok.position} is missing its right operand"
            )


NESTED_TOO_DEEPLY = "expression nested too deeply"

_PARSER = None
_PARSER_LOCK = threading.Lock()


def _parse(source: str, tokens: Sequence[Token]):
    global _PARSER
    with _PARSER_LOCK:
        if _PARSER is None:
            _PARSER = ParserPython(condition, ws=WHITESPACE)
        try:
            return _PARSER.parse(source)
        except NoMatch as e:
            pos = e.position
            rest = [t for t in tokens if t.position >= pos]
            if rest:
                msg = f"unexpected token '{rest[0].text}' at position {rest[0].position}"
            else:
                msg = "unexpected end of expression"
            _debug_print(f"parse failed for {source!r}: {msg}")
            raise ExpressionSyntaxError(msg) from e
        except RecursionError as e:
            _debug_print(f"parse failed for {source!r}: nested too deeply")
            raise ExpressionSyntaxError(NESTED_TOO_DEEPLY) from e


def evaluate(source: str, context: Mapping[str, Any]) -> bool:
    """
    Evaluate a condition expression against an object's field values.

    Args:
        source: The expression text, e.g. ``enabled == true AND count > 0``.
        context: Field name -> value mapping (the object being validated).

    Returns:
        The boolean outcome.

    Raises:
        ExpressionSyntaxError: empty input, unbalanced parentheses, an
            operator without a right operand, trailing tokens, or nesting
            deeper than the parser can recurse.
        ExpressionEvaluationError: an ordering comparison on non-numbers.
    """
    tokens = tokenize(source)
    _check_structure(tokens)
    tree = _parse(source, tokens)
    try:
        return visit_parse_tree(tree, ExpressionEvaluator(context))
    except RecursionError as e:
        raise ExpressionSyntaxError(NESTED_TOO_DEEPLY) from e
