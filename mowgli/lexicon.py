"""
Mowgli Expression Lexicon (Single Source of Truth)

Lexical rules for the condition expression language. Both the tokenizer
and the parser grammar import their terminals from this module so a token
boundary can never differ between the two.

Terminals:
    LPAREN / RPAREN   ( )
    AND / OR          case-insensitive keywords, only at word boundaries
    OPERATOR          != == >= <= > <   (longest first)
    LITERAL           quoted ("..." or '...', quote escaped by doubling)
                      or bare (runs until whitespace, paren or operator)
"""

import re

from arpeggio import RegExMatch as _

# Whitespace is a separator only. The same set is handed to the arpeggio
# parser as its skip set.
WHITESPACE = " \t\r\n\f\v"
_WS = r" \t\r\n\f\v"

# Word boundary for AND/OR: start/end of input, whitespace or a parenthesis.
_BOUNDARY_BEFORE = rf"(?<![^{_WS}()])"
_BOUNDARY_AFTER = rf"(?![^{_WS}()])"

AND_PATTERN = _BOUNDARY_BEFORE + r"(?i:and)" + _BOUNDARY_AFTER
OR_PATTERN = _BOUNDARY_BEFORE + r"(?i:or)" + _BOUNDARY_AFTER
_KEYWORD_PATTERN = _BOUNDARY_BEFORE + r"(?i:and|or)" + _BOUNDARY_AFTER

# Sorted longest first so '==' never splits into '=' '='.
OPERATORS = ("!=", "==", ">=", "<=", ">", "<")
OPERATOR_PATTERN = "|".join(re.escape(op) for op in OPERATORS)

# (?!") after the closing quote stops a doubled quote from being read as
# close-then-reopen.
QUOTED_PATTERN = r'"(?:[^"]|"")*"(?!")' + "|" + r"'(?:[^']|'')*'(?!')"

BARE_PATTERN = (
    rf"(?!{_KEYWORD_PATTERN})(?![\"'])"
    rf"(?:(?!{OPERATOR_PATTERN})[^{_WS}()])+"
)

# Numeric-looking literal text: 123, -4, 0.5, 1e3
NUMBER_RE = re.compile(r"[+-]?\d+(\.\d+)?([eE][+-]?\d+)?")

QUOTES = ("\"", "'")
NULL_WORDS = ("null", "nil")
BOOL_WORDS = {"true": True, "false": False}


# ==========================================
# Shared arpeggio terminals
# ==========================================

def lparen():
    return _(r"\(")


def rparen():
    return _(r"\)")


def and_kw():
    return _(AND_PATTERN)


def or_kw():
    return _(OR_PATTERN)


def operator():
    return _(OPERATOR_PATTERN)


def quoted():
    return _(QUOTED_PATTERN)


def bare():
    return _(BARE_PATTERN)


def literal():
    return [quoted, bare]


def unquote(text: str) -> str:
    """Strip the surrounding quotes and collapse doubled quote escapes."""
    q = text[0]
    return text[1:-1].replace(q + q, q)
