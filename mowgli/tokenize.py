"""
mowgli/tokenize.py

Tokenizer for condition expressions.

Token boundaries come from the shared terminals in mowgli.lexicon; the
scan itself is an arpeggio grammar that repeats "any terminal" until EOF.
"""

import os
import sys
import threading
from dataclasses import dataclass
from typing import List

from arpeggio import EOF, NoMatch, ParserPython, PTNodeVisitor, Terminal, ZeroOrMore, visit_parse_tree

from .errors import ExpressionSyntaxError
from .lexicon import QUOTES, WHITESPACE, and_kw, bare, lparen, operator, or_kw, quoted, rparen

_DEBUG_ENABLED = os.getenv("MOWGLI_DEBUG", "0") == "1"

LITERAL = "LITERAL"
OPERATOR = "OPERATOR"
AND = "AND"
OR = "OR"
LPAREN = "LPAREN"
RPAREN = "RPAREN"


def _debug_print(*args):
    """Print to stderr only if MOWGLI_DEBUG=1."""
    if _DEBUG_ENABLED:
        print("[mowgli.tokenize]", *args, file=sys.stderr)


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    position: int

    @property
    def quoted(self) -> bool:
        return self.kind == LITERAL and self.text[:1] in QUOTES


def token_stream():
    # AND/OR before literal so a keyword at a word boundary is never a name.
    return ZeroOrMore([lparen, rparen, and_kw, or_kw, operator, quoted, bare]), EOF


def _flatten(items):
    for item in items:
        if isinstance(item, list):
            yield from _flatten(item)
        else:
            yield item


class _TokenCollector(PTNodeVisitor):

    def visit__default__(self, node, children):
        if isinstance(node, Terminal):
            return super().visit__default__(node, children)
        return list(_flatten(children))

    def visit_lparen(self, node, children):
        return Token(LPAREN, node.value, node.position)

    def visit_rparen(self, node, children):
        return Token(RPAREN, node.value, node.position)

    def visit_and_kw(self, node, children):
        return Token(AND, node.value, node.position)

    def visit_or_kw(self, node, children):
        return Token(OR, node.value, node.position)

    def visit_operator(self, node, children):
        return Token(OPERATOR, node.value, node.position)

    def visit_quoted(self, node, children):
        return Token(LITERAL, node.value, node.position)

    def visit_bare(self, node, children):
        return Token(LITERAL, node.value, node.position)

    def visit_token_stream(self, node, children):
        return [c for c in _flatten(children) if isinstance(c, Token)]


# Parser objects keep per-parse state; one instance is shared and every
# parse is serialized.
_PARSER = None
_PARSER_LOCK = threading.Lock()


def tokenize(source: str) -> List[Token]:
    """
    Split an expression into tokens.

    Raises:
        ExpressionSyntaxError: on empty input or an unterminated quote.
    """
    global _PARSER
    if source is None or not source.strip(WHITESPACE):
        raise ExpressionSyntaxError("empty expression")

    with _PARSER_LOCK:
        if _PARSER is None:
            _PARSER = ParserPython(token_stream, ws=WHITESPACE)
        try:
            tree = _PARSER.parse(source)
        except NoMatch as e:
            pos = e.position
            if pos < len(source) and source[pos] in QUOTES:
                msg = f"unterminated quoted literal at position {pos}"
            else:
                msg = f"unexpected character {source[pos:pos + 1]!r} at position {pos}"
            _debug_print(f"tokenize failed for {source!r}: {msg}")
            raise ExpressionSyntaxError(msg) from e
        except RecursionError as e:
            raise ExpressionSyntaxError("expression nested too deeply") from e

    tokens = visit_parse_tree(tree, _TokenCollector())
    if not tokens:
        raise ExpressionSyntaxError("empty expression")
    return tokens
