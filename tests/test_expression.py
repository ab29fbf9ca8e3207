import unittest

import pytest

from mowgli.errors import ExpressionEvaluationError, ExpressionSyntaxError
from mowgli.expression import evaluate


class TestLogicalOperators(unittest.TestCase):

    def test_and(self):
        cases = [
            ({"enabled": True, "active": True}, True),
            ({"enabled": False, "active": True}, False),
            ({"enabled": True, "active": False}, False),
            ({"enabled": False, "active": False}, False),
        ]
        for ctx, expected in cases:
            with self.subTest(ctx=ctx):
                self.assertIs(evaluate("enabled AND active", ctx), expected)

    def test_or(self):
        cases = [
            ({"enabled": True, "active": True}, True),
            ({"enabled": True, "active": False}, True),
            ({"enabled": False, "active": True}, True),
            ({"enabled": False, "active": False}, False),
        ]
        for ctx, expected in cases:
            with self.subTest(ctx=ctx):
                self.assertIs(evaluate("enabled OR active", ctx), expected)

    def test_comparisons_joined(self):
        self.assertTrue(evaluate('count > 0 AND status == "active"', {"count": 5, "status": "active"}))
        self.assertFalse(evaluate('count > 0 AND status == "active"', {"count": 0, "status": "active"}))
        self.assertTrue(evaluate('count > 10 OR status == "active"', {"count": 5, "status": "active"}))

    def test_and_binds_tighter_than_or(self):
        ctx = {"a": True, "b": False, "c": False}
        # a OR (b AND c) -> True; left-to-right would give False.
        self.assertTrue(evaluate("a OR b AND c", ctx))
        self.assertTrue(evaluate("b AND c OR a", ctx))

    def test_parentheses_override_precedence(self):
        ctx = {"a": True, "b": False, "c": False}
        self.assertFalse(evaluate("(a OR b) AND c", ctx))
        self.assertTrue(evaluate("(a OR b) AND c", {"a": True, "b": False, "c": True}))
        self.assertTrue(evaluate("((a AND b) OR c)", {"a": False, "b": True, "c": True}))

    def test_keywords_any_case(self):
        self.assertTrue(evaluate("a and b", {"a": True, "b": True}))
        self.assertTrue(evaluate("a Or b", {"a": False, "b": True}))

    def test_identifier_containing_keyword(self):
        ctx = {"android": True, "ORDER": False}
        self.assertTrue(evaluate("android", ctx))
        self.assertFalse(evaluate("android AND ORDER", ctx))

    def test_no_whitespace_around_parentheses(self):
        self.assertTrue(evaluate("(a)AND(b)", {"a": True, "b": True}))

    def test_both_operands_always_evaluated(self):
        # The left operand is already False; the right one still raises.
        with self.assertRaises(ExpressionEvaluationError):
            evaluate("flag AND name > 1", {"flag": False, "name": "x"})


class TestBareLiterals(unittest.TestCase):

    def test_boolean_words(self):
        self.assertTrue(evaluate("true", {}))
        self.assertFalse(evaluate("false", {}))
        self.assertFalse(evaluate("false OR false", {}))

    def test_field_lookup(self):
        self.assertTrue(evaluate("flag", {"flag": True}))
        self.assertFalse(evaluate("flag", {"flag": False}))

    def test_non_boolean_field_is_existence_check(self):
        self.assertTrue(evaluate("name", {"name": "bob"}))
        self.assertTrue(evaluate("count", {"count": 0}))
        self.assertTrue(evaluate("items", {"items": []}))
        self.assertFalse(evaluate("name", {"name": None}))

    def test_absent_field_is_false(self):
        self.assertFalse(evaluate("missing", {}))


class TestComparisons(unittest.TestCase):

    def test_absent_field(self):
        self.assertTrue(evaluate("x == null", {}))
        self.assertTrue(evaluate("x == nil", {}))
        self.assertFalse(evaluate("x != null", {}))
        self.assertFalse(evaluate("x == 1", {}))
        self.assertFalse(evaluate("x > 5", {}))

    def test_present_null(self):
        ctx = {"x": None}
        self.assertTrue(evaluate("x == null", ctx))
        self.assertFalse(evaluate("x != null", ctx))
        self.assertTrue(evaluate("x != 0", ctx))

    def test_numbers_compare_across_int_and_float(self):
        self.assertTrue(evaluate("n == 3.0", {"n": 3}))
        self.assertTrue(evaluate("n == 3", {"n": 3.0}))
        self.assertTrue(evaluate("n >= 3", {"n": 3.5}))
        self.assertTrue(evaluate("n <= 3.5", {"n": 3.5}))
        self.assertFalse(evaluate("n < -1", {"n": 0}))
        self.assertTrue(evaluate("n > 1e2", {"n": 101}))

    def test_booleans(self):
        self.assertTrue(evaluate("flag == true", {"flag": True}))
        self.assertTrue(evaluate("flag != false", {"flag": True}))
        self.assertFalse(evaluate("flag == 1", {"flag": True}))

    def test_strings(self):
        ctx = {"status": "active"}
        self.assertTrue(evaluate('status == "active"', ctx))
        self.assertTrue(evaluate("status == 'active'", ctx))
        self.assertTrue(evaluate("status == active", ctx))
        self.assertFalse(evaluate('status == "inactive"', ctx))

    def test_quoted_null_is_a_string(self):
        self.assertFalse(evaluate('x == "null"', {"x": None}))
        self.assertTrue(evaluate('x == "null"', {"x": "null"}))

    def test_doubled_quotes_unescape(self):
        self.assertTrue(evaluate('q == "say ""hi"""', {"q": 'say "hi"'}))
        self.assertTrue(evaluate("q == 'it''s'", {"q": "it's"}))

    def test_numeric_string_is_not_a_number(self):
        self.assertFalse(evaluate("code == 5", {"code": "5"}))
        self.assertTrue(evaluate('code == "5"', {"code": "5"}))

    def test_ordering_needs_numbers(self):
        with self.assertRaises(ExpressionEvaluationError) as cm:
            evaluate("s > 1", {"s": "abc"})
        self.assertIn("cannot compare non-numeric values", str(cm.exception))
        with self.assertRaises(ExpressionEvaluationError):
            evaluate("n > abc", {"n": 5})
        with self.assertRaises(ExpressionEvaluationError):
            evaluate("flag > 0", {"flag": True})


@pytest.mark.parametrize("source", [
    "",
    "   ",
    "a AND",
    "OR a",
    "(a AND b",
    "a AND b)",
    ")a(",
    "x ==",
    "x == == y",
    "== x",
    "a b",
    "a == 1 == 2",
    "()",
])
def test_syntax_errors(source):
    with pytest.raises(ExpressionSyntaxError):
        evaluate(source, {"a": True, "b": True, "x": 1})


def test_unbalanced_parentheses_message():
    with pytest.raises(ExpressionSyntaxError, match="unbalanced parentheses"):
        evaluate("(a AND b", {})
    with pytest.raises(ExpressionSyntaxError, match="unbalanced parentheses"):
        evaluate("a)", {})


def test_missing_right_operand_message():
    with pytest.raises(ExpressionSyntaxError, match="missing its right operand"):
        evaluate("count >", {"count": 1})


def test_trailing_token_message():
    with pytest.raises(ExpressionSyntaxError, match="unexpected"):
        evaluate("a b", {"a": True})


def test_grouped_expression_scenario():
    assert evaluate("(a OR b) AND c", {"a": True, "b": False, "c": True}) is True


def test_keyword_glued_to_operand_leaves_trailing_token():
    with pytest.raises(ExpressionSyntaxError, match="unexpected token 'y'"):
        evaluate("x>=1AND y", {"x": 2, "y": True})
    assert evaluate("x>=1 AND y", {"x": 2, "y": True}) is True


def test_deep_nesting_is_a_syntax_error():
    deep = "(" * 2000 + "a" + ")" * 2000
    with pytest.raises(ExpressionSyntaxError, match="nested too deeply"):
        evaluate(deep, {"a": True})
    # The shared parser is still usable afterwards.
    assert evaluate("((a))", {"a": True}) is True
