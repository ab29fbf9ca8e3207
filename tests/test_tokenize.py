import unittest

from mowgli.errors import ExpressionSyntaxError
from mowgli.tokenize import AND, LITERAL, LPAREN, OPERATOR, OR, RPAREN, Token, tokenize


def kinds(tokens):
    return [t.kind for t in tokens]


def texts(tokens):
    return [t.text for t in tokens]


class TestTokenizer(unittest.TestCase):

    def test_simple_comparison(self):
        tokens = tokenize('enabled == true')
        self.assertEqual(kinds(tokens), [LITERAL, OPERATOR, LITERAL])
        self.assertEqual(texts(tokens), ["enabled", "==", "true"])
        self.assertEqual([t.position for t in tokens], [0, 8, 11])

    def test_longest_operator_wins(self):
        for op in ("==", "!=", ">=", "<=", ">", "<"):
            with self.subTest(op=op):
                tokens = tokenize(f"count{op}5")
                self.assertEqual(texts(tokens), ["count", op, "5"])
                self.assertEqual(kinds(tokens), [LITERAL, OPERATOR, LITERAL])

    def test_keywords_are_case_insensitive(self):
        tokens = tokenize("a and b Or c AND d")
        self.assertEqual(kinds(tokens), [LITERAL, AND, LITERAL, OR, LITERAL, AND, LITERAL])

    def test_keywords_need_word_boundaries(self):
        tokens = tokenize("android OR ORDER")
        self.assertEqual(kinds(tokens), [LITERAL, OR, LITERAL])
        self.assertEqual(texts(tokens), ["android", "OR", "ORDER"])

        tokens = tokenize("fooAND bar")
        self.assertEqual(texts(tokens), ["fooAND", "bar"])

    def test_keyword_glued_to_operand_is_part_of_literal(self):
        tokens = tokenize("x>=1AND y")
        self.assertEqual(texts(tokens), ["x", ">=", "1AND", "y"])
        self.assertEqual(kinds(tokens), [LITERAL, OPERATOR, LITERAL, LITERAL])

        tokens = tokenize("x>=1 AND y")
        self.assertEqual(kinds(tokens), [LITERAL, OPERATOR, LITERAL, AND, LITERAL])

    def test_keyword_next_to_parentheses(self):
        tokens = tokenize("(a)AND(b)")
        self.assertEqual(kinds(tokens), [LPAREN, LITERAL, RPAREN, AND, LPAREN, LITERAL, RPAREN])

    def test_quoted_literals(self):
        tokens = tokenize('status == "needs review"')
        self.assertEqual(texts(tokens), ["status", "==", '"needs review"'])
        self.assertTrue(tokens[2].quoted)
        self.assertFalse(tokens[0].quoted)

    def test_doubled_quote_escape(self):
        tokens = tokenize("name == 'it''s' OR title == \"say \"\"hi\"\"\"")
        self.assertEqual(texts(tokens), ["name", "==", "'it''s'", "OR", "title", "==", '"say ""hi"""'])

    def test_quoted_literal_keeps_keywords_and_parens(self):
        tokens = tokenize('x == "a AND (b)"')
        self.assertEqual(kinds(tokens), [LITERAL, OPERATOR, LITERAL])

    def test_whitespace_is_insignificant(self):
        self.assertEqual(texts(tokenize("  a\t==\n1  ")), ["a", "==", "1"])

    def test_unterminated_quote(self):
        with self.assertRaises(ExpressionSyntaxError) as cm:
            tokenize('status == "open')
        self.assertIn("unterminated", str(cm.exception))

    def test_empty_input(self):
        for source in ("", "   ", "\t\n"):
            with self.subTest(source=source):
                with self.assertRaises(ExpressionSyntaxError):
                    tokenize(source)

    def test_tokens_are_values(self):
        self.assertEqual(tokenize("a")[0], Token(LITERAL, "a", 0))


if __name__ == "__main__":
    unittest.main()
