import unittest

from regulus.lang.error import GenericException
from regulus.pure.atom import INT_MAX, INT_MIN
from regulus.pure.lexical import Token, TokenType, classify, tokenize, validate_tokens
from regulus.pure.positions import Position, Span


def span(start, end):
    return Span(Position(*start), Position(*end))


class TokenizeTestCase(unittest.TestCase):

    def test_tokenize(self):
        should_fail = ['"abc', '"', 'print("a)', "99999999999999999999", "f(-9223372036854775809)"]
        for case in should_fail:
            self.assertRaises(GenericException, tokenize, case)

        cases = {
            "": [],
            "  \t\r\n": [],
            "+(3, 4)": [
                Token(TokenType.NAME, span((1, 1), (1, 1)), "+"),
                Token(TokenType.LEFT_PAREN, span((1, 2), (1, 2))),
                Token(TokenType.ATOM, span((1, 3), (1, 3)), 3),
                Token(TokenType.COMMA, span((1, 4), (1, 4))),
                Token(TokenType.ATOM, span((1, 6), (1, 6)), 4),
                Token(TokenType.RIGHT_PAREN, span((1, 7), (1, 7))),
            ],
            '"a b"': [Token(TokenType.ATOM, span((1, 1), (1, 5)), "a b")],
            '""': [Token(TokenType.ATOM, span((1, 1), (1, 2)), "")],
            '"#(,)"': [Token(TokenType.ATOM, span((1, 1), (1, 6)), "#(,)")],
            "# hi\nx": [
                Token(TokenType.COMMENT, span((1, 1), (1, 5)), " hi"),
                Token(TokenType.NAME, span((2, 1), (2, 1)), "x"),
            ],
            "x#c": [
                Token(TokenType.NAME, span((1, 1), (1, 1)), "x"),
                Token(TokenType.COMMENT, span((1, 2), (1, 3)), "c"),
            ],
            "true false null": [
                Token(TokenType.ATOM, span((1, 1), (1, 4)), True),
                Token(TokenType.ATOM, span((1, 6), (1, 10)), False),
                Token(TokenType.ATOM, span((1, 12), (1, 15)), None),
            ],
            "->(o,\n  name)": [
                Token(TokenType.NAME, span((1, 1), (1, 2)), "->"),
                Token(TokenType.LEFT_PAREN, span((1, 3), (1, 3))),
                Token(TokenType.NAME, span((1, 4), (1, 4)), "o"),
                Token(TokenType.COMMA, span((1, 5), (1, 5))),
                Token(TokenType.NAME, span((2, 3), (2, 6)), "name"),
                Token(TokenType.RIGHT_PAREN, span((2, 7), (2, 7))),
            ],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, tokenize(case), case)

    def test_classify(self):
        where = span((1, 1), (1, 1))
        cases = {
            "0": 0,
            "-5": -5,
            "+5": 5,
            "007": 7,
            str(INT_MAX): INT_MAX,
            str(INT_MIN): INT_MIN,
            "true": True,
            "false": False,
            "null": None,
        }
        for case, expected in cases.items():
            token = classify(case, where)
            self.assertIs(TokenType.ATOM, token.kind, case)
            self.assertEqual(Token(TokenType.ATOM, where, expected), token, case)

        names = ["a-1", "12abc", "-", "+", "==", "True", "[x]", "$x", "1.5"]
        for case in names:
            self.assertEqual(Token(TokenType.NAME, where, case), classify(case, where), case)

        should_fail = [str(INT_MAX + 1), str(INT_MIN - 1), "100000000000000000000000"]
        for case in should_fail:
            self.assertRaises(GenericException, classify, case, where)

    def test_token_equality(self):
        where = span((1, 1), (1, 1))
        self.assertNotEqual(Token(TokenType.ATOM, where, 1), Token(TokenType.ATOM, where, True))
        self.assertNotEqual(Token(TokenType.ATOM, where, 0), Token(TokenType.ATOM, where, False))
        self.assertNotEqual(Token(TokenType.ATOM, where, "x"), Token(TokenType.NAME, where, "x"))


class ValidateTokensTestCase(unittest.TestCase):

    def test_validate_tokens(self):
        should_fail = [")(", "(()", "())(", "f(", ")", "f(g(x)"]
        for case in should_fail:
            with self.assertRaises(GenericException, msg=case) as context:
                validate_tokens(tokenize(case))
            self.assertEqual("Syntax", context.exception.kind, case)

        should_pass = ["", "f()", "f(g(), h(1, 2))", "x", "# ((("]
        for case in should_pass:
            self.assertIsNone(validate_tokens(tokenize(case)), case)
