"""Lexical analysis for the regulus language: source text to a flat list of tokens.

All tokens can be loosely defined as follows:

```
<left_paren>  ::= "("
<right_paren> ::= ")"
<comma>       ::= ","
<comment>     ::= "#" <char>*                 ; runs until end of line (or end of file)
<atom>        ::= <int> | "true" | "false" | "null" | '"' <char>* '"'
<int>         ::= ["+" | "-"] <digit>+        ; must fit into a signed 64-bit integer
<name>        ::= <char>+                     ; anything else that is not whitespace or one of the above
```

Whitespace only separates tokens. Strings have no escape sequences.
"""

import re
from enum import Enum

from regulus.lang.error import GenericException, SYNTAX
from regulus.pure.atom import INT_MAX, INT_MIN
from regulus.pure.positions import Span, char_positions


INT_PATTERN = re.compile(r"[+-]?[0-9]+")
KEYWORDS = {"true": True, "false": False, "null": None}
WHITESPACE = " \t\r\n"


class TokenType(Enum):
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    COMMA = ","
    COMMENT = "#"
    ATOM = "atom"
    NAME = "name"


class Token:
    """One token with the exact (inclusive) span of characters it was built from. data is the atom for ATOM tokens,
    the identifier for NAME tokens and the comment text for COMMENT tokens.
    """

    def __init__(self, kind, span, data=None):
        self.kind = kind
        self.span = span
        self.data = data

    @property
    def is_comment(self):
        return self.kind is TokenType.COMMENT

    def __eq__(self, other):
        return (isinstance(other, Token) and self.kind is other.kind and self.span == other.span
                and type(self.data) is type(other.data) and self.data == other.data)

    def __repr__(self):
        if self.kind in (TokenType.ATOM, TokenType.NAME, TokenType.COMMENT):
            return f"Token({self.kind.name}, {self.data!r})"
        return f"Token({self.kind.name})"


def classify(word, span):
    """Returns an ATOM token if word is a literal, a NAME token otherwise. Raises on integer overflow."""
    if word in KEYWORDS:
        return Token(TokenType.ATOM, span, KEYWORDS[word])

    if INT_PATTERN.fullmatch(word):
        value = int(word)
        if not INT_MIN <= value <= INT_MAX:
            msg = f"integer {word} cannot be parsed as an integer due to overflow"
            raise GenericException(SYNTAX, msg, span)
        return Token(TokenType.ATOM, span, value)

    return Token(TokenType.NAME, span, word)


def tokenize(code, source=None):
    """Converts code to a list of Tokens, raises a Syntax GenericException if code is not lexically valid."""
    tokens = []
    chars = char_positions(code)

    word = []           # characters of the pending name/atom
    word_span = None    # (start, end) positions of the pending word

    def flush():
        if word:
            tokens.append(classify("".join(word), Span(*word_span, source)))
            word.clear()

    for position, char in chars:
        if char in "(),":
            flush()
            tokens.append(Token(TokenType(char), Span(position, position, source)))

        elif char in WHITESPACE:
            flush()

        elif char == '"':
            flush()
            body = []
            for end, string_char in chars:
                if string_char == '"':
                    break
                body.append(string_char)
            else:
                raise GenericException(SYNTAX, "unclosed string literal", Span(position, position, source))
            tokens.append(Token(TokenType.ATOM, Span(position, end, source), "".join(body)))

        elif char == "#":
            flush()
            body = []
            end = position
            for end, comment_char in chars:
                if comment_char == "\n":
                    break
                body.append(comment_char)
            tokens.append(Token(TokenType.COMMENT, Span(position, end, source), "".join(body)))

        else:
            if not word:
                word_span = (position, position)
            word.append(char)
            word_span = (word_span[0], position)

    flush()
    return tokens


def validate_tokens(tokens):
    """Checks that parentheses are balanced: there may never be more ')' than '(' at any point, and the final counts
    must be equal.
    """
    left_parens = 0
    right_parens = 0

    for token in tokens:
        if token.kind is TokenType.LEFT_PAREN:
            left_parens += 1
        elif token.kind is TokenType.RIGHT_PAREN:
            right_parens += 1

        if right_parens > left_parens:
            msg = f"more ')' ({right_parens}) than '(' ({left_parens}) at some time"
            raise GenericException(SYNTAX, msg, token.span)

    if left_parens != right_parens:
        msg = f"nonequal amount of '(' and ')': {left_parens} vs. {right_parens}"
        raise GenericException(SYNTAX, msg, tokens[-1].span if tokens else None)
