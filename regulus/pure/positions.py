"""Source positions for diagnostics. Every token and AST node carries a Span, which is only ever used for error
messages, never for evaluation.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Source:
    """A unit of source code: a file path, '<stl:NAME>', '<eval>' or '<in>', plus its text."""
    name: str
    text: str

    def line(self, line_num):
        """Returns line line_num (1-based) without its newline, or "" if it doesn't exist."""
        lines = self.text.split("\n")
        if 1 <= line_num <= len(lines):
            return lines[line_num - 1].rstrip("\r")
        return ""

    def __repr__(self):
        return f"Source({self.name!r})"


@dataclass(frozen=True, order=True)
class Position:
    """1-based line and column. Ordered by (line, column)."""
    line: int
    column: int

    def __str__(self):
        return f"{self.line}:{self.column}"


START = Position(1, 1)


@dataclass(frozen=True)
class Span:
    """A region of source code. Both start and end are inclusive."""
    start: Position
    end: Position
    source: Source = None

    def merge(self, other):
        """Returns the span from the start of self to the end of other."""
        return Span(self.start, other.end, self.source)

    def __deepcopy__(self, memo):
        return self  # immutable, and shares its Source with every other span of the same unit

    def __str__(self):
        name = self.source.name if self.source else "<unknown>"
        return f"{name}:{self.start}"


def char_positions(text):
    """Yields (Position, char) for every character in text."""
    line, column = 1, 1
    for char in text:
        yield Position(line, column), char
        if char == "\n":
            line += 1
            column = 1
        else:
            column += 1


def index_to_position(text, idx):
    """Returns the Position of the character at index idx."""
    for pos, (position, __) in enumerate(char_positions(text)):
        if pos == idx:
            return position
    raise IndexError(f"index {idx} out of range for text of length {len(text)}")


def extract(text, span):
    """Returns all characters of text that span encloses, or None if span is invalid (end before start or out of
    bounds).
    """
    extracted = []
    start_found = False

    for position, char in char_positions(text):
        if position == span.start:
            start_found = True
        if start_found:
            extracted.append(char)
        if position == span.end:
            return "".join(extracted) if start_found else None

    return None
