"""Abstract syntax tree of the regulus language and the program builder that produces it from tokens.

The grammar is:

```
<program>   ::= <args>                         ; implicitly wrapped as _(<program>)
<args>      ::= <arg> ("," <arg>)* [","]       ; commas only separate, so they may also be repeated or left out
<arg>       ::= <atom>                         ; Literal
              | <name>                         ; Variable
              | <name> "(" [<args>] ")"        ; FunctionCall (the name must be directly followed by "(")
```

Every node can be evaluated directly against a State: there is no separate compilation step.
"""

from abc import ABC, abstractmethod

from regulus.lang.error import GenericException, NAME, SYNTAX
from regulus.pure.atom import literal
from regulus.pure.lexical import TokenType, validate_tokens
from regulus.pure.positions import START, Span


class Argument(ABC):
    """Superclass of every AST node. Evaluation short-circuits to null once exit has been called in the State."""

    def __init__(self, span):
        self.span = span

    def evaluate(self, state):
        """Evaluates this node, returning an atom or raising a GenericException."""
        if state.exit_unwind is not None:
            return None
        return self._evaluate(state)

    @abstractmethod
    def _evaluate(self, state):
        ...

    @abstractmethod
    def stringify(self):
        """Returns an approximation of the source code of this node."""

    def __repr__(self):
        return f"{type(self).__name__}({self.stringify()!r})"


class Literal(Argument):

    def __init__(self, value, span=None):
        super().__init__(span)
        self.value = value

    def _evaluate(self, state):
        return self.value

    def stringify(self):
        return literal(self.value)


class Variable(Argument):

    def __init__(self, name, span=None):
        super().__init__(span)
        self.name = name

    def _evaluate(self, state):
        try:
            return state.storage.get(self.name)
        except KeyError:
            raise GenericException(NAME, f"No variable named `{self.name}` found!", self.span) from None

    def stringify(self):
        return self.name


class FunctionCall(Argument):
    """A call name(args...). args are handed to the function unevaluated: evaluating them is up to the callee."""

    def __init__(self, name, args, span=None, doc=""):
        super().__init__(span)
        self.name = name
        self.args = args
        self.doc = doc

    def _evaluate(self, state):
        try:
            function = state.storage.get_function(self.name)
            state.current_call = self
            return function.call(state, self.args, self.name)
        except GenericException as exc:
            exc.add_frame(self.span)
            raise

    def stringify(self):
        return f"{self.name}({', '.join(arg.stringify() for arg in self.args)})"


def build_program(tokens, name="_"):
    """Builds the top-level FunctionCall called name whose arguments are all top-level expressions in tokens. Raises a
    Syntax GenericException for unbalanced parentheses or misplaced tokens.
    """
    validate_tokens(tokens)

    args, idx = _build_args(tokens, 0)
    if idx != len(tokens):
        raise GenericException(SYNTAX, "unexpected ')'", tokens[idx].span)

    if tokens:
        span = tokens[0].span.merge(tokens[-1].span)
    else:
        span = Span(START, START)
    return FunctionCall(name, args, span)


def _concat_doc(comments):
    """Joins doc comments, one line each, with a single leading space stripped."""
    return "\n".join(comment.data[1:] if comment.data.startswith(" ") else comment.data for comment in comments)


def _build_args(tokens, idx):
    """Builds arguments starting at tokens[idx] until a ')' that closes this level (or the end) is reached. Returns
    the arguments and the index of that ')'.
    """
    args = []
    comments = []  # comments since the last argument, used as doc of the next call

    while idx < len(tokens):
        token = tokens[idx]

        if token.kind is TokenType.RIGHT_PAREN:
            break

        elif token.kind is TokenType.COMMENT:
            comments.append(token)
            idx += 1
            continue

        elif token.kind is TokenType.COMMA:
            idx += 1

        elif token.kind is TokenType.LEFT_PAREN:
            raise GenericException(SYNTAX, "'(' must directly follow a function name", token.span)

        elif token.kind is TokenType.ATOM:
            args.append(Literal(token.data, token.span))
            idx += 1

        elif idx + 1 < len(tokens) and tokens[idx + 1].kind is TokenType.LEFT_PAREN:
            call_args, end = _build_args(tokens, idx + 2)
            span = token.span.merge(tokens[end].span)
            args.append(FunctionCall(token.data, call_args, span, _concat_doc(comments)))
            idx = end + 1

        else:
            args.append(Variable(token.data, token.span))
            idx += 1

        comments = []

    return args, idx
