import io
import unittest

from regulus.lang.closure import Closure, Parameter, define_function
from regulus.lang.error import GenericException
from regulus.lang.state import State
from regulus.pure.lexical import tokenize
from regulus.pure.syntax import build_program


def execute(code):
    state = State(stdin=io.StringIO(), stdout=io.StringIO(), stderr=io.StringIO())
    return state.run(code), state


class ParameterTestCase(unittest.TestCase):

    def test_parse(self):
        cases = {
            "x": Parameter("x"),
            "$x": Parameter("x", lazy=True),
            "[x]": Parameter("x", variadic=True),
            "[$x]": Parameter("x", variadic=True, lazy=True),
            "$[x]": Parameter("[x]", lazy=True),
            "x]": Parameter("x]"),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, Parameter.parse(case), case)

        should_fail = ["[]", "$", "[$]"]
        for case in should_fail:
            self.assertRaises(GenericException, Parameter.parse, case)


class ClosureTestCase(unittest.TestCase):

    def test_arity(self):
        body = build_program(tokenize("x"))
        cases = [
            ([], 0, 0),
            ([Parameter("a"), Parameter("b")], 2, 2),
            ([Parameter("a"), Parameter("b", variadic=True)], None, 1),
            ([Parameter("b", variadic=True, lazy=True)], None, 0),
        ]
        for params, argc, required in cases:
            closure = Closure(params, body)
            self.assertEqual(argc, closure.argc, params)
            self.assertEqual(required, closure.required, params)

        with self.assertRaises(GenericException) as context:
            Closure([Parameter("a", variadic=True), Parameter("b")], body)
        self.assertEqual("Argument", context.exception.kind)

    def test_body_is_copied(self):
        body = build_program(tokenize("+(1, 2)"))
        function = define_function("adds", [], body)
        body.args[0].name = "-"

        self.assertEqual("adds", function.doc)
        self.assertEqual(0, function.argc)
        self.assertEqual(3, function.call(State(prelude=False), []))


class FunctionDefinitionTestCase(unittest.TestCase):

    def test_def_and_fn(self):
        cases = {
            "def(double, n, *(n, 2)), double(21)": 42,
            "=(f, fn(a, b, -(a, b))), f(10, 3)": 7,
            "=(one, fn(1)), one()": 1,
            "def(f, a, b, list(a, b)), =(a, 1), =(b, 2), f(b, a)": [2, 1],
            "def(fact, n, ifelse(<=(n, 1), 1, *(n, fact(-(n, 1))))), fact(10)": 3628800,
            "def(f, x, _(=(y, x), y)), f(5)": 5,
        }
        for case, expected in cases.items():
            result, __ = execute(case)
            self.assertEqual(expected, result.unwrap(), case)

    def test_definition_errors(self):
        cases = {
            "def(f)": "Argument",
            "def(1, x)": "Argument",
            "def(f, 1, x)": "Argument",
            'def(f, "a", x)': "Argument",
            "fn()": "Argument",
            "def(f, [a], b, a)": "Argument",
            "def(f, [], a)": "Argument",
            "def(f, a, a), f()": "Argument",
            "def(f, a, a), f(1, 2)": "Argument",
        }
        for case, kind in cases.items():
            result, __ = execute(case)
            self.assertFalse(result.ok, case)
            self.assertEqual(kind, result.exception.kind, case)

    def test_scope_isolation(self):
        result, state = execute("def(f, x, _(=(local, x), x)), f(5)")
        self.assertEqual(5, result.unwrap())
        self.assertNotIn("x", state.storage)
        self.assertNotIn("local", state.storage)
        self.assertEqual(1, state.storage.depth)

        result, state = execute("=(x, 1), def(f, x, =(x, 2)), f(0), x")
        self.assertEqual(1, result.unwrap())

        result, state = execute("def(f, x, +(x, true)), catch(f(1)), x")
        self.assertEqual("Name", result.exception.kind)
        self.assertEqual(1, state.storage.depth)

    def test_globals(self):
        cases = {
            "global(g), =(g, 1), def(inc, =(g, +(g, 1))), inc(), inc(), g": 3,
            "def(setup, _(global(h), =(h, 5))), setup(), h": 5,
            "=(g, 1), global(g), def(f, g), f()": 1,
            "def(f, _(global(c), =(c, 1))), def(g, _(f(), =(c, +(c, 1)), c)), g()": 2,
        }
        for case, expected in cases.items():
            result, __ = execute(case)
            self.assertEqual(expected, result.unwrap(), case)

    def test_variadic(self):
        cases = {
            "def(f, a, [rest], rest), f(1, 2, 3)": [2, 3],
            "def(f, a, [rest], rest), f(1)": [],
            "def(f, [all], len(all)), f()": 0,
            "def(f, [all], all), f(+(1, 1), \"x\", null)": [2, "x", None],
            "argc(fn(a, [b], a))": None,
            "argc(fn(a, b, a))": 2,
        }
        for case, expected in cases.items():
            result, __ = execute(case)
            self.assertEqual(expected, result.unwrap(), case)

        result, __ = execute("def(f, a, b, [rest], rest), f(1)")
        self.assertEqual("Argument", result.exception.kind)
        self.assertEqual("too few arguments to variadic function: expected at least 2, found 1", result.exception.msg)

    def test_lazy(self):
        cases = {
            "def(twice, $x, _(x(), x())), =(n, 0), twice(=(n, +(n, 1))), n": 2,
            "def(never, $x, 1), never(error(\"Boom\", \"evaluated\"))": 1,
            "def(unless, c, $body, if(!(c), body())), =(n, 0), unless(false, =(n, 5)), unless(true, =(n, 6)), n": 5,
            "def(f, [$xs], _(=(t, 0), for_in(xs, x, =(t, +(t, x()))), t)), f(1, 2, 3)": 6,
            "def(get, $x, x()), def(outer, v, get(v)), outer(7)": 7,
            "def(get, $x, _(=(x2, 1), x())), =(x2, 2), get(x2)": 2,
            "argc(fn($x, x))": 1,
        }
        for case, expected in cases.items():
            result, __ = execute(case)
            self.assertEqual(expected, result.unwrap(), case)

        result, __ = execute("def(force, $x, x()), force(+(1, true))")
        self.assertEqual("Type", result.exception.kind)
