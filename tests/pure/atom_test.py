import unittest

from regulus.lang.error import GenericException
from regulus.pure.atom import (Function, INT_MAX, INT_MIN, Object, check_int, display, equals, expect, is_int, literal,
                               type_id, type_name)


def noop(state, args):
    return None


class AtomTestCase(unittest.TestCase):

    def test_type_name(self):
        cases = [
            (1, "Int"),
            (True, "Bool"),
            (None, "Null"),
            ("", "String"),
            ([], "List"),
            (Object({}, 6), "Object"),
            (Function("", 0, noop), "Function"),
        ]
        for atom, expected in cases:
            self.assertEqual(expected, type_name(atom), atom)

        self.assertRaises(TypeError, type_name, 1.5)

    def test_type_id(self):
        cases = [(0, 0), (False, 1), (None, 2), ([1], 3), ("a", 4), (Function("", None, noop), 5), (Object({}, 9), 9)]
        for atom, expected in cases:
            self.assertEqual(expected, type_id(atom), atom)

    def test_is_int(self):
        self.assertTrue(is_int(0))
        self.assertTrue(is_int(INT_MIN))
        self.assertFalse(is_int(True))
        self.assertFalse(is_int("1"))

    def test_equals(self):
        function = Function("", 0, noop)

        should_fail = [
            (1, True),
            (0, False),
            (1, "1"),
            (None, False),
            ([1], [True]),
            ([1, 2], [1]),
            (function, function),
            ([function], [function]),
            (Object({"a": 1}, 6), Object({"a": 1}, 7)),
            (Object({"a": 1}, 6), Object({"a": True}, 6)),
            (Object({"a": 1}, 6), Object({"b": 1}, 6)),
        ]
        for lhs, rhs in should_fail:
            self.assertFalse(equals(lhs, rhs), (lhs, rhs))

        should_pass = [
            (1, 1),
            (True, True),
            (None, None),
            ("a", "a"),
            ([], []),
            ([1, [2, "x"]], [1, [2, "x"]]),
            (Object({"a": 1, "b": [2]}, 6), Object({"b": [2], "a": 1}, 6)),
        ]
        for lhs, rhs in should_pass:
            self.assertTrue(equals(lhs, rhs), (lhs, rhs))

    def test_display(self):
        cases = [
            (None, "null"),
            (True, "true"),
            (False, "false"),
            (-3, "-3"),
            ("text", "text"),
            ([], "[]"),
            ([1, "a", [None]], "[1, a, [null]]"),
            (Object({"y": 2, "x": True}, 6), "{x: true, y: 2}"),
            (Function("", 2, noop), "<function>(2)"),
            (Function("", None, noop), "<function>(_)"),
        ]
        for atom, expected in cases:
            self.assertEqual(expected, display(atom), atom)

        self.assertEqual('"text"', literal("text"))
        self.assertEqual("null", literal(None))

    def test_check_int(self):
        for value in [0, INT_MAX, INT_MIN, -1]:
            self.assertEqual(value, check_int(value))
        for value in [INT_MAX + 1, INT_MIN - 1, 2 ** 100]:
            self.assertRaises(GenericException, check_int, value)

    def test_expect(self):
        self.assertEqual(1, expect(1, "Int"))
        self.assertEqual("a", expect("a", "Int", "String"))

        with self.assertRaises(GenericException) as context:
            expect(True, "Int")
        self.assertEqual("Type", context.exception.kind)
        self.assertEqual("true is not a Int!", context.exception.msg)


class FunctionTestCase(unittest.TestCase):

    def test_call(self):
        function = Function("doc", 2, lambda state, args: len(args))
        self.assertEqual(2, function.call(None, ["a", "b"]))

        with self.assertRaises(GenericException) as context:
            function.call(None, ["a"], "f")
        self.assertEqual("Argument", context.exception.kind)
        self.assertEqual("expected `2` args, found `1` args for `f`", context.exception.msg)

        variadic = Function("doc", None, lambda state, args: len(args))
        for args in [[], ["a"], ["a", "b", "c"]]:
            self.assertEqual(len(args), variadic.call(None, args))

    def test_object_copy(self):
        obj = Object({"a": 1}, 6)
        copy = obj.copy()
        copy.data["a"] = 2

        self.assertEqual(1, obj.data["a"])
        self.assertEqual(6, copy.ty_id)
