import unittest

from regulus.lang.error import GenericException
from regulus.lang.storage import Storage
from regulus.pure.atom import Function


class StorageTestCase(unittest.TestCase):

    def setUp(self):
        self.function = Function("", 0, lambda state, args: None)
        self.storage = Storage({"f": self.function})

    def test_get_and_insert(self):
        self.assertIs(self.function, self.storage.get("f"))
        self.assertRaises(KeyError, self.storage.get, "x")

        self.storage.insert("x", 1)
        self.assertEqual(1, self.storage.get("x"))
        self.assertIn("x", self.storage)
        self.assertNotIn("y", self.storage)

    def test_get_function(self):
        self.storage.insert("x", 1)
        self.assertIs(self.function, self.storage.get_function("f"))

        for name in ["x", "missing"]:
            with self.assertRaises(GenericException, msg=name) as context:
                self.storage.get_function(name)
            self.assertEqual("Name", context.exception.kind, name)

    def test_scopes(self):
        self.storage.insert("x", 1)

        with self.storage.scope():
            self.assertEqual(2, self.storage.depth)
            self.assertEqual(1, self.storage.get("x"))  # outer bindings stay readable

            self.storage.insert("x", 2)
            self.storage.insert("y", 3)
            self.assertEqual(2, self.storage.get("x"))

        self.assertEqual(1, self.storage.depth)
        self.assertEqual(1, self.storage.get("x"))
        self.assertNotIn("y", self.storage)

    def test_scope_popped_on_error(self):
        with self.assertRaises(ValueError):
            with self.storage.scope():
                self.storage.insert("y", 1)
                raise ValueError()

        self.assertEqual(1, self.storage.depth)
        self.assertNotIn("y", self.storage)
        self.assertRaises(RuntimeError, self.storage.pop_scope)

    def test_globals(self):
        self.storage.insert("g", 1)
        self.storage.declare_global("g")

        with self.storage.scope():
            self.storage.insert("g", 2)
            self.storage.declare_global("h")
            self.storage.insert("h", 3)

        self.assertEqual(2, self.storage.get("g"))
        self.assertEqual(3, self.storage.get("h"))
        self.assertEqual({"g": 2, "h": 3}, self.storage.globals)

        self.storage.add_global("k", 4)
        with self.storage.scope():
            self.assertEqual(4, self.storage.get("k"))

    def test_declared_global_without_value(self):
        self.storage.declare_global("g")
        self.assertNotIn("g", self.storage)

        with self.storage.scope():
            self.storage.insert("g", 1)
        self.assertEqual(1, self.storage.get("g"))

    def test_truncated(self):
        self.storage.insert("x", "outer")
        with self.storage.scope():
            self.storage.insert("x", "inner")
            with self.storage.truncated(1):
                self.assertEqual("outer", self.storage.get("x"))
                self.storage.insert("y", 1)
            self.assertEqual("inner", self.storage.get("x"))

            with self.storage.truncated(10):
                self.assertEqual("inner", self.storage.get("x"))

        self.assertEqual(1, self.storage.get("y"))

    def test_exported(self):
        baseline = self.storage.snapshot()
        self.storage.insert("x", 1)
        self.storage.insert("f", Function("", 1, lambda state, args: None))

        exported = self.storage.exported(baseline)
        self.assertEqual({"x", "f"}, set(exported))
        self.assertEqual({}, Storage({"f": self.function}).exported({"f": self.function}))

        other = Storage()
        other.extend_from(exported, {"g": 5})
        self.assertEqual(1, other.get("x"))
        self.assertEqual(5, other.get("g"))
        self.assertIn("g", other.global_names)
