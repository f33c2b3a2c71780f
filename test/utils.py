"""
Utils module behavioral tests.

Scope
- Validate the Unset sentinel (singleton, falsey, copy/pickle identity, final).
- Validate coalesce, rename and mirror.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import pickle
import unittest
from unittest import TestCase

from cmdtree.utils import Unset, UnsetType, coalesce, mirror, rename


class TestUnset(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsey(self):
        self.assertFalse(Unset)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testCopiesKeepIdentity(self):
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(copy.deepcopy([Unset])[0], Unset)

    def testPickleKeepsIdentity(self):
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testCannotSubclass(self):
        with self.assertRaises(TypeError):
            class Other(UnsetType):
                pass

    def testUnionWithTypes(self):
        self.assertIsInstance("text", str | Unset)
        self.assertIsInstance(Unset, str | Unset)


class TestCoalesce(TestCase):

    def testUnsetFallsBack(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testFalseyValuesArePreserved(self):
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertEqual(coalesce("", "x"), "")


class TestRename(TestCase):

    def testFunctionForm(self):
        def original():
            pass

        renamed = rename(original, "other")
        self.assertIs(renamed, original)
        self.assertEqual(original.__name__, "other")
        self.assertEqual(original.__qualname__, "other")

    def testDecoratorForm(self):
        @rename("action")
        def helper():
            pass

        self.assertEqual(helper.__name__, "action")

    def testArgumentValidation(self):
        with self.assertRaises(TypeError):
            rename(42, "name")
        with self.assertRaises(TypeError):
            rename(lambda: None, 42)
        with self.assertRaises(TypeError):
            rename()


class TestMirror(TestCase):

    def setUp(self):
        class Node:
            items = mirror("items")
            label = mirror("label")

            def __init__(self):
                self._items = [1, 2]
                self._label = Unset

        self.node = Node()

    def testListsAreFrozen(self):
        self.assertEqual(self.node.items, (1, 2))
        self.node._items.append(3)
        self.assertEqual(self.node.items, (1, 2, 3))

    def testUnsetReadsAsNone(self):
        self.assertIsNone(self.node.label)

    def testReadOnly(self):
        with self.assertRaises(AttributeError):
            self.node.items = ()

    def testNameMustBeString(self):
        with self.assertRaises(TypeError):
            mirror(1)


if __name__ == "__main__":
    unittest.main()
