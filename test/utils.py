"""
Tests for the internal helpers.

This module verifies:
- The Unset sentinel (singleton, falsy, sealed, usable in unions).
- coalesce() keeping legitimate falsy values.
- rename() in both forms.
- mirror() read-only views over containers.
"""
import unittest
from types import MappingProxyType
from unittest import TestCase

from declarg.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` sentinel.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the exported instance on every call.
        """
        self.assertIs(UnsetType(), Unset)

    def testFalsyButNotNone(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertEqual(repr(Unset), "Unset")

    def testUnion(self) -> None:
        """
        `str | Unset` builds a usable isinstance target.
        """
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("x", str | Unset)
        self.assertNotIsInstance(1, str | Unset)

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})


class HelpersTest(TestCase):

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertEqual(coalesce("", "fallback"), "")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertIsNone(coalesce(Unset))

    def testRenameFunctionForm(self) -> None:
        def original():
            pass

        self.assertIs(rename(original, "renamed"), original)
        self.assertEqual(original.__name__, "renamed")
        self.assertEqual(original.__qualname__, "renamed")

    def testRenameDecoratorForm(self) -> None:
        @rename("renamed")
        def original():
            pass

        self.assertEqual(original.__name__, "renamed")

    def testRenameArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename("not callable", "name")

    def testMirrorFreezesContainers(self) -> None:
        class Holder:
            items = mirror("items")
            mapping = mirror("mapping")

            def __init__(self):
                self._items = [1, 2]
                self._mapping = {"a": 1}

        holder = Holder()
        self.assertEqual(holder.items, (1, 2))
        self.assertIsInstance(holder.mapping, MappingProxyType)
        with self.assertRaises(AttributeError):
            holder.items = ()


if __name__ == "__main__":
    unittest.main()
