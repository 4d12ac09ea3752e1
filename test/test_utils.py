"""
Tests for the shared utilities.

This module verifies:
- The Unset sentinel: singleton identity, falsy semantics, copies, finality.
- coalesce() only replacing Unset.
- rename() as a decorator.
- Introspective classes: type names, mirrored read-only properties, repr.
- camelcase() option keys.
"""
import copy
import pickle
import unittest
from unittest import TestCase

from rich.console import Console

from commandeer.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` sentinel.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the module-level instance every time.
        """
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsyButDistinct(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertNotEqual(Unset, 0)
        self.assertNotEqual(Unset, "")

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyPreservesIdentity(self) -> None:
        """
        Copies of the sentinel are the sentinel itself.
        """
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})

    def testPickle(self) -> None:
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)


class CoalesceTest(TestCase):

    def testReplacesUnset(self) -> None:
        self.assertEqual(coalesce(Unset, "drink"), "drink")
        self.assertIsNone(coalesce(Unset))

    def testKeepsFalsyValues(self) -> None:
        # only Unset is replaced
        self.assertIsNone(coalesce(None, "drink"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertEqual(coalesce([], [1]), [])


class RenameTest(TestCase):

    def testDecorator(self) -> None:
        @rename("renamed")
        def function():
            pass

        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testRejectsBadArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename(1)
        with self.assertRaises(TypeError):
            rename("name")(1)


class IntrospectiveTest(TestCase):
    """
    Test suite for the Introspective metaclass.
    """

    def setUp(self) -> None:
        class SampleSpec(metaclass=Introspective):
            __introspectable__ = ("name", "tags")
            __displayable__ = ("name",)

            def __init__(self, name, tags):
                self._name = name
                self._tags = tags

        self.SampleSpec = SampleSpec

    def testDisplayableDefaultsToUnset(self) -> None:
        self.assertIs(Introspective.__displayable__, Unset)

    def testTypename(self) -> None:
        self.assertEqual(self.SampleSpec.__typename__, "sample-spec")

    def testMirroredProperties(self) -> None:
        spec = self.SampleSpec("pizza", ["food", ["hot"]])
        self.assertEqual(spec.name, "pizza")
        self.assertEqual(spec.tags, ["food", ["hot"]])
        with self.assertRaises(AttributeError):
            spec.name = "drink"

    def testMirroredContainersAreDetached(self) -> None:
        """
        Mutating what a property returns leaves the object untouched.
        """
        spec = self.SampleSpec("pizza", ["food", ["hot"]])
        spec.tags.append("cold")
        spec.tags[1].append("spicy")
        self.assertEqual(spec.tags, ["food", ["hot"]])

    def testRepr(self) -> None:
        self.assertEqual(repr(self.SampleSpec("pizza", [])), "sample-spec(name='pizza')")

    def testRichRepr(self) -> None:
        console = Console(width=80, color_system=None)
        with console.capture() as capture:
            console.print(self.SampleSpec("pizza", []))
        self.assertIn("pizza", capture.get())

    def testCustomReprIsKept(self) -> None:
        class Custom(metaclass=Introspective):
            def __repr__(self):
                return "custom"

        self.assertEqual(repr(Custom()), "custom")


class CamelcaseTest(TestCase):

    def testHyphenated(self) -> None:
        self.assertEqual(camelcase("option-name"), "optionName")
        self.assertEqual(camelcase("extra-large-name"), "extraLargeName")

    def testSingleWord(self) -> None:
        self.assertEqual(camelcase("size"), "size")

    def testDoubledHyphens(self) -> None:
        self.assertEqual(camelcase("extra--large-"), "extraLarge")


if __name__ == "__main__":
    unittest.main()
