"""
Registry module behavioral tests (registration, validation, lookup, runtime fields).

Scope
- Validate register(): names, explicit None rejection, duplicates, conflicts, descr.
- Validate lookup() by short/long name and registry indexing by handle/name.
- Validate OptionSpec flags and read-only runtime fields.

Conventions
- Test method names follow CamelCase per project convention.
- Never pass explicit None for any parameter; omit instead.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from rich.text import Text

from cmdapp import Registry, OptionSpec, OptionFlag


class TestRegister(TestCase):
    """Behavioral tests for Registry.register()."""

    def setUp(self):
        self.registry = Registry()

    def testRegisterReturnsStableHandle(self):
        verbose = self.registry.register("v", "verbose")
        self.assertIsInstance(verbose, OptionSpec)
        self.assertIs(self.registry[0], verbose)
        self.assertEqual(verbose.index, 0)

    def testRegisterKeepsInsertionOrder(self):
        first = self.registry.register("a")
        second = self.registry.register("b", "bravo")
        third = self.registry.register("c")
        self.assertEqual(list(self.registry), [first, second, third])
        self.assertEqual([option.index for option in self.registry], [0, 1, 2])
        self.assertEqual(len(self.registry), 3)

    def testRegisterRequiresAtLeastOneName(self):
        with self.assertRaises(TypeError):
            self.registry.register()

    def testRegisterShortOnly(self):
        option = self.registry.register("x")
        self.assertEqual(option.short, "x")
        self.assertIsNone(option.long)
        self.assertEqual(option.names, ("-x",))

    def testRegisterExplicitNoneRejected(self):
        with self.assertRaises(TypeError):
            self.registry.register(None, "verbose")
        with self.assertRaises(TypeError):
            self.registry.register("v", descr=None)

    def testRegisterShortMustBeOneCharacter(self):
        with self.assertRaises(ValueError):
            self.registry.register("vv")
        with self.assertRaises(ValueError):
            self.registry.register("")

    def testRegisterShortRejectsDashEqualsAndWhitespace(self):
        for short in ("-", "=", " "):
            with self.subTest(short=short), self.assertRaises(ValueError):
                self.registry.register(short)

    def testRegisterLongRejectsMalformedNames(self):
        for long in ("", "-verbose", "--verbose", "out=file", "two words"):
            with self.subTest(long=long), self.assertRaises(ValueError):
                self.registry.register("o", long)

    def testRegisterDuplicateShortRejected(self):
        self.registry.register("v", "verbose")
        with self.assertRaises(ValueError):
            self.registry.register("v", "version-info")

    def testRegisterDuplicateLongRejected(self):
        self.registry.register("v", "verbose")
        with self.assertRaises(ValueError):
            self.registry.register("V", "verbose")

    def testRegisterTakesArgumentSetsFlag(self):
        output = self.registry.register("o", "out", takes_argument=True)
        boolean = self.registry.register("q", "quiet")
        self.assertTrue(output.takes_argument)
        self.assertIn(OptionFlag.TAKESARG, output.flags)
        self.assertFalse(boolean.takes_argument)
        self.assertNotIn(OptionFlag.TAKESARG, boolean.flags)

    def testRegisterTakesArgumentMustBeBoolean(self):
        with self.assertRaises(TypeError):
            self.registry.register("o", takes_argument="yes")

    def testRegisterConflictsAreStored(self):
        verbose = self.registry.register("v", "verbose")
        quiet = self.registry.register("q", "quiet", conflicts=(verbose,))
        self.assertEqual(quiet.conflicts, frozenset({verbose}))
        self.assertTrue(quiet.conflicts_with(verbose))
        self.assertTrue(verbose.conflicts_with(quiet))

    def testRegisterConflictsFromAnotherRegistryRejected(self):
        foreign = Registry().register("v")
        with self.assertRaises(ValueError):
            self.registry.register("q", conflicts=(foreign,))

    def testRegisterConflictsMustBeHandles(self):
        with self.assertRaises(TypeError):
            self.registry.register("q", conflicts=("verbose",))
        with self.assertRaises(TypeError):
            self.registry.register("q", conflicts="v")

    def testRegisterDescrIsTrimmed(self):
        option = self.registry.register("v", descr="  talk more  ")
        self.assertEqual(option.descr, "talk more")

    def testRegisterDescrEmptyRejected(self):
        with self.assertRaises(ValueError):
            self.registry.register("v", descr="   ")

    def testRegisterDescrAcceptsRichText(self):
        descr = Text("talk more", style="bold")
        option = self.registry.register("v", descr=descr)
        self.assertIs(option.descr, descr)

    def testRegisterDescrDefaultsToNone(self):
        self.assertIsNone(self.registry.register("v").descr)


class TestLookup(TestCase):
    """Behavioral tests for lookup() and registry indexing."""

    def setUp(self):
        self.registry = Registry()
        self.verbose = self.registry.register("v", "verbose")
        self.output = self.registry.register("o", "out", takes_argument=True)
        self.version = self.registry.register("V", "version")

    def testLookupShort(self):
        self.assertIs(self.registry.lookup(short="o"), self.output)

    def testLookupLong(self):
        self.assertIs(self.registry.lookup(long="verbose"), self.verbose)

    def testLookupMissingReturnsNone(self):
        self.assertIsNone(self.registry.lookup(short="x"))
        self.assertIsNone(self.registry.lookup(long="bogus"))

    def testLookupRequiresExactlyOneName(self):
        with self.assertRaises(TypeError):
            self.registry.lookup()
        with self.assertRaises(TypeError):
            self.registry.lookup(short="v", long="verbose")

    def testLookupIsCaseSensitive(self):
        self.assertIs(self.registry.lookup(short="V"), self.version)
        self.assertIs(self.registry.lookup(short="v"), self.verbose)

    def testGetItemBySpelledName(self):
        self.assertIs(self.registry["-v"], self.verbose)
        self.assertIs(self.registry["--out"], self.output)

    def testGetItemMissingRaisesKeyError(self):
        for key in ("--bogus", "-x", "verbose", "-", "--"):
            with self.subTest(key=key), self.assertRaises(KeyError):
                self.registry[key]

    def testGetItemRejectsOtherTypes(self):
        with self.assertRaises(TypeError):
            self.registry[1.5]

    def testContains(self):
        self.assertIn("--verbose", self.registry)
        self.assertIn("-o", self.registry)
        self.assertNotIn("--help", self.registry)
        self.assertNotIn(42, self.registry)


class TestRuntimeFields(TestCase):
    """Behavioral tests for OptionSpec runtime state."""

    def setUp(self):
        self.registry = Registry()
        self.output = self.registry.register("o", "out", takes_argument=True)

    def testFreshOptionIsUnseen(self):
        self.assertFalse(self.output.seen)
        self.assertIsNone(self.output.value)
        self.assertNotIn(OptionFlag.EXISTS, self.output.flags)

    def testPublicFieldsAreReadOnly(self):
        for name in ("short", "long", "value", "descr", "index", "conflicts"):
            with self.subTest(name=name), self.assertRaises(AttributeError):
                setattr(self.output, name, "x")

    def testResetClearsSeenAndValue(self):
        self.output._mark("file.txt")
        self.assertTrue(self.output.seen)
        self.assertEqual(self.output.value, "file.txt")
        self.registry.reset()
        self.assertFalse(self.output.seen)
        self.assertIsNone(self.output.value)
        self.assertTrue(self.output.takes_argument)

    def testReprShowsNames(self):
        self.assertIn("short='o'", repr(self.output))
        self.assertIn("long='out'", repr(self.output))
        self.assertIn("-o/--out", repr(self.registry))


if __name__ == "__main__":
    unittest.main()
