"""
Context behavioral tests.

Scope
- Validate flag lookups by short and long name.
- Validate environment accessors and their failure mode.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import os
import sys
import unittest
from unittest import TestCase, mock

from cmdtree import Context, EnvironmentAccessError, Flag, FlagKind, parse


class TestContextLookups(TestCase):

    def setUp(self):
        self.output = Flag(FlagKind.VALUE, "o", "output")
        self.verbose = Flag(FlagKind.BOOLEAN, "v", "verbose")
        parse(["-o", "report.txt"], [self.output, self.verbose])
        self.context = Context([self.output, self.verbose])

    def testShortFindsSetFlag(self):
        self.assertEqual(self.context.short("o"), ("report.txt", True))

    def testLongFindsSetFlag(self):
        self.assertEqual(self.context.long("output"), ("report.txt", True))

    def testLongDoesNotMatchShortNames(self):
        self.assertEqual(self.context.long("o"), (None, False))

    def testUnsetFlagIsAbsent(self):
        self.assertEqual(self.context.short("v"), (None, False))
        self.assertEqual(self.context.long("verbose"), (None, False))

    def testUnknownNameIsAbsent(self):
        self.assertEqual(self.context.short("x"), (None, False))
        self.assertEqual(self.context.long("missing"), (None, False))

    def testFlagsAreExposedInOrder(self):
        self.assertEqual(self.context.flags, (self.output, self.verbose))


class TestContextEnvironment(TestCase):

    def testInjectedAccessors(self):
        context = Context([], executable=lambda: "/opt/app/bin/app", working=lambda: "/srv")
        self.assertEqual(context.executable(), "/opt/app/bin/app")
        self.assertEqual(context.working(), "/srv")

    def testDefaultWorkingDirectory(self):
        self.assertEqual(Context([]).working(), os.getcwd())

    def testDefaultExecutable(self):
        with mock.patch.object(sys, "executable", "/usr/bin/python3"):
            self.assertEqual(Context([]).executable(), "/usr/bin/python3")

    def testUnresolvedExecutableFails(self):
        with mock.patch.object(sys, "executable", ""):
            with self.assertRaises(EnvironmentAccessError) as context:
                Context([]).executable()
        self.assertEqual(context.exception.subject, "executable")

    def testWorkingFailureKeepsCause(self):
        def gone():
            raise FileNotFoundError("directory was removed")

        with self.assertRaises(EnvironmentAccessError) as context:
            Context([], working=gone).working()
        self.assertIsInstance(context.exception.__cause__, FileNotFoundError)
        self.assertEqual(context.exception.subject, "working")


if __name__ == "__main__":
    unittest.main()
