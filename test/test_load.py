"""
Command source loading tests.

Scope
- Validate loading a single source file and a whole directory.
- Validate skipped files, nested loading and missing paths.

Conventions
- Test method names follow CamelCase per project convention.
- Sources live under test/sources; each defines setup(command).
"""

from __future__ import annotations

import os.path
import unittest
from unittest import TestCase

from commandeer import Command, SourceNotFoundError

SOURCES = os.path.join(os.path.dirname(os.path.abspath(__file__)), "sources")


class TestLoad(TestCase):
    """Behavioral tests for Command.load() and Command.load_file()."""

    def setUp(self):
        self.messages = []
        self.bot = Command().set_send(lambda metadata, text: self.messages.append(text))

    def testLoadFile(self):
        self.bot.load_file(os.path.join(SOURCES, "basic"), "first.py")
        self.bot.parse("first")
        self.assertEqual(self.messages, ["first"])

    def testLoadPath(self):
        self.bot.load(os.path.join(SOURCES, "basic", "second.py"))
        self.bot.parse("second")
        self.assertEqual(self.messages, ["second"])

    def testLoadDirectory(self):
        self.assertIs(self.bot.load(os.path.join(SOURCES, "basic")), self.bot)
        self.assertEqual([child.name for child in self.bot.children], ["help", "first", "second"])
        self.bot.parse("first")
        self.bot.parse("second")
        self.assertEqual(self.messages, ["first", "second"])

    def testNestedLoad(self):
        self.bot.load(os.path.join(SOURCES, "nested"))
        self.bot.parse("sub echo")
        self.assertEqual(self.messages, ["echo"])

    def testMissingDirectory(self):
        with self.assertRaises(SourceNotFoundError):
            self.bot.load(os.path.join(SOURCES, "missing"))

    def testMissingFile(self):
        with self.assertRaises(SourceNotFoundError):
            self.bot.load_file(os.path.join(SOURCES, "basic"), "missing.py")

    def testSourceWithoutSetup(self):
        with self.assertRaises(TypeError):
            self.bot.load(os.path.join(SOURCES, "invalid"))

    def testRejectsNonPath(self):
        with self.assertRaises(TypeError):
            self.bot.load(1)


if __name__ == "__main__":
    unittest.main()
