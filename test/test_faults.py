"""
Faults module tests (codes, raising, warnings, rich rendering).

Scope
- Validate trigger(): raising errors, emitting warnings, printing in shell mode.
- Validate option merging through copy.replace.
- Validate rich rendering of faults (plain and fancy).
- Validate duplicated option declarations.

Conventions
- Test method names follow CamelCase per project convention.
- Rendering goes through a captured rich Console without colors.
"""

from __future__ import annotations

import copy
import unittest
import warnings
from unittest import TestCase, mock

from rich.console import Console

from commandeer import faults
from commandeer import (
    Command,
    CommandException,
    DuplicatedOptionWarning,
    FaultCode,
    MissingArgumentError,
    SourceNotFoundError,
    UnknownOptionError,
    getdoc,
    trigger,
)


def render(renderable):
    console = Console(width=100, color_system=None)
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


class TestTrigger(TestCase):
    """Behavioral tests for trigger()."""

    def testRaisesErrors(self):
        with self.assertRaises(SourceNotFoundError) as context:
            trigger(SourceNotFoundError("no such file or directory: 'x'"))
        self.assertEqual(str(context.exception), "no such file or directory: 'x'")

    def testRaisesCopy(self):
        fault = SourceNotFoundError("missing", path="x")
        with self.assertRaises(SourceNotFoundError) as context:
            trigger(fault, command=None)
        self.assertIsNot(context.exception, fault)
        self.assertEqual(dict(context.exception.options), {"path": "x", "command": None})

    def testWarnsWarnings(self):
        with self.assertWarns(DuplicatedOptionWarning):
            trigger(DuplicatedOptionWarning("flag -s is already declared"))

    def testShellPrints(self):
        console = Console(width=100, color_system=None)
        with mock.patch.object(faults, "console", console), console.capture() as capture:
            trigger(UnknownOptionError("unknown option -f"), shell=True)
        self.assertIn("unknown option -f", capture.get())

    def testRejectsPlainObjects(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))


class TestFaults(TestCase):
    """Behavioral tests for the fault types."""

    def testMessage(self):
        self.assertEqual(str(MissingArgumentError("missing required argument file")), "missing required argument file")
        self.assertEqual(str(CommandException()), "")

    def testOptionsAreReadOnly(self):
        fault = UnknownOptionError("unknown option -f", command=None)
        with self.assertRaises(TypeError):
            fault.options["command"] = Command()

    def testReplace(self):
        fault = UnknownOptionError("unknown option -f", colorful=False)
        replaced = copy.replace(fault, fancy=True)
        self.assertIsInstance(replaced, UnknownOptionError)
        self.assertEqual(str(replaced), "unknown option -f")
        self.assertEqual(dict(replaced.options), {"colorful": False, "fancy": True})

    def testCodes(self):
        self.assertEqual(UnknownOptionError.code, FaultCode.UNKNOWN_OPTION)
        self.assertEqual(DuplicatedOptionWarning.code, FaultCode.DUPLICATED_OPTION)
        self.assertEqual(FaultCode.MISSING_ARGUMENT.normalize(), "21111")

    def testGetdoc(self):
        self.assertIsNone(getdoc(FaultCode.SOURCE_NOT_FOUND))
        with self.assertRaises(TypeError):
            getdoc(21121)

    def testRichRendering(self):
        output = render(UnknownOptionError("unknown option -f", command=Command("bot")))
        self.assertIn("bot", output)
        self.assertIn("21101", output)
        self.assertIn("Unknown Option", output)
        self.assertIn("unknown option -f", output)
        self.assertIn(UnknownOptionError.hint, output)

    def testFancyRendering(self):
        output = render(DuplicatedOptionWarning("flag -s is already declared", fancy=True))
        self.assertIn("Duplicated Option", output)
        self.assertIn("flag -s is already declared", output)


class TestDuplicatedOption(TestCase):
    """Declaring the same flag twice on a node."""

    def testWarns(self):
        with self.assertWarns(DuplicatedOptionWarning):
            Command().option("-s").option("-s, --size <size>")

    def testDistinctFlagsDoNotWarn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            Command().option("-s").option("-S, --size <size>")

    def testFirstDeclarationWins(self):
        calls = []
        bot = Command()
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", DuplicatedOptionWarning)
            bot.option("-s", "first").option("-s, --size <size>", "second")
        bot.arguments("[word]").action(lambda metadata, word, options: calls.append((word, options)))
        bot.parse("go -s")
        self.assertEqual(calls[0][0], "go")
        self.assertIs(calls[0][1]["s"], True)
        self.assertIsNone(calls[0][1]["size"])


if __name__ == "__main__":
    unittest.main()
