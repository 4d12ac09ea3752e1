"""
Commandeer faults (errors and warnings) and their rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing issue, grouped
  by domain so that codes stay searchable in logs and chat transcripts.
- CommandException / CommandWarning: base types carrying a message plus
  free-form options; both know how to render themselves through rich.
- trigger(): single entry point to surface a fault (raise it, warn it, or
  print it when running inside an interactive shell).
- getdoc(): optional long description of a code, supplied by the host.

Two families of faults
- Parse-time faults (missing argument, option argument missing, unknown
  option) are never raised. The command tree collects them while binding a
  line and delivers them once, as text, through the send callback.
- Declaration-time and configuration faults (variadic argument not last,
  command source not found) abort the integrator's setup code: they are
  raised through trigger(). Duplicated option flags only warn.

Options understood by every fault
- command: the Command node the fault belongs to (named in the header).
- colorful: style the rich rendering (default True).
- fancy: wrap the rich rendering in a panel (default False).
- shell: print on the stderr console instead of raising/warning (default False).

Host hooks (looked up in __main__)
- __styles__: palette overrides for the rich renderers.
- __codes__: FaultCode → label remapping used by FaultCode.normalize().
- __docs__: FaultCode → documentation used by getdoc().
- __prog__: program name shown in rendered headers.
"""
import copy
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, UnsetType, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - options (2110x)
      • UNKNOWN_OPTION, OPTION_ARGUMENT_MISSING
    - arguments (2111x)
      • MISSING_ARGUMENT, VARIADIC_NOT_LAST
    - sources (2112x)
      • SOURCE_NOT_FOUND
    - warnings (22xxx)
      • DUPLICATED_OPTION

    the gaps between codes leave room for new faults without renumbering.
    """
    # --- option errors (21xxx) ---
    UNKNOWN_OPTION              = 21101
    OPTION_ARGUMENT_MISSING     = 21102

    # --- argument errors (21xxx) ---
    MISSING_ARGUMENT            = 21111
    VARIADIC_NOT_LAST           = 21112

    # --- source errors (21xxx) ---
    SOURCE_NOT_FOUND            = 21121

    # --- warnings (22xxx) ---
    DUPLICATED_OPTION           = 22101

    def normalize(self):
        """
        label of this code: the host's __codes__ entry, or the numeric value.
        """
        labels = getattr(__import__("__main__"), "__codes__", {})
        return str(labels[self] if self in labels else self.value)


class _Fault:
    """
    Shared body of errors and warnings: message, options and rendering.

    Subclasses set code, title (short lowercase headline) and hint (one
    sentence telling the user what to try next). kind prefixes the palette
    keys of the header code, the title and the message.
    """
    code = Unset
    kind = "fault"
    title = "fault"
    hint = ""
    palette = {}

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | UnsetType)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return coalesce(self.message, "")

    def __rich__(self):
        main = __import__("__main__")
        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | self.palette | getattr(main, "__styles__", {}))

        def style(role):
            return styles[role] if self.options.get("colorful", True) else ""

        command = self.options.get("command")
        prog = getattr(main, "__prog__", None) or (command.root.name if command else "") or "commandeer"

        header = Text.assemble(
            "[ ",
            (prog, style("prog-name")),
            " - ",
            (self.code.normalize() if self.code else "-", style(f"{self.kind}-code")),
            " | ",
            (self.title.title(), style(f"{self.kind}-title")),
            " ]",
        )
        body = Group(
            Text(str(self), style(f"{self.kind}-message")),
            Text.assemble((" -> ", style("hint-arrow")), (self.hint, style("hint"))),
        )

        if self.options.get("fancy", False):
            return Panel(body, title=header, title_align="left")
        return Group(header, body)

    def __replace__(self, /, **overrides):
        return type(self)(self.message, **(dict(self.options) | overrides))


class CommandException(_Fault, Exception):
    """
    Base class of every error raised or collected by commandeer.
    """
    kind = "error"
    title = "command error"
    palette = {
        "error-code": "bold #00E5FF",
        "error-title": "bold #FF4DA6",
        "error-message": "#C8C8D0",
    }

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)


class UnknownOptionError(CommandException):
    code = FaultCode.UNKNOWN_OPTION
    title = "unknown option"
    hint = "check the spelling or ask for help with --help"


class OptionArgumentError(CommandException):
    code = FaultCode.OPTION_ARGUMENT_MISSING
    title = "option argument missing"
    hint = "give the option a value right after its flag"


class MissingArgumentError(CommandException):
    code = FaultCode.MISSING_ARGUMENT
    title = "missing argument"
    hint = "every <argument> in the usage line needs a value"


class VariadicArgumentError(CommandException):
    code = FaultCode.VARIADIC_NOT_LAST
    title = "variadic argument not last"
    hint = "declare a single [argument...] and keep it at the end"


class SourceNotFoundError(CommandException):
    code = FaultCode.SOURCE_NOT_FOUND
    title = "source not found"
    hint = "load() expects an existing python file or directory"


class CommandWarning(_Fault, Warning):
    """
    Base class of non-fatal diagnostics, issued through the warnings module.

    The stacklevel option (default 4) points the warning at the integrator's
    declaration rather than at commandeer's internals.
    """
    kind = "warning"
    title = "command warning"
    palette = {
        "warning-code": "bold #FFB400",
        "warning-title": "bold #FFC2E0",
        "warning-message": "#D6D6DE",
    }

    def __trigger__(self):
        if not self.options.get("shell", False):
            warnings.warn(self, stacklevel=self.options.get("stacklevel", 4))
            return
        console.print(self)


class DuplicatedOptionWarning(CommandWarning):
    code = FaultCode.DUPLICATED_OPTION
    title = "duplicated option"
    hint = "the first declaration of a flag is the one that gets used"


def trigger(fault, /, **options):
    """
    surface a fault with extra runtime options.

    contract
    - fault must provide __trigger__ and __replace__ (see the base classes).
    - options are merged into a copy of the fault (copy.replace) before triggering.
    - exceptions are raised and warnings go through warnings.warn, unless
      shell=True, in which case both are printed on the stderr console.
    """
    if not all(callable(getattr(fault, hook, None)) for hook in ("__trigger__", "__replace__")):
        raise TypeError("trigger() argument must be a commandeer fault")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    documentation for a fault code, from the host's __docs__ mapping, or None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    return getattr(__import__("__main__"), "__docs__", {}).get(code)


__all__ = (
    "CommandException",
    "UnknownOptionError",
    "OptionArgumentError",
    "MissingArgumentError",
    "VariadicArgumentError",
    "SourceNotFoundError",
    "CommandWarning",
    "DuplicatedOptionWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
