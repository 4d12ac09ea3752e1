"""
Commandeer command layer: declare a command tree, then feed it lines.

What this module provides
- Command: one node of the tree. Nodes are declared through a fluent API and
  then parse free-text lines (chat messages, shell input), dispatching them to
  handlers or answering with help and error messages through a send callback.
- ParseConfig: the per-node parsing policies plus the shared send outlet.
- Action: handle of a registered handler, bound to the node that declared it.

Quick start
    import re

    from commandeer import Command

    bot = Command().prefix("!").set_send(lambda metadata, text: print(text))

    (bot.command("pizza <size> [toppings...]")
        .alias("order")
        .description("Order your pizza")
        .option("-d, --drink [drink]", "Drink", re.compile(r"^(coke|pepsi)$", re.I))
        .action(lambda metadata, size, toppings, options: ...))

    bot.parse("!pizza large ham pineapple --drink coke", {"user": "amy"})

Dispatch of one line
1. The node where parse() is called strips the first matching prefix; a line
   matching none of the configured prefixes is ignored.
2. The line is tokenized, normalized and scanned for options (see tokens and
   parsing). Option errors are reported right away with this node's help.
3. The first positional token picks what runs:
   • nothing → help (when asked for with -h/--help, or when help-on-empty is on);
   • "help" alone → this node's help; "help x ..." behaves like "x ... --help";
   • a handler registered under that name (or alias) → the handler's node
     binds arguments and calls it;
   • a child named so → the rest of the raw line is parsed again by the child,
     which knows options the parent does not;
   • otherwise → the wildcard ("*") handlers, if any.
4. Binding re-reads the tokens nobody recognized so far with the node's own
   options, then assigns positional tokens to the declared arguments and calls
   handler(metadata, *arguments, options). Faults found on the way are sent
   once, followed by the node's help unless show_help_on_error(False).

Configuration inheritance
- A child copies its parent's ParseConfig when command() creates it: later
  policy changes on the parent do not reach it. The send outlet is shared by
  the whole tree, so set_send() on any node re-routes every node.
- Option lookup falls back to ancestors: options declared on a parent may be
  written after a subcommand name.

Loading commands from files
- load(path) imports a python file (or every *.py file of a directory, in
  sorted order) and calls its setup(command) function with this node.
"""
import copy
import importlib.util
import os.path
import re
from types import MappingProxyType

from .arguments import Option, parse_expected
from .faults import *
from .parsing import merge, parse_options
from .rendering import render, synopsis
from .tokens import Token, normalize, tokenize, unquote
from .utils import *

HELP_TOKENS = ("-h", "--help")


class Outlet:
    """
    Holder of the send callback, shared by every node of a tree.

    Calling the outlet forwards (metadata, text) to the callback and returns
    its value. Empty text, or a missing callback, is a silent no-op returning None.
    """
    __slots__ = ("send",)

    def __init__(self, send=None):
        self.send = send

    def __call__(self, metadata, text):
        if not text or self.send is None:
            return None
        return self.send(metadata, text)

    def __repr__(self):
        return f"outlet(send={self.send!r})"


class ParseConfig(metaclass=Introspective):
    """
    Parsing policies of one node.

    Fields
    - outlet: shared Outlet (copied by reference).
    - allow_unknown: accept options nobody declared (default False).
    - help_on_error: append the node's help to error messages (default True).
    - help_on_empty: answer an empty line with help (default True).
    - lower_case: match command names case-insensitively (default False).
    """
    __displayable__ = (
        "allow_unknown",
        "help_on_error",
        "help_on_empty",
        "lower_case",
    )

    def __init__(self, outlet=None, *, allow_unknown=False, help_on_error=True, help_on_empty=True, lower_case=False):
        self.outlet = outlet if outlet is not None else Outlet()
        self.allow_unknown = allow_unknown
        self.help_on_error = help_on_error
        self.help_on_empty = help_on_empty
        self.lower_case = lower_case


class Action:
    """
    A handler registered through Command.action(), bound to its node.
    """
    __slots__ = ("command", "handler")

    def __init__(self, command, handler):
        self.command = command
        self.handler = handler

    def __call__(self, result, metadata):
        return self.command._perform(self.handler, result, metadata)

    def __repr__(self):
        return f"action(command={self.command.name!r}, handler={self.handler!r})"


class Command(metaclass=Introspective):
    """
    Node of a command tree.

    Responsibilities
    - Declaration: children (command), positional arguments (arguments),
      options (option), handlers (action) and help metadata (description,
      alias, usage).
    - Dispatch: parse() resolves a line against the tree (see module docs).
    - Rendering: help() returns the help text; the node is a rich renderable.
    - Discovery: load()/load_file() run external setup(command) functions.

    Notes
    - Getter/setters (description, alias, usage) return the current value when
      called without argument and the node otherwise, so they chain.
    - Read-only properties return copies of the node's containers.
    """

    __introspectable__ = (
        "name",
        "parent",
        "children",
        "options",
        "expected",
        "listeners",
        "config",
        "no_help",
        "prefixes",
    )

    __displayable__ = (
        "name",
        "options",
        "expected",
        "children",
        "no_help",
    )

    def __init__(self, name="", /, *, parent=None, config=None, no_help=False):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} name must be a string")
        if parent is not None and not isinstance(parent, Command):
            raise TypeError(f"{type(self).__typename__} parent must be a command")
        self._name = name
        self._parent = parent
        self._config = config if config is not None else ParseConfig()
        self._no_help = bool(no_help)
        self._alias = None
        self._description = None
        self._usage = None
        self._prefixes = None
        self._children = []
        self._options = []
        self._expected = []
        self._listeners = {}
        self._actions = []

    @property
    def root(self):
        """
        Topmost node of the tree this node belongs to.
        """
        command = self
        while command._parent is not None:
            command = command._parent
        return command

    def __rich__(self):
        return render(self)

    # Declaration

    def prefix(self, prefix, /):
        """
        Only accept lines starting with a prefix.

        A string is a single prefix ("!@$" needs all three characters); any
        other iterable gives alternatives (["!", "@"]). None removes the filter.
        """
        if prefix is None:
            self._prefixes = None
        elif isinstance(prefix, str):
            self._prefixes = [prefix]
        else:
            prefixes = list(prefix)
            if not all(isinstance(each, str) for each in prefixes):
                raise TypeError(f"{type(self).__typename__} prefixes must be strings")
            self._prefixes = prefixes
        return self

    def set_send(self, send, /):
        """
        Set the callback receiving (metadata, text) for the whole tree.
        """
        if send is not None and not callable(send):
            raise TypeError(f"{type(self).__typename__} send must be callable")
        self._config.outlet.send = send
        return self

    def send(self, metadata=None, text=None, /):
        """
        Deliver text through the send callback and return what it returns.

        Nothing is delivered (and None is returned) for None or empty text.
        """
        return self._config.outlet(metadata, text)

    def command(self, spec, /, *, no_help=False):
        """
        Declare a child from a spec such as "copy <file> [dest...]" and return it.

        The first child of a node is preceded by an implicit "help [cmd]" child
        (unless it is itself named help). Raises VariadicArgumentError when the
        spec places a variadic argument anywhere but last.
        """
        if not isinstance(spec, str):
            raise TypeError(f"{type(self).__typename__} spec must be a string")
        elif not (words := tokenize(spec)):
            raise ValueError(f"{type(self).__typename__} spec cannot be empty")

        name, *words = words
        child = Command(str(name), parent=self, config=copy.copy(self._config), no_help=no_help)
        child._declare(words)

        if not self._children and name != "help":
            self.command("help [cmd]").description("display help for [cmd]")
        self._children.append(child)
        return child

    def arguments(self, spec, /):
        """
        Declare positional arguments ("<required> [optional] [variadic...]").
        """
        if not isinstance(spec, str):
            raise TypeError(f"{type(self).__typename__} arguments must be a string")
        self._declare(tokenize(spec))
        return self

    def _declare(self, words):
        arguments = self._expected + parse_expected(words)
        for index, argument in enumerate(arguments):
            if argument.variadic and index != len(arguments) - 1:
                trigger(VariadicArgumentError("variadic arguments must be last args", command=self, argument=argument.name))
        self._expected = arguments

    def option(self, flags, descr="", coerce=Unset, default=Unset):
        """
        Declare an option.

        Parameters
        - flags: "-s, --size <size>", "-d|--drink [drink]", "--no-cheese", ...
        - descr: help description.
        - coerce: callable(value, previous), compiled regex, or the default
          value when it is neither.
        - default: initial value.

        A flag already declared on this node raises DuplicatedOptionWarning;
        the earlier declaration keeps answering to it.
        """
        option = Option(flags, descr, coerce, default)
        for existing in self._options:
            for name in set(option.names) & set(existing.names):
                trigger(DuplicatedOptionWarning(f"flag {name} of {option.flags!r} is already declared by {existing.flags!r}", command=self))
        self._options.append(option)
        return self

    def action(self, handler, /):
        """
        Register handler(metadata, *arguments, options) for this node.

        The handler is registered on the parent under the node name and alias;
        on a root node it becomes the wildcard handler.
        """
        if not callable(handler):
            raise TypeError(f"{type(self).__typename__} action must be callable")
        self._actions.append(action := Action(self, handler))
        if self._parent is None:
            self._listen("*", action)
        else:
            self._parent._listen(self._name, action)
            if self._alias:
                self._parent._listen(self._alias, action)
        return self

    def _listen(self, event, action):
        self._listeners.setdefault(event, []).append(action)

    def _forget(self, event, action):
        if action in (actions := self._listeners.get(event, [])):
            actions.remove(action)
        if not actions:
            self._listeners.pop(event, None)

    def description(self, text=Unset, /):
        if text is Unset:
            return self._description
        if not isinstance(text, str | None):
            raise TypeError(f"{type(self).__typename__} description must be a string")
        self._description = text
        return self

    def alias(self, name=Unset, /):
        """
        Get or set the alternative name of this node.

        Handlers already registered follow the new alias.
        """
        if name is Unset:
            return self._alias
        if not isinstance(name, str | None):
            raise TypeError(f"{type(self).__typename__} alias must be a string")
        if self._parent is not None:
            for action in self._actions:
                if self._alias:
                    self._parent._forget(self._alias, action)
                if name:
                    self._parent._listen(name, action)
        self._alias = name
        return self

    def usage(self, text=Unset, /):
        """
        Get the usage line (the declared one or the synthesized default), or set it.
        """
        if text is Unset:
            return coalesce(self._usage) or synopsis(self)
        if not isinstance(text, str | None):
            raise TypeError(f"{type(self).__typename__} usage must be a string")
        self._usage = text
        return self

    def allow_unknown_option(self, allow=True, /):
        self._config.allow_unknown = bool(allow)
        return self

    def show_help_on_error(self, show=True, /):
        self._config.help_on_error = bool(show)
        return self

    def show_help_on_empty(self, show=True, /):
        self._config.help_on_empty = bool(show)
        return self

    def lower_case(self, lower=True, /):
        """
        Match this node's name (and, for children, their names) ignoring case.
        """
        self._config.lower_case = bool(lower)
        return self

    # Rendering

    def help(self):
        """
        Return the help text of this node.
        """
        return render(self).plain

    def output_help(self, metadata=None, /):
        return self.send(metadata, self.help())

    # Dispatch

    def parse(self, line, metadata=None, /):
        """
        Parse one line and dispatch it.

        Returns the value of the last handler run, or of the send call made
        for help or errors; None when nothing ran.
        """
        if not isinstance(line, str):
            raise TypeError(f"{type(self).__typename__} line must be a string")
        if self._prefixes is not None:
            for prefix in self._prefixes:
                if line.startswith(prefix):
                    line = line[len(prefix):]
                    break
            else:
                return None
        return self._parse(line, metadata, {})

    def _option_for(self, token):
        command = self
        while command is not None:
            for option in command._options:
                if option.matches(token):
                    return option
            command = command._parent
        return None

    def _seeds(self):
        return {option.key: option.seed() for option in self._options}

    def _parse(self, line, metadata, inherited):
        raw = tokenize(line)
        seeds = self._seeds()
        result = parse_options(normalize(raw, self._option_for), self._option_for, seeds)
        if result.errors:
            return self._fail(result.errors, metadata)
        # ancestors already read the whole line: keep their values for their options
        result.values = merge(inherited, {key: result.values[key] for key in seeds})
        return self._resolve(result, raw, metadata)

    def _resolve(self, result, raw, metadata, *, helping=False):
        if not result.positional or not result.positional[0]:
            if any(token in HELP_TOKENS for token in result.unknown) or self._config.help_on_empty:
                return self.output_help(metadata)
            return None

        token = result.positional[0]
        if token == "help" and not helping:
            if len(result.positional) == 1:
                return self.output_help(metadata)
            result.positional.pop(0)
            result.unknown.append(Token("--help", token.origin))
            return self._resolve(result, raw, metadata, helping=True)

        name = str(token)
        if self._config.lower_case or any(
            child._config.lower_case and name.lower() in (child._name, child._alias)
            for child in self._children
        ):
            name = name.lower()

        if actions := self._listeners.get(name):
            result.positional.pop(0)
            outcome = None
            for action in actions:
                outcome = action(result, metadata)
            return outcome

        for child in self._children:
            if name in (child._name, child._alias):
                line = " ".join(raw[getattr(token, "origin", 0) + 1:])
                if helping:
                    line += " --help"
                return child._parse(line, metadata, result.values)

        outcome = None
        for action in self._listeners.get("*", ()):
            outcome = action(result, metadata)
        return outcome

    def _perform(self, handler, result, metadata):
        # options this node already resolved while reading the line keep their values
        seeds = {key: result.values.get(key, seed) for key, seed in self._seeds().items()}
        parsed = parse_options(result.unknown, self._option_for, seeds)
        if any(token in HELP_TOKENS for token in parsed.unknown):
            return self.output_help(metadata)

        errors = list(parsed.errors)
        if parsed.unknown and not self._config.allow_unknown:
            errors.append(UnknownOptionError(f"unknown option {parsed.unknown[0]}", command=self))

        values = merge(result.values, {key: parsed.values[key] for key in seeds})
        positional = parsed.positional + result.positional

        bound = []
        for index, argument in enumerate(self._expected):
            if argument.required and index >= len(positional):
                errors.append(MissingArgumentError(f"missing required argument {argument.name}", command=self))
            if argument.variadic:
                bound.append([unquote(token) for token in positional[index:]])
            elif index < len(positional):
                bound.append(unquote(positional[index]))
            else:
                bound.append(None)

        if errors:
            return self._fail(errors, metadata)
        return handler(metadata, *bound, MappingProxyType(values))

    def _fail(self, errors, metadata):
        text = "\n".join(f"  error: {error}" for error in errors)
        if self._config.help_on_error:
            text += "\n" + self.help()
        return self.send(metadata, text)

    # Discovery

    def load(self, path, /):
        """
        Run the setup(command) function of a python file, or of every *.py file
        of a directory (sorted, names starting with "_" skipped), on this node.

        Raises
        - SourceNotFoundError: the path does not exist.
        - TypeError: a source has no callable setup.
        """
        if not isinstance(path, str | os.PathLike):
            raise TypeError("load() argument must be a path")
        path = os.fspath(path)

        if os.path.isdir(path):
            for filename in sorted(os.listdir(path)):
                source = os.path.join(path, filename)
                if filename.endswith(".py") and not filename.startswith("_") and os.path.isfile(source):
                    self._source(source)
        elif os.path.isfile(path):
            self._source(path)
        else:
            trigger(SourceNotFoundError(f"no such file or directory: {path!r}", command=self, path=path))
        return self

    def load_file(self, directory, filename, /):
        return self.load(os.path.join(directory, filename))

    def _source(self, filename):
        name = "commandeer.sources." + re.sub(r"\W", "_", os.path.splitext(os.path.basename(filename))[0])
        spec = importlib.util.spec_from_file_location(name, filename)
        if spec is None or spec.loader is None:
            raise TypeError(f"unable to import command source {filename!r}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        if not callable(setup := getattr(module, "setup", None)):
            raise TypeError(f"command source {filename!r} must define a setup(command) function")
        setup(self)


__all__ = (
    "Command",
    "ParseConfig",
    "Outlet",
    "Action",
)
