r"""
Commandeer argument declarations: options and positional arguments.

Overview
- Option: a flag-driven input declared from a flags string.
    "-s, --size <size>"   short + long, required value
    "-d --drink [drink]"  short + long, optional value
    "-p|--pepper"         presence-only flag
    "-C, --no-cheese"     negated flag (true unless given)
  Separators between the words of a flags string are commas, pipes or spaces.

- Argument: a positional slot declared inside a command spec.
    "<file>"       required
    "[dest]"       optional
    "[files...]"   variadic (absorbs every remaining token, must be last)
  A quoted name ("<\"file name\">") is kept as written; it only shows in help.

Option values
- Values are stored under Option.key, the camel-cased long flag without its
  leading dashes or "no-" ("--no-cheese" → "cheese", "-option-name" → "optionName").
- seed() is the value an option has before a line is scanned: True for
  negated flags, the default (or False) for presence flags, a deep copy of the
  default (or None) for value options. Mutable defaults such as [] never leak
  between two parses.
- resolve(value, previous) folds one occurrence into the accumulated value;
  this is where coercion, boolean defaults and accumulation happen.

Coercion
- coerce may be:
  • a callable receiving (value, previous); callables taking no second
    positional parameter, or an optional one (int, float, str.split, ...),
    receive the value only.
  • a compiled regular expression: the matched text, or the previous value
    when the value does not match.
  • anything else: taken as the default value (option("-s [v]", "size", "large")).

Quick example:
    >>> verbose = Option("-v, --verbose", "verbosity", lambda value, total: total + 1, 0)
    >>> verbose.resolve(None, verbose.resolve(None, verbose.seed()))
    2
    >>> [humanize(argument) for argument in parse_expected(["<file>", "[rest...]"])]
    ['<file>', '[rest...]']
"""
import copy
import inspect
import re
from inspect import Parameter

from .tokens import tokenize
from .utils import *

_SEPARATORS = re.compile(r"[ ,|]+")


def _converter(coerce):
    """
    Adapt a coercion to the (value, previous) calling convention.
    """
    if isinstance(coerce, re.Pattern):
        @rename("match")
        def match(value, previous):
            found = coerce.search(str(value))
            return found.group(0) if found else previous
        return match

    try:
        parameters = list(inspect.signature(coerce).parameters.values())
    except (TypeError, ValueError):
        # builtins such as int expose no signature
        parameters = []

    positional = [
        parameter for parameter in parameters
        if parameter.kind in (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)
    ]
    # the previous value goes to a second positional parameter without default
    if (len(positional) > 1 and positional[1].default is Parameter.empty) or any(
        parameter.kind is Parameter.VAR_POSITIONAL for parameter in parameters
    ):
        return coerce

    @rename(getattr(coerce, "__name__", "coerce"))
    def convert(value, previous):
        return coerce(value)
    return convert


class Option(metaclass=Introspective):
    """
    Declared option of a command node.

    Derived fields
    - short: first word of the flags, when there are several words and the
      second one is not a <value>/[value] placeholder.
    - long: the next word (the only one for "-p" or "--pepper").
    - key: camel-cased long flag without dashes and "no-" prefix.
    - required: the flags contain "<"; optional: the flags contain "[".
    - negated: the flags contain "-no-"; boolean is its opposite.
    - flag: neither required nor optional (takes no value).
    """

    __introspectable__ = (
        "flags",
        "short",
        "long",
        "key",
        "descr",
        "required",
        "optional",
        "negated",
        "default",
        "coerce",
    )

    __displayable__ = (
        "flags",
        "key",
        "descr",
        "default",
    )

    def __init__(self, flags, descr="", coerce=Unset, default=Unset):
        if not isinstance(flags, str):
            raise TypeError(f"{type(self).__typename__} flags must be a string")
        elif not (flags := flags.strip()):
            raise ValueError(f"{type(self).__typename__} flags cannot be empty")
        if not isinstance(descr, str):
            raise TypeError(f"{type(self).__typename__} description must be a string")

        match coerce:
            case re.Pattern() | UnsetType():
                pass
            case _ if callable(coerce):
                pass
            case _:
                # a plain value in third position is the default
                coerce, default = Unset, coerce

        words = _SEPARATORS.split(flags)
        short = words.pop(0) if len(words) > 1 and not words[1].startswith(("<", "[")) else None
        long = words.pop(0)

        self._flags = flags
        self._short = short
        self._long = long
        self._key = camelcase(long.lstrip("-").removeprefix("no-"))
        self._descr = descr
        self._required = "<" in flags
        self._optional = "[" in flags
        self._negated = "-no-" in flags
        self._default = default
        self._coerce = coerce
        self._convert = _converter(coerce) if coerce is not Unset else None

    @property
    def boolean(self):
        return not self._negated

    @property
    def flag(self):
        return not self._required and not self._optional

    @property
    def names(self):
        """
        Flags this option answers to, short first.
        """
        return tuple(name for name in (self._short, self._long) if name)

    def matches(self, token, /):
        return token in self.names

    def seed(self):
        """
        Value of the option before any occurrence has been read.
        """
        if self._negated:
            return True
        if self.flag:
            return coalesce(self._default, False)
        return copy.deepcopy(coalesce(self._default))

    def resolve(self, value, previous):
        """
        Fold one occurrence of the option into its accumulated value.

        Parameters
        - value: the token given to the option, or None when none was taken.
        - previous: the accumulated value so far (initially seed()).
        """
        if self._convert is not None and (value is not None or self.flag):
            value = self._convert(value, previous)
        if value is not None:
            return value
        if self._negated:
            return False
        if previous is None or isinstance(previous, bool):
            return coalesce(self._default) or True
        return previous


class Argument(metaclass=Introspective):
    """
    Positional slot of a command: name, required, variadic.
    """

    __introspectable__ = (
        "name",
        "required",
        "variadic",
    )

    def __init__(self, name, /, *, required=False, variadic=False):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__typename__} name must be a string")
        elif not name:
            raise ValueError(f"{type(self).__typename__} name cannot be empty")
        self._name = name
        self._required = bool(required)
        self._variadic = bool(variadic)


def parse_expected(words, /):
    """
    Build Argument specs from the argument words of a command spec.

    Words may be a string ("<file> [dest]") or already split tokens. Words that
    are neither <...> nor [...] are ignored, as are empty brackets.
    """
    if isinstance(words, str):
        words = tokenize(words)

    arguments = []
    for word in words:
        match word[:1]:
            case "<":
                required = True
            case "[":
                required = False
            case _:
                continue
        name = word[1:-1]
        variadic = len(name) > 3 and name.endswith("...")
        if variadic:
            name = name[:-3]
        if name:
            arguments.append(Argument(name, required=required, variadic=variadic))
    return arguments


def humanize(argument, /):
    """
    Help/usage label of an argument: <name>, [name] or [name...].
    """
    label = argument.name + ("..." if argument.variadic else "")
    return f"<{label}>" if argument.required else f"[{label}]"


__all__ = (
    "Option",
    "Argument",
    "parse_expected",
    "humanize",
)
