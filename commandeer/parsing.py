"""
Commandeer option parsing: one pass over normalized tokens.

parse_options(tokens, lookup, values) classifies every token:
- "--" switches to literal mode and is dropped; in literal mode every token
  is positional, verbatim. A later "--" is dropped as well.
- a declared option (found through lookup):
  • required value: takes the next token, whatever it looks like. With no
    token left an OptionArgumentError is recorded and the scan goes on.
  • optional value: takes the next token unless it looks like a flag.
  • presence flag: takes nothing.
  The value is folded through Option.resolve against the value accumulated so
  far, so repeated occurrences can collect or count.
- an undeclared option-like token (dash + at least one character) goes to
  unknown, together with the following token when that one does not start
  with a dash. The pairing is a guess: the token may really be a positional
  argument. Nodes further down the tree re-read unknown tokens with their own
  declarations.
- anything else is positional, in order.

Nothing here raises for user input: problems end up in ParseResult.errors.
"""
from collections import deque

from .faults import OptionArgumentError
from .tokens import TERMINATOR, looks_like_flag


class ParseResult:
    """
    Transient outcome of one option pass.

    Attributes
    - positional: non-option tokens, in order.
    - values: option key → resolved value.
    - unknown: undeclared option-like tokens (and their guessed values).
    - errors: collected faults; str(fault) is the user-facing message.
    """
    __slots__ = ("positional", "values", "unknown", "errors")

    def __init__(self, positional=(), values=(), unknown=(), errors=()):
        self.positional = list(positional)
        self.values = dict(values)
        self.unknown = list(unknown)
        self.errors = list(errors)

    def __repr__(self):
        return "parse-result(%s)" % ", ".join("%s=%r" % (name, getattr(self, name)) for name in self.__slots__)


def parse_options(tokens, lookup, values=None, /):
    """
    Split normalized tokens into positional tokens, option values and unknowns.

    Parameters
    - tokens: iterable of normalized tokens.
    - lookup: callable mapping a token to its declared Option, or None.
    - values: initial values (usually every declared option's seed()); options
      missing from it are seeded on first occurrence.

    Returns
    - ParseResult
    """
    result = ParseResult(values=values or {})
    stream = deque(tokens)
    literal = False

    while stream:
        token = stream.popleft()

        if token == TERMINATOR:
            literal = True
            continue

        if literal:
            result.positional.append(token)
            continue

        if (option := lookup(token)) is not None:
            if option.required:
                if not stream:
                    result.errors.append(OptionArgumentError(f"option {option.flags} argument missing", option=option))
                    continue
                value = stream.popleft()
            elif option.optional and stream and not looks_like_flag(stream[0]):
                value = stream.popleft()
            else:
                value = None
            previous = result.values[option.key] if option.key in result.values else option.seed()
            result.values[option.key] = option.resolve(value, previous)
            continue

        if looks_like_flag(token):
            result.unknown.append(token)
            if stream and not stream[0].startswith("-"):
                result.unknown.append(stream.popleft())
            continue

        result.positional.append(token)

    return result


def merge(inherited, local, /):
    """
    Merge option values resolved by an ancestor with local ones.

    Ancestor values come first; a local value replaces an inherited one unless
    it is None while the inherited one is not.
    """
    merged = dict(inherited)
    for key, value in local.items():
        if value is not None or merged.get(key) is None:
            merged[key] = value
    return merged


__all__ = (
    "ParseResult",
    "parse_options",
    "merge",
)
