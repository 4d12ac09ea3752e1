r"""
Commandeer tokens: splitting and normalizing a command line.

Tokenizer
- A line is cut on whitespace; a "double" or 'single' quoted span stays inside
  one token together with its inner whitespace. The quotes are kept: only the
  argument binder removes them (see unquote), option values keep them.
- Quotes do not nest and an unbalanced quote is an ordinary character.
- Empty tokens never appear.

Token
- str subclass remembering origin, the index of the raw token it came from.
  Expanding "-abc" yields three tokens sharing one origin, which lets the
  command tree re-join the untouched raw remainder of a line when it hands
  the line down to a subcommand.

Normalizer (checks applied in this order)
1. "--" and everything after it pass through untouched.
2. A token right after a raw token naming a required-value option passes
   through untouched ("-n -5" keeps "-5" as the value).
3. "-abc" becomes "-a -b -c"; "-s=val" becomes "-s val".
4. "--name=value" becomes "--name value" (split at the first "=").
5. Anything else passes through.

Example
    >>> [str(token) for token in normalize(tokenize('pizza -ds=large "extra cheese"'))]
    ['pizza', '-d', '-s', 'large', '"extra cheese"']
"""
import re

_TOKEN = re.compile(r"""(?:"[^"]*"|'[^']*'|\S)+""")

TERMINATOR = "--"


class Token(str):
    """
    A token of a command line, tagged with the index of its raw token.
    """
    def __new__(cls, text, origin=0):
        self = super().__new__(cls, text)
        self.origin = origin
        return self

    def __repr__(self):
        return f"Token({str(self)!r}, origin={self.origin})"


def tokenize(line, /):
    """
    Split a line into raw tokens (quote-aware, quotes retained).

    >>> tokenize("copy 'my file' dest")
    [Token('copy', origin=0), Token("'my file'", origin=1), Token('dest', origin=2)]
    """
    if not isinstance(line, str):
        raise TypeError("tokenize() argument must be a string")
    return [Token(match.group(), index) for index, match in enumerate(_TOKEN.finditer(line))]


def looks_like_flag(token, /):
    """
    True for option-like tokens: a leading dash and at least one more character.
    """
    return len(token) > 1 and token.startswith("-")


def unquote(token, /):
    """
    Remove one pair of matching surrounding quotes, if any.
    """
    if len(token) > 1 and token[0] == token[-1] and token[0] in "\"'":
        return token[1:-1]
    return str(token)


def normalize(tokens, lookup=None, /):
    """
    Rewrite raw tokens: expand short clusters and split "=" assignments.

    Parameters
    - tokens: raw tokens, normally the output of tokenize().
    - lookup: callable mapping a flag to its declared Option (or None). Used to
      keep the value of a required-value option verbatim.

    Returns
    - list[Token], each keeping the origin of the raw token it came from.
    """
    normalized = []
    previous = None

    for index, token in enumerate(tokens):
        origin = getattr(token, "origin", index)
        option = lookup(previous) if lookup and previous is not None else None
        previous = token

        if token == TERMINATOR:
            normalized.extend(Token(rest, getattr(rest, "origin", index + offset)) for offset, rest in enumerate(tokens[index:]))
            break
        elif option is not None and option.required:
            normalized.append(Token(token, origin))
        elif len(token) > 1 and token[0] == "-" and token[1] != "-":
            flags, assigned, value = token.partition("=")
            normalized.extend(Token("-" + char, origin) for char in flags[1:])
            if assigned:
                normalized.append(Token(value, origin))
        elif token.startswith("--") and "=" in token:
            name, _, value = token.partition("=")
            normalized.append(Token(name, origin))
            normalized.append(Token(value, origin))
        else:
            normalized.append(Token(token, origin))

    return normalized


__all__ = (
    "Token",
    "TERMINATOR",
    "tokenize",
    "normalize",
    "unquote",
    "looks_like_flag",
)
