"""
Commandeer: a recursive command parser and dispatcher for free-text lines
(chat messages, interactive shells).

Submodules
- tokens: quote-aware tokenizer and flag normalizer.
- arguments: Option and Argument declarations.
- parsing: the option pass shared by every node.
- rendering: help text as rich Text.
- commands: the Command tree (declaration, dispatch, help, loading).
- faults: error and warning types.
"""
__title__ = 'commandeer'
__author__ = 'The Commandeer Developers'
__license__ = 'MIT'
__version__ = "0.0.0"

from . import arguments, commands, faults, tokens
from .arguments import *
from .commands import *
from .faults import *
from .tokens import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

version_info = VersionInfo(*map(int, __version__.split(".")), "final", 0, "")

__all__ = (
    "__title__",
    "__author__",
    "__license__",
    "__version__",
    "version_info",
    *arguments.__all__,
    *commands.__all__,
    *faults.__all__,
    *tokens.__all__,
)
