"""
Commandeer utilities (shared building blocks)

Scope
- Small helpers shared by the tokenizer, the option/argument specs and the
  command tree. They are public, but mainly exist to keep the higher layers
  short and consistent.

Overview
- UnsetType / Unset
  • Sentinel for "not provided" where None is itself a meaningful value
    (an option default of None, a description cleared on purpose).
  • Falsey, printable as "Unset", one instance per process, not subclassable,
    preserved by copy and pickle.

- coalesce(value, default=None)
  • Turn Unset into a concrete default; every other value (None included) is kept.

- @rename("name")
  • Give generated functions a readable __name__/__qualname__.

- mirror("attr")
  • Read-only property over a private field (self._attr). Containers are handed
    out as fresh copies, so callers cannot reach into a node's declarations.

- Introspective
  • Metaclass adding __typename__, mirrored properties for every name listed
    in __introspectable__ and a compact __repr__/__rich_repr__ pair.

- camelcase(text)
  • "option-name" → "optionName", the key under which option values are stored.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
    >>> camelcase("extra-large-name")
    'extraLargeName'
"""
import functools
import re
from collections.abc import Mapping, Sequence, Set
from typing import final


@final
class UnsetType:
    """
    Type of the Unset sentinel.

    bool(Unset) is False, yet Unset is neither None nor 0. UnsetType() always
    returns the module-level instance.
    """
    __slots__ = ()

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init_subclass__(cls, **options):
        raise TypeError(f"type {UnsetType.__name__!r} is not an acceptable base type")

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __reduce__(self):
        # copy and pickle resolve the module-level name
        return "Unset"


Unset = UnsetType()
"""
Sentinel for "not provided". Falsey, distinct from None; materialize it with
coalesce(value, default).
"""


def coalesce(object, default=None, /):
    """
    Return object, or default when object is the Unset sentinel.

    Falsey values (None, 0, "", []) are returned untouched; only Unset is
    replaced.

    Examples
    - coalesce("size", "drink") -> "size"
    - coalesce(Unset, "drink")  -> "drink"
    - coalesce(None, "drink")   -> None
    """
    return default if object is Unset else object


def rename(name, /):
    """
    Decorator assigning __name__ and __qualname__ to the decorated function.
    """
    if not isinstance(name, str):
        raise TypeError("rename() argument must be a string")

    def decorate(function):
        if not callable(function):
            raise TypeError("@rename() must be applied to a callable")
        function.__name__ = function.__qualname__ = name
        return function

    return decorate


def _detach(object):
    match object:
        case str() | bytes():
            return object
        case Mapping():
            return {key: _detach(value) for key, value in object.items()}
        case Set():
            return {_detach(value) for value in object}
        case Sequence():
            return [_detach(value) for value in object]
        case _:
            return object


def mirror(name, /):
    """
    Build a read-only property exposing the private field "_{name}".

    Container values are returned as detached copies so that a caller holding
    node.options cannot append to the node's declarations.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")
    attribute = "_" + name

    @rename(name)
    def getter(self):
        return _detach(getattr(self, attribute))

    return property(getter, doc=f"Read-only copy of {attribute}.")


class Introspective(type):
    """
    Metaclass for the declarative objects of the package (options, argument
    specs, command nodes).

    Responsibilities
    - __typename__: class name hyphenated on camel case ("ParseConfig" →
      "parse-config"); used in error messages and reprs.
    - One mirror() property per name in __introspectable__.
    - __repr__ and __rich_repr__ built from __displayable__ when set, else
      from __introspectable__. A class body defining either keeps its own.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(cls, name, bases, namespace, **options)
        self.__typename__ = re.sub(r"\B([A-Z])", r"-\1", name).lower()

        for field in namespace.get("__introspectable__", ()):
            setattr(self, field, mirror(field))

        if "__rich_repr__" not in namespace:
            self.__rich_repr__ = Introspective._rich_repr
        if "__repr__" not in namespace:
            self.__repr__ = Introspective._repr
        return self

    @staticmethod
    @rename("__rich_repr__")
    def _rich_repr(self):
        for field in coalesce(type(self).__displayable__, type(self).__introspectable__):
            yield field, getattr(self, field)

    @staticmethod
    @rename("__repr__")
    def _repr(self):
        fields = ", ".join(f"{field}={value!r}" for field, value in self.__rich_repr__())
        return f"{type(self).__typename__}({fields})"


@functools.cache
def camelcase(text, /):
    """
    Camel-case a hyphenated word: "extra-large-name" → "extraLargeName".

    Empty fragments (doubled or trailing hyphens) are dropped.
    """
    if not isinstance(text, str):
        raise TypeError("camelcase() argument must be a string")
    head, *tail = text.split("-")
    return head + "".join(word[:1].upper() + word[1:] for word in tail)


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "camelcase",

    # Types
    "UnsetType",
    "Introspective",

    # Constants
    "Unset",
)
