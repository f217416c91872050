r"""
Burrow argument definitions.

Overview
- Param: positional, value-bearing parameter. Bound in declaration order; a param
  without a default is required.
- Option: named option addressed as --name or through a one-character flag (-n).
  Either a toggle (presence-only, starts as False) or a value option (consumes the
  next token, starts as its default).

Both are plain immutable records: every field is exposed as a read-only property
declared in __introspectable__, and instances are sealed after construction.

Metadata (sanitized on construction)
- Shared
  • name: non-empty string without whitespace, not starting with '-'.
  • type: str (String), float (Number), bool (Boolean) or Unset (untyped).
  • default: any value; for Param, Unset means "required".
  • descr: Unset | str (short help), non-empty when provided.
- Option only
  • flag: Unset | one character, neither '-' nor whitespace.
  • required: bool.
  • toggle: bool (presence-only; type and default are ignored for the record seed).

Quick example:
    >>> from burrow.arguments import Param, Option
    >>> Param("name", type=str)
    param(name='name', type=<class 'str'>, default=Unset, descr=None)
    >>> Option("force", flag="f", toggle=True).toggle
    True
"""
import functools
import operator
import re

from .casting import TYPES
from .utils import *


class DefinitionType(type):
    """
    Metaclass that turns definition classes into sealed, introspectable records.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens).
    - Expose every name listed in __introspectable__ as a read-only property
      mirroring the private "_{name}" field.
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics.
    - Forbid attribute assignment on instances once construction is over.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        @rename("__setattr__")
        def __setattr__(self, name, value):
            if getattr(self, "_sealed", False):
                raise AttributeError(f"{type(self).__typename__} is read-only")
            object.__setattr__(self, name, value)
        self.__setattr__ = __setattr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the fields shared by Param and Option.

    Raises
    - TypeError: when name/type/descr have the wrong type.
    - ValueError: when name/descr are malformed strings.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not name or re.search(r"\s", name) or name.startswith("-"):
        raise ValueError(f"{cls.__typename__} 'name' must be a non-empty word without leading '-'")

    if metadata["type"] is not Unset and metadata["type"] not in TYPES:
        raise TypeError(f"{cls.__typename__} 'type' must be one of str, float, bool (or left unset)")

    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)


def _sanitize_option_metadata(cls, metadata, /):
    """
    Internal: validate the flag shorthand of an Option.
    """
    if not isinstance(flag := metadata["flag"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'flag' must be a string")
    elif isinstance(flag, str) and (len(flag) != 1 or flag == "-" or flag.isspace()):
        raise ValueError(f"{cls.__typename__} 'flag' must be a single character other than '-'")
    metadata["flag"] = coalesce(flag)


class Param(metaclass=DefinitionType):
    """
    Positional parameter definition.

    Positional tokens fill params in declaration order, coerced per 'type'.
    Unfilled params receive their 'default' at dispatch; a param declared
    without a default is required and counts towards Command.required.
    """

    __introspectable__ = (
        "name",
        "type",
        "default",
        "descr",
    )

    def __init__(self, name, /, type=Unset, default=Unset, descr=Unset):
        metadata = {
            "name": name,
            "type": type,
            "default": default,
            "descr": descr,
        }
        _sanitize_metadata(Param, metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._sealed = True

    @property
    def required(self):
        """
        True when no default was declared.
        """
        return self._default is Unset


class Option(metaclass=DefinitionType):
    """
    Named option definition.

    - toggle=True: presence-only. Seeded False, set True by --name or its flag.
    - toggle=False: value option. Seeded with 'default', replaced by the coerced
      token that follows --name (or that follows a cluster ending with its flag).
    - required=True: must be supplied (by name or flag) before dispatch.
    """

    __introspectable__ = (
        "name",
        "flag",
        "required",
        "toggle",
        "type",
        "default",
        "descr",
    )

    def __init__(self, name, /, flag=Unset, required=False, toggle=False, default=None, type=Unset, descr=Unset):
        metadata = {
            "name": name,
            "flag": flag,
            "required": bool(required),
            "toggle": bool(toggle),
            "type": type,
            "default": default,
            "descr": descr,
        }
        _sanitize_metadata(Option, metadata)
        _sanitize_option_metadata(Option, metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._sealed = True

    @property
    def seed(self):
        """
        Initial value of this option in an options record.
        """
        return False if self._toggle else self._default


__all__ = (
    "Param",
    "Option",
)

# Not part of the public API.
del DefinitionType
