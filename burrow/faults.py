"""
Burrow faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues
  (errors and warnings), grouped by domain (routing, options, positionals, coercion).
- CommandException / CommandWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: every message that relates to a token names its ordinal
  position in the command line (“at third position”).
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.

Integration
- The binder and dispatcher build faults with title/code/hint and the fault details
  (input, index, names, expected/got, ...) and hand them to the CLI trigger.
- In non-shell mode exceptions are raised and warnings go through warnings.warn;
  in shell mode both are rendered via rich on stderr, and errors exit with status 1.
"""
import copy
import inspect
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    Stable numeric identifiers of every fault burrow raises or warns about.

    11xxx are errors (1110x resolution, 1111x options, 1112x params) and 12xxx
    are warnings. Hosts relabel them with a __codes__ mapping in __main__.
    """
    # --- resolution ---
    COMMAND_NOT_FOUND                 = 11101

    # --- options ---
    UNKNOWN_OPTION_NAME               = 11111
    UNKNOWN_OPTION_FLAG               = 11112
    MISSING_OPTION_VALUE              = 11113
    OPTION_VALUE_LOOKS_LIKE_OPTION    = 11114
    NON_TERMINAL_FLAG_TAKES_VALUE     = 11115
    MISSING_REQUIRED_OPTIONS          = 11116

    # --- params ---
    INSUFFICIENT_POSITIONAL_ARGUMENTS = 11121

    # --- coercion warnings ---
    UNCASTABLE_VALUE                  = 12111

    def normalize(self):
        """
        Label shown in fault headers: __main__.__codes__[self], else the number.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _prog(options):
    """
    Program label for headers: __main__.__prog__, else the tool entry name.
    """
    return getattr(__import__("__main__"), "__prog__", getattr(options.get("tool"), "entry", "burrow"))


class _Renderable:
    """
    Shared rich rendering for errors and warnings.

    Subclasses pick their palette through __palette__ and the keys used for
    title/message styles.
    """
    __palette__ = {}
    __title_style__ = "title"
    __message_style__ = "message"

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, type(self).__palette__ | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        code = self.options.get("code")
        header = Text.assemble(
            "[ ",
            text(_prog(self.options), styler("prog-name")),
            " — ",
            text(code.normalize() if isinstance(code, FaultCode) else "", styler("code")),
            " | ",
            text(str(self.options.get("title", "")).title(), styler(type(self).__title_style__)),
            " ]"
        )
        message = text(self.message, styler(type(self).__message_style__))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options.get("hint", ""), styler("hint")))

        if fancy:
            try:
                width = int((console.width - 4) * self.options["ratio"])
            except KeyError:
                width = None
            return Panel(Group(message, hint), title=header, title_align="left", width=width)

        return Group(header, message, hint)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class CommandException(_Renderable, Exception):
    __palette__ = {
        "prog-name": "bold #E6E6F0",
        "code": "bold #00E5FF",
        "error-title": "bold #FF4DA6",
        "error-message": "#C8C8D0",
        "hint-arrow": "dim #9CE19C",
        "hint": "italic #9CE19C",
    }
    __title_style__ = "error-title"
    __message_style__ = "error-message"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)


class CommandNotFoundError(CommandException): ...
class UnknownOptionNameError(CommandException): ...
class UnknownOptionFlagError(CommandException): ...
class MissingOptionValueError(CommandException): ...
class OptionValueLooksLikeOptionError(CommandException): ...
class NonTerminalFlagTakesValueError(CommandException): ...
class InsufficientPositionalArgumentsError(CommandException): ...
class MissingRequiredOptionsError(CommandException): ...


class CommandWarning(_Renderable, ABC, Warning):
    # warnings share the layout of errors with an amber code and softer tones
    __palette__ = {
        "prog-name": "bold #E6E6F0",
        "code": "bold #FFB400",
        "warning-title": "bold #FFC2E0",
        "warning-message": "#D6D6DE",
        "hint-arrow": "dim #B8EFAF",
        "hint": "italic #B8EFAF",
    }
    __title_style__ = "warning-title"
    __message_style__ = "warning-message"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message)

    def __trigger__(self):
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)


class UncastableValueWarning(CommandWarning): ...


def trigger(fault, /, **options):
    """
    Surface a fault after merging runtime options into a copy of it.

    The copy decides how to surface itself: errors raise (or print and exit in
    shell mode), warnings warn (or print in shell mode).

    Raises
    - TypeError: when fault does not implement __trigger__ and __replace__.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    Return the host documentation for a fault code (__main__.__docs__), or None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "CommandException",
    "CommandNotFoundError",
    "UnknownOptionNameError",
    "UnknownOptionFlagError",
    "MissingOptionValueError",
    "OptionValueLooksLikeOptionError",
    "NonTerminalFlagTakesValueError",
    "InsufficientPositionalArgumentsError",
    "MissingRequiredOptionsError",
    "CommandWarning",
    "UncastableValueWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
