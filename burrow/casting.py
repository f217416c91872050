r"""
Permissive coercion of raw command-line tokens into typed values.

Every place where a raw token becomes a typed value (positional parameters and
option values alike) goes through cast(token, type). The recognized types are:

- str   (String)  → the token, unchanged.
- float (Number)  → number(token).
- bool  (Boolean) → "false" in any casing is False; otherwise the token is parsed
                    as a number: not-a-number is True, any other number is its truth
                    value (0 → False, 2 → True).
- Unset (untyped) → None, whatever the token says.

Permissive coercion policy
- A Number token that is not well-formed is NOT rejected: it becomes float("nan")
  and is handed to the command as-is. Boolean parsing leans on the same numeric
  parse, so "yes" is True and "0" is False.
- Callers may use isnan(value) to notice the malformed case; the binder does so to
  raise an UncastableValueWarning, while the value itself still passes through.

Numeric grammar accepted by number(token)
- surrounding whitespace is ignored; an empty token is 0.0
- decimal forms with optional sign, fraction and exponent ("-1.5e3", ".5", "3.")
- integer literals with 0x / 0o / 0b prefixes (unsigned, case-insensitive)
- "Infinity" with an optional sign
- anything else is nan (including "inf", "nan", "1_000")
"""
import math
import re

from .utils import Unset

_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_PREFIXED = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
_INFINITY = re.compile(r"[+-]?Infinity")

TYPES = (str, float, bool)
"""Declarable value types (plus Unset for untyped definitions)."""


def number(token, /):
    """
    Parse a token as a number, following the permissive coercion policy.

    Returns
    - float: the parsed value, or nan when the token is not a number.
    """
    token = token.strip()

    if not token:
        return 0.0
    if _DECIMAL.fullmatch(token):
        return float(token)
    if _PREFIXED.fullmatch(token):
        return float(int(token, 0))
    if _INFINITY.fullmatch(token):
        return -math.inf if token.startswith("-") else math.inf
    return math.nan


def boolean(token, /):
    """
    Parse a token as a boolean: "false" (any casing) → False, else numeric truth.
    """
    if token.lower() == "false":
        return False
    if math.isnan(value := number(token)):
        return True
    return bool(value)


def cast(token, type=Unset, /):
    """
    Coerce a raw token according to a declared type (str, float, bool or Unset).

    Untyped (and unrecognized) types coerce to None regardless of the token.
    """
    if type is str:
        return token
    if type is float:
        return number(token)
    if type is bool:
        return boolean(token)
    return None


def malformed(token, type=Unset, /):
    """
    Tell whether a token would be silently coerced to nan for the given type.

    Only Number definitions can be malformed; Boolean parsing maps nan to True by rule.
    """
    return type is float and math.isnan(number(token))


__all__ = (
    "TYPES",
    "number",
    "boolean",
    "cast",
    "malformed",
)
