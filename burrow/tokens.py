"""
Token classification for the argv tail of a resolved command.

Rules, checked in order for each token:
1. exactly "-h", "-?" or "--help"  → HELP (payload: the token)
2. starts with "--"                → NAME (payload: the long name after "--")
3. starts with "-"                 → FLAGS (payload: the cluster after "-")
4. anything else                   → VALUE (payload: the token)

Classification never fails: unknown names and flags are the binder's concern.
"""
from enum import Enum

HELP_TOKENS = frozenset({"-h", "-?", "--help"})


class TokenKind(Enum):
    HELP = "help"
    NAME = "name"
    FLAGS = "flags"
    VALUE = "value"


def classify(token, /):
    """
    Return (TokenKind, payload) for a single raw token.
    """
    if token in HELP_TOKENS:
        return TokenKind.HELP, token
    if token.startswith("--"):
        return TokenKind.NAME, token[2:]
    if token.startswith("-"):
        return TokenKind.FLAGS, token[1:]
    return TokenKind.VALUE, token


__all__ = (
    "HELP_TOKENS",
    "TokenKind",
    "classify",
)
