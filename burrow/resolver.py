"""
Command resolution: greedy longest-match walk over a directory-shaped command tree.

resolve(registry, entry, argv) walks argv from its first token:
- a token that is not a valid command name (word segments joined by single hyphens)
  stops the walk; it is the first argument of the command found so far.
- otherwise the walk descends into the token and probes, in this order:
    1. the leaf module "<token>" in the current directory,
    2. the "default" module of the "<token>" directory.
  The first one found is recorded (module, command path, argument index) and the
  walk continues with the next token.
- when neither exists, the walk stops unless a "<token>" directory exists; such a
  directory only groups deeper commands, so the walk carries on inside it without
  recording anything, and its name never joins the command path.

The result is whatever was recorded last, starting from the root default module,
the command path (entry,) and argument index 0. There is no backtracking, and the
walk is deterministic for identical registry/entry/argv.
"""
import logging
import re
from collections import namedtuple

from .faults import CommandNotFoundError, FaultCode, getdoc
from .registry import DEFAULT

logger = logging.getLogger(__name__)

COMMAND_NAME = re.compile(r"\w+(?:-\w+)*", re.ASCII)


class Resolution(namedtuple("Resolution", ("module", "commands", "index"))):
    """
    Outcome of a resolver walk.

    Fields
    - module: module path of the resolved command, e.g. ("create", "default").
    - commands: command path from the entry name to the resolved command.
    - index: position in argv where the command's own arguments start.
    """
    __slots__ = ()


def resolve(registry, entry, argv, /):
    """
    Find the deepest command matching the leading tokens of argv.

    Parameters
    - registry: object with exists(module) / isdir(directory) (see burrow.registry).
    - entry: name of the entry command; first element of the command path.
    - argv: sequence of tokens after the program name.

    Returns
    - Resolution(module, commands, index)
    """
    directory = ()
    module = (DEFAULT,)
    commands = [entry]
    index = 0

    for position, token in enumerate(argv):
        if not COMMAND_NAME.fullmatch(token):
            break

        directory += (token,)
        for candidate in (directory, directory + (DEFAULT,)):
            if registry.exists(candidate):
                module = candidate
                commands.append(token)
                index = position + 1
                logger.debug("resolved %r to module %s", token, "/".join(candidate))
                break
        else:
            if not registry.isdir(directory):
                break
            logger.debug("descending into %s without a default module", "/".join(directory))

    return Resolution(module, tuple(commands), index)


def locate(registry, resolution, /):
    """
    Load the command behind a resolution.

    Raises
    - CommandNotFoundError: when no module exists at the resolved path (only possible
      when the tree has no root default module and no token matched).
    """
    if not registry.exists(resolution.module):
        route = " ".join(resolution.commands)
        raise CommandNotFoundError(
            "no command found for %r" % route,
            title="command not found",
            code=FaultCode.COMMAND_NOT_FOUND,
            module=resolution.module,
            commands=resolution.commands,
            hint="check the command name or add a %r module to the command tree" % DEFAULT,
            docs=getdoc(FaultCode.COMMAND_NOT_FOUND),
        )
    return registry.load(resolution.module)


__all__ = (
    "COMMAND_NAME",
    "Resolution",
    "resolve",
    "locate",
)
