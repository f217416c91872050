"""
Burrow entry point: resolve, bind and dispatch one command line.

    from burrow import CLI

    if __name__ == "__main__":
        CLI("tool", shell=True).run()

CLI(entry, root=Unset, registry=Unset, *, shell=False, fancy=False, colorful=False)
- entry: name of the program, first element of every command path.
- root: directory of the command tree. Computed once at construction; when Unset,
  the "cli" directory next to the running __main__ script.
- registry: any registry (see burrow.registry); defaults to FileSystemRegistry(root).
- shell/fancy/colorful: fault rendering. In shell mode faults are printed with rich
  to stderr and errors exit with status 1; otherwise errors are raised and warnings
  go through the warnings module.

parse(prompt=Unset, cwd=Unset)
- prompt: Unset (sys.argv[1:]), a shell-like string (shlex.split) or an iterable
  of strings used verbatim.
- returns what the command's execute() returns, or None when help was shown.

run(prompt=Unset, cwd=Unset)
- parse(), with every CommandException surfaced through trigger() using the
  runtime options above.
"""
import logging
import os
import shlex
import sys
from collections import deque
from collections.abc import Iterable

from .faults import CommandException, trigger
from .invocation import Invocation, dispatch
from .registry import FileSystemRegistry
from .resolver import resolve, locate
from .utils import *

logger = logging.getLogger(__name__)


def default_root():
    """
    Return the "cli" directory next to the running __main__ script.

    Falls back to sys.argv[0], then to the working directory, when __main__ has
    no file (interactive sessions).
    """
    main = sys.modules.get("__main__")
    script = getattr(main, "__file__", None) or (sys.argv[0] if sys.argv and sys.argv[0] else None)
    directory = os.path.dirname(os.path.abspath(script)) if script else os.getcwd()
    return os.path.join(directory, "cli")


def _tokenize(prompt):
    """
    Normalize a prompt into a list of tokens.

    Raises
    - TypeError: when prompt is not Unset/str/Iterable[str].
    """
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("parse() argument must be a string or an iterable of strings")


class CLI:
    """
    Command line front: Resolver → Registry → Binder → Dispatcher.

    Every call to parse()/run() is an independent run: it owns one resolver walk
    and one Invocation, and nothing is cached between runs.
    """

    def __init__(self, entry, /, root=Unset, registry=Unset, *, shell=False, fancy=False, colorful=False):
        if not isinstance(entry, str):
            raise TypeError("CLI 'entry' must be a string")
        elif not (entry := entry.strip()):
            raise ValueError("CLI 'entry' cannot be empty")

        self.entry = entry
        if registry is Unset:
            self.root = os.path.abspath(os.fspath(default_root() if root is Unset else root))
            registry = FileSystemRegistry(self.root)
        else:
            self.root = coalesce(root)
        self.registry = registry
        self.shell = bool(shell)
        self.fancy = bool(fancy)
        self.colorful = bool(colorful)

    def __repr__(self):
        return f"cli(entry={self.entry!r}, registry={self.registry!r}, shell={self.shell!r})"

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this CLI's runtime options (see faults.trigger).
        """
        trigger(fault, **options, tool=self, shell=self.shell, fancy=self.fancy, colorful=self.colorful)

    def parse(self, prompt=Unset, /, cwd=Unset):
        tokens = _tokenize(prompt)

        resolution = resolve(self.registry, self.entry, tokens)
        logger.debug("resolved %r to %s", " ".join(resolution.commands), "/".join(resolution.module))
        command = locate(self.registry, resolution)

        invocation = Invocation(command, resolution.commands, index=resolution.index, warn=self.trigger)
        if invocation.consume(deque(tokens[resolution.index:])):
            return None
        return dispatch(invocation, os.getcwd() if cwd is Unset else cwd)

    def run(self, prompt=Unset, /, cwd=Unset):
        try:
            return self.parse(prompt, cwd=cwd)
        except CommandException as exception:
            self.trigger(exception)


__all__ = (
    "CLI",
    "default_root",
)
