"""
Command registries: where the resolver finds commands.

A command tree is addressed by module paths: tuples of names from the tree root.
The leaf module "create" at the root is ("create",); the default module of the
"create" directory is ("create", "default"); the root default is ("default",).

Every registry answers three questions:
- exists(module): is there a command module at this path?
- isdir(directory): is there a directory at this path (even without a default)?
- load(module): return the Command instance living at this path.

Backends
- FileSystemRegistry(root): a directory of Python modules. "<root>/create.py",
  "<root>/create/default.py", ... Each module must define exactly one command:
  a Command subclass (instantiated without arguments) or a Command instance.
  A base class defined in the module and refined by its command is skipped.
- MappingRegistry(mapping): an in-memory mapping from module paths (tuples or
  "a/b" strings) to Command instances or subclasses; directories are implied
  by key prefixes.
"""
import importlib.util
import inspect
import logging
import os.path
import re
from collections.abc import Mapping

from .commands import Command

logger = logging.getLogger(__name__)

DEFAULT = "default"
"""Name of the module that stands for a directory."""


def _instantiate(object, where):
    """
    Turn a registry entry (Command subclass or instance) into a Command instance.
    """
    if isinstance(object, Command):
        return object
    if isinstance(object, type) and issubclass(object, Command) and object is not Command:
        return object()
    raise TypeError(f"registry entry {where!r} must be a command or a command class")


class FileSystemRegistry:
    """
    Registry backed by a directory of Python command modules.

    Parameters
    - root: str | os.PathLike, the directory holding the root "default.py".
    - suffix: file suffix of command modules (".py").

    Loading
    - Modules are imported from their file with importlib under a private name
      derived from the module path ("burrow.tree.create.default"), so command
      modules never need to be importable packages.
    """

    def __init__(self, root, /, suffix=".py"):
        self.root = os.path.abspath(os.fspath(root))
        self.suffix = suffix

    def __repr__(self):
        return f"file-system-registry(root={self.root!r})"

    def _filename(self, module):
        return os.path.join(self.root, *module) + self.suffix

    def exists(self, module, /):
        return os.path.isfile(self._filename(module))

    def isdir(self, directory, /):
        return os.path.isdir(os.path.join(self.root, *directory))

    def load(self, module, /):
        filename = self._filename(module)
        name = "burrow.tree." + ".".join(re.sub(r"\W", "_", segment) for segment in module)

        spec = importlib.util.spec_from_file_location(name, filename)
        if spec is None or spec.loader is None:
            raise ImportError(f"unable to load command module {filename!r}")
        source = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(source)
        logger.debug("loaded command module %s from %s", name, filename)

        # Only commands defined in this very module count; imported ones are ignored.
        candidates = [
            object for _, object in inspect.getmembers(source)
            if (
                (isinstance(object, type) and issubclass(object, Command) and object is not Command) or
                isinstance(object, Command)
            ) and getattr(object if isinstance(object, type) else type(object), "__module__", None) == name
        ]
        # a shared base refined by another command of the same module is not a command itself
        concrete = [object if isinstance(object, type) else type(object) for object in candidates]
        candidates = [
            object for object in candidates
            if not (isinstance(object, type) and any(
                other is not object and issubclass(other, object) for other in concrete
            ))
        ]
        if len(candidates) != 1:
            raise TypeError(f"command module {filename!r} must define exactly one command, found {len(candidates)}")
        return _instantiate(candidates[0], filename)


class MappingRegistry:
    """
    Registry backed by an in-memory mapping.

    Keys are module paths, either tuples ("create", "default") or slash-separated
    strings "create/default". Values are Command instances or subclasses.
    """

    def __init__(self, mapping, /):
        if not isinstance(mapping, Mapping):
            raise TypeError("MappingRegistry() argument must be a mapping")
        self._commands = {}
        for key, object in mapping.items():
            module = tuple(key.split("/")) if isinstance(key, str) else tuple(key)
            if not module or not all(isinstance(segment, str) and segment for segment in module):
                raise ValueError(f"registry key {key!r} must be a non-empty module path")
            self._commands[module] = object
        self._directories = {
            module[:index] for module in self._commands for index in range(1, len(module))
        }

    def __repr__(self):
        return f"mapping-registry(modules={sorted('/'.join(module) for module in self._commands)!r})"

    def exists(self, module, /):
        return tuple(module) in self._commands

    def isdir(self, directory, /):
        return tuple(directory) in self._directories

    def load(self, module, /):
        return _instantiate(self._commands[tuple(module)], "/".join(module))


__all__ = (
    "DEFAULT",
    "FileSystemRegistry",
    "MappingRegistry",
)
