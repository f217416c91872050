"""
Burrow command layer: the shape every resolvable command has.

What this module provides
- Command: base class for command implementations. A subclass declares
  • params: ordered tuple of Param definitions (positional, declaration order binds),
  • options: tuple of Option definitions, or Unset when the command takes no options
    record at all (execute() then receives only params and the context),
  • execute(*params, [options,] context): the command body,
  • help(commands): renders help for the resolved command path (default: rich).
- command(...): turn a plain function into a Command instance.

Definitions are validated once, when the class is created: option names and flags
must be unique, and params/options must contain Param/Option records only.

Quick start
    from burrow import Command, Param, Option

    class Create(Command):
        \"\"\"Create a widget.\"\"\"
        params = (Param("name", type=str),)
        options = (Option("force", flag="f", toggle=True),)

        def execute(self, name, options, context):
            print(name, options["force"], context.args)
"""
import inspect

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .arguments import Param, Option
from .utils import *

console = Console()


def _check_definitions(cls):
    """
    Validate the declared params/options of a Command class (configuration errors).

    Raises
    - TypeError: when params/options are not sequences of Param/Option.
    - ValueError: on duplicate param names, option names or option flags.
    """
    if not all(isinstance(param, Param) for param in cls.params):
        raise TypeError(f"command {cls.__name__!r} 'params' must contain only params")
    if len({param.name for param in cls.params}) != len(cls.params):
        raise ValueError(f"command {cls.__name__!r} 'params' names must be unique")

    if cls.options is Unset:
        return
    if not all(isinstance(option, Option) for option in cls.options):
        raise TypeError(f"command {cls.__name__!r} 'options' must contain only options")
    if len({option.name for option in cls.options}) != len(cls.options):
        raise ValueError(f"command {cls.__name__!r} 'options' names must be unique")
    flags = [option.flag for option in cls.options if option.flag]
    if len(set(flags)) != len(flags):
        raise ValueError(f"command {cls.__name__!r} 'options' flags must be unique")


class Command:
    """
    Base class for commands found by the resolver.

    Subclasses override params/options and execute(); help() has a default
    rich renderer built from the declared definitions and the class docstring.
    """
    params = ()
    options = Unset

    def __init_subclass__(cls, **options):
        super().__init_subclass__(**options)
        cls.params = tuple(cls.params)
        if cls.options is not Unset:
            cls.options = tuple(cls.options)
        _check_definitions(cls)

    @property
    def required(self):
        """
        Number of params declared without a default.
        """
        return sum(param.required for param in self.params)

    @property
    def descr(self):
        """
        Short description taken from the class docstring (None when missing).
        """
        # own docstring only; inspect.getdoc would fall back to this base class
        return inspect.cleandoc(type(self).__doc__) if type(self).__doc__ else None

    def execute(self, *args):
        raise NotImplementedError(f"command {type(self).__name__!r} does not implement execute()")

    def help(self, commands):
        """
        Render usage, params and options for the resolved command path.

        Layout
        - usage line: "<commands> <param> [<param>] [options]"
        - description (class docstring), when present
        - params and options tables, when declared
        """
        usage = Text.assemble(("usage: ", "bold"), " ".join(commands))
        for param in self.params:
            usage.append(" " + (f"<{param.name}>" if param.required else f"[<{param.name}>]"))
        if self.options:
            usage.append(" [options]")

        console.print(usage)
        if self.descr:
            console.print()
            console.print(self.descr)

        if self.params:
            table = Table(title="params", title_justify="left", show_header=False, box=None, padding=(0, 2))
            for param in self.params:
                table.add_row(param.name, _typename(param.type), param.descr or "")
            console.print()
            console.print(table)

        if self.options:
            table = Table(title="options", title_justify="left", show_header=False, box=None, padding=(0, 2))
            for option in self.options:
                names = f"-{option.flag}, --{option.name}" if option.flag else f"    --{option.name}"
                kind = "toggle" if option.toggle else _typename(option.type)
                descr = option.descr or ""
                if option.required:
                    descr = f"{descr} (required)".strip()
                table.add_row(names, kind, descr)
            console.print()
            console.print(table)


def _typename(type, /):
    return {str: "string", float: "number", bool: "boolean"}.get(type, "")


def command(source=Unset, /, params=(), options=Unset, name=Unset):
    """
    Create a Command instance from a plain function, or return a decorator.

    Invocation modes
    - Direct: command(func, params=(...), options=(...))
    - Decorator:
        @command(params=(Param("name", type=str),))
        def create(name, context): ...

    The function receives exactly what Command.execute() receives. The class
    docstring of the generated command is the function docstring.
    """
    @rename("command")
    def wrapper(source, /):
        if not callable(source):
            raise TypeError("@command() must be applied to a callable")

        def execute(self, *args):
            return source(*args)

        cls = type(coalesce(name, getattr(source, "__name__", "command")), (Command,), {
            "__module__": getattr(source, "__module__", __name__),
            "__doc__": inspect.getdoc(source),
            "params": params,
            "options": options,
            "execute": execute,
        })
        return cls()

    return wrapper(source) if source is not Unset else wrapper


__all__ = (
    "Command",
    "command",
)
