"""
Binding and dispatch: from the argv tail of a resolved command to execute().

Invocation is the working state of one parse. It is created for a command and its
command path, consumes a deque of tokens (see consume()), and is finally handed to
dispatch(), which validates completeness and calls the command.

State
- args:     bound positional values, in declaration order (append-only).
- options:  option name → current value, seeded with False for toggles and the
            declared default otherwise (Unset when the command takes no options).
- pending:  names of required options not supplied yet, in declaration order.
- params:   queue of params still waiting for a positional token.
- extras:   positional tokens beyond the declared params, kept verbatim.

Binding rules
- "--name": the option must exist. Toggles become True; value options consume the
  next token, which must exist and must not start with '-'.
- "-abc": every character must be a known flag. All but the last must be toggles;
  the last may be a value option, consuming the next token like "--name" does.
- anything else fills the next pending param (coerced) or goes to extras.
- "-h", "-?" and "--help" call command.help(commands) and stop: no dispatch.
Supplying a required option by name or by flag satisfies it.

Faults are raised as CommandException subclasses; coercion warnings go through the
warn callable given to the Invocation (burrow.faults.trigger by default).
"""
import difflib
import logging
from collections import deque, namedtuple

from .casting import cast, malformed
from .faults import *
from .tokens import TokenKind, classify
from .utils import *

logger = logging.getLogger(__name__)


class Context(namedtuple("Context", ("cwd", "args", "commands"))):
    """
    Invocation context handed to execute() as its last argument.

    Fields
    - cwd: working directory of the run.
    - args: extra positional tokens beyond the declared params (verbatim strings).
    - commands: command path from the entry name to the resolved command.
    """
    __slots__ = ()


class Invocation:
    """
    Working state of a single parse, owned by one run and never shared.

    Parameters
    - command: the resolved Command.
    - commands: the command path (used for help and hints).
    - index: number of argv tokens consumed by resolution; token positions in
      messages are counted from the start of argv.
    - warn: callable receiving non-fatal faults (defaults to faults.trigger).
    """

    def __init__(self, command, commands=(), /, *, index=0, warn=trigger):
        self.command = command
        self.commands = tuple(commands)
        self.args = []
        self.extras = []
        self.options = Unset if command.options is Unset else {}
        self.pending = {}
        self.params = deque(command.params)

        self._definitions = {}
        self._flags = {}
        self._index = index
        self._warn = warn

        for definition in coalesce(command.options, ()):
            self._definitions[definition.name] = definition
            if definition.flag:
                self._flags[definition.flag] = definition.name
            if definition.required:
                self.pending[definition.name] = definition
            self.options[definition.name] = definition.seed

    @property
    def route(self):
        return " ".join(self.commands)

    def consume(self, tokens, /):
        """
        Consume every token of the deque, left to right.

        Returns
        - True when help was requested (help already rendered, do not dispatch).
        - False when all tokens were bound.
        """
        while tokens:
            token = tokens.popleft()
            self._index += 1

            kind, payload = classify(token)
            match kind:
                case TokenKind.HELP:
                    logger.debug("help requested for %r", self.route)
                    self.command.help(self.commands)
                    return True
                case TokenKind.NAME:
                    self._consume_name(payload, tokens)
                case TokenKind.FLAGS:
                    self._consume_flags(payload, tokens)
                case TokenKind.VALUE:
                    self._consume_argument(payload)
        return False

    def _satisfy(self, name):
        self.pending.pop(name, None)

    def _consume_name(self, name, tokens):
        try:
            definition = self._definitions[name]
        except KeyError:
            suggestions = difflib.get_close_matches(name, self._definitions.keys(), 5)
            try:
                hint = "did you mean '--%s'? you can also run '%s --help' to see all options" % (
                    suggestions[0], self.route
                )
            except IndexError:
                hint = "try '%s --help' to see all available options" % self.route
            raise UnknownOptionNameError(
                "unknown option '--%s' at %s position" % (name, ordinal(self._index)),
                title="unknown option",
                code=FaultCode.UNKNOWN_OPTION_NAME,
                input=name,
                index=self._index,
                suggestions=suggestions,
                hint=hint,
                docs=getdoc(FaultCode.UNKNOWN_OPTION_NAME),
            ) from None

        self._satisfy(name)
        if definition.toggle:
            self.options[name] = True
        else:
            self._consume_value(definition, "--" + name, tokens)

    def _consume_flags(self, flags, tokens):
        for position, flag in enumerate(flags):
            try:
                name = self._flags[flag]
            except KeyError:
                suggestions = difflib.get_close_matches(flag, self._flags.keys(), 5)
                try:
                    hint = "did you mean '-%s'? you can also run '%s --help' to see all flags" % (
                        suggestions[0], self.route
                    )
                except IndexError:
                    hint = "try '%s --help' to see all available flags" % self.route
                raise UnknownOptionFlagError(
                    "unknown option flag '%s' in '-%s' at %s position" % (flag, flags, ordinal(self._index)),
                    title="unknown flag",
                    code=FaultCode.UNKNOWN_OPTION_FLAG,
                    input=flag,
                    cluster=flags,
                    index=self._index,
                    suggestions=suggestions,
                    hint=hint,
                    docs=getdoc(FaultCode.UNKNOWN_OPTION_FLAG),
                ) from None

            definition = self._definitions[name]
            self._satisfy(name)

            if definition.toggle:
                self.options[name] = True
            elif position != len(flags) - 1:
                raise NonTerminalFlagTakesValueError(
                    "only the last flag in '-%s' at %s position may take a value, but '%s' does" % (
                        flags, ordinal(self._index), flag
                    ),
                    title="flag takes a value",
                    code=FaultCode.NON_TERMINAL_FLAG_TAKES_VALUE,
                    input=flag,
                    cluster=flags,
                    index=self._index,
                    hint="move '%s' to the end of the cluster or pass it alone: -%s <value>" % (flag, flag),
                    docs=getdoc(FaultCode.NON_TERMINAL_FLAG_TAKES_VALUE),
                )
            else:
                self._consume_value(definition, "-" + flag, tokens)

    def _consume_value(self, definition, input, tokens):
        try:
            token = tokens.popleft()
        except IndexError:
            raise MissingOptionValueError(
                "expecting a value for option %r at %s position" % (input, ordinal(self._index)),
                title="missing option value",
                code=FaultCode.MISSING_OPTION_VALUE,
                input=input,
                name=definition.name,
                index=self._index,
                hint="pass a value after the option (for example: %s <value>)" % input,
                docs=getdoc(FaultCode.MISSING_OPTION_VALUE),
            ) from None

        self._index += 1
        if token.startswith("-"):
            raise OptionValueLooksLikeOptionError(
                "expecting a value instead of an option or toggle %r for option %r at %s position" % (
                    token, input, ordinal(self._index)
                ),
                title="option value looks like an option",
                code=FaultCode.OPTION_VALUE_LOOKS_LIKE_OPTION,
                input=input,
                name=definition.name,
                value=token,
                index=self._index,
                hint="values cannot start with '-'; pass a value right after %s" % input,
                docs=getdoc(FaultCode.OPTION_VALUE_LOOKS_LIKE_OPTION),
            )

        self.options[definition.name] = self._cast(token, definition.type, "option %r" % input)

    def _consume_argument(self, token):
        if not self.params:
            self.extras.append(token)
            return
        param = self.params.popleft()
        self.args.append(self._cast(token, param.type, "param %r" % param.name))

    def _cast(self, token, type, subject):
        # permissive coercion: a malformed number is reported, never rejected
        if malformed(token, type):
            self._warn(UncastableValueWarning(
                "%s at %s position received %r, which is not a number" % (subject, ordinal(self._index), token),
                title="value is not a number",
                code=FaultCode.UNCASTABLE_VALUE,
                value=token,
                index=self._index,
                hint="the command receives nan; pass a numeric value instead",
                docs=getdoc(FaultCode.UNCASTABLE_VALUE),
            ))
        return cast(token, type)


def dispatch(invocation, cwd, /):
    """
    Validate a fully consumed invocation and call the command's execute().

    Steps
    - at least command.required positional values must be bound;
    - no required option may still be pending (all missing names are reported);
    - unfilled params receive their declared default (None when undeclared);
    - execute(*params, [options,] Context(cwd, extras, commands)) is called, the
      options record being omitted when the command declares no options.

    Returns
    - whatever execute() returns.
    """
    command = invocation.command

    if (got := len(invocation.args)) < (expected := command.required):
        raise InsufficientPositionalArgumentsError(
            "expecting %d or more params but got %d instead" % (expected, got),
            title="not enough params",
            code=FaultCode.INSUFFICIENT_POSITIONAL_ARGUMENTS,
            expected=expected,
            got=got,
            hint="run '%s --help' to see the expected params" % invocation.route,
            docs=getdoc(FaultCode.INSUFFICIENT_POSITIONAL_ARGUMENTS),
        )

    if invocation.pending:
        names = tuple(invocation.pending)
        raise MissingRequiredOptionsError(
            "missing required option(s) %s" % ", ".join("'--%s'" % name for name in names),
            title="missing required options",
            code=FaultCode.MISSING_REQUIRED_OPTIONS,
            names=names,
            hint="pass %s; run '%s --help' to see all options" % (
                " ".join("--%s" % name for name in names), invocation.route
            ),
            docs=getdoc(FaultCode.MISSING_REQUIRED_OPTIONS),
        )

    while invocation.params:
        invocation.args.append(coalesce(invocation.params.popleft().default))

    context = Context(cwd, invocation.extras, invocation.commands)
    arguments = [*invocation.args]
    if invocation.options is not Unset:
        arguments.append(invocation.options)
    arguments.append(context)

    logger.debug("dispatching %r with %d params", invocation.route, len(invocation.args))
    return command.execute(*arguments)


__all__ = (
    "Context",
    "Invocation",
    "dispatch",
)
