"""
Argship faults (parse errors) and their rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing parse failure,
  grouped by domain so logs and searches stay predictable.
- ParserError: base type carrying a message plus read-only options, able to
  render itself through rich in a short, lowercased, actionable way.
- One subclass per failure kind, each exposing the structured data a caller
  needs to build its own message (token, names, option, ...).
- ConversionError: raised by value kinds when a raw token cannot be converted;
  the parser turns it into a TypeMismatchError.

Integration
- Parsers raise faults; they never print or exit. The caller decides how to
  show them (e.g. Console(stderr=True).print(error)) and which status to use.
- The host may remap codes with a __codes__ mapping and restyle the output with
  a __styles__ mapping, both looked up on __main__.
"""
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes used by the parser (stable identifiers).

    grouping
    - options (1111x): UNKNOWN_OPTION, EXPECTED_VALUE
    - positionals and routing (1112x): UNEXPECTED_ARGUMENT, EXPECTED_ARGUMENTS
    - conversion (1113x): TYPE_MISMATCH
    """
    # --- option errors ---
    UNKNOWN_OPTION      = 11111
    EXPECTED_VALUE      = 11112

    # --- positional/routing errors ---
    UNEXPECTED_ARGUMENT = 11121
    EXPECTED_ARGUMENTS  = 11122

    # --- conversion errors ---
    TYPE_MISMATCH       = 11131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ConversionError(ValueError):
    """
    A raw token could not be converted to the target kind.
    """

    def __init__(self, token, typename, /):
        self.token = token
        self.typename = typename
        super().__init__("%s is not convertible to %s" % (token, typename))


class ParserError(Exception):
    """
    Base class of every parse failure.

    Options (read-only mapping)
    - parser: the Parser level where parsing stopped.
    - title: short lowercased headline.
    - code: FaultCode.
    - hint: one actionable sentence.
    """
    code = Unset

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({"code": type(self).code} | options)

    @property
    def parser(self):
        return self.options.get("parser")

    def __rich__(self):
        main = __import__("__main__")
        parser = self.options.get("parser")
        colorful = getattr(parser, "colorful", False)
        fancy = getattr(parser, "fancy", False)

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        } | getattr(main, "__styles__", {}))

        def text(fragment, style):
            if not fragment:
                return Text("")
            return Text(str(fragment), styles[style] if colorful else "")

        prog = " ".join(step.name for step in parser.path) if parser is not None else "argship"

        header = Text.assemble(
            "[ ",
            text(prog, "prog-name"),
            " — ",
            text(self.options["code"].normalize(), "code"),
            " | ",
            text(self.options.get("title", "").title(), "error-title"),
            " ]",
        )
        message = text(self.message, "error-message")
        hint = Text.assemble(text(" → ", "hint-arrow"), text(self.options.get("hint"), "hint"))

        if fancy:
            return Panel(Group(message, hint), title=header, title_align="left")
        return Group(header, message, hint)


class UnknownOptionError(ParserError):
    """An option-like token matched no registered name at the current level."""
    code = FaultCode.UNKNOWN_OPTION

    def __init__(self, token, /, **options):
        self.token = token
        super().__init__("unknown option %s" % token, **options)


class UnexpectedArgumentError(ParserError):
    """A plain token could not be consumed as positional or sub-command."""
    code = FaultCode.UNEXPECTED_ARGUMENT

    def __init__(self, token, /, **options):
        self.token = token
        super().__init__("unexpected argument %s" % token, **options)


class ExpectedArgumentsError(ParserError):
    """
    Required positionals were missing, or a sub-command name did not match.

    `names` lists the missing positional labels, or the sorted sub-command names
    that would have been accepted.
    """
    code = FaultCode.EXPECTED_ARGUMENTS

    def __init__(self, names, /, **options):
        self.names = tuple(names)
        super().__init__("expected arguments: %s" % ", ".join(self.names), **options)


class ExpectedValueError(ParserError):
    """A value-bearing option was the last token."""
    code = FaultCode.EXPECTED_VALUE

    def __init__(self, option, /, **options):
        self.option = option
        super().__init__("option %s requires a value" % option, **options)


class TypeMismatchError(ParserError):
    """A token failed conversion to its argument's kind."""
    code = FaultCode.TYPE_MISMATCH

    @property
    def token(self):
        return self.options.get("token")

    @property
    def typename(self):
        return self.options.get("typename")


__all__ = (
    "FaultCode",
    "ConversionError",
    "ParserError",
    "UnknownOptionError",
    "UnexpectedArgumentError",
    "ExpectedArgumentsError",
    "ExpectedValueError",
    "TypeMismatchError",
)
