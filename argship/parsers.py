"""
Argship parser layer: declare, parse and describe command lines.

What this module provides
- Parser: one command level. It owns
  • an ordered list of cardinals (positionals),
  • a name-indexed map of options (long names and short aliases),
  • a map of named child parsers (sub-commands).
- parse(tokens): a single left-to-right pass over the tokens producing a
  ParseResult, or raising a ParserError subclass at the first token that
  cannot be consumed.
- format_usage()/print_usage(): OVERVIEW / USAGE / aligned argument rows built
  from the declarations alone. Parsers also render through rich (__rich__).

Core ideas
- Tree, not inheritance: every level is a Parser node owning its children;
  dispatch is a recursive call on the chosen child.
- Hard sub-command boundaries: once a sub-command name is consumed, the rest of
  the tokens belong to the child. Options of other levels are unknown there.
- Declarations are closed by the first parse; after that the tree is read-only.

Quick start
    from argship import Parser

    parser = Parser("git", usage="[options] <command>", overview="Sample overview")
    verbose = parser.add_option("--verbose", "-v", kind=bool, usage="Print more")
    checkout = parser.add_subparser("checkout", overview="Switch branches")
    branch = checkout.add_positional("branch", usage="The branch to checkout")

    result = parser.parse(["-v", "checkout", "main"])
    result.get(branch)            # "main"
    result.subparser(parser)      # "checkout"
"""
import logging
import os.path
import sys
from collections import defaultdict, deque
from collections.abc import Iterable

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .arguments import Arity, Cardinal, Option
from .faults import *
from .results import ParseResult
from .utils import *

logger = logging.getLogger(__name__)


def _attach_to_parent(self, parent):
    """
    Register this parser under its parent, enforcing unique sub-command names.
    """
    if getattr(parent, "_children", {}).setdefault(name := self.name, self) is self:
        return
    raise ValueError(f"parser subcommand name {name!r} is already in use")


def _sanitize_text(field, value, /):
    if not isinstance(value, str | Unset):
        raise TypeError(f"parser {field!r} must be a string")
    if isinstance(value, str) and not (value := value.strip()):
        raise ValueError(f"parser {field!r} cannot be empty")
    return value


class Parser:
    """
    One command level of a command-line interface.

    Parameters
    - name: Unset | str
      Command name shown in the USAGE line. Root parsers default to the basename
      of sys.argv[0]; sub-parsers must be named.
    - usage: Unset | str
      Label appended to the command chain in the USAGE line.
    - overview: Unset | str
      One-line description (OVERVIEW line, and the SUBCOMMANDS row of the parent).
    - parent: Parser | Unset
      Parent level. Prefer parent.add_subparser(...) over passing this directly.
    - colorful, fancy: bool | Unset
      Rich rendering flags for usage and faults; inherited from the parent when
      Unset (default False).
    """

    name = mirror("name")
    usage = mirror("usage")
    overview = mirror("overview")
    parent = mirror("parent")
    cardinals = mirror("cardinals")
    options = mirror("options")
    children = mirror("children")
    colorful = mirror("colorful")
    fancy = mirror("fancy")

    def __init__(
            self,
            name=Unset,
            /,
            usage=Unset,
            overview=Unset,
            parent=Unset,
            *,
            colorful=Unset,
            fancy=Unset
    ):
        if not isinstance(parent, Parser | Unset):
            raise TypeError("parser 'parent' must be a parser")
        if parent and name is Unset:
            raise TypeError("subparser must specify a name")
        if isinstance(name := _sanitize_text("name", name), str) and parent and name.startswith("-"):
            raise ValueError(f"parser subcommand name {name!r} cannot start with '-'")

        self._name = coalesce(name, os.path.basename(sys.argv[0]))
        self._usage = coalesce(_sanitize_text("usage", usage))
        self._overview = coalesce(_sanitize_text("overview", overview))
        self._parent = coalesce(parent)
        self._cardinals = []
        self._options = {}
        self._children = {}
        self._colorful = bool(coalesce(colorful, getattr(parent, "colorful", False)))
        self._fancy = bool(coalesce(fancy, getattr(parent, "fancy", False)))
        self._closed = False

        if parent:
            parent._ensure_open()
            _attach_to_parent(self, parent)

    @property
    def root(self):
        """
        Return the topmost parser of this tree.
        """
        child, parent = self, self.parent
        while parent:
            child, parent = parent, parent.parent
        return child

    @property
    def path(self):
        """
        Return the ancestry from root to this parser as a tuple.
        """
        path = [parser := self]
        while parser.parent:
            path.append(parser := parser.parent)
        return tuple(reversed(path))

    def __repr__(self):
        return "parser(name=%r, cardinals=%d, options=%d, children=%r)" % (
            self._name, len(self._cardinals), len(set(self._options.values())), tuple(self._children)
        )

    def __rich_repr__(self):
        yield "name", self.name
        yield "overview", self.overview
        yield "children", tuple(self._children)

    # -- declarations -------------------------------------------------------

    def _ensure_open(self):
        if self._closed:
            raise RuntimeError(f"parser {self._name!r} cannot be changed after parsing")

    def add_positional(self, label, /, kind=str, usage=Unset, *, optional=False):
        """
        Declare the next positional argument and return its descriptor.

        Required cardinals cannot follow optional ones: positionals are filled
        strictly in declaration order.
        """
        self._ensure_open()
        cardinal = Cardinal(label, kind, usage, optional=optional)
        if not cardinal.optional and any(previous.optional for previous in self._cardinals):
            raise ValueError(f"required cardinal {cardinal.label!r} cannot follow an optional one")
        self._cardinals.append(cardinal)
        return cardinal

    def add_option(self, name, shortname=Unset, /, kind=str, usage=Unset):
        """
        Declare a named option and return its descriptor.

        The option is registered under its name and, when given, its short name.
        Bool kinds declare flags, array kinds (list[str], ...) repeated options.
        """
        self._ensure_open()
        option = Option(name, shortname, kind, usage)
        for alias in option.names:
            if alias in self._options:
                raise ValueError(f"option name {alias!r} is already in use by parser {self._name!r}")
        self._options.update(dict.fromkeys(option.names, option))
        return option

    def add_subparser(self, name, /, overview=Unset, usage=Unset):
        """
        Create, register and return a child parser selected by `name`.
        """
        return Parser(name, usage, overview, self)

    # -- parsing ------------------------------------------------------------

    def _close(self):
        pending = [self]
        while pending:
            parser = pending.pop()
            parser._closed = True
            pending.extend(parser._children.values())

    def _convert(self, argument, token):
        try:
            return argument.convert(token)
        except ConversionError as error:
            raise TypeMismatchError(
                str(error),
                parser=self,
                title="type mismatch",
                token=error.token,
                typename=error.typename,
                argument=argument,
                hint="pass a value of type %s" % error.typename,
            ) from None

    def _route(self):
        return " ".join(step.name for step in self.path)

    def _parseargs(self, tokens, result):
        """
        consume `tokens` at this level, delegating the suffix to a sub-command.

        steps (per token, left to right)
        - option name of this level: flag → True; otherwise take the next token
          as its value (repeated options append).
        - anything else starting with '-': unknown at this level.
        - plain token: next unfilled cardinal, else a sub-command name, else
          unexpected.
        at the end, any required cardinal still unfilled is reported.
        """
        cardinals = deque(self._cardinals)
        while tokens:
            token = tokens.popleft()

            if token.startswith("-"):
                try:
                    option = self._options[token]
                except KeyError:
                    raise UnknownOptionError(
                        token,
                        parser=self,
                        title="unknown option",
                        hint="check the usage of '%s' for the options it accepts" % self._route(),
                    ) from None

                if option.arity is Arity.FLAG:
                    result._store(option, True)
                    continue

                try:
                    value = tokens.popleft()
                except IndexError:
                    raise ExpectedValueError(
                        token,
                        parser=self,
                        title="missing option value",
                        hint="pass a value after it, e.g. '%s <value>'" % token,
                    ) from None

                value = self._convert(option, value)
                if option.arity is Arity.REPEATED:
                    result._append(option, value)
                else:
                    result._store(option, value)

            elif cardinals:
                cardinal = cardinals.popleft()
                result._store(cardinal, self._convert(cardinal, token))

            elif self._children:
                try:
                    child = self._children[token]
                except KeyError:
                    raise ExpectedArgumentsError(
                        sorted(self._children),
                        parser=self,
                        title="unknown subcommand",
                        token=token,
                        hint="use one of the subcommands of '%s'" % self._route(),
                    ) from None
                logger.debug("%s: delegating %d token(s) to subcommand %r", self._route(), len(tokens), token)
                result._select(self, token)
                return child._parseargs(tokens, result)

            else:
                raise UnexpectedArgumentError(
                    token,
                    parser=self,
                    title="unexpected argument",
                    hint="remove it or check the usage of '%s'" % self._route(),
                )

        if missing := [cardinal.label for cardinal in cardinals if not cardinal.optional]:
            raise ExpectedArgumentsError(
                missing,
                parser=self,
                title="missing arguments",
                hint="add the missing values in the order shown by the usage of '%s'" % self._route(),
            )

    def parse(self, tokens=(), /):
        """
        Parse a token sequence (without the program name) into a ParseResult.

        Raises
        - TypeError: when tokens is a plain string or contains non-strings.
        - ParserError subclasses on the first token that cannot be consumed.
        """
        if isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("parse() argument must be an iterable of strings")
        tokens = deque(tokens)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be an iterable of strings")

        self._close()
        result = ParseResult(self)
        logger.debug("%s: parsing %d token(s)", self._route(), len(tokens))
        self._parseargs(tokens, result)
        return result._seal()

    # -- usage --------------------------------------------------------------

    def _render(self, colorful):
        """
        Build the usage text; styles are applied only when `colorful` is True.

        Layout
        - OVERVIEW line, blank line, USAGE line (command chain + usage label).
        - Sections POSITIONAL ARGUMENTS, OPTIONS, SUBCOMMANDS, one row each,
          indented by two spaces. The description column is the longest name
          plus three, capped at 24; names too wide for it get their description
          on the following line.
        """
        styles = defaultdict(str, {
            "overview-label": "bold #00E6FF",
            "overview": "italic #A3A3A3",
            "usage-label": "bold #00E6FF",
            "program-name": "bold #FF4D94",
            "usage-section": "bold #36C5F0",
            "group-label": "bold #FFFFFF",
            "cardinal-name": "bold #FFD600",
            "option-name": "bold #00E6FF",
            "flag-name": "bold #22C55E",
            "children": "bold #36C5F0",
            "argument-description": "#9CA3AF",
        } | getattr(__import__("__main__"), "__styles__", {}))

        def style(key):
            return styles[key] if colorful else ""

        sections = {
            "POSITIONAL ARGUMENTS": [
                (cardinal.label, cardinal.usage, "cardinal-name") for cardinal in self._cardinals
            ],
            "OPTIONS": [
                (", ".join(option.names), option.usage, "flag-name" if option.arity is Arity.FLAG else "option-name")
                for option in dict.fromkeys(self._options.values())
            ],
            "SUBCOMMANDS": [
                (name, child.overview, "children") for name, child in sorted(self._children.items())
            ],
        }

        padding = 2
        longest = max((len(name) for rows in sections.values() for name, _, _ in rows), default=0)
        width = min(longest + padding + 1, 24)

        text = Text()
        text.append("OVERVIEW", style("overview-label")).append(": ")
        text.append(self._overview or "", style("overview"))
        text.append("\n\n")
        text.append("USAGE", style("usage-label")).append(": ")
        text.append(self._route(), style("program-name"))
        if self._usage:
            text.append(" ").append(self._usage, style("usage-section"))

        for title, rows in sections.items():
            if not rows:
                continue
            text.append("\n\n").append(title, style("group-label")).append(":")
            for name, usage, key in rows:
                text.append("\n").append(" " * padding).append(name, style(key))
                if not usage:
                    continue
                if len(name) >= width - padding:
                    text.append("\n").append(" " * (width + padding))
                else:
                    text.append(" " * (width - len(name)))
                text.append(usage, style("argument-description"))

        return text.append("\n")

    def format_usage(self):
        """
        Return the plain-text usage of this level.
        """
        return self._render(False).plain

    def print_usage(self, file=Unset, /):
        """
        Write the usage to a text stream (default sys.stdout) or a rich Console.
        """
        if isinstance(file, Console):
            file.print(self)
            return
        file = coalesce(file, sys.stdout)
        file.write(self.format_usage())

    def __rich__(self):
        text = self._render(self.colorful)
        text.rstrip()
        if self.fancy:
            return Panel(text, title=Text.assemble("[ ", f"{self._route()} USAGE".upper(), " ]"), title_align="left")
        return text


__all__ = (
    "Parser",
)
