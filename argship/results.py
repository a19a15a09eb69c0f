"""
Argship parse results.

A ParseResult is produced by exactly one Parser.parse() call. It maps argument
descriptors (by identity) to converted values and records which sub-command
was chosen at every level that was reached. Entries exist only for arguments
that were actually matched: absence means "not provided", never a default.

The parser fills a result through the private _store/_append/_select methods
and seals it before returning; after that the result is read-only.
"""
from types import MappingProxyType

from .arguments import Argument, Arity
from .utils import *


class ParseResult:
    """
    Read-only outcome of one parse.

    Retrieval
    - get(argument, default=None): converted value for that exact descriptor.
      Repeated options yield a new list in first-seen order.
    - argument in result: whether the descriptor was matched.
    - subparser(parser): sub-command name chosen at that parser, or None.
    - selections: ((parser, name), ...) from the root downwards.
    """

    def __init__(self, parser, /):
        self._parser = parser
        self._values = {}
        self._selections = []
        self._sealed = False

    parser = mirror("parser")

    @property
    def selections(self):
        return tuple(self._selections)

    def _store(self, argument, value, /):
        assert not self._sealed, "parse result is read-only"
        self._values[argument] = value

    def _append(self, argument, value, /):
        assert not self._sealed, "parse result is read-only"
        self._values.setdefault(argument, []).append(value)

    def _select(self, parser, name, /):
        assert not self._sealed, "parse result is read-only"
        self._selections.append((parser, name))

    def _seal(self):
        self._values = MappingProxyType({
            argument: tuple(value) if argument.arity is Arity.REPEATED else value
            for argument, value in self._values.items()
        })
        self._selections = tuple(self._selections)
        self._sealed = True
        return self

    def get(self, argument, default=None, /):
        if not isinstance(argument, Argument):
            raise TypeError("get() argument must be a cardinal or an option")
        try:
            value = self._values[argument]
        except KeyError:
            return default
        return list(value) if argument.arity is Arity.REPEATED else value

    def __contains__(self, argument):
        return argument in self._values

    def subparser(self, parser, /):
        if not hasattr(parser, "children"):
            raise TypeError("subparser() argument must be a parser")
        for node, name in self._selections:
            if node is parser:
                return name
        return None

    def __repr__(self):
        return "parse-result(values=%r, selections=%r)" % (
            dict(self._values),
            tuple((" ".join(step.name for step in parser.path), name) for parser, name in self._selections),
        )

    def __rich_repr__(self):
        yield "values", dict(self._values)
        yield "selections", tuple(name for _, name in self._selections)


__all__ = (
    "ParseResult",
)
