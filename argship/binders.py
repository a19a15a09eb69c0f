"""
Argship binder: populate caller-owned targets from a ParseResult.

A Binder keeps an ordered list of (arguments, apply) entries. Declarations and
targets stay decoupled: the target type knows nothing about parsers, and the
binder refers to arguments by identity only.

Example
    binder = Binder()
    binder.bind(parser.add_option("--branch", "-b"), to=lambda options, value: setattr(options, "branch", value))
    binder.bind_array(
        parser.add_option("-xlinker", kind=list[str]),
        parser.add_option("-xswiftc", kind=list[str]),
        to=lambda options, xlinker, xswiftc: setattr(options, "flags", Flags(xswiftc, xlinker)),
    )
    options = binder.fill(parser.parse(sys.argv[1:]), Options())
"""
import logging

from .arguments import Argument, Arity
from .utils import *

logger = logging.getLogger(__name__)


class Binder:
    """
    Ordered collection of mutators applied by fill().

    Binding forms
    - bind(argument, to=f): f(target, value), skipped when the argument is absent.
    - bind(a, b, ..., to=f): f(target, value_a, value_b, ...), None for absent
      arguments; skipped only when all of them are absent.
    - bind_array(...): same shapes for repeated options; absent ones are passed
      as empty lists.
    """

    def __init__(self):
        self._bindings = []

    def __len__(self):
        return len(self._bindings)

    def _register(self, arguments, to, default, /):
        if not arguments:
            raise TypeError("bind() requires at least one argument")
        for argument in arguments:
            if not isinstance(argument, Argument):
                raise TypeError("bind() arguments must be cardinals or options")
        if not callable(to):
            raise TypeError("bind() 'to' must be callable")

        @rename("apply")
        def apply(result, target):
            if not any(argument in result for argument in arguments):
                logger.debug("skipping binding of %r: no value", arguments)
                return
            to(target, *(result.get(argument, default()) for argument in arguments))

        self._bindings.append((arguments, apply))

    def bind(self, *arguments, to):
        self._register(arguments, to, lambda: None)

    def bind_array(self, *arguments, to):
        for argument in arguments:
            if getattr(argument, "arity", Unset) is not Arity.REPEATED:
                raise TypeError("bind_array() arguments must be array-valued options")
        self._register(arguments, to, list)

    def fill(self, result, target, /):
        """
        Apply every binding, in declaration order, to `target` and return it.
        """
        for _, apply in self._bindings:
            apply(result, target)
        return target


__all__ = (
    "Binder",
)
