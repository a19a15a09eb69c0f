"""
Argship utilities (internal helpers shared by every layer).

Overview
- UnsetType / Unset
  • Singleton sentinel for “not provided”, distinct from None (None is a valid
    parse outcome for absent values, so it cannot double as a default marker).
- coalesce(value, default=None)
  • Materialize Unset into a concrete default; every other value passes through.
- rename(callable, name) / @rename("name")
  • Give generated closures readable __name__/__qualname__ for tracebacks.
- mirror("attr")
  • Read-only property over a private backing field; containers come back as
    immutable views so declarations cannot be changed through the public API.

Stability
- Names listed in __all__ are re-used across the package; anything else may
  change without notice.
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is neither None nor 0.
    - Printable: repr(Unset) -> "Unset".
    - Singleton: UnsetType() always yields the same instance.
    - Sealed: subclassing raises TypeError.
    """

    def __or__(self, other, /):
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Return `default` when `object` is Unset, otherwise `object` unchanged.

    Falsey values such as None, 0, "" or [] are preserved.
    """
    return default if object is Unset else object


def rename(*parameters):
    """
    Set __name__/__qualname__ on a callable, or return a decorator doing so.

    Forms
    - rename(callable, name) -> callable
    - rename(name) -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            callable.__qualname__ = name
            callable.__name__ = name
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _freeze(object):
    """
    Wrap containers into read-only views (shallow: elements are left as-is).
    """
    if isinstance(object, Sequence) and not isinstance(object, str):
        return tuple(object)
    if isinstance(object, Mapping):
        return MappingProxyType(object)
    if isinstance(object, Set):
        return frozenset(object)
    return object


def mirror(name, /):
    """
    Define a read-only property exposing the private field "_{name}".

    Sequences are returned as tuples, mappings as MappingProxyType views and sets
    as frozensets, so callers can inspect declarations but never mutate them.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _freeze(getattr(self, "_" + name))

    return property(getter)


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "mirror",
)
