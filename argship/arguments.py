r"""
Argship argument descriptors.

Overview
- Cardinal[_T]: positional argument, filled in declaration order from the
  first unclaimed plain tokens. Its label is display-only.
- Option[_T]: named argument matched by an explicit token (e.g. --branch or
  -b). Depending on its kind it is scalar (takes the next token), a flag (Bool
  kind, presence only) or repeated (array kind, every occurrence appends).
- Arity: SCALAR, FLAG or REPEATED, derived from the kind at declaration time.

Identity
- A descriptor is its own identity token: equality and hashing are by object
  identity, so two declarations with the same names never collide in a result.

Introspection & representation
- ArgumentType metaclass exposes the fields listed in __introspectable__ as
  read-only properties and provides stable __repr__/__rich_repr__.

Validation highlights
- Option names must match r"--?[^\W\d_](-?[^\W_]+)*" ("-b", "-Xld", "--no-fly").
- Labels and usage strings are trimmed; empty strings are rejected.
- Cardinals cannot be array-valued.

Quick example:
    >>> from argship.arguments import Cardinal, Option
    >>> package = Cardinal("package", kind=str, usage="The name of the package")
    >>> branch = Option("--branch", "-b", kind=str)
    >>> branch.names
    ('--branch', '-b')
"""
import enum
import functools
import operator
import re

from .kinds import resolve
from .utils import *


class Arity(enum.Enum):
    """
    How many tokens an argument consumes and how repeated occurrences behave.
    """
    SCALAR = "scalar"
    FLAG = "flag"
    REPEATED = "repeated"


class ArgumentType(type):
    """
    Metaclass that turns descriptor classes into introspectable declarations.

    Responsibilities
    - Derive __typename__ from the class name ("Cardinal" -> "cardinal").
    - Expose read-only properties for every name in __introspectable__.
    - Provide compact __repr__/__rich_repr__ for diagnostics.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_text(cls, metadata, field, /):
    """
    Internal: trim a str | Unset field and reject empty strings.
    """
    if not isinstance(value := metadata[field], str | Unset):
        raise TypeError(f"{cls.__typename__} {field!r} must be a string")
    elif isinstance(value, str) and not (value := value.strip()):
        raise ValueError(f"{cls.__typename__} {field!r} cannot be empty")
    metadata[field] = value


def _sanitize_name(cls, name, /):
    """
    Internal: validate one shell-style option name and return it.
    """
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} names must be strings")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} names cannot be empty-strings")
    elif not re.fullmatch(r"--?[^\W\d_](-?[^\W_]+)*", name):
        raise ValueError(f"{cls.__typename__} name {name!r} is not a valid shell-style option name")
    return name


class Argument(metaclass=ArgumentType):
    """
    Common base of Cardinal and Option.

    Every argument carries a resolved Kind, an Arity and an optional usage text.
    """

    def convert(self, token, /):
        """
        Convert one raw token with this argument's kind (raises ConversionError).
        """
        return self._kind.convert(token)

    @property
    def typename(self):
        return self._kind.name


class Cardinal[_T](Argument):
    """
    Positional argument.

    Parameters
    - label: str
      Display name used in usage text and missing-argument faults.
    - kind: Kind | annotation
      Anything accepted by kinds.resolve (str, int, bool, Enum subclass, ...).
    - usage: Unset | str
      Short description for usage text.
    - optional: bool
      When True the cardinal may stay unfilled at the end of input.
    """
    __introspectable__ = (
        "label",
        "kind",
        "arity",
        "usage",
        "optional",
    )

    def __init__(self, label, /, kind=str, usage=Unset, *, optional=False):
        metadata = {
            "label": label,
            "usage": usage,
        }
        if label is Unset:
            raise TypeError(f"{type(self).__typename__} must specify a label")
        _sanitize_text(type(self), metadata, "label")
        _sanitize_text(type(self), metadata, "usage")

        kind = resolve(kind)
        if kind.repeated:
            raise TypeError(f"{type(self).__typename__} {metadata['label']!r} cannot be array-valued")

        self._label = metadata["label"]
        self._kind = kind
        self._arity = Arity.SCALAR
        self._usage = coalesce(metadata["usage"])
        self._optional = bool(optional)


class Option[_T](Argument):
    """
    Named argument.

    Parameters
    - name: str
      Primary name, e.g. "--branch" or "-Xld".
    - shortname: Unset | str
      Optional alias, e.g. "-b".
    - kind: Kind | annotation
      Bool kinds make a flag, array kinds (list[str], ...) a repeated option,
      anything else a scalar option.
    - usage: Unset | str
      Short description for usage text.
    """
    __introspectable__ = (
        "names",
        "kind",
        "arity",
        "usage",
    )

    def __init__(self, name, shortname=Unset, /, kind=str, usage=Unset):
        names = [_sanitize_name(type(self), name)]
        if shortname is not Unset:
            if (shortname := _sanitize_name(type(self), shortname)) in names:
                raise ValueError(f"{type(self).__typename__} names cannot contain duplicates")
            names.append(shortname)

        metadata = {"usage": usage}
        _sanitize_text(type(self), metadata, "usage")

        kind = resolve(kind)
        if kind.flag:
            arity = Arity.FLAG
        elif kind.repeated:
            arity = Arity.REPEATED
        else:
            arity = Arity.SCALAR

        self._names = tuple(names)
        self._kind = kind
        self._arity = arity
        self._usage = coalesce(metadata["usage"])

    @property
    def name(self):
        """
        The primary (first declared) name.
        """
        return self._names[0]

    @property
    def shortname(self):
        return self._names[1] if len(self._names) > 1 else None


__all__ = (
    "Arity",
    "Argument",
    "Cardinal",
    "Option",
)
