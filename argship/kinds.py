"""
Argship value kinds: the pluggable type-conversion registry.

Overview
- Kind[_T]: a named converter from one raw token to a typed value.
  • STRING, INT and BOOL are built in; their names ("String", "Int", "Bool")
    appear in conversion messages ("yes is not convertible to Int").
  • Kinds built with flag=True (BOOL among them) make presence-only options.
- ArrayKind[_T]: an element kind used by repeated options; every occurrence of
  the option converts one token with the element kind and appends it.
- ChoiceKind: exact, case-sensitive match against a finite set of labels,
  optionally mapping each label to an enum member.
- register()/resolve(): map annotations (str, int, bool, list[str], Enum
  subclasses, ...) to kinds so declarations can say kind=int instead of
  kind=INT.

Conversion contract
- convert(token) returns the value or raises ConversionError(token, name).
- Converters signal failure by raising ValueError or TypeError; anything else
  propagates untouched.
- Kinds are pure: no state is kept between conversions.
"""
import enum
import functools
import re
import typing
from collections.abc import Mapping

from .faults import ConversionError
from .utils import *


class Kind[_T]:
    """
    Named conversion strategy for a single raw token.

    Parameters
    - name: str
      Type name shown in conversion failures.
    - converter: Callable[[str], _T]
      Raises ValueError/TypeError on bad input.
    - flag: bool
      Options of a flag kind take no value token; their presence stores True.
    """
    name = mirror("name")
    flag = mirror("flag")

    def __init__(self, name, converter, /, *, flag=False):
        if not isinstance(name, str) or not name:
            raise TypeError("kind 'name' must be a non-empty string")
        if not callable(converter):
            raise TypeError("kind 'converter' must be callable")
        self._name = name
        self._converter = converter
        self._flag = bool(flag)

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.name)

    def __rich_repr__(self):
        yield "name", self.name

    @property
    def repeated(self):
        """
        True when an option of this kind accumulates one value per occurrence.
        """
        return False

    def convert(self, token, /):
        if not isinstance(token, str):
            raise TypeError("convert() argument must be a string")
        try:
            return self._converter(token)
        except (ValueError, TypeError):
            raise ConversionError(token, self.name) from None


class ArrayKind[_T](Kind[_T]):
    """
    Array of an element kind; conversion is delegated to the element so the
    failure message names the element type.
    """

    def __init__(self, element, /):
        element = resolve(element)
        if isinstance(element, ArrayKind):
            raise TypeError("array kind cannot be nested")
        self._element = element
        super().__init__("[%s]" % element.name, element.convert)

    element = mirror("element")

    @property
    def repeated(self):
        return True

    def convert(self, token, /):
        return self._element.convert(token)


class ChoiceKind(Kind[str]):
    """
    Closed set of string labels.

    Conversion is an exact, case-sensitive match. When built from an enum
    (see from_enum) each label maps to its member; otherwise the label itself
    is the converted value.
    """

    def __init__(self, choices, /, name=Unset):
        if isinstance(choices, str):
            raise TypeError("choice kind 'choices' must be an iterable of strings, not a string")
        mapping = dict(choices) if isinstance(choices, Mapping) else {label: label for label in choices}
        if not mapping:
            raise ValueError("choice kind requires at least one label")
        for label in mapping:
            if not isinstance(label, str) or not label:
                raise TypeError("choice kind labels must be non-empty strings")
        self._choices = mapping
        super().__init__(coalesce(name, "{%s}" % ",".join(mapping)), self._choose)

    choices = mirror("choices")

    def _choose(self, token):
        try:
            return self._choices[token]
        except KeyError:
            raise ValueError(token) from None

    @classmethod
    def from_enum(cls, enumeration, /):
        """
        Build a choice kind from an Enum whose member values are strings.
        """
        if not isinstance(enumeration, type) or not issubclass(enumeration, enum.Enum):
            raise TypeError("from_enum() argument must be an enum class")
        mapping = {}
        for member in enumeration:
            if not isinstance(member.value, str):
                raise TypeError(f"enum {enumeration.__name__!r} member values must be strings")
            mapping[member.value] = member
        return cls(mapping, name=enumeration.__name__)


def _integer(token):
    if not re.fullmatch(r"[+-]?[0-9]+", token):
        raise ValueError(token)
    return int(token)


def _boolean(token):
    match token:
        case "true":
            return True
        case "false":
            return False
        case _:
            raise ValueError(token)


STRING = Kind("String", str)
INT = Kind("Int", _integer)
BOOL = Kind("Bool", _boolean, flag=True)

_registry = {
    str: STRING,
    int: INT,
    bool: BOOL,
}


def register(annotation, kind, /):
    """
    Make `annotation` resolve to `kind` from now on.

    Registering an annotation twice replaces the previous kind. Registered
    annotations win over the built-in list[X] and Enum handling.
    """
    if not isinstance(kind, Kind):
        raise TypeError("register() second argument must be a kind")
    _registry[annotation] = kind
    return kind


@functools.cache
def _enumeration(enumeration):
    return ChoiceKind.from_enum(enumeration)


def resolve(kind, /):
    """
    Turn a kind-like declaration into a Kind.

    Accepted
    - a Kind instance (returned as-is)
    - a registered annotation (str, int, bool, or anything passed to register)
    - an Enum subclass with string values
    - list[X] for any of the above element forms
    """
    if isinstance(kind, Kind):
        return kind
    try:
        return _registry[kind]
    except (KeyError, TypeError):
        pass
    if typing.get_origin(kind) is list:
        try:
            element, = typing.get_args(kind)
        except ValueError:
            raise TypeError("unsupported argument kind %r" % (kind,)) from None
        return ArrayKind(element)
    if isinstance(kind, type) and issubclass(kind, enum.Enum):
        return _enumeration(kind)
    raise TypeError("unsupported argument kind %r" % (kind,))


__all__ = (
    "Kind",
    "ArrayKind",
    "ChoiceKind",
    "STRING",
    "INT",
    "BOOL",
    "register",
    "resolve",
)
