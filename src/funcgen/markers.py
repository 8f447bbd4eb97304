"""Marker annotations for declaring generated functions in Python.

Declarations are ``typing.Protocol`` classes decorated with :func:`function`::

    from typing import Annotated, Optional, Protocol

    from funcgen import Out, Returns, Star, function

    @function(name="make_request")
    class MakeRequest(Protocol):
        url: str
        headers: dict[str, list[Star]]
        sink: list[Out[Buffer]]
        timeout: Optional[float]
        response: Annotated[Response, Returns]

Markers are plain data. They only record intent; nothing happens until the generator
discovers the decorated classes.
"""

import typing

from typing_extensions import Annotated

from .model import FUNCTION_MARKER, Marker, Variance

MARKERS_ATTRIBUTE = "__funcgen_markers__"

T = typing.TypeVar("T")


def function(name: str) -> typing.Callable[[T], T]:
    """Mark a declaration as the source of a generated function called ``name``."""

    def decorator(obj: T) -> T:
        add_marker(obj, Marker(FUNCTION_MARKER, {"name": name}))
        return obj

    return decorator


def add_marker(obj, marker: Marker) -> None:
    # only the object's own markers, subclasses must be marked separately
    existing = vars(obj).get(MARKERS_ATTRIBUTE, ())
    setattr(obj, MARKERS_ATTRIBUTE, (*existing, marker))


def own_markers(obj) -> tuple[Marker, ...]:
    try:
        return tuple(vars(obj).get(MARKERS_ATTRIBUTE, ()))
    except TypeError:
        # objects without a __dict__ cannot carry markers
        return ()


class _ReturnsMarker:
    def __repr__(self):
        return "Returns"


Returns = _ReturnsMarker()
"""Property marker: ``value: Annotated[T, Returns]`` makes ``value`` the generated function's result."""


class _VarianceMarker:
    def __init__(self, variance: Variance):
        self.variance = variance

    def __getitem__(self, item):
        return Annotated[item, self]

    def __repr__(self):
        return self.variance.label.capitalize()


Out = _VarianceMarker(Variance.COVARIANT)
In = _VarianceMarker(Variance.CONTRAVARIANT)


class Star:
    """Star projection, usable wherever a generic type argument is expected: ``list[Star]``."""

    def __new__(cls, *args, **kwargs):
        raise TypeError("Star is a type argument marker and cannot be instantiated")
