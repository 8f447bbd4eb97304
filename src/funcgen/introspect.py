"""Conversion of decorated Python classes into declaration models.

This is the host side of the generator: it turns ``@function``-decorated classes and their
annotations into :class:`~funcgen.model.AnnotatedDeclaration` objects. Type annotations are
evaluated one property at a time, so a single unresolvable annotation only affects that
property.
"""

import enum
import inspect
import sys
import types
import typing

import typing_extensions

from .markers import Returns, Star, _VarianceMarker, own_markers
from .model import RETURNS_MARKER, AnnotatedDeclaration, DeclarationKind, Marker, Property, TypeReference, Variance

_IGNORED_BASES = {object, typing.Generic, typing.Protocol, typing_extensions.Protocol}

_UNION_TYPES: tuple = (typing.Union,)
if hasattr(types, "UnionType"):
    _UNION_TYPES += (types.UnionType,)


def qualified_name(cls: type) -> typing.Optional[str]:
    """Return the name a class is rendered with, or None for classes local to a function."""
    if "<locals>" in cls.__qualname__:
        return None
    if cls.__module__ in ("builtins", "__builtin__"):
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def declaration_kind(cls: type) -> DeclarationKind:
    if typing_extensions.is_protocol(cls):
        return DeclarationKind.INTERFACE
    if issubclass(cls, enum.Enum):
        return DeclarationKind.ENUM_CLASS
    return DeclarationKind.CLASS


def _annotation_text(annotation) -> str:
    if isinstance(annotation, str):
        return annotation
    if hasattr(annotation, "__forward_arg__"):
        return annotation.__forward_arg__
    if isinstance(annotation, type):
        return annotation.__qualname__
    return repr(annotation)


def _evaluate(annotation, globalns: dict, localns: dict):
    """Evaluate a string or ForwardRef annotation, returning None if it does not evaluate."""
    source = annotation.__forward_arg__ if hasattr(annotation, "__forward_arg__") else annotation
    try:
        return eval(source, globalns, localns)
    except (NameError, AttributeError, SyntaxError, TypeError):
        return None


def _is_union(annotation) -> bool:
    return typing_extensions.get_origin(annotation) in _UNION_TYPES


def type_reference(
    annotation,
    globalns: dict,
    localns: typing.Optional[dict] = None,
    variance: Variance = Variance.INVARIANT,
) -> TypeReference:
    """
    Convert a type annotation into a type reference.

    Args:
        annotation: The annotation (type object, string or ForwardRef)
        globalns: Globals used to evaluate string annotations
        localns: Locals used to evaluate string annotations
        variance: Variance of the argument slot the annotation appears in

    Returns:
        The type reference. Annotations that cannot be evaluated or do not name a class
        (type variables, unions of several types, local classes) give an unresolved reference.

    Examples:
        str -> str
        Optional[int] -> int?
        dict[str, list[Star]] -> dict<str, list<*>>
        list[Out[Buffer]] -> list<out mod.Buffer>
    """
    localns = localns or {}
    text = _annotation_text(annotation)

    if isinstance(annotation, str) or hasattr(annotation, "__forward_arg__"):
        annotation = _evaluate(annotation, globalns, localns)
        if annotation is None:
            return TypeReference.unresolved(text, variance=variance)

    if annotation is Star:
        return TypeReference.star()

    if typing_extensions.get_origin(annotation) is typing_extensions.Annotated:
        inner, *metadata = typing_extensions.get_args(annotation)
        for meta in metadata:
            if isinstance(meta, _VarianceMarker):
                variance = meta.variance
        return type_reference(inner, globalns, localns, variance)

    if annotation is None:
        annotation = type(None)

    if _is_union(annotation):
        members = typing_extensions.get_args(annotation)
        non_none = [member for member in members if member is not type(None)]
        if len(non_none) != 1:
            return TypeReference.unresolved(text, variance=variance)
        ref = type_reference(non_none[0], globalns, localns, variance)
        if ref.is_star or len(non_none) == len(members):
            return ref
        return TypeReference(ref.qualified_name, True, ref.variance, ref.arguments, ref.text)

    origin = typing_extensions.get_origin(annotation)
    if origin is not None:
        if not isinstance(origin, type):
            return TypeReference.unresolved(text, variance=variance)
        arguments = tuple(type_reference(arg, globalns, localns) for arg in typing_extensions.get_args(annotation))
        return TypeReference(qualified_name(origin), False, variance, arguments, text)

    if isinstance(annotation, type):
        return TypeReference(qualified_name(annotation), False, variance, (), text)

    # type variables, Ellipsis, argument lists of Callable, ...
    return TypeReference.unresolved(text, variance=variance)


def _is_class_var(annotation) -> bool:
    return annotation is typing.ClassVar or typing_extensions.get_origin(annotation) is typing.ClassVar


def _returns_count(annotation) -> int:
    """Count ``Returns`` in the metadata of ``annotation``, looking through ``Optional``/``Union``."""
    if typing_extensions.get_origin(annotation) is typing_extensions.Annotated:
        return sum(meta is Returns for meta in annotation.__metadata__)
    if _is_union(annotation):
        return sum(_returns_count(member) for member in typing_extensions.get_args(annotation))
    return 0


def property_from_annotation(name: str, annotation, globalns: dict, localns: dict) -> typing.Optional[Property]:
    """Build a property from a class-level annotation, or None for class variables.

    One ``Returns`` marker is recorded for every ``Returns`` in the annotation, including
    those inside the members of an ``Optional``.
    """
    evaluated = annotation
    if isinstance(annotation, str):
        evaluated = _evaluate(annotation, globalns, localns)
    if evaluated is not None and _is_class_var(evaluated):
        return None

    markers: tuple[Marker, ...] = ()
    if evaluated is not None:
        markers = tuple(Marker(RETURNS_MARKER) for _ in range(_returns_count(evaluated)))

    return Property(name, type_reference(annotation, globalns, localns), markers)


def class_properties(cls: type) -> tuple[Property, ...]:
    """Collect the annotated attributes of a class and its bases.

    Base class attributes come first. An attribute redeclared in a subclass keeps the position
    of its first declaration but takes the subclass's type.
    """
    collected: dict[str, Property] = {}
    for base in reversed(cls.__mro__):
        if base in _IGNORED_BASES:
            continue
        module = sys.modules.get(base.__module__)
        globalns = dict(vars(module)) if module is not None else {}
        localns = dict(vars(base))
        for name, annotation in inspect.get_annotations(base).items():
            prop = property_from_annotation(name, annotation, globalns, localns)
            if prop is not None:
                collected[name] = prop
    return tuple(collected.values())


def declaration_from_class(cls: type) -> AnnotatedDeclaration:
    return AnnotatedDeclaration(
        simple_name=cls.__name__,
        kind=declaration_kind(cls),
        markers=own_markers(cls),
        properties=class_properties(cls),
        qualified_name=f"{cls.__module__}.{cls.__qualname__}",
    )
