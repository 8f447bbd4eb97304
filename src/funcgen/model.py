"""Declaration model consumed by the function generator.

Declarations are produced by a discovery collaborator (see ``funcgen.introspect``) and
are read-only from the generator's point of view. Nothing in here knows how the
declarations were found, only what they look like.
"""

from __future__ import annotations

import enum
import typing
from dataclasses import dataclass, field

FUNCTION_MARKER = "Function"
RETURNS_MARKER = "Returns"


class DeclarationKind(enum.Enum):
    INTERFACE = "interface"
    CLASS = "class"
    ENUM_CLASS = "enum_class"
    OBJECT = "object"
    ANNOTATION_CLASS = "annotation_class"


class Variance(enum.Enum):
    """Use-site variance of a generic argument slot."""

    INVARIANT = ""
    COVARIANT = "out"
    CONTRAVARIANT = "in"
    STAR = "*"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class Marker:
    """A marker annotation and its arguments, e.g. ``Function(name="make")``."""

    short_name: str
    arguments: typing.Mapping[str, typing.Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TypeReference:
    """A mention of a type, possibly generic, possibly unresolvable.

    ``qualified_name`` is None when the mention could not be resolved to a declaration
    (and always for star projections). ``text`` is the source spelling, used for diagnostics.
    """

    qualified_name: typing.Optional[str]
    nullable: bool = False
    variance: Variance = Variance.INVARIANT
    arguments: tuple[TypeReference, ...] = ()
    text: str = ""

    def __post_init__(self):
        if self.variance is Variance.STAR and (self.qualified_name is not None or self.arguments):
            raise ValueError("Star projections carry no type name or type arguments")

    @classmethod
    def star(cls) -> TypeReference:
        return cls(qualified_name=None, variance=Variance.STAR, text="*")

    @classmethod
    def unresolved(cls, text: str, *, variance: Variance = Variance.INVARIANT) -> TypeReference:
        return cls(qualified_name=None, variance=variance, text=text)

    @property
    def is_star(self) -> bool:
        return self.variance is Variance.STAR

    @property
    def is_resolvable(self) -> bool:
        return self.is_star or self.qualified_name is not None

    def describe(self) -> str:
        if self.text:
            return self.text
        if self.is_star:
            return "*"
        return self.qualified_name or "<unresolved>"

    def is_fully_resolvable(self) -> bool:
        """True when this reference and every nested argument can be resolved."""
        pending = [self]
        while pending:
            ref = pending.pop()
            if not ref.is_resolvable:
                return False
            pending.extend(ref.arguments)
        return True


@dataclass(frozen=True)
class Property:
    name: str
    type: TypeReference
    markers: tuple[Marker, ...] = ()

    def has_marker(self, short_name: str) -> bool:
        return any(marker.short_name == short_name for marker in self.markers)

    def count_markers(self, short_name: str) -> int:
        return sum(marker.short_name == short_name for marker in self.markers)

    @property
    def is_return(self) -> bool:
        return self.has_marker(RETURNS_MARKER)


@dataclass(frozen=True)
class AnnotatedDeclaration:
    """A declaration carrying the generator's marker annotation."""

    simple_name: str
    kind: DeclarationKind
    markers: tuple[Marker, ...] = ()
    properties: tuple[Property, ...] = ()
    qualified_name: str = ""

    def find_marker(self, short_name: str) -> typing.Optional[Marker]:
        for marker in self.markers:
            if marker.short_name == short_name:
                return marker
        return None

    def validate(self) -> bool:
        """Whether every property type of this declaration resolves."""
        return all(prop.type.is_fully_resolvable() for prop in self.properties)

    def __str__(self) -> str:
        return self.qualified_name or self.simple_name
