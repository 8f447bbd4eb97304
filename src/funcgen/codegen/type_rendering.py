"""Rendering of type references into target-language type signatures.

A type reference renders as its qualified name, followed by its generic argument clause,
followed by ``?`` when nullable::

    kotlin.collections.Map<kotlin.String, kotlin.collections.List<*>>
    kotlin.collections.List<out com.example.Foo?>?

Generic argument clauses nest as deeply as the source type does. Rendering walks the
argument tree with an explicit work stack rather than Python recursion, so the nesting
depth of a type is not limited by the interpreter's recursion limit.
"""

from __future__ import annotations

import typing
from dataclasses import dataclass

from typing_extensions import assert_never

from funcgen.model import TypeReference, Variance

if typing.TYPE_CHECKING:
    from funcgen.diagnostics import DiagnosticLogger

STAR_PROJECTION = "*"


@dataclass(frozen=True)
class ResolvedType:
    qualified_name: str
    arguments: tuple[TypeReference, ...]
    nullable: bool


def resolve_type(ref: TypeReference) -> ResolvedType | None:
    """
    Resolve a type reference to its qualified name, generic arguments and nullability.

    Args:
        ref: The type reference of a property, return value or generic argument slot

    Returns:
        The resolved type, or None if the reference has no resolvable qualified name.
        Star projections never resolve; they have no underlying declaration.
    """
    if ref.is_star or ref.qualified_name is None:
        return None
    return ResolvedType(ref.qualified_name, ref.arguments, ref.nullable)


def variance_prefix(variance: Variance) -> str:
    """Return the text written in front of a type argument for its variance."""
    if variance is Variance.INVARIANT:
        return ""
    elif variance is Variance.COVARIANT or variance is Variance.CONTRAVARIANT:
        return f"{variance.label} "
    elif variance is Variance.STAR:
        # star projections replace the whole argument, there is nothing to prefix
        return ""
    else:
        assert_never(variance)


def _push_argument_clause(stack: list, arguments: typing.Sequence[TypeReference]) -> None:
    if not arguments:
        return
    items: list = ["<"]
    for index, argument in enumerate(arguments):
        if index:
            items.append(", ")
        items.append(argument)
    items.append(">")
    # the stack is popped from the end
    stack.extend(reversed(items))


def render_type_arguments(
    arguments: typing.Sequence[TypeReference],
    suppress_generics: bool,
    diagnostics: DiagnosticLogger | None = None,
    *,
    owner: object = None,
) -> str:
    """
    Render a generic argument list as a bracketed, comma separated clause.

    Args:
        arguments: The type arguments, in declaration order
        suppress_generics: Render every argument slot, at any depth, as ``*``
        diagnostics: Receives an error for every argument that cannot be resolved
        owner: The symbol (usually a property) that diagnostics are attributed to

    Returns:
        ``""`` for an empty argument list, otherwise e.g. ``"<kotlin.String, out Foo?>"``.
        An unresolvable argument renders as an empty slot.

    Examples:
        [String, List<Int>] -> "<String, List<Int>>"
        [String, List<Int>] with suppress_generics -> "<*, *>"
        [out Foo?] -> "<out Foo?>"
        [*] -> "<*>"
    """
    parts: list[str] = []
    # Work items are literal text or an argument that still has to be rendered.
    stack: list[typing.Union[str, TypeReference]] = []
    _push_argument_clause(stack, arguments)

    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        if suppress_generics or item.is_star:
            parts.append(STAR_PROJECTION)
            continue

        resolved = resolve_type(item)
        if resolved is None:
            if diagnostics is not None:
                symbol = f"{owner} ({item.describe()})" if owner is not None else item.describe()
                diagnostics.error("Invalid type argument", symbol)
            continue

        parts.append(variance_prefix(item.variance) + resolved.qualified_name)
        # everything pushed now is emitted after the name, nullability suffix last
        if resolved.nullable:
            stack.append("?")
        _push_argument_clause(stack, resolved.arguments)

    return "".join(parts)


def render_type(
    ref: TypeReference,
    suppress_generics: bool,
    diagnostics: DiagnosticLogger | None = None,
    *,
    owner: object = None,
) -> str | None:
    """
    Render the complete type of a property or return value.

    Returns:
        ``qualified_name + argument clause + "?" if nullable``, or None if the type itself
        cannot be resolved. Unresolvable nested arguments are reported to ``diagnostics``
        and rendered as empty slots.
    """
    resolved = resolve_type(ref)
    if resolved is None:
        return None
    type_arguments = render_type_arguments(resolved.arguments, suppress_generics, diagnostics, owner=owner)
    suffix = "?" if resolved.nullable else ""
    return f"{resolved.qualified_name}{type_arguments}{suffix}"
