"""Unit tests for type reference rendering.

Covers the generic argument clause for every variance, star projections, nullability,
the ignore-generic-args override and unresolvable arguments.
"""

import pytest

from funcgen.codegen.type_rendering import (
    ResolvedType,
    render_type,
    render_type_arguments,
    resolve_type,
    variance_prefix,
)
from funcgen.diagnostics import DiagnosticLogger, Severity
from funcgen.model import TypeReference, Variance


def ref(qualified_name, *arguments, nullable=False, variance=Variance.INVARIANT):
    return TypeReference(qualified_name, nullable, variance, tuple(arguments))


STRING = ref("kotlin.String")
INT = ref("kotlin.Int")


class TestResolveType:
    def test_resolves_name_arguments_and_nullability(self):
        list_of_int = ref("kotlin.collections.List", INT, nullable=True)
        assert resolve_type(list_of_int) == ResolvedType("kotlin.collections.List", (INT,), True)

    def test_unresolved_reference(self):
        assert resolve_type(TypeReference.unresolved("Missing")) is None

    def test_star_projection_has_no_declaration(self):
        assert resolve_type(TypeReference.star()) is None


class TestVariancePrefix:
    @pytest.mark.parametrize(
        "variance, prefix",
        [
            (Variance.INVARIANT, ""),
            (Variance.COVARIANT, "out "),
            (Variance.CONTRAVARIANT, "in "),
            (Variance.STAR, ""),
        ],
    )
    def test_prefix(self, variance, prefix):
        assert variance_prefix(variance) == prefix


class TestRenderTypeArguments:
    def test_empty_arguments_render_nothing(self):
        assert render_type_arguments([], False) == ""
        assert render_type_arguments([], True) == ""

    def test_single_argument(self):
        assert render_type_arguments([STRING], False) == "<kotlin.String>"

    def test_nested_arguments(self):
        list_of_star = ref("kotlin.collections.List", TypeReference.star())
        assert render_type_arguments([STRING, list_of_star], False) == "<kotlin.String, kotlin.collections.List<*>>"

    def test_covariant_nullable_argument(self):
        foo = ref("Foo", nullable=True, variance=Variance.COVARIANT)
        assert render_type_arguments([foo], False) == "<out Foo?>"

    def test_contravariant_argument(self):
        foo = ref("Foo", variance=Variance.CONTRAVARIANT)
        assert render_type_arguments([foo], False) == "<in Foo>"

    def test_star_projection_ignores_nullability(self):
        nullable_star = TypeReference(None, nullable=True, variance=Variance.STAR)
        assert render_type_arguments([nullable_star], False) == "<*>"

    def test_nullability_suffix_follows_nested_clause(self):
        nested = ref("List", ref("Foo", nullable=True), nullable=True)
        assert render_type_arguments([nested], False) == "<List<Foo?>?>"

    def test_ignore_generic_args_replaces_every_slot(self):
        list_of_int = ref("List", INT)
        assert render_type_arguments([STRING, list_of_int], True) == "<*, *>"

    def test_ignore_generic_args_drops_variance_and_nullability(self):
        foo = ref("Foo", nullable=True, variance=Variance.COVARIANT)
        assert render_type_arguments([foo], True) == "<*>"

    def test_unresolvable_argument_renders_empty_slot(self):
        diagnostics = DiagnosticLogger()
        arguments = [STRING, TypeReference.unresolved("Missing")]

        assert render_type_arguments(arguments, False, diagnostics, owner="Example.x") == "<kotlin.String, >"

        assert len(diagnostics.diagnostics) == 1
        diagnostic = diagnostics.diagnostics[0]
        assert diagnostic.severity is Severity.ERROR
        assert diagnostic.message == "Invalid type argument"
        assert diagnostic.symbol == "Example.x (Missing)"

    def test_unresolvable_argument_without_diagnostics(self):
        assert render_type_arguments([TypeReference.unresolved("Missing")], False) == "<>"

    def test_deep_nesting_does_not_hit_recursion_limit(self):
        depth = 5000
        nested = ref("I")
        for _ in range(depth):
            nested = ref("L", nested)

        rendered = render_type_arguments([nested], False)

        assert rendered == "<" + "L<" * depth + "I" + ">" * depth + ">"


class TestRenderType:
    def test_plain_type(self):
        assert render_type(STRING, False) == "kotlin.String"

    def test_nullable_generic_type(self):
        pair = ref("kotlin.Pair", STRING, ref("kotlin.Boolean"), nullable=True)
        assert render_type(pair, False) == "kotlin.Pair<kotlin.String, kotlin.Boolean>?"

    def test_ignore_generic_args_keeps_outer_name(self):
        map_type = ref("Map", STRING, ref("List", ref("List", INT)))
        assert render_type(map_type, True) == "Map<*, *>"

    def test_unresolvable_type(self):
        assert render_type(TypeReference.unresolved("Missing"), False) is None


def test_star_projection_cannot_carry_a_name():
    with pytest.raises(ValueError):
        TypeReference("Foo", variance=Variance.STAR)


def test_star_projection_cannot_carry_arguments():
    with pytest.raises(ValueError):
        TypeReference(None, variance=Variance.STAR, arguments=(STRING,))
