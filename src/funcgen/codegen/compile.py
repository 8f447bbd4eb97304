"""Compilation of annotated declarations into generated function text."""

from __future__ import annotations

import typing
from dataclasses import dataclass, field

from funcgen.diagnostics import Diagnostic, DiagnosticLogger
from funcgen.exceptions import AmbiguousReturnError, MissingAnnotationArgumentError
from funcgen.model import FUNCTION_MARKER, RETURNS_MARKER, AnnotatedDeclaration, DeclarationKind, Property
from funcgen.options import GeneratorOptions
from funcgen.resolver import DeclarationResolver, StaticResolver

from .type_rendering import render_type
from .writer import BufferSink, OutputSink

INDENT = "    "


@dataclass(frozen=True)
class PropertyFragments:
    signature: str
    body: str


@dataclass
class ProcessResult:
    """Outcome of one generation pass."""

    written: list[AnnotatedDeclaration] = field(default_factory=list)
    skipped: list[AnnotatedDeclaration] = field(default_factory=list)
    # declarations with unresolvable types, to be offered again in a later pass
    deferred: list[AnnotatedDeclaration] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)


def _property_symbol(declaration: AnnotatedDeclaration | None, prop: Property) -> str:
    if declaration is None:
        return prop.name
    return f"{declaration}.{prop.name}"


def compile_property(
    prop: Property,
    options: GeneratorOptions,
    diagnostics: DiagnosticLogger,
    declaration: AnnotatedDeclaration | None = None,
) -> PropertyFragments:
    """
    Compile one property into a parameter of the generated signature and a body statement.

    Args:
        prop: The property to translate into a function parameter
        options: Generator options (generic argument suppression)
        diagnostics: Receives errors for unresolvable types
        declaration: The declaration owning the property, for diagnostics

    Returns:
        Fragments like ``"    x: String,\\n"`` and ``'    println("$x")\\n'``. If the property
        type cannot be resolved the parameter is emitted without a type (``"    x,\\n"``).
    """
    symbol = _property_symbol(declaration, prop)
    body = f'{INDENT}println("${prop.name}")\n'

    type_str = render_type(prop.type, options.ignore_generic_args, diagnostics, owner=symbol)
    if type_str is None:
        diagnostics.error("Invalid property type", symbol)
        return PropertyFragments(f"{INDENT}{prop.name},\n", body)

    return PropertyFragments(f"{INDENT}{prop.name}: {type_str},\n", body)


def function_name(declaration: AnnotatedDeclaration) -> str:
    """Read the ``name`` argument of the declaration's ``Function`` marker.

    Raises:
        MissingAnnotationArgumentError: If the marker or its string ``name`` argument is missing
    """
    marker = declaration.find_marker(FUNCTION_MARKER)
    if marker is None:
        raise MissingAnnotationArgumentError(declaration, "name")
    name = marker.arguments.get("name")
    if not isinstance(name, str):
        raise MissingAnnotationArgumentError(declaration, "name")
    return name


def compile_declaration(
    declaration: AnnotatedDeclaration,
    options: GeneratorOptions,
    diagnostics: DiagnosticLogger,
) -> str | None:
    """
    Compile an annotated declaration into the text of one generated function.

    Args:
        declaration: The annotated declaration
        options: Generator options
        diagnostics: Receives non-fatal errors

    Returns:
        The function text, starting with a blank line and ending with the closing brace
        line, or None if the declaration is not an interface and was skipped.

    Raises:
        AmbiguousReturnError: If the ``Returns`` marker occurs more than once across the properties
        MissingAnnotationArgumentError: If the ``Function`` marker has no ``name``
    """
    if declaration.kind is not DeclarationKind.INTERFACE:
        diagnostics.error("Only interfaces can be annotated with @Function", declaration)
        return None

    name = function_name(declaration)

    if not declaration.properties:
        return f'\nfun {name}() {{\n{INDENT}println("Hello from {name}")\n}}\n'

    return_properties = [prop for prop in declaration.properties if prop.is_return]
    # occurrences, not properties: a marker repeated on one property is ambiguous too
    if sum(prop.count_markers(RETURNS_MARKER) for prop in declaration.properties) > 1:
        raise AmbiguousReturnError(declaration, [prop.name for prop in return_properties])

    signature = [f"fun {name}(\n"]
    body = []
    # Translate each property to a function parameter, in declaration order
    for prop in declaration.properties:
        fragments = compile_property(prop, options, diagnostics, declaration)
        signature.append(fragments.signature)
        body.append(fragments.body)

    returned = return_properties[0] if return_properties else None
    return_type = None
    if returned is not None:
        # already reported while compiling the parameter, so no diagnostics here
        return_type = render_type(returned.type, options.ignore_generic_args)

    if returned is not None and return_type is not None:
        signature.append(f"): {return_type} {{\n")
        body.append(f"{INDENT}return {returned.name}\n")
    else:
        signature.append(") {\n")

    return "\n" + "".join(signature) + "".join(body) + "}\n"


class FunctionProcessor:
    """Runs generation passes over the declarations supplied by a resolver.

    Every pass writes all of its functions to a single sink obtained from ``sink_factory``.
    The sink is only opened when there is at least one annotated declaration, and it is
    closed exactly once, also when the pass is aborted by a ``GenerationError``.
    """

    def __init__(
        self,
        sink_factory: typing.Callable[[], OutputSink],
        options: GeneratorOptions | None = None,
        diagnostics: DiagnosticLogger | None = None,
    ):
        self._sink_factory = sink_factory
        self.options = options or GeneratorOptions()
        self.diagnostics = diagnostics or DiagnosticLogger()

    def process(self, resolver: DeclarationResolver) -> ProcessResult:
        declarations = list(resolver.get_symbols_with_annotation(FUNCTION_MARKER))
        result = ProcessResult()
        if not declarations:
            return result

        first_diagnostic = len(self.diagnostics.diagnostics)
        sink = self._sink_factory()
        try:
            for declaration in declarations:
                text = compile_declaration(declaration, self.options, self.diagnostics)
                if text is None:
                    result.skipped.append(declaration)
                    continue
                sink.write(text)
                result.written.append(declaration)
        finally:
            sink.close()

        result.deferred = [declaration for declaration in declarations if not declaration.validate()]
        result.diagnostics = self.diagnostics.diagnostics[first_diagnostic:]
        return result


def generate_functions(
    declarations: typing.Iterable[AnnotatedDeclaration],
    options: GeneratorOptions | None = None,
    diagnostics: DiagnosticLogger | None = None,
) -> str:
    """Run a single pass over ``declarations`` and return the generated text."""
    sink = BufferSink()
    FunctionProcessor(lambda: sink, options, diagnostics).process(StaticResolver(declarations))
    return sink.getvalue()
