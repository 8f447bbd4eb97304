import pytest
import types

from funcgen import function
from funcgen.model import FUNCTION_MARKER, AnnotatedDeclaration, DeclarationKind, Marker
from funcgen.resolver import ModuleResolver, StaticResolver


def test_static_resolver_filters_by_marker():
    marked = AnnotatedDeclaration("Marked", DeclarationKind.INTERFACE, (Marker(FUNCTION_MARKER, {"name": "f"}),))
    unmarked = AnnotatedDeclaration("Unmarked", DeclarationKind.INTERFACE, (Marker("Other"),))

    assert StaticResolver([unmarked, marked]).get_symbols_with_annotation(FUNCTION_MARKER) == [marked]


def test_module_resolver_in_definition_order(support_files):
    resolver = ModuleResolver.from_module_names(["declarations_impl"])

    declarations = list(resolver.get_symbols_with_annotation(FUNCTION_MARKER))

    assert [d.simple_name for d in declarations] == ["MyAmazingFunction", "MyNewFunction", "Transfer"]
    assert all(d.kind is DeclarationKind.INTERFACE for d in declarations)


def test_module_resolver_includes_wrong_kinds(support_files):
    resolver = ModuleResolver.from_module_names(["wrong_kind_impl"])

    declarations = list(resolver.get_symbols_with_annotation(FUNCTION_MARKER))

    assert [(d.simple_name, d.kind) for d in declarations] == [
        ("Before", DeclarationKind.INTERFACE),
        ("Concrete", DeclarationKind.CLASS),
        ("After", DeclarationKind.INTERFACE),
    ]


def test_module_resolver_ignores_functions_and_imported_classes():
    module = types.ModuleType("fake_declarations")

    @function(name="not_a_class")
    def marked_function():
        pass

    class Imported:
        pass

    function(name="imported")(Imported)

    module.marked_function = marked_function
    module.Imported = Imported

    assert list(ModuleResolver([module]).get_symbols_with_annotation(FUNCTION_MARKER)) == []


def test_module_resolver_import_error():
    with pytest.raises(ImportError, match="Could not import module 'funcgen_no_such_module'"):
        ModuleResolver.from_module_names(["funcgen_no_such_module"])
