import pytest
from pathlib import Path

from funcgen.model import FUNCTION_MARKER, AnnotatedDeclaration, DeclarationKind, Marker

SUPPORT_FILES = Path(__file__).parent / "support_files"


@pytest.fixture
def support_files(monkeypatch):
    """Make the declaration modules in support_files importable."""
    monkeypatch.syspath_prepend(str(SUPPORT_FILES))
    return SUPPORT_FILES


@pytest.fixture
def make_declaration():
    """Build an annotated interface declaration with a ``Function(name=...)`` marker."""

    def _make_declaration(simple_name, *properties, function_name="make", kind=DeclarationKind.INTERFACE):
        return AnnotatedDeclaration(
            simple_name=simple_name,
            kind=kind,
            markers=(Marker(FUNCTION_MARKER, {"name": function_name}),),
            properties=tuple(properties),
            qualified_name=f"com.example.{simple_name}",
        )

    return _make_declaration
