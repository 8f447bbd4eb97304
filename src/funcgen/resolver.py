"""Discovery of annotated declarations.

The generator does not look for declarations itself. A resolver hands it every declaration
carrying a given marker, in a stable order, once per generation pass.
"""

import importlib
import sys
import types
import typing

from .introspect import declaration_from_class
from .markers import own_markers
from .model import AnnotatedDeclaration


class DeclarationResolver(typing.Protocol):
    def get_symbols_with_annotation(self, marker_name: str) -> typing.Iterable[AnnotatedDeclaration]: ...


class StaticResolver:
    """Resolver over a fixed sequence of declarations."""

    def __init__(self, declarations: typing.Iterable[AnnotatedDeclaration]):
        self._declarations = list(declarations)

    def get_symbols_with_annotation(self, marker_name: str) -> list[AnnotatedDeclaration]:
        return [declaration for declaration in self._declarations if declaration.find_marker(marker_name) is not None]


class ModuleResolver:
    """Resolver over the classes defined in a set of imported Python modules.

    Classes are returned module by module, in definition order. Marked objects that are not
    classes are ignored, and so are classes a module merely imports from elsewhere.
    """

    def __init__(self, modules: typing.Iterable[types.ModuleType]):
        self.modules = list(modules)

    @classmethod
    def from_module_names(cls, module_names: typing.Iterable[str]) -> "ModuleResolver":
        """
        Import modules by qualified name and build a resolver over them.

        Raises:
            ImportError: If one of the modules cannot be imported
        """
        modules = []
        for module_name in module_names:
            try:
                importlib.import_module(module_name)
            except ImportError as e:
                raise ImportError(f"Could not import module '{module_name}': {e}") from e
            modules.append(sys.modules[module_name])
        return cls(modules)

    def get_symbols_with_annotation(self, marker_name: str) -> typing.Iterator[AnnotatedDeclaration]:
        for module in self.modules:
            for obj in list(vars(module).values()):
                if not isinstance(obj, type) or obj.__module__ != module.__name__:
                    continue
                if any(marker.short_name == marker_name for marker in own_markers(obj)):
                    yield declaration_from_class(obj)
