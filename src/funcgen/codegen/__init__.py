"""Code generation package for funcgen."""

# Re-export public functions
from .compile import FunctionProcessor, ProcessResult, compile_declaration, compile_property, generate_functions
from .type_rendering import render_type, render_type_arguments, resolve_type
from .writer import BufferSink, FileSink

__all__ = [
    "FunctionProcessor",
    "ProcessResult",
    "compile_declaration",
    "compile_property",
    "generate_functions",
    "render_type",
    "render_type_arguments",
    "resolve_type",
    "BufferSink",
    "FileSink",
]
