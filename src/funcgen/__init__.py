from .exceptions import AmbiguousReturnError, GenerationError, MissingAnnotationArgumentError
from .markers import In, Out, Returns, Star, function
from .model import AnnotatedDeclaration, DeclarationKind, Marker, Property, TypeReference, Variance
from .options import GeneratorOptions

__all__ = [
    "AmbiguousReturnError",
    "AnnotatedDeclaration",
    "DeclarationKind",
    "GenerationError",
    "GeneratorOptions",
    "In",
    "Marker",
    "MissingAnnotationArgumentError",
    "Out",
    "Property",
    "Returns",
    "Star",
    "TypeReference",
    "Variance",
    "function",
]
