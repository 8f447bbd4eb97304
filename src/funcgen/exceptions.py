class GenerationError(Exception):
    """Base error for failures that abort a whole generation pass."""


class AmbiguousReturnError(GenerationError):
    """More than one property of a declaration carries the ``Returns`` marker."""

    def __init__(self, declaration, property_names):
        self.declaration = declaration
        self.property_names = tuple(property_names)
        super().__init__(
            f"Can't use @Returns on more than one property "
            f"({declaration}: {', '.join(self.property_names)})"
        )


class MissingAnnotationArgumentError(GenerationError):
    """The ``Function`` marker of a declaration has no usable ``name`` argument.

    The marker contract guarantees the argument, so this is an internal contract breach
    rather than something to recover from.
    """

    def __init__(self, declaration, argument: str):
        self.declaration = declaration
        self.argument = argument
        super().__init__(f"Missing required argument '{argument}' on @Function for {declaration}")


class OptionError(GenerationError, ValueError):
    """A generator option could not be parsed."""
