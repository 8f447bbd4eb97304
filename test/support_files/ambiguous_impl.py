from typing import Annotated, Protocol

from funcgen import Returns, function


@function(name="first")
class First(Protocol):
    value: int


@function(name="ambiguous")
class Ambiguous(Protocol):
    left: Annotated[int, Returns]
    right: Annotated[int, Returns]


@function(name="never_generated")
class NeverGenerated(Protocol):
    value: str
