from __future__ import annotations

from typing import Annotated, Optional, Protocol

from funcgen import In, Out, Returns, Star, function


class Payload:
    pass


@function(name="my_amazing_function")
class MyAmazingFunction(Protocol):
    name: str
    args: dict[str, list[Star]]
    end: Annotated[tuple[str, bool], Returns]


@function(name="new")
class MyNewFunction(Protocol):
    pass


@function(name="transfer")
class Transfer(Protocol):
    source: list[Out[Payload]]
    target: list[In[Payload]]
    note: Optional[str]
