"""Generator options.

Options arrive as a flat string mapping (``-A key=value`` on the command line), the same
shape a build tool hands to an annotation processor.
"""

from __future__ import annotations

import logging
import typing
from dataclasses import dataclass

from .exceptions import OptionError

logger = logging.getLogger("funcgen")

IGNORE_GENERIC_ARGS = "ignoreGenericArgs"

_BOOLEAN_VALUES = ("true", "false")


@dataclass(frozen=True)
class GeneratorOptions:
    ignore_generic_args: bool = False

    @classmethod
    def from_mapping(cls, options: typing.Mapping[str, str]) -> GeneratorOptions:
        for key in options:
            if key != IGNORE_GENERIC_ARGS:
                logger.debug("Ignoring unrecognized option %r", key)

        raw = options.get(IGNORE_GENERIC_ARGS)
        if raw is not None and raw not in _BOOLEAN_VALUES:
            logger.warning("Option %s expects 'true' or 'false', got %r, using false", IGNORE_GENERIC_ARGS, raw)
        # only the literal "true" switches generic rendering off
        return cls(ignore_generic_args=raw == "true")


def parse_option_pairs(pairs: typing.Iterable[str]) -> dict[str, str]:
    """Parse ``key=value`` strings into an options mapping.

    Raises:
        OptionError: If a pair has no ``=`` or an empty key
    """
    options: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise OptionError(f"Invalid option '{pair}', expected KEY=VALUE")
        options[key] = value.strip()
    return options
