"""Allow running funcgen.codegen as a module.

This allows the CLI to be invoked as:
    python -m funcgen.codegen
"""

from .cli import main

if __name__ == "__main__":
    main()
