"""Allow ``python -m holdem``."""

from .cli import main

main()
