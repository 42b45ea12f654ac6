"""Command-line interfaces and other presentation layer components."""

from .cli.classify_structures import main as classify_structures_main

__all__ = [
    "classify_structures_main",
]
