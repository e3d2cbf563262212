from .randomness import PythonRandomSource, gameplay_random, seeded_random

__all__ = [
    "PythonRandomSource",
    "gameplay_random",
    "seeded_random",
]
