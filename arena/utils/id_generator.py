"""
ID generation utilities for entities.

Player and obstacle ids are opaque strings. Production code uses random
uuid4 hex ids; tests can plug in a sequential generator for readable ids.
"""

import itertools
import uuid
from typing import Callable, Iterator

IdFactory = Callable[[], str]


def new_entity_id() -> str:
    """Return a fresh opaque id."""
    return uuid.uuid4().hex


class IDGenerator:
    """
    Generates unique, sequential ids such as "p1", "p2".

    This is a simple wrapper around itertools.count that makes
    testing easier and provides a clear contract. Instances are callable
    so they can be passed wherever an IdFactory is expected.
    """

    def __init__(self, prefix: str = "e", start: int = 1):
        """
        Initialize the ID generator.

        Args:
            prefix: Text put in front of every number
            start: The first number to generate (default: 1)
        """
        self._prefix = prefix
        self._counter: Iterator[int] = itertools.count(start)

    def next_id(self) -> str:
        """Generate the next unique id."""
        return f"{self._prefix}{next(self._counter)}"

    def __call__(self) -> str:
        return self.next_id()
