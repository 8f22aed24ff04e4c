"""Test helper modules.

- in_memory_store: page store and renderer doubles for publisher tests
"""

from .in_memory_store import InMemoryPageStore, StubRenderer

__all__ = [
    'InMemoryPageStore',
    'StubRenderer',
]
