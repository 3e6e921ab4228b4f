"""
Utility functions and helpers for the Grid Arena engine.
"""

from .id_generator import (
    IDGenerator,
    IdFactory,
    new_entity_id,
)

__all__ = [
    "IDGenerator",
    "IdFactory",
    "new_entity_id",
]
