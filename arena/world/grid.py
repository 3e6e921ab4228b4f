"""
Grid - Spatial logic for the arena.

The Grid handles:
- Coordinate validation
- Distance and line geometry
- Occupancy scans along straight lines (paths and rays)
- Starting corners

Coordinate System:
- X increases to the RIGHT
- Y increases DOWNWARD (screen convention)
- Origin (0, 0) is at TOP-LEFT
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from ..core.types import EntityKind, GridPos


@dataclass(frozen=True)
class Occupant:
    """
    What sits on a cell, tagged by kind.

    Attributes:
        kind: PLAYER or OBSTACLE
        entity: The Player or Obstacle object
    """
    kind: EntityKind
    entity: Any

    @property
    def id(self) -> str:
        return self.entity.id


OccupancyLookup = Callable[[GridPos], Optional[Occupant]]


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class Grid:
    """
    A square grid with screen coordinates (Y+ = DOWN).

    Provides spatial queries without game rules and without state of its own.
    Occupancy is read through a lookup callable supplied by the owner of the
    entities, so the same Grid always sees the live board.

    Attributes:
        size: Width and height of the grid
    """

    def __init__(self, size: int, occupant_at: Optional[OccupancyLookup] = None):
        """
        Initialize a grid.

        Args:
            size: Grid width and height (must be positive)
            occupant_at: Returns the Occupant of a cell or None; defaults to an empty board

        Raises:
            ValueError: If the size is invalid
        """
        if size <= 0:
            raise ValueError(f"Grid size must be positive: {size}")

        self.size = size
        self._occupant_at: OccupancyLookup = occupant_at or (lambda pos: None)

    def in_bounds(self, pos: GridPos) -> bool:
        """
        Check if a position is within grid boundaries.

        Args:
            pos: Position to check (x, y)

        Returns:
            True if position is valid, False otherwise
        """
        x, y = pos
        return 0 <= x < self.size and 0 <= y < self.size

    @staticmethod
    def straight_line(a: GridPos, b: GridPos) -> bool:
        """True if a and b share a column or a row (no diagonals)."""
        return a[0] == b[0] or a[1] == b[1]

    @staticmethod
    def manhattan_distance(a: GridPos, b: GridPos) -> int:
        """
        Calculate Manhattan (taxicab) distance between two positions.

        Args:
            a: First position (x, y)
            b: Second position (x, y)

        Returns:
            Manhattan distance as an integer
        """
        return abs(a[0] - b[0]) + abs(a[1] - b[1])

    @staticmethod
    def direction(a: GridPos, b: GridPos) -> Tuple[int, int]:
        """Unit step (dx, dy) pointing from a towards b."""
        return _sign(b[0] - a[0]), _sign(b[1] - a[1])

    @staticmethod
    def adjacent(a: GridPos, b: GridPos) -> bool:
        """True if b is one of the 8 neighbours of a."""
        return max(abs(a[0] - b[0]), abs(a[1] - b[1])) == 1

    def occupant_at(self, pos: GridPos) -> Optional[Occupant]:
        return self._occupant_at(pos)

    def is_occupied(self, pos: GridPos) -> bool:
        return self._occupant_at(pos) is not None

    def path_clear(self, start: GridPos, target: GridPos) -> bool:
        """
        Check that every cell from start (exclusive) to target (inclusive) is free.

        Callers must ensure start and target lie on a straight line.
        A target equal to start is treated as blocked (the mover stands there).
        """
        dx, dy = self.direction(start, target)
        if (dx, dy) == (0, 0):
            return False

        x, y = start
        while (x, y) != target:
            x += dx
            y += dy
            if self.is_occupied((x, y)):
                return False
        return True

    def first_entity_along_ray(
        self,
        start: GridPos,
        target: GridPos,
        max_range: int,
    ) -> Optional[Occupant]:
        """
        Walk from start towards target and return the first occupant met.

        The start cell itself is never examined. The walk stops when it leaves
        the grid, once the travelled distance exceeds max_range, or after the
        target cell has been examined.

        Args:
            start: Origin of the ray (the attacker's cell)
            target: Cell the ray is aimed at (same row or column as start)
            max_range: Maximum Manhattan distance reached by the ray

        Returns:
            The first Occupant found, or None
        """
        dx, dy = self.direction(start, target)
        if (dx, dy) == (0, 0):
            return None

        x, y = start[0] + dx, start[1] + dy
        while self.in_bounds((x, y)) and self.manhattan_distance(start, (x, y)) <= max_range:
            occupant = self.occupant_at((x, y))
            if occupant is not None:
                return occupant
            if (x, y) == target:
                break
            x += dx
            y += dy
        return None

    def starting_positions(self) -> List[GridPos]:
        """The four corners in join order: top-left, top-right, bottom-left, bottom-right."""
        edge = self.size - 1
        return [(0, 0), (edge, 0), (0, edge), (edge, edge)]

    def __str__(self) -> str:
        """String representation."""
        return f"Grid({self.size}x{self.size})"

    def __repr__(self) -> str:
        """Detailed representation."""
        return f"Grid(size={self.size})"
