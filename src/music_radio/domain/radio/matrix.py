"""
Dense directed adjacency over table slots.

The matrix is capacity x capacity. Only the square of occupied slots is ever
read; callers pass the current occupancy to the row queries.
"""

from typing import List


class RelationMatrix:
    """Square boolean adjacency matrix indexed by slot."""

    def __init__(self, size: int):
        self.size = size
        self._cells: List[List[bool]] = [[False] * size for _ in range(size)]

    def add_edge(self, orig: int, dest: int) -> bool:
        """
        Set the orig -> dest cell.

        Returns:
            True if the edge was absent before, False if it already existed
        """
        if self._cells[orig][dest]:
            return False
        self._cells[orig][dest] = True
        return True

    def has_edge(self, orig: int, dest: int) -> bool:
        return self._cells[orig][dest]

    def out_degree(self, orig: int, occupied: int) -> int:
        """Number of edges from orig to the first `occupied` slots."""
        return sum(self._cells[orig][:occupied])

    def successors(self, orig: int, occupied: int) -> List[int]:
        """Destination slots of orig in ascending slot order."""
        row = self._cells[orig]
        return [dest for dest in range(occupied) if row[dest]]
