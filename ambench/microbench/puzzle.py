"""A* search for the 15-puzzle with an updatable binary heap."""

import copy
from dataclasses import dataclass
from typing import Optional

from ambench.microbench.common import Setting

_M32 = 0xFFFFFFFF
_UNREACHED = 2147483647

PUZZLE_S = (1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 0, 11, 13, 14, 15, 12)
PUZZLE_M = (1, 2, 3, 4, 5, 6, 7, 8, 12, 0, 14, 13, 11, 15, 10, 9)
PUZZLE_L = (0, 2, 3, 4, 9, 6, 7, 8, 5, 11, 10, 12, 1, 15, 13, 14)
PUZZLE_H = (2, 6, 8, 0, 9, 15, 4, 12, 5, 13, 11, 14, 1, 7, 3, 10)

# Start position and step limit for each input size.
_INPUTS = {
    0: (PUZZLE_S, 10),
    1: (PUZZLE_M, 2048),
    2: (PUZZLE_L, 16384),
    3: (PUZZLE_H, 786432),
}


class Puzzle:
    """An immutable 4 x 4 sliding-tile position; 0 is the blank."""

    SIDE = 4
    __slots__ = ("_tiles", "_valid", "_zero", "_manhattan", "_hash")

    def __init__(self, tiles) -> None:
        n = self.SIDE
        tiles = tuple(tiles)
        if len(tiles) != n * n:
            raise ValueError(f"a puzzle needs exactly {n * n} tiles")
        if any(not 0 <= t < n * n for t in tiles):
            raise ValueError("tile value out of range")
        self._tiles = tiles
        self._valid = len(set(tiles)) == n * n
        pos = tiles.index(0) if 0 in tiles else 0
        self._zero = divmod(pos, n)
        self._manhattan = sum(
            abs((t - 1) // n - p // n) + abs((t - 1) % n - p % n)
            for p, t in enumerate(tiles) if t
        )
        h = 0
        if self._valid:
            for t in tiles:
                h = (h * 1973 + t) & _M32
        self._hash = h

    @property
    def tiles(self) -> tuple[int, ...]:
        return self._tiles

    @property
    def valid(self) -> bool:
        return self._valid

    @property
    def blank(self) -> tuple[int, int]:
        """Row and column of the blank."""
        return self._zero

    def __hash__(self) -> int:
        return self._hash if self._valid else 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Puzzle):
            return NotImplemented
        if not self._valid or not other._valid or hash(self) != hash(other):
            return False
        return self._tiles == other._tiles

    def __ne__(self, other: object) -> bool:
        # Invalid positions are neither equal nor unequal to anything.
        if not isinstance(other, Puzzle):
            return NotImplemented
        if not self._valid or not other._valid:
            return False
        return self._tiles != other._tiles

    def __repr__(self) -> str:
        return f"Puzzle({list(self._tiles)!r})"

    def solvable(self) -> bool:
        """Whether the position can reach the solution."""
        if not self._valid:
            return False
        n = self.SIDE
        entries = [t if t else n * n for t in self._tiles]
        parity = sum(1 for i, a in enumerate(entries) for b in entries[i + 1:] if a > b)
        zi, zj = self._zero
        parity += 2 * n - 2 - zi - zj
        return parity % 2 == 0

    def lower_bound(self) -> int:
        """Manhattan distance to the solution, or N**3 for an invalid position."""
        return self._manhattan if self._valid else self.SIDE ** 3

    def tile_up_possible(self) -> bool:
        return self._valid and self._zero[0] != self.SIDE - 1

    def tile_down_possible(self) -> bool:
        return self._valid and self._zero[0] != 0

    def tile_left_possible(self) -> bool:
        return self._valid and self._zero[1] != self.SIDE - 1

    def tile_right_possible(self) -> bool:
        return self._valid and self._zero[1] != 0

    def _invalid_copy(self) -> "Puzzle":
        result = copy.copy(self)
        result._valid = False
        return result

    def _slide(self, possible: bool, di: int, dj: int) -> "Puzzle":
        if not self._valid:
            return self
        if not possible:
            return self._invalid_copy()
        n = self.SIDE
        zi, zj = self._zero
        here = zi * n + zj
        there = (zi + di) * n + (zj + dj)
        tiles = list(self._tiles)
        tiles[here], tiles[there] = tiles[there], 0
        return Puzzle(tiles)

    def tile_up(self) -> "Puzzle":
        """Move the tile below the blank up."""
        return self._slide(self.tile_up_possible(), 1, 0)

    def tile_down(self) -> "Puzzle":
        """Move the tile above the blank down."""
        return self._slide(self.tile_down_possible(), -1, 0)

    def tile_left(self) -> "Puzzle":
        """Move the tile right of the blank left."""
        return self._slide(self.tile_left_possible(), 0, 1)

    def tile_right(self) -> "Puzzle":
        """Move the tile left of the blank right."""
        return self._slide(self.tile_right_possible(), 0, -1)

    @classmethod
    def solution(cls) -> "Puzzle":
        """The solved position: tiles in order with the blank last."""
        n = cls.SIDE
        return cls(list(range(1, n * n)) + [0])


@dataclass(eq=False)
class _Step:
    element: Puzzle
    heap_index: int
    path_length: int
    path_weight: int
    visited: bool = False


class UpdatableHeap:
    """Binary min-heap keyed on path weight, with lookup of every pushed element."""

    def __init__(self, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._heap: list[Optional[_Step]] = [None]
        self._steps: dict[Puzzle, _Step] = {}
        self.max_size = 0

    def __len__(self) -> int:
        return len(self._heap) - 1

    def _weight(self, i: int) -> int:
        return self._heap[i].path_weight

    def _swap(self, i: int, j: int) -> None:
        heap = self._heap
        heap[i], heap[j] = heap[j], heap[i]
        heap[i].heap_index = i
        heap[j].heap_index = j

    def _percolate_down(self) -> None:
        size = len(self)
        n = 1
        while 2 * n + 1 <= size:
            w, left, right = self._weight(n), self._weight(2 * n), self._weight(2 * n + 1)
            if w < left and w < right:
                return
            if left < right:
                self._swap(n, 2 * n)
                n = 2 * n
            else:
                self._swap(n, 2 * n + 1)
                n = 2 * n + 1
        if 2 * n == size and self._weight(2 * n) < self._weight(n):
            self._swap(n, 2 * n)

    def _percolate_up(self, n: int) -> None:
        while n != 1:
            parent = n // 2
            if self._weight(parent) > self._weight(n):
                self._swap(parent, n)
                n = parent
            else:
                return

    def push(self, element: Puzzle, path_length: int) -> None:
        """Insert ``element``, or lower its weight if this path is shorter."""
        step = self._steps.get(element)
        if step is None:
            if len(self) > self.capacity:
                raise OverflowError("heap capacity exceeded")
            step = _Step(element, len(self) + 1, path_length,
                         path_length + element.lower_bound())
            self._steps[element] = step
            self._heap.append(step)
            self._percolate_up(len(self))
            self.max_size = max(self.max_size, len(self))
        elif not step.visited:
            weight = path_length + step.element.lower_bound()
            if weight < step.path_weight:
                step.path_weight = weight
                self._percolate_up(step.heap_index)

    def pop(self) -> Puzzle:
        """Remove and return the element of least weight."""
        if len(self) == 0:
            raise IndexError("pop from an empty heap")
        top = self._heap[1]
        last = self._heap.pop()
        if len(self) > 0:
            self._heap[1] = last
            last.heap_index = 1
            self._percolate_down()
        return top.element

    def length(self, element: Puzzle) -> int:
        """Path length recorded when ``element`` was first pushed."""
        step = self._steps.get(element)
        return _UNREACHED if step is None else step.path_length


def solve(puzzle: Puzzle, maxn: int) -> int:
    """Search for the solution; return path length times pops, or -1 if not reached."""
    if not puzzle.solvable():
        raise ValueError("puzzle is not solvable")
    goal = Puzzle.solution()
    heap = UpdatableHeap(maxn)
    heap.push(puzzle, 0)
    popped = 0
    while len(heap) and popped != maxn:
        top = heap.pop()
        popped += 1
        if top == goal:
            return heap.length(top) * popped
        moves = (
            (top.tile_left_possible, top.tile_left),
            (top.tile_right_possible, top.tile_right),
            (top.tile_up_possible, top.tile_up),
            (top.tile_down_possible, top.tile_down),
        )
        for possible, move in moves:
            if possible():
                heap.push(move(), heap.length(top) + 1)
    return -1


class PuzzleBench:
    """Solve a fixed 15-puzzle position with A* search."""

    name = "15pz"

    def __init__(self, setting: Setting) -> None:
        self.setting = setting
        self.answer: Optional[int] = None

    def prepare(self) -> None:
        if self.setting.size not in _INPUTS:
            raise ValueError(f"no puzzle for size {self.setting.size}")
        self.answer = None

    def run(self) -> None:
        tiles, maxn = _INPUTS[self.setting.size]
        self.answer = solve(Puzzle(tiles), maxn)

    def validate(self) -> bool:
        if self.answer is None:
            return False
        return (self.answer & _M32) == self.setting.checksum