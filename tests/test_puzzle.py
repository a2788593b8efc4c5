import pytest

from ambench.microbench.common import SETTINGS
from ambench.microbench.puzzle import (
    PUZZLE_S,
    Puzzle,
    PuzzleBench,
    UpdatableHeap,
    solve,
)


def test_solution_layout():
    goal = Puzzle.solution()
    assert goal.tiles == tuple(range(1, 16)) + (0,)
    assert goal.lower_bound() == 0
    assert goal.solvable()
    assert goal.blank == (3, 3)


def test_moves_possible_from_solution():
    goal = Puzzle.solution()
    assert not goal.tile_up_possible()
    assert not goal.tile_left_possible()
    assert goal.tile_down_possible()
    assert goal.tile_right_possible()


def test_move_round_trip():
    goal = Puzzle.solution()
    moved = goal.tile_down()
    assert moved.blank == (2, 3)
    assert moved.lower_bound() == 1
    assert moved != goal
    assert moved.tile_up() == goal
    assert goal.tile_right().tile_left() == goal


def test_impossible_move_gives_invalid():
    bad = Puzzle.solution().tile_up()
    assert not bad.valid
    assert bad.lower_bound() == Puzzle.SIDE ** 3
    assert not bad.solvable()
    assert bad.tile_down() is bad


def test_duplicate_tiles_are_invalid():
    tiles = list(range(1, 16)) + [1]
    p = Puzzle(tiles)
    assert not p.valid
    assert not (p == p)


def test_bad_shape_rejected():
    with pytest.raises(ValueError):
        Puzzle([1, 2, 3])
    with pytest.raises(ValueError):
        Puzzle(list(range(15)) + [16])


def test_unsolvable_detected():
    tiles = list(range(1, 16)) + [0]
    tiles[13], tiles[14] = tiles[14], tiles[13]
    p = Puzzle(tiles)
    assert p.valid
    assert not p.solvable()
    with pytest.raises(ValueError):
        solve(p, 10)


def test_heap_pops_in_weight_order():
    goal = Puzzle.solution()
    near = goal.tile_down()
    far = near.tile_down()
    heap = UpdatableHeap(16)
    heap.push(far, 0)
    heap.push(goal, 0)
    heap.push(near, 0)
    assert len(heap) == 3
    assert [heap.pop(), heap.pop(), heap.pop()] == [goal, near, far]
    assert len(heap) == 0


def test_heap_decrease_key_keeps_first_length():
    goal = Puzzle.solution()
    near = goal.tile_down()
    heap = UpdatableHeap(16)
    heap.push(near, 5)
    heap.push(goal, 3)
    heap.push(near, 1)
    assert heap.pop() == near
    assert heap.length(near) == 5
    assert heap.length(goal) == 3


def test_heap_unknown_length_and_empty_pop():
    heap = UpdatableHeap(4)
    assert heap.length(Puzzle.solution()) == 2147483647
    with pytest.raises(IndexError):
        heap.pop()


def test_solve_small():
    assert solve(Puzzle(PUZZLE_S), 10) == SETTINGS["15pz"][0].checksum


@pytest.mark.parametrize("index", [0, 1])
def test_bench_validates(index):
    bench = PuzzleBench(SETTINGS["15pz"][index])
    bench.prepare()
    assert not bench.validate()
    bench.run()
    assert bench.validate()