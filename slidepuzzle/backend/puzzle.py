"""Reducer for the 3x3 swap puzzle played by a single client session."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Iterable

from .errors import ValidationError
from .models import INITIAL_CONFIGURATION, TARGET_CONFIGURATION

SIZE = 3
CELLS = SIZE * SIZE

Grid = tuple[int, ...]
SearchTree = dict[Grid, tuple[Grid | None, tuple[int, int] | None, int]]


@dataclass(frozen=True)
class PuzzleState:
    grid: tuple[int, ...] = INITIAL_CONFIGURATION
    selected: int | None = None
    moves: int = 0
    solved: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "grid": list(self.grid),
            "selected": self.selected,
            "moves": self.moves,
            "solved": self.solved,
        }


@dataclass(frozen=True)
class MoveResult:
    state: PuzzleState
    events: list[dict[str, Any]] = field(default_factory=list)

    @property
    def solved_moves(self) -> int | None:
        """Final move count when this move completed the puzzle."""
        for event in self.events:
            if event["kind"] == "solved":
                return int(event["moves"])
        return None


def new_game(grid: Iterable[int] = INITIAL_CONFIGURATION) -> PuzzleState:
    return PuzzleState(grid=_checked_grid(grid))


def reset(state: PuzzleState) -> PuzzleState:
    return PuzzleState(grid=INITIAL_CONFIGURATION)


def is_adjacent(first: int, second: int) -> bool:
    """True when both cells share an edge. Diagonals never count."""
    row1, col1 = divmod(first, SIZE)
    row2, col2 = divmod(second, SIZE)
    return abs(row1 - row2) + abs(col1 - col2) == 1


def neighbors(index: int) -> list[int]:
    _check_index(index)
    return [other for other in range(CELLS) if is_adjacent(index, other)]


def select_or_swap(state: PuzzleState, index: int) -> MoveResult:
    """Apply a click on ``index`` and return the next state."""
    _check_index(index)
    if state.solved:
        return MoveResult(state=state)

    if state.selected is None:
        return MoveResult(state=replace(state, selected=index), events=[{"kind": "selected", "index": index}])

    if state.selected == index:
        return MoveResult(state=replace(state, selected=None), events=[{"kind": "deselected", "index": index}])

    if not is_adjacent(state.selected, index):
        return MoveResult(state=replace(state, selected=index), events=[{"kind": "selected", "index": index}])

    grid = _swap(state.grid, state.selected, index)
    moves = state.moves + 1
    events: list[dict[str, Any]] = [{"kind": "swap", "from": state.selected, "to": index, "moves": moves}]
    solved = grid == TARGET_CONFIGURATION
    if solved:
        events.append({"kind": "solved", "moves": moves})
    return MoveResult(state=PuzzleState(grid=grid, selected=None, moves=moves, solved=solved), events=events)


ADJACENT_PAIRS: tuple[tuple[int, int], ...] = tuple(
    (first, second) for first in range(CELLS) for second in range(first + 1, CELLS) if is_adjacent(first, second)
)


def shortest_solution(grid: Iterable[int]) -> list[tuple[int, int]]:
    """Return a minimal list of adjacent swaps that turns ``grid`` into the target.

    Bidirectional breadth-first search. Adjacent transpositions on a connected
    grid generate every permutation, so a solution always exists.
    """
    start = _checked_grid(grid)
    if start == TARGET_CONFIGURATION:
        return []

    forward: SearchTree = {start: (None, None, 0)}
    backward: SearchTree = {TARGET_CONFIGURATION: (None, None, 0)}
    forward_frontier = [start]
    backward_frontier = [TARGET_CONFIGURATION]

    while forward_frontier and backward_frontier:
        if len(forward_frontier) <= len(backward_frontier):
            forward_frontier, meetings = _expand_layer(forward_frontier, forward, backward)
        else:
            backward_frontier, meetings = _expand_layer(backward_frontier, backward, forward)
        if meetings:
            meeting = min(meetings, key=lambda node: forward[node][2] + backward[node][2])
            return _trace_forward(meeting, forward) + _trace_backward(meeting, backward)

    raise ValidationError("Grid cannot be solved")


def _expand_layer(frontier: list[Grid], seen: SearchTree, other: SearchTree) -> tuple[list[Grid], list[Grid]]:
    next_frontier: list[Grid] = []
    meetings: list[Grid] = []
    for node in frontier:
        depth = seen[node][2]
        for pair in ADJACENT_PAIRS:
            child = _swap(node, *pair)
            if child in seen:
                continue
            seen[child] = (node, pair, depth + 1)
            if child in other:
                meetings.append(child)
            next_frontier.append(child)
    return next_frontier, meetings


def _trace_forward(node: Grid, seen: SearchTree) -> list[tuple[int, int]]:
    path: list[tuple[int, int]] = []
    parent, pair, _ = seen[node]
    while parent is not None:
        path.append(pair)
        parent, pair, _ = seen[parent]
    path.reverse()
    return path


def _trace_backward(node: Grid, seen: SearchTree) -> list[tuple[int, int]]:
    # swaps are their own inverse, so walking towards the target replays them in order
    path: list[tuple[int, int]] = []
    parent, pair, _ = seen[node]
    while parent is not None:
        path.append(pair)
        parent, pair, _ = seen[parent]
    return path


def _swap(grid: tuple[int, ...], first: int, second: int) -> tuple[int, ...]:
    cells = list(grid)
    cells[first], cells[second] = cells[second], cells[first]
    return tuple(cells)


def _check_index(index: int) -> None:
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < CELLS:
        raise ValidationError(f"Cell index must be between 0 and {CELLS - 1}")


def _checked_grid(grid: Iterable[int]) -> tuple[int, ...]:
    cells = tuple(grid)
    if sorted(cells) != list(TARGET_CONFIGURATION):
        raise ValidationError("Grid must be a permutation of 1-9")
    return cells
