"""
Core functionality for simulating the stochastic fifteen puzzle, including the board representation,
the unreliable move transition and the evaluation of a configuration.
"""

from __future__ import annotations

from collections.abc import Iterable

from numpy import abs as abs_array
from numpy import arange, array, array_equal, flatnonzero, int64, ndarray, sort
from numpy import sum as sum_array_values
from numpy.random import Generator

from .moves import BOARD_SIZE, NUM_CELLS, ROLL_HIGH, ROLL_LOW, Action, is_valid_move, legal_actions, success_odds

# ##>: Reward of the goal configuration; every other board scores strictly less.
MAX_REWARD = 1.0

# ##>: Largest Manhattan distance of a tile on a 4x4 board (opposite corners).
MAX_TILE_DISTANCE = 6

# ##>: Largest raw proximity score, reached only by boards with every tile in place.
MAX_PROXIMITY = MAX_TILE_DISTANCE * (NUM_CELLS - 1)

# ##>: Divisor keeping accumulated rollout rewards small; must exceed MAX_PROXIMITY.
HEURISTIC_SCALE = 1600.0

GOAL = tuple(range(1, NUM_CELLS)) + (0,)

_GOAL_BOARD = array(GOAL, dtype=int64)
_CELL_ROWS, _CELL_COLUMNS = divmod(arange(NUM_CELLS), BOARD_SIZE)


def tile_proximity(tiles: ndarray) -> int:
    """
    Sum ``6 - manhattan distance`` over every non-blank tile.

    Parameters
    ----------
    tiles : ndarray
        Flat board of 16 values, 0 being the blank.

    Returns
    -------
    int
        Raw (unscaled) proximity score, at most 90.

    Notes
    -----
    Tile ``v`` belongs in cell ``v - 1``.
    """
    mask = tiles != 0
    targets = tiles[mask] - 1
    distances = abs_array(_CELL_ROWS[mask] - targets // BOARD_SIZE) + abs_array(
        _CELL_COLUMNS[mask] - targets % BOARD_SIZE
    )
    return int(sum_array_values(MAX_TILE_DISTANCE - distances))


class PuzzleState:
    """
    A 4x4 sliding-tile board whose moves may stochastically fail.

    The board is a permutation of 0..15 stored flat, in row-major order. States behave as values:
    ``copy()`` returns a fully independent board and equality compares tiles.

    Parameters
    ----------
    tiles : Iterable[int]
        Sixteen values, row-major, 0 being the blank.

    Raises
    ------
    ValueError
        If the tiles are not a permutation of 0..15.
    """

    __slots__ = ('_tiles', '_blank')

    def __init__(self, tiles: Iterable[int]):
        board = array(list(tiles), dtype=int64).reshape(-1)
        if board.shape != (NUM_CELLS,) or not array_equal(sort(board), arange(NUM_CELLS)):
            raise ValueError(f'A board must be a permutation of 0..{NUM_CELLS - 1}, got {board.tolist()}.')
        self._tiles = board
        self._blank = int(flatnonzero(board == 0)[0])

    @classmethod
    def goal(cls) -> PuzzleState:
        """Build the solved board."""
        return cls(GOAL)

    @property
    def tiles(self) -> ndarray:
        """Copy of the flat board."""
        return self._tiles.copy()

    @property
    def blank_index(self) -> int:
        """Flat index of the blank tile."""
        return self._blank

    def at(self, index: int) -> int:
        """Value held by a cell."""
        return int(self._tiles[index])

    def copy(self) -> PuzzleState:
        """Return an independent copy of this board."""
        clone = PuzzleState.__new__(PuzzleState)
        clone._tiles = self._tiles.copy()
        clone._blank = self._blank
        return clone

    def valid(self, action: int) -> bool:
        """Check whether the blank's position allows the action (geometry only)."""
        return is_valid_move(self._blank, action)

    def legal_actions(self) -> list[Action]:
        """Geometrically legal actions, in canonical order."""
        return legal_actions(self._blank)

    def slide(self, action: int) -> None:
        """
        Move the blank deterministically, bypassing the odds roll.

        Parameters
        ----------
        action : int
            A geometrically legal action.

        Raises
        ------
        ValueError
            If the action would move the blank off the board.
        """
        if not self.valid(action):
            raise ValueError(f'Move {Action(action).name} is not legal with the blank at {self._blank}.')
        target = self._blank + Action(action).offset
        self._tiles[self._blank], self._tiles[target] = self._tiles[target], 0
        self._blank = target

    def attempt_move(self, action: int, generator: Generator) -> bool:
        """
        Attempt a move through the unreliable actuator.

        Parameters
        ----------
        action : int
            A geometrically legal action. Checking legality first is the caller's job.
        generator : Generator
            Source of uniformly distributed integers.

        Returns
        -------
        bool
            True if the move happened. On failure the board is left untouched.

        Raises
        ------
        ValueError
            If the action is not geometrically legal.
        """
        if not self.valid(action):
            raise ValueError(f'Move {Action(action).name} is not legal with the blank at {self._blank}.')
        roll = generator.integers(ROLL_LOW, ROLL_HIGH + 1)
        if roll < success_odds(self._blank, action):
            return False
        self.slide(action)
        return True

    def move(self, action: int, generator: Generator) -> int:
        """
        Repeat a move until the actuator succeeds.

        Parameters
        ----------
        action : int
            A geometrically legal action.
        generator : Generator
            Source of uniformly distributed integers.

        Returns
        -------
        int
            Number of failed attempts before the success.
        """
        failures = 0
        while not self.attempt_move(action, generator):
            failures += 1
        return failures

    def is_goal(self) -> bool:
        """Check for the canonical ascending ordering, blank last."""
        return array_equal(self._tiles, _GOAL_BOARD)

    def manhattan_distance(self) -> int:
        """Total Manhattan distance of the non-blank tiles to their targets."""
        return MAX_PROXIMITY - tile_proximity(self._tiles)

    def heuristic_value(self, scale: float = HEURISTIC_SCALE) -> float:
        """
        Evaluate the board; higher is better.

        Parameters
        ----------
        scale : float, optional
            Divisor applied to the raw proximity score (default is 1600).

        Returns
        -------
        float
            ``MAX_REWARD`` for the goal, otherwise the scaled proximity score.
        """
        if self.is_goal():
            return MAX_REWARD
        return tile_proximity(self._tiles) / scale

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PuzzleState):
            return NotImplemented
        return array_equal(self._tiles, other._tiles)

    # ##>: Boards are mutated in place by moves, so they are not hashable.
    __hash__ = None

    def __repr__(self) -> str:
        return f'PuzzleState({self._tiles.tolist()})'
