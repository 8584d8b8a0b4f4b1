"""
Move utilities for the stochastic fifteen puzzle, providing the action set, the geometric legality
rules of the blank tile and the odds of an attempted move succeeding.
"""

from enum import IntEnum

BOARD_SIZE = 4
NUM_CELLS = BOARD_SIZE * BOARD_SIZE

# ##>: Inclusive bounds of the success roll, drawn as ``integers(1, 101)``.
ROLL_LOW = 1
ROLL_HIGH = 100


class Action(IntEnum):
    """
    Moves of the blank tile, in canonical order.

    The integer value is the action id used to index child slots. The character code of the
    move letter is what the odds function consumes.
    """

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3

    @property
    def symbol(self) -> str:
        """Single letter name of the move ('U', 'D', 'L' or 'R')."""
        return 'UDLR'[self.value]

    @property
    def code(self) -> int:
        """Numeric code of the move letter."""
        return ord(self.symbol)

    @property
    def offset(self) -> int:
        """Shift of the blank's flat index when the move succeeds."""
        return _OFFSETS[self.value]

    @classmethod
    def from_symbol(cls, symbol: str) -> 'Action':
        """
        Parse a move letter, case insensitive.

        Raises
        ------
        ValueError
            If the letter is not one of U, D, L, R.
        """
        index = 'UDLR'.find(symbol.upper())
        if len(symbol) != 1 or index < 0:
            raise ValueError(f'Unknown move letter: {symbol!r}.')
        return cls(index)


_OFFSETS = (-BOARD_SIZE, BOARD_SIZE, -1, 1)


def is_valid_move(blank_index: int, action: int) -> bool:
    """
    Check whether the blank can move in a direction without leaving the board.

    Parameters
    ----------
    blank_index : int
        Flat index (0-15) of the blank tile.
    action : int
        Action id (0: up, 1: down, 2: left, 3: right).

    Returns
    -------
    bool
        True if the move is geometrically legal. Randomness is never consulted.
    """
    row, column = divmod(blank_index, BOARD_SIZE)
    if action == Action.UP:
        return row > 0
    if action == Action.DOWN:
        return row < BOARD_SIZE - 1
    if action == Action.LEFT:
        return column > 0
    if action == Action.RIGHT:
        return column < BOARD_SIZE - 1
    return False


def legal_actions(blank_index: int) -> list[Action]:
    """
    Determine the geometrically legal actions for a blank position.

    Parameters
    ----------
    blank_index : int
        Flat index (0-15) of the blank tile.

    Returns
    -------
    list[Action]
        Legal actions, in canonical order.
    """
    return [action for action in Action if is_valid_move(blank_index, action)]


def success_odds(blank_index: int, action: int) -> int:
    """
    Compute the odds threshold of an attempted move.

    Parameters
    ----------
    blank_index : int
        Flat index (0-15) of the blank tile.
    action : int
        Action id (0: up, 1: down, 2: left, 3: right).

    Returns
    -------
    int
        Threshold in [0, 99]. A move succeeds when a roll drawn uniformly in [1, 100] is greater
        than or equal to it.

    Notes
    -----
    Thresholds are computed as
    ``(15 + (code % (index + 5)) * (code % (index + 4))) % 100``
    where ``code`` is the character code of the move letter.
    """
    code = Action(action).code
    return (15 + (code % (blank_index + 5)) * (code % (blank_index + 4))) % 100
