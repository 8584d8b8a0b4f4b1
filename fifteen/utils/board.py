"""Text conversion of fifteen puzzle boards."""

from fifteen.core import BOARD_SIZE, NUM_CELLS, Action, PuzzleState


def render_board(state: PuzzleState) -> str:
    """
    Render a board as four tab separated rows.

    Parameters
    ----------
    state : PuzzleState
        The board to render.

    Returns
    -------
    str
        Text of the board, one row per line.
    """
    rows = state.tiles.reshape(BOARD_SIZE, BOARD_SIZE).tolist()
    return '\n'.join('\t'.join(map(str, row)) for row in rows)


def parse_board(text: str) -> PuzzleState:
    """
    Read a board from whitespace separated integers.

    Parameters
    ----------
    text : str
        Sixteen integers, row-major, 0 being the blank. Commas are accepted as separators.

    Returns
    -------
    PuzzleState
        The parsed board.

    Raises
    ------
    ValueError
        If the text does not hold exactly sixteen integers forming a permutation of 0..15.
    """
    tokens = text.replace(',', ' ').split()
    if len(tokens) != NUM_CELLS:
        raise ValueError(f'Expected {NUM_CELLS} values, got {len(tokens)}.')
    return PuzzleState(int(token) for token in tokens)


def apply_moves(state: PuzzleState, letters: str) -> PuzzleState:
    """
    Slide the blank along a sequence of move letters, without odds rolls.

    Parameters
    ----------
    state : PuzzleState
        The board to modify in place.
    letters : str
        Move letters among U, D, L and R, case insensitive. Whitespace and commas are skipped.

    Returns
    -------
    PuzzleState
        The same board, after the moves.

    Raises
    ------
    ValueError
        If a letter is unknown or a move would leave the board.
    """
    for letter in letters.replace(',', ' ').split():
        for symbol in letter:
            state.slide(Action.from_symbol(symbol))
    return state
