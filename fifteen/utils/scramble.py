"""
Generation of start boards and heuristic diagnostics.
"""

from numpy.random import Generator

from fifteen.core import HEURISTIC_SCALE, NUM_CELLS, PuzzleState


def scramble(moves: int, generator: Generator) -> PuzzleState:
    """
    Walk randomly away from the goal, never undoing the previous move.

    Parameters
    ----------
    moves : int
        Number of moves of the walk.
    generator : Generator
        Source of randomness.

    Returns
    -------
    PuzzleState
        A board that is solvable by construction.

    Notes
    -----
    Moves are applied with ``slide``, the walk never fails.
    """
    state = PuzzleState.goal()
    previous_blank = None
    for _ in range(moves):
        candidates = [
            action for action in state.legal_actions() if state.blank_index + action.offset != previous_blank
        ]
        previous_blank = state.blank_index
        state.slide(candidates[int(generator.integers(0, len(candidates)))])
    return state


def shuffled(generator: Generator) -> PuzzleState:
    """
    Draw a uniformly random permutation of the tiles.

    Half of these boards cannot be solved.
    """
    return PuzzleState(generator.permutation(NUM_CELLS))


def average_heuristic(samples: int, generator: Generator, scale: float = HEURISTIC_SCALE) -> float:
    """
    Average the heuristic value of random boards.

    Parameters
    ----------
    samples : int
        Number of shuffled boards to evaluate.
    generator : Generator
        Source of randomness.
    scale : float, optional
        Divisor of the heuristic (default is 1600).

    Returns
    -------
    float
        Mean heuristic value, useful to calibrate the scale against the rollout depth.
    """
    if samples <= 0:
        raise ValueError('At least one sample is required.')
    total = sum(shuffled(generator).heuristic_value(scale) for _ in range(samples))
    return total / samples
