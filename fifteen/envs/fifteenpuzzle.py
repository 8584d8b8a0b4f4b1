"""Stochastic fifteen puzzle environment for planning agents."""

from numpy import ndarray
from numpy.random import PCG64DXSM, Generator, default_rng

from fifteen.core import BOARD_SIZE, HEURISTIC_SCALE, PuzzleState
from fifteen.utils.board import render_board
from fifteen.utils.scramble import scramble


class FifteenPuzzle:
    """
    Fifteen puzzle environment with an unreliable actuator.

    Each call to ``step`` makes a single attempt: a geometrically legal move may still fail, in which
    case the board is left unchanged.
    """

    # ##: All Actions.
    ACTIONS = {'up': 0, 'down': 1, 'left': 2, 'right': 3}

    def __init__(
        self,
        board: PuzzleState | None = None,
        scramble_moves: int = 40,
        seed: int | None = None,
        scale: float = HEURISTIC_SCALE,
        generator: Generator | None = None,
    ):
        """
        Initialize the puzzle.

        Parameters
        ----------
        board : PuzzleState, optional
            Fixed start board. When omitted, a board is scrambled from the goal.
        scramble_moves : int, optional
            Length of the scrambling walk (default is 40).
        seed : int, optional
            Seed of the environment's generator. Ignored when ``generator`` is given.
        scale : float, optional
            Divisor of the heuristic used as reward (default is 1600).
        generator : Generator, optional
            Shared source of randomness, used for scrambling and for the odds rolls.
        """
        self._start = board.copy() if board is not None else None
        self._scramble_moves = scramble_moves
        self._scale = scale
        self._generator = generator if generator is not None else default_rng(PCG64DXSM(seed))
        self._current_state: PuzzleState | None = None
        self._current_reward = 0.0

        self.reset()

    @property
    def generator(self) -> Generator:
        """Generator rolling the odds of this environment."""
        return self._generator

    @property
    def state(self) -> PuzzleState:
        """The live board. Planners commit moves to it directly."""
        return self._current_state

    @property
    def is_finished(self) -> bool:
        """
        Check if the puzzle is solved.

        Returns
        -------
        bool
            True if the board is in the goal configuration.
        """
        return self._current_state.is_goal()

    @property
    def observation(self) -> ndarray:
        """
        Get the current board.

        Returns
        -------
        ndarray
            A 4x4 copy of the board, 0 being the blank.
        """
        return self._current_state.tiles.reshape(BOARD_SIZE, BOARD_SIZE)

    @property
    def reward(self) -> float:
        """Heuristic value of the current board."""
        return self._current_reward

    def reset(self, seed: int | None = None) -> ndarray:
        """
        Restore the start board, or scramble a new one.

        Parameters
        ----------
        seed : int, optional
            Reseed the generator before scrambling.

        Returns
        -------
        ndarray
            The new board as a 4x4 array.
        """
        if seed is not None:
            self._generator = default_rng(PCG64DXSM(seed))
        if self._start is not None:
            self._current_state = self._start.copy()
        else:
            self._current_state = scramble(self._scramble_moves, self._generator)
        self._current_reward = self._current_state.heuristic_value(self._scale)
        return self.observation

    def step(self, action: int) -> tuple[ndarray, float, bool]:
        """
        Attempt one move of the blank.

        Parameters
        ----------
        action : int
            The move to attempt (0: up, 1: down, 2: left, 3: right).

        Returns
        -------
        tuple[ndarray, float, bool]
            A tuple containing:
            - The board after the attempt (ndarray)
            - The heuristic value of that board (float)
            - Whether the puzzle is solved (bool)

        Raises
        ------
        ValueError
            If the move would leave the board.
        """
        self._current_state.attempt_move(action, self._generator)
        self._current_reward = self._current_state.heuristic_value(self._scale)
        return self.observation, self.reward, self.is_finished

    def render(self) -> None:
        """
        Render the game board. This method prints the current state of the board to the console.
        """
        print(render_board(self._current_state))
