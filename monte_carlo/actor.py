# -*- coding: utf-8 -*-
"""
Online planner for the stochastic fifteen puzzle.

The planner alternates deliberation and action: it searches from the current real board, commits the
chosen move to that board, and starts over until the goal is reached.
"""
import logging
from collections.abc import Iterator
from dataclasses import dataclass

from numpy.random import PCG64DXSM, Generator, default_rng

from fifteen.core import Action, PuzzleState

from .config import SearchConfig, default_config
from .node import SearchNode, release
from .report import describe_node
from .search import SearchError, SearchStatistics, best_action, monte_carlo_search

logger = logging.getLogger(__name__)


@dataclass
class Decision:
    """
    One committed move.

    Attributes
    ----------
    step : int
        Index of the decision, from 0.
    action : Action
        The move committed to the real board.
    failures : int
        Failed attempts before the move happened on the real board.
    state : PuzzleState
        Snapshot of the real board after the move.
    statistics : SearchStatistics
        Counters of the search behind the decision.
    report : str, optional
        Dump of the searched root and its children, taken before the move was committed.
    """

    step: int
    action: Action
    failures: int
    state: PuzzleState
    statistics: SearchStatistics
    report: str | None = None


class PlanActLoop:
    """
    Plan-act loop driving Monte Carlo Tree Search on the real board.

    Attributes
    ----------
    config : SearchConfig
        Planner configuration.
    generator : Generator
        The single source of randomness, shared by the search and the real actuator.
    history : list[Decision]
        Decisions committed so far.

    Methods
    -------
    choose_action(state)
        Search from a board and return the best move without applying it.
    step(state)
        Search, then commit the best move to the real board.
    solve(state, max_steps)
        Commit moves until the goal is reached.
    """

    def __init__(
        self, config: SearchConfig | None = None, generator: Generator | None = None, keep_reports: bool = False
    ):
        """
        Initialize the planner.

        Parameters
        ----------
        config : SearchConfig, optional
            Planner configuration (default is ``default_config()``).
        generator : Generator, optional
            Seeded source of randomness. A fresh ``PCG64DXSM`` generator is used when omitted.
        keep_reports : bool, optional
            Store a dump of each searched root in its decision (default is False).
        """
        self.config = config or default_config()
        self.generator = generator if generator is not None else default_rng(PCG64DXSM())
        self.keep_reports = keep_reports
        self.history: list[Decision] = []
        self._root: SearchNode | None = None

    @property
    def root(self) -> SearchNode | None:
        """Tree of the last decision, or the retained subtree."""
        return self._root

    def _prepare_root(self, state: PuzzleState) -> SearchNode:
        """Reuse the retained subtree when it matches the board, build a new root otherwise."""
        if self.config.retain_tree and self._root is not None and self._root.state == state:
            return self._root
        if self._root is not None:
            release(self._root)
        self._root = SearchNode.root(state, self.config.heuristic_scale)
        return self._root

    def _advance(self, root: SearchNode, action: Action) -> None:
        """Keep the chosen subtree as the next root, discarding its siblings."""
        if not self.config.retain_tree:
            return
        chosen = root.child(action)
        chosen.detach()
        release(root, keep=chosen)
        self._root = chosen

    def _search(self, state: PuzzleState) -> tuple[SearchNode, Action, SearchStatistics]:
        root = self._prepare_root(state)
        statistics = monte_carlo_search(root, self.config, self.generator)
        return root, best_action(root, self.config.exploration_weight), statistics

    def choose_action(self, state: PuzzleState) -> Action:
        """
        Search from a board and return the most promising move.

        Parameters
        ----------
        state : PuzzleState
            The current real board; it is not modified.

        Returns
        -------
        Action
            The chosen move.

        Raises
        ------
        SearchError
            If the root has no selectable move.
        """
        _, action, _ = self._search(state)
        return action

    def step(self, state: PuzzleState) -> tuple[Action, PuzzleState]:
        """
        Run one decision cycle and commit its move.

        Parameters
        ----------
        state : PuzzleState
            The real board. The move is applied to it in place, retrying until it happens.

        Returns
        -------
        tuple[Action, PuzzleState]
            The committed move and the real board after it.

        Raises
        ------
        SearchError
            If the root has no selectable move.
        """
        root, action, statistics = self._search(state)
        report = None
        if self.keep_reports:
            report = describe_node(root, self.config.exploration_weight, self.config.heuristic_scale)

        failures = state.move(action, self.generator)
        self._advance(root, action)

        decision = Decision(
            step=len(self.history),
            action=action,
            failures=failures,
            state=state.copy(),
            statistics=statistics,
            report=report,
        )
        self.history.append(decision)

        logger.debug('Step %d: committed %s after %d failed attempts', decision.step, action.name, failures)
        if failures > self.config.slow_commit_threshold:
            logger.warning('Move %s needed %d attempts before it happened', action.name, failures + 1)
        return action, state

    def solve(self, state: PuzzleState, max_steps: int | None = None) -> Iterator[Decision]:
        """
        Commit moves until the board reaches the goal.

        Parameters
        ----------
        state : PuzzleState
            The real board, modified in place.
        max_steps : int, optional
            Give up after this many decisions. Unbounded when omitted: the planner may then never stop.

        Yields
        ------
        Decision
            Each committed move, in order.

        Raises
        ------
        SearchError
            If ``max_steps`` decisions were made without reaching the goal.
        """
        steps = 0
        while not state.is_goal():
            if max_steps is not None and steps >= max_steps:
                raise SearchError(f'Goal not reached after {max_steps} moves.')
            self.step(state)
            steps += 1
            yield self.history[-1]
        logger.info('Goal reached after %d moves', steps)
