# -*- coding: utf-8 -*-
"""
Monte Carlo Tree Search (MCTS) for the stochastic fifteen puzzle.

This module provides the four phases of the search (UCB1 selection, expansion, random walk and
backpropagation) together with the driver running a fixed number of iterations from a root.

Moves may fail at random. Expansion retries a move until it succeeds, so a child always holds the one
legal post-move board, while the random walk pays one step of its budget for every failed attempt.
"""
import logging
from dataclasses import dataclass, field
from math import inf, log, sqrt

from numpy.random import Generator

from fifteen.core import HEURISTIC_SCALE, Action, PuzzleState

from .config import SearchConfig
from .node import SearchNode, tree_size

logger = logging.getLogger(__name__)

EXPLORATION_WEIGHT = 2.0


class SearchError(RuntimeError):
    """Raised when the planner cannot produce a decision."""


@dataclass
class RolloutResult:
    """
    Outcome of one random walk.

    Attributes
    ----------
    total : float
        Sum of the heuristic values met after each successful move. Not averaged.
    successes : int
        Moves that happened.
    failures : int
        Attempts that failed and only consumed budget.
    """

    total: float = 0.0
    successes: int = 0
    failures: int = 0


@dataclass
class IterationResult:
    """Outcome of one select, expand, rollout and backpropagate cycle."""

    node: SearchNode
    reward: float
    expanded: int
    rollout: RolloutResult


@dataclass
class SearchStatistics:
    """
    Counters of one decision cycle.

    Attributes
    ----------
    iterations : int
        Iterations run.
    expansions : int
        Leaves expanded.
    rollout_successes : int
        Successful moves across all random walks.
    rollout_failures : int
        Failed attempts across all random walks.
    tree_sizes : list[int]
        Valid node count after each iteration.
    """

    iterations: int = 0
    expansions: int = 0
    rollout_successes: int = 0
    rollout_failures: int = 0
    tree_sizes: list[int] = field(default_factory=list)

    @property
    def tree_size(self) -> int:
        """Valid node count at the end of the search."""
        return self.tree_sizes[-1] if self.tree_sizes else 0

    def record(self, result: IterationResult, size: int) -> None:
        """Fold one iteration into the counters."""
        self.iterations += 1
        self.expansions += int(result.expanded > 0)
        self.rollout_successes += result.rollout.successes
        self.rollout_failures += result.rollout.failures
        self.tree_sizes.append(size)


def ucb_score(node: SearchNode, exploration_weight: float = EXPLORATION_WEIGHT) -> float:
    """
    Compute the UCB1 score of a node.

    Parameters
    ----------
    node : SearchNode
        The node to score.
    exploration_weight : float, optional
        The exploration constant C (default is 2).

    Returns
    -------
    float
        0 for the root, infinity for an unvisited node, otherwise
        ``W / n + C * sqrt(ln(N) / n)`` with N the parent's visit count.
    """
    if node.parent is None:
        return 0.0
    if node.visits == 0:
        return inf
    return node.values / node.visits + exploration_weight * sqrt(log(node.parent.visits) / node.visits)


def pick_child(node: SearchNode, exploration_weight: float = EXPLORATION_WEIGHT) -> int:
    """
    Select the child slot with the greatest UCB1 score.

    Parameters
    ----------
    node : SearchNode
        The node whose children are compared.
    exploration_weight : float, optional
        The exploration constant C (default is 2).

    Returns
    -------
    int
        Index of the selected slot, or -1 if the node has no selectable child.

    Notes
    -----
    Slots are scanned in canonical order (up, down, left, right) and the first of equal scores wins.
    """
    best_index, best_score = -1, -inf
    for index, child in enumerate(node.children):
        if child is None:
            continue
        score = ucb_score(child, exploration_weight)
        if score > best_score:
            best_index, best_score = index, score
    return best_index


def select_leaf(root: SearchNode, exploration_weight: float = EXPLORATION_WEIGHT) -> SearchNode:
    """
    Descend from the root by UCB1 until a leaf is reached.

    Parameters
    ----------
    root : SearchNode
        Root of the tree.
    exploration_weight : float, optional
        The exploration constant C (default is 2).

    Returns
    -------
    SearchNode
        A leaf, or an expanded node without any selectable child.
    """
    node = root
    while not node.is_leaf():
        index = pick_child(node, exploration_weight)
        if index < 0:
            break
        node = node.children[index]
    return node


def expand(node: SearchNode, generator: Generator, scale: float = HEURISTIC_SCALE) -> int:
    """
    Materialize the four child slots of a leaf.

    Parameters
    ----------
    node : SearchNode
        The leaf to expand.
    generator : Generator
        Source of the odds rolls.
    scale : float, optional
        Divisor of the heuristic seeding each child's value.

    Returns
    -------
    int
        Number of valid children created.

    Raises
    ------
    ValueError
        If the node is already expanded.

    Notes
    -----
    A legal move is retried on a private copy of the parent's board until it succeeds; the retries are
    free. Each child starts unvisited with its own heuristic value.
    """
    if not node.is_leaf():
        raise ValueError('Node is already expanded.')

    children: list[SearchNode | None] = []
    for action in Action:
        if not node.state.valid(action):
            children.append(None)
            continue
        board = node.state.copy()
        board.move(action, generator)
        children.append(SearchNode(state=board, parent=node, action=action, values=board.heuristic_value(scale)))

    node.children = children
    return len(node.valid_children())


def draw_action(state: PuzzleState, generator: Generator) -> Action:
    """Draw uniform action ids until one is geometrically legal."""
    action = Action(int(generator.integers(0, len(Action))))
    while not state.valid(action):
        action = Action(int(generator.integers(0, len(Action))))
    return action


def random_walk(state: PuzzleState, budget: int, generator: Generator, scale: float = HEURISTIC_SCALE) -> RolloutResult:
    """
    Walk randomly from a board, detached from the tree.

    Parameters
    ----------
    state : PuzzleState
        Starting board; it is copied.
    budget : int
        Remaining steps. The walk stops once the budget drops below zero, so ``budget + 1`` attempts
        are made.
    generator : Generator
        Source of the action draws and odds rolls.
    scale : float, optional
        Divisor of the heuristic.

    Returns
    -------
    RolloutResult
        Accumulated reward and attempt counts.

    Notes
    -----
    Redrawing an illegal action is free. A failed attempt costs one step and earns nothing, which
    penalizes boards where only unreliable moves lead forward.
    """
    board = state.copy()
    result = RolloutResult()
    while budget >= 0:
        action = draw_action(board, generator)
        if board.attempt_move(action, generator):
            result.total += board.heuristic_value(scale)
            result.successes += 1
        else:
            result.failures += 1
        budget -= 1
    return result


def backpropagate(node: SearchNode, reward: float) -> None:
    """
    Fold a rollout return into the tree.

    Parameters
    ----------
    node : SearchNode
        The node the rollout started from.
    reward : float
        The normalized rollout return.

    Notes
    -----
    The return is added once to the starting node. Then, up to the root, each node gains a visit and its
    parent gains the node's whole cumulative value, not only the return. Values therefore compound along
    the path. The root gains its visit last.
    """
    node.values += reward
    while node.parent is not None:
        node.visits += 1
        node.parent.values += node.values
        node = node.parent
    node.visits += 1


def iterate(root: SearchNode, config: SearchConfig, generator: Generator) -> IterationResult:
    """
    Run one MCTS iteration.

    Parameters
    ----------
    root : SearchNode
        Root of the tree.
    config : SearchConfig
        Planner configuration.
    generator : Generator
        Source of randomness.

    Returns
    -------
    IterationResult
        The node the rollout started from, the backpropagated reward and the expansion size.
    """
    node = select_leaf(root, config.exploration_weight)

    # ##: Expand a leaf met for the second time and continue from its first valid child.
    expanded = 0
    if node.visits != 0 and node.is_leaf():
        expanded = expand(node, generator, config.heuristic_scale)
        node = next(iter(node.valid_children()), node)

    # ##: Simulate and back-propagate.
    rollout = random_walk(node.state, config.rollout_depth, generator, config.heuristic_scale)
    reward = rollout.total / config.rollout_depth
    backpropagate(node, reward)
    return IterationResult(node=node, reward=reward, expanded=expanded, rollout=rollout)


def monte_carlo_search(root: SearchNode, config: SearchConfig, generator: Generator) -> SearchStatistics:
    """
    Perform Monte Carlo Tree Search from a root.

    Parameters
    ----------
    root : SearchNode
        Root of the tree, fresh or retained from the previous decision.
    config : SearchConfig
        Planner configuration; ``config.iterations`` iterations are run.
    generator : Generator
        Source of randomness.

    Returns
    -------
    SearchStatistics
        Counters of this search.
    """
    statistics = SearchStatistics()
    size = tree_size(root)
    for _ in range(config.iterations):
        result = iterate(root, config, generator)
        size += result.expanded
        statistics.record(result, size)

    logger.debug(
        'Search done: %d iterations, %d expansions, %d nodes, %d failed rollout attempts',
        statistics.iterations,
        statistics.expansions,
        statistics.tree_size,
        statistics.rollout_failures,
    )
    return statistics


def best_action(root: SearchNode, exploration_weight: float = EXPLORATION_WEIGHT) -> Action:
    """
    Choose the move to commit once the search is over.

    Parameters
    ----------
    root : SearchNode
        Root of the searched tree.
    exploration_weight : float, optional
        The exploration constant C (default is 2).

    Returns
    -------
    Action
        The root child with the greatest UCB1 score, scored against the root's visit count.

    Raises
    ------
    SearchError
        If the root has no selectable child.
    """
    index = pick_child(root, exploration_weight)
    if index < 0:
        raise SearchError(f'No move available from the root board {root.state!r}.')
    return Action(index)
