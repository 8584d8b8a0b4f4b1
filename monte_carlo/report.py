"""Human readable dump of search nodes."""

from fifteen.core import HEURISTIC_SCALE, Action
from fifteen.utils.board import render_board

from .node import SearchNode
from .search import EXPLORATION_WEIGHT, ucb_score


def _statistics(node: SearchNode, exploration_weight: float, scale: float) -> list[str]:
    average = f'{node.average_value():.6f}' if node.visits > 0 else 'inf'
    return [
        f'Total value:\t{node.values:.6f}',
        f'Visits:\t\t{node.visits}',
        f'Average value:\t{average}',
        f'UCB1 score:\t{ucb_score(node, exploration_weight):.6f}',
        f'Heuristic:\t{node.state.heuristic_value(scale):.6f}',
        render_board(node.state),
    ]


def describe_node(
    node: SearchNode, exploration_weight: float = EXPLORATION_WEIGHT, scale: float = HEURISTIC_SCALE
) -> str:
    """
    Describe a node and each of its child slots.

    Parameters
    ----------
    node : SearchNode
        The node to describe, usually a root after a search.
    exploration_weight : float, optional
        The exploration constant used for the UCB1 column.
    scale : float, optional
        Divisor of the heuristic column.

    Returns
    -------
    str
        Multi-line report: the node's statistics and board, then one block per move.
    """
    lines = _statistics(node, exploration_weight, scale)
    if node.is_leaf():
        lines.append('No children.')
        return '\n'.join(lines)

    for action, child in zip(Action, node.children):
        if child is None:
            lines.append(f'Move {action.symbol}: illegal.')
            continue
        lines.append(f'Move {action.symbol}:')
        lines.extend(_statistics(child, exploration_weight, scale))
    return '\n'.join(lines)
