# -*- coding: utf-8 -*-
"""
Search tree node for the online Monte Carlo planner.

A node caches a board, its visit and value statistics, and owns four child slots once expanded. A slot
holds either a child node or ``None`` when the corresponding move is geometrically illegal.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from fifteen.core import HEURISTIC_SCALE, Action, PuzzleState


@dataclass(kw_only=True, eq=False)
class SearchNode:
    """
    Node of the search tree.

    Attributes
    ----------
    state : PuzzleState
        Board represented by this node. Owned by the node.
    parent : SearchNode, optional
        Back-reference used for upward traversal only. None at the root.
    action : Action, optional
        Move that produced this node from its parent.
    values : float
        Cumulative value W.
    visits : int
        Visit count n.
    children : list
        Four slots in canonical action order once expanded, empty before. ``None`` marks an illegal move.
    """

    state: PuzzleState
    parent: SearchNode | None = field(default=None, repr=False)
    action: Action | None = None
    values: float = 0.0
    visits: int = 0
    children: list[SearchNode | None] = field(default_factory=list, repr=False)

    @classmethod
    def root(cls, state: PuzzleState, scale: float = HEURISTIC_SCALE) -> SearchNode:
        """
        Wrap a copy of a real board as a tree root.

        Parameters
        ----------
        state : PuzzleState
            The current real board; it is copied.
        scale : float, optional
            Divisor of the heuristic seeding the root value.

        Returns
        -------
        SearchNode
            Unvisited root whose value is the board's heuristic.
        """
        board = state.copy()
        return cls(state=board, values=board.heuristic_value(scale))

    def is_leaf(self) -> bool:
        """Check if the node has no materialized children."""
        return not self.children

    def is_root(self) -> bool:
        """Check if the node has no parent."""
        return self.parent is None

    def valid_children(self) -> list[SearchNode]:
        """Materialized children, skipping illegal slots."""
        return [child for child in self.children if child is not None]

    def child(self, action: int) -> SearchNode | None:
        """
        Get the child reached by an action.

        Returns
        -------
        SearchNode, optional
            None if the node is a leaf or the action is illegal.
        """
        if self.is_leaf():
            return None
        return self.children[action]

    def average_value(self) -> float:
        """Mean value W / n, 0 for an unvisited node."""
        return self.values / self.visits if self.visits > 0 else 0.0

    def detach(self) -> None:
        """Turn this node into a root, dropping the link to its parent."""
        self.parent = None
        self.action = None


def tree_size(root: SearchNode) -> int:
    """
    Count the nodes of a tree, illegal slots excluded.

    Parameters
    ----------
    root : SearchNode
        Root of the tree.

    Returns
    -------
    int
        Number of valid nodes reachable from the root, root included.
    """
    count = 0
    stack = [root]
    while stack:
        node = stack.pop()
        count += 1
        stack.extend(node.valid_children())
    return count


def release(root: SearchNode, keep: SearchNode | None = None) -> None:
    """
    Break the links of a discarded tree so that it is reclaimed at once.

    Parameters
    ----------
    root : SearchNode
        Root of the tree to discard.
    keep : SearchNode, optional
        Subtree to spare; it must already be detached from its parent.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        if node is keep:
            continue
        stack.extend(node.valid_children())
        node.children = []
        node.parent = None
