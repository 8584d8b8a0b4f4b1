# -*- coding: utf-8 -*-
"""
Module containing the online Monte Carlo Tree Search planner for the stochastic fifteen puzzle.
"""
from .actor import Decision, PlanActLoop
from .config import SearchConfig, default_config, fast_config
from .node import SearchNode, release, tree_size
from .report import describe_node
from .search import (
    SearchError,
    SearchStatistics,
    backpropagate,
    best_action,
    expand,
    iterate,
    monte_carlo_search,
    pick_child,
    random_walk,
    select_leaf,
    ucb_score,
)

__all__ = [
    'Decision',
    'PlanActLoop',
    'SearchConfig',
    'SearchError',
    'SearchNode',
    'SearchStatistics',
    'backpropagate',
    'best_action',
    'default_config',
    'describe_node',
    'expand',
    'fast_config',
    'iterate',
    'monte_carlo_search',
    'pick_child',
    'random_walk',
    'release',
    'select_leaf',
    'tree_size',
    'ucb_score',
]
