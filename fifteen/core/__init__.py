# -*- coding: utf-8 -*-
"""
This module provides the game logic of the stochastic fifteen puzzle.

It includes the action set, the geometric legality rules of the blank tile, the odds of an attempted
move, and the `PuzzleState` board with its unreliable transition and heuristic evaluation.
"""

from .moves import BOARD_SIZE, NUM_CELLS, Action, is_valid_move, legal_actions, success_odds
from .puzzle import GOAL, HEURISTIC_SCALE, MAX_PROXIMITY, MAX_REWARD, PuzzleState, tile_proximity

__all__ = [
    'Action',
    'BOARD_SIZE',
    'GOAL',
    'HEURISTIC_SCALE',
    'MAX_PROXIMITY',
    'MAX_REWARD',
    'NUM_CELLS',
    'PuzzleState',
    'is_valid_move',
    'legal_actions',
    'success_odds',
    'tile_proximity',
]
