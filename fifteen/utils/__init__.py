# -*- coding: utf-8 -*-
"""
This module provides utilities for reading, rendering and generating fifteen puzzle boards.
"""

from .board import apply_moves, parse_board, render_board
from .scramble import average_heuristic, scramble, shuffled

__all__ = ['apply_moves', 'parse_board', 'render_board', 'average_heuristic', 'scramble', 'shuffled']
