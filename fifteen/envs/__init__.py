# -*- coding: utf-8 -*-
"""
Python implementation of the stochastic fifteen puzzle.

This module provides the `FifteenPuzzle` class, which wraps a board and its unreliable actuator.
"""

from .fifteenpuzzle import FifteenPuzzle

__all__ = ['FifteenPuzzle']
