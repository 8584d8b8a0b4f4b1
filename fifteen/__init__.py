"""
Stochastic fifteen puzzle: a 4x4 sliding-tile board whose moves can fail at random.
"""
