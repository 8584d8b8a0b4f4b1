"""
Configuration of the online Monte Carlo planner.

Defaults: 20 iterations per decision, random walks of 200 steps and an
exploration constant of 2.
"""

from dataclasses import dataclass

from fifteen.core import HEURISTIC_SCALE, MAX_PROXIMITY


@dataclass
class SearchConfig:
    """
    Configuration of one planner.

    Raises
    ------
    ValueError
        If a field is out of range.
    """

    # ##>: Search budget.
    iterations: int = 20  # MCTS iterations per committed move
    rollout_depth: int = 200  # Random walk budget per iteration, also its normalizer

    # ##>: Selection.
    exploration_weight: float = 2.0  # UCB1 constant C

    # ##>: Evaluation; fixed for the lifetime of a planner.
    heuristic_scale: float = HEURISTIC_SCALE

    # ##>: Keep the chosen subtree as the next root instead of rebuilding the tree.
    retain_tree: bool = False

    # ##>: Warn when committing a move needs more failed attempts than this.
    slow_commit_threshold: int = 25

    def __post_init__(self):
        """Validate the configuration."""
        # ##>: The first iteration only simulates the root; the second expands it.
        if self.iterations < 2:
            raise ValueError(f'iterations must be at least 2 so that the root gets expanded, got {self.iterations}.')
        if self.rollout_depth < 1:
            raise ValueError(f'rollout_depth must be positive, got {self.rollout_depth}.')
        if self.exploration_weight < 0:
            raise ValueError(f'exploration_weight must be non-negative, got {self.exploration_weight}.')
        if self.heuristic_scale <= MAX_PROXIMITY:
            raise ValueError(
                f'heuristic_scale must exceed {MAX_PROXIMITY} so that only the goal reaches the maximum reward, '
                f'got {self.heuristic_scale}.'
            )
        if self.slow_commit_threshold < 0:
            raise ValueError(f'slow_commit_threshold must be non-negative, got {self.slow_commit_threshold}.')


def default_config() -> SearchConfig:
    """
    Create the default configuration.

    Returns
    -------
    SearchConfig
        Configuration with 20 iterations of 200 step random walks.
    """
    return SearchConfig()


def fast_config() -> SearchConfig:
    """
    Create a smaller configuration for quick experiments.

    Returns
    -------
    SearchConfig
        Reduced search budget.
    """
    return SearchConfig(iterations=8, rollout_depth=20)
