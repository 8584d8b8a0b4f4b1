"""
Tests for the search node report.
"""

from unittest import TestCase, main

from numpy.random import default_rng

from fifteen.core import PuzzleState
from monte_carlo.config import SearchConfig
from monte_carlo.node import SearchNode
from monte_carlo.report import describe_node
from monte_carlo.search import monte_carlo_search


class TestDescribeNode(TestCase):
    """Test the multi-line node report."""

    def test_leaf(self):
        """A leaf reports its statistics and board only."""
        report = describe_node(SearchNode.root(PuzzleState.goal()))

        self.assertIn('Visits:\t\t0', report)
        self.assertIn('Average value:\tinf', report)
        self.assertIn('13\t14\t15\t0', report)
        self.assertTrue(report.endswith('No children.'))

    def test_searched_root(self):
        """An expanded root reports every slot, illegal ones included."""
        root = SearchNode.root(PuzzleState.goal())
        monte_carlo_search(root, SearchConfig(iterations=5, rollout_depth=5), default_rng(0))
        report = describe_node(root)

        self.assertIn('Move U:\n', report)
        self.assertIn('Move D: illegal.', report)
        self.assertIn('Move L:\n', report)
        self.assertIn('Move R: illegal.', report)
        self.assertEqual(report.count('UCB1 score:'), 3)


if __name__ == '__main__':
    main()
