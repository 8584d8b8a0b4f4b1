"""
Tests for PlanActLoop (high-level planning interface).

Focuses on move selection, commitment to the real board, tree reuse
between decisions and the end-to-end loop.
"""

from unittest import TestCase, main

from numpy.random import default_rng

from fifteen.core import Action, PuzzleState
from fifteen.utils import scramble
from monte_carlo.actor import PlanActLoop
from monte_carlo.config import SearchConfig, default_config, fast_config
from monte_carlo.search import SearchError


class NeverFail:
    """Random source whose odds rolls always succeed; action draws come from a seeded generator."""

    def __init__(self, seed: int = 0):
        self._generator = default_rng(seed)

    def integers(self, low, high):
        if low == 1:
            return high - 1
        return self._generator.integers(low, high)


def one_move_from_goal() -> PuzzleState:
    """Board solved by moving the blank right once."""
    return PuzzleState(list(range(1, 15)) + [0, 15])


class TestPlanActLoop(TestCase):
    """Test PlanActLoop move selection and commitment."""

    def setUp(self):
        """Create a planner with a small budget for fast tests."""
        self.config = SearchConfig(iterations=10, rollout_depth=10)
        self.planner = PlanActLoop(config=self.config, generator=default_rng(0))

    def test_default_configuration(self):
        """Without arguments the planner uses the default configuration."""
        planner = PlanActLoop()
        self.assertEqual(planner.config, default_config())
        self.assertIsNone(planner.root)
        self.assertEqual(planner.history, [])

    def test_choose_action_returns_legal_action(self):
        """The chosen move is legal and the board is left alone."""
        state = scramble(15, default_rng(1))
        before = state.copy()

        action = self.planner.choose_action(state)

        self.assertIsInstance(action, Action)
        self.assertIn(action, state.legal_actions())
        self.assertEqual(state, before)

    def test_step_commits_move(self):
        """A step moves the blank of the real board once."""
        state = scramble(15, default_rng(2))
        before = state.copy()

        action, after = self.planner.step(state)

        self.assertIs(after, state)
        before.slide(action)
        self.assertEqual(state, before)

    def test_step_records_decision(self):
        """Each step appends a decision with its search counters."""
        state = scramble(15, default_rng(3))
        self.planner.step(state)
        self.planner.step(state)

        self.assertEqual([decision.step for decision in self.planner.history], [0, 1])
        last = self.planner.history[-1]
        self.assertEqual(last.state, state)
        self.assertIsNot(last.state, state)
        self.assertGreaterEqual(last.failures, 0)
        self.assertEqual(last.statistics.iterations, self.config.iterations)

    def test_step_logs_decision(self):
        """Each committed move is logged."""
        state = scramble(15, default_rng(4))
        with self.assertLogs('monte_carlo.actor', level='DEBUG') as logs:
            self.planner.step(state)
        self.assertIn('committed', logs.output[0])

    def test_rebuilds_tree_by_default(self):
        """Without tree reuse each decision starts from a fresh root."""
        state = scramble(15, default_rng(5))
        self.planner.step(state)
        first = self.planner.root
        self.planner.step(state)

        self.assertIsNot(self.planner.root, first)
        self.assertEqual(self.planner.root.visits, self.config.iterations)

    def test_reports_off_by_default(self):
        """Decisions carry no dump unless asked for."""
        self.planner.step(scramble(15, default_rng(6)))
        self.assertIsNone(self.planner.history[-1].report)


class TestTreeReuse(TestCase):
    """Test the retained subtree mode."""

    def setUp(self):
        self.config = SearchConfig(iterations=10, rollout_depth=10, retain_tree=True)
        self.planner = PlanActLoop(config=self.config, generator=default_rng(7))

    def test_chosen_child_becomes_root(self):
        """After a step the retained root is the detached child for the real board."""
        state = scramble(15, default_rng(8))
        self.planner.step(state)
        root = self.planner.root

        self.assertTrue(root.is_root())
        self.assertEqual(root.state, state)
        self.assertIsNot(root.state, state)

    def test_retained_statistics_accumulate(self):
        """Searching from the retained root adds to its statistics."""
        state = scramble(15, default_rng(9))
        self.planner.step(state)
        root = self.planner.root
        visits = root.visits

        self.planner.choose_action(state)

        self.assertIs(self.planner.root, root)
        self.assertEqual(root.visits, visits + self.config.iterations)

    def test_report_describes_searched_root(self):
        """The dump shows the tree behind the decision, not the retained subtree."""
        planner = PlanActLoop(config=self.config, generator=default_rng(11), keep_reports=True)
        state = scramble(15, default_rng(12))
        legal = state.legal_actions()
        planner.step(state)
        report = planner.history[-1].report

        # ##>: A fresh root is visited once per iteration.
        self.assertTrue(report.startswith('Total value:'))
        self.assertIn(f'Visits:\t\t{self.config.iterations}\n', report)
        self.assertLess(planner.root.visits, self.config.iterations)
        self.assertEqual(report.count('UCB1 score:'), 1 + len(legal))

    def test_mismatched_board_rebuilds(self):
        """A board that does not match the retained root gets a fresh tree."""
        state = scramble(15, default_rng(10))
        self.planner.step(state)
        retained = self.planner.root

        self.planner.choose_action(one_move_from_goal())

        self.assertIsNot(self.planner.root, retained)
        self.assertTrue(retained.is_leaf())


class TestSolve(TestCase):
    """Test the plan-act loop until the goal."""

    def test_one_move_from_goal(self):
        """With reliable moves the winning child dominates after one visit each."""
        # ##>: Iterations: root rollout, then up, left and right children once each.
        config = SearchConfig(iterations=4, rollout_depth=10)
        planner = PlanActLoop(config=config, generator=NeverFail(0))
        state = one_move_from_goal()

        decisions = list(planner.solve(state))

        self.assertTrue(state.is_goal())
        self.assertEqual([decision.action for decision in decisions], [Action.RIGHT])
        self.assertEqual(decisions[0].failures, 0)

    def test_goal_needs_no_move(self):
        """A solved board yields nothing."""
        planner = PlanActLoop(config=fast_config(), generator=default_rng(11))
        self.assertEqual(list(planner.solve(PuzzleState.goal())), [])
        self.assertEqual(planner.history, [])

    def test_step_limit(self):
        """The loop gives up once the step limit is reached."""
        planner = PlanActLoop(config=fast_config(), generator=default_rng(12))
        # ##>: Each tile sits one cell past its target, far more than two moves away.
        state = PuzzleState(range(16))

        with self.assertRaises(SearchError):
            list(planner.solve(state, max_steps=2))
        self.assertEqual(len(planner.history), 2)


if __name__ == '__main__':
    main()
