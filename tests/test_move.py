from unittest import TestCase, main

from fifteen.core.moves import Action, is_valid_move, legal_actions, success_odds


class TestGameMove(TestCase):
    def test_action_codes(self):
        """
        Test that the odds code of each move is the character code of its letter.
        """
        self.assertEqual([action.code for action in Action], [85, 68, 76, 82])
        self.assertEqual([action.symbol for action in Action], ['U', 'D', 'L', 'R'])

    def test_from_symbol(self):
        """
        Test that move letters parse case insensitively.
        """
        self.assertEqual(Action.from_symbol('r'), Action.RIGHT)
        self.assertEqual(Action.from_symbol('U'), Action.UP)
        with self.assertRaises(ValueError):
            Action.from_symbol('Z')

    def test_corner_legal_actions(self):
        """
        Test that the blank in a corner has exactly two legal moves.
        """
        self.assertEqual(legal_actions(0), [Action.DOWN, Action.RIGHT])
        self.assertEqual(legal_actions(15), [Action.UP, Action.LEFT])

    def test_edge_and_center_legal_actions(self):
        """
        Test the legal moves of an edge cell and a center cell.
        """
        self.assertEqual(legal_actions(1), [Action.DOWN, Action.LEFT, Action.RIGHT])
        self.assertEqual(legal_actions(5), list(Action))

    def test_every_blank_position_has_two_moves(self):
        """
        Test that no blank position is a dead end.
        """
        for index in range(16):
            self.assertGreaterEqual(sum(is_valid_move(index, action) for action in Action), 2)

    def test_unknown_action_is_invalid(self):
        """
        Test that ids outside 0..3 are never legal.
        """
        self.assertFalse(is_valid_move(5, 4))

    def test_success_odds(self):
        """
        Test the odds formula on hand computed values.
        """
        # ##>: 15 + (85 % 20) * (85 % 19) = 15 + 5 * 9.
        self.assertEqual(success_odds(15, Action.UP), 60)
        # ##>: 15 + (76 % 20) * (76 % 19) = 15 + 16 * 0.
        self.assertEqual(success_odds(15, Action.LEFT), 15)
        # ##>: 15 + (82 % 5) * (82 % 4) = 15 + 2 * 2.
        self.assertEqual(success_odds(0, Action.RIGHT), 19)
        # ##>: 15 + (68 % 5) * (68 % 4) = 15 + 3 * 0.
        self.assertEqual(success_odds(0, Action.DOWN), 15)

    def test_success_odds_range(self):
        """
        Test that the odds stay in [0, 99] so that a roll of 100 always succeeds.
        """
        for index in range(16):
            for action in Action:
                self.assertGreaterEqual(success_odds(index, action), 0)
                self.assertLess(success_odds(index, action), 100)


if __name__ == '__main__':
    main()
