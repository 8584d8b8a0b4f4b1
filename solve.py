# -*- coding: utf-8 -*-
"""
Solve a stochastic fifteen puzzle with the online Monte Carlo planner.
"""
import logging
import sys
from argparse import ArgumentParser, Namespace

from numpy.random import PCG64DXSM, Generator, default_rng
from tqdm import tqdm

from fifteen.envs import FifteenPuzzle
from fifteen.utils import apply_moves, average_heuristic, parse_board
from monte_carlo.actor import Decision, PlanActLoop
from monte_carlo.config import SearchConfig
from monte_carlo.search import SearchError


def solve(
    env: FifteenPuzzle, config: SearchConfig, display: bool = False, max_steps: int | None = None
) -> list[Decision]:
    """
    Drive the planner from the environment's board to the goal.

    Parameters
    ----------
    env : FifteenPuzzle
        The environment; its live board is modified in place and its generator is shared with the planner.
    config : SearchConfig
        Planner configuration.
    display : bool, optional
        Print the searched root and the board after each move (default is False).
    max_steps : int, optional
        Give up after this many moves.

    Returns
    -------
    list[Decision]
        The committed moves, in order.
    """
    planner = PlanActLoop(config=config, generator=env.generator, keep_reports=display)

    with tqdm(planner.solve(env.state, max_steps=max_steps), unit='move', disable=display) as period:
        for decision in period:
            # ##: Log.
            period.set_postfix(move=decision.action.symbol, distance=decision.state.manhattan_distance())
            if display:
                print(f'MAIN LOOP ITERATION {decision.step}')
                print(decision.report)
                print(f'DONE DELIBERATING, CHOSE TO MOVE {decision.action.symbol}')
                env.render()
                print()

    return planner.history


def _build_env(args: Namespace, parser: ArgumentParser, generator: Generator) -> FifteenPuzzle:
    try:
        if args.scramble is not None:
            env = FifteenPuzzle(scramble_moves=args.scramble, generator=generator)
        else:
            text = ' '.join(args.board) if args.board else sys.stdin.read()
            env = FifteenPuzzle(board=parse_board(text), generator=generator)
        if args.moves:
            apply_moves(env.state, args.moves)
    except ValueError as error:
        parser.error(str(error))
    return env


if __name__ == '__main__':
    parser = ArgumentParser(description='Solve a fifteen puzzle whose moves can fail.')
    parser.add_argument('board', nargs='*', help='Sixteen values, row-major, 0 for the blank (default: stdin)')
    parser.add_argument('--scramble', type=int, default=None, help='Start from a walk of this many moves from the goal')
    parser.add_argument('--moves', type=str, default=None, help='Move letters (U, D, L, R) slid before solving')
    parser.add_argument('--seed', type=int, default=None, help='Seed of the random source')
    parser.add_argument('--iterations', type=int, default=20, help='MCTS iterations per move')
    parser.add_argument('--rollout-depth', type=int, default=200, help='Random walk budget per iteration')
    parser.add_argument('--exploration-weight', type=float, default=2.0, help='UCB1 exploration constant')
    parser.add_argument('--retain-tree', action='store_true', help='Reuse the chosen subtree between moves')
    parser.add_argument('--max-steps', type=int, default=None, help='Give up after this many moves')
    parser.add_argument('--display', action='store_true', help='Print the search and the board after each move')
    parser.add_argument('--average-heuristic', type=int, default=None, help='Report the mean heuristic of N boards')
    parser.add_argument('--verbose', action='store_true', help='Log each decision')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    try:
        config = SearchConfig(
            iterations=args.iterations,
            rollout_depth=args.rollout_depth,
            exploration_weight=args.exploration_weight,
            retain_tree=args.retain_tree,
        )
    except ValueError as error:
        parser.error(str(error))

    # ##: One source for scrambling, searching and acting.
    generator = default_rng(PCG64DXSM(args.seed))

    if args.average_heuristic is not None:
        mean = average_heuristic(args.average_heuristic, generator, config.heuristic_scale)
        print(f'AVERAGE HEURISTIC OVER {args.average_heuristic} ITERATIONS IS {mean}')
        sys.exit(0)

    env = _build_env(args, parser, generator)
    env.render()
    print()
    try:
        history = solve(env, config, display=args.display, max_steps=args.max_steps)
    except SearchError as error:
        parser.exit(1, f'{error}\n')
    moves = ''.join(decision.action.symbol for decision in history)
    print(f'GOAL FOUND after {len(history)} moves: {moves}')
