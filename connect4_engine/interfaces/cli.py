"""
cli.py - Command-line interface for the Connect Four engine

This module provides a CLI for playing against the negamax player,
analyzing serialized board states, and timing the search.
"""

import argparse
import random
import sys
from typing import List, Optional

from connect4_engine.ai.negamax import NegamaxPlayer
from connect4_engine.debug import debug, DebugLevel
from connect4_engine.exceptions import InvalidState
from connect4_engine.game.board import BoardState
from connect4_engine.game.rules import ConnectFourGame
from connect4_engine.game.placement import legal_columns
from connect4_engine.game.win import find_winner, find_winning_line, is_draw
from connect4_engine.utils import COLS, SEARCH_DEPTH, Cell

HUMAN_PLAYER = 0
AI_PLAYER = 1

# Special commands returned by get_human_move
QUIT, UNDO, RESTART = -1, -2, -3


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Connect Four engine CLI')
    parser.add_argument('--debug', action='store_true', help='Enable debug mode')
    parser.add_argument('--debug_level',
                        choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
                        default='warning',
                        help='Set debug level (ignored when --debug is given)')
    parser.add_argument('--log_file', type=str, help='Also write log output to this file')
    parser.add_argument('--depth', type=positive_int, default=SEARCH_DEPTH,
                        help=f'Search depth in plies (default: {SEARCH_DEPTH})')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    play_parser = subparsers.add_parser('play', help='Play a game interactively')
    play_parser.add_argument('--ai', choices=['negamax', 'none'], default='negamax',
                             help='AI opponent: negamax search, or none for two humans')
    play_parser.add_argument('--state', type=str, help='Serialized state to start from')

    analyze_parser = subparsers.add_parser('analyze', help='Analyze a serialized state')
    analyze_parser.add_argument('--state', type=str, required=True,
                                help='42 symbols, row-major from the top: 0 empty, 1 and 2 players')

    benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark performance')
    benchmark_parser.add_argument('--iterations', type=positive_int, default=100,
                                  help='Number of random positions to time')
    benchmark_parser.add_argument('--seed', type=int, default=0, help='Random seed')

    return parser


def configure_debug(args) -> None:
    """Configure debug level based on args.debug or args.debug_level."""
    if args.debug:
        debug.configure(level=DebugLevel.DEBUG)
    else:
        debug.set_from_string(args.debug_level)
    if args.log_file:
        debug.configure(log_file=args.log_file)


class SimpleCLI:
    """Simple command-line interface for the engine."""

    def __init__(self):
        """Initialize the CLI."""
        self.args = None
        self.game = None

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments."""
        self.args = build_parser().parse_args(argv)
        configure_debug(self.args)
        self.game = ConnectFourGame(ai=NegamaxPlayer(depth=self.args.depth))

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            return self.play_game()
        elif self.args.command == 'analyze':
            return self.analyze_state()
        elif self.args.command == 'benchmark':
            return self.benchmark()

        print("Please specify a command. Use --help for options.")
        return 1

    def play_game(self) -> int:
        """Play a Connect Four game interactively."""
        print("Starting a new Connect Four game!")
        print(f"Enter column number (0-{COLS - 1}) to make a move.")
        print("Other commands: 'q' to quit, 'u' to undo, 'r' to restart.")

        if self.args.state:
            try:
                self.game.load_state(self.args.state)
            except InvalidState as e:
                print(f"Cannot load state: {e}")
                return 1
        print(self.game.render())

        while not self.game.is_game_over():
            player = self.game.current_player

            if self.args.ai == 'negamax' and player == AI_PLAYER:
                print("AI is thinking...")
                if not self.game.request_ai_move(player):
                    break
                column, _, _ = self.game.moves_made[-1]
                print(f"AI plays column {column}")
                print(self.game.render())
                continue

            move = self.get_human_move(player)
            if move is None:
                continue
            elif move == QUIT:
                print("Quitting game.")
                return 0
            elif move == UNDO:
                # Take back the AI reply as well, so it is the human's turn again
                steps = 2 if self.args.ai == 'negamax' and len(self.game.moves_made) > 1 else 1
                if all(self.game.undo_move() for _ in range(steps)):
                    print("Move undone.")
                else:
                    print("No moves to undo.")
                print(self.game.render())
                continue
            elif move == RESTART:
                self.game.reset()
                print("Game restarted.")
                print(self.game.render())
                continue

            if self.game.attempt_human_move(move, player):
                print(self.game.render())
            else:
                print(f"Column {move} is full.")

        print("Game over!")
        winner = self.game.winner_if_any()
        if winner is None:
            print("It's a draw!")
        elif self.args.ai == 'negamax':
            print("You win! Congratulations!" if winner == HUMAN_PLAYER else "AI wins! Better luck next time.")
        else:
            print(f"Player {Cell.for_player(winner)} wins!")
        return 0

    def get_human_move(self, player: int) -> Optional[int]:
        """
        Get a move from human player input.

        Returns:
            Column index, or special command code, or None if invalid input
        """
        try:
            user_input = input(f"Player {Cell.for_player(player)} move (columns 0-{COLS - 1}, q/u/r): ").strip().lower()
        except EOFError:
            return QUIT

        if user_input == 'q':
            return QUIT
        elif user_input == 'u':
            return UNDO
        elif user_input == 'r':
            return RESTART

        try:
            move = int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or special command.")
            return None

        if 0 <= move < COLS:
            return move
        print(f"Column must be between 0 and {COLS - 1}.")
        return None

    def analyze_state(self) -> int:
        """Validate a serialized state and report what the engine sees."""
        try:
            board = BoardState.from_serialized_state(self.args.state)
        except InvalidState as e:
            print(f"Invalid state: {e}")
            return 1

        print("Loaded position:")
        print(board.render())

        line = find_winning_line(board)
        if line is not None:
            print(f"Winner: player {line[0]} ({Cell.for_player(line[0])}) on {line[1]}")
            return 0
        if is_draw(board):
            print("Draw: the board is full")
            return 0

        grid = board.grid
        to_move = 0 if (grid == Cell.PLAYER_A.value).sum() <= (grid == Cell.PLAYER_B.value).sum() else 1
        print(f"Empty spaces: {int((grid == Cell.EMPTY.value).sum())}")
        print(f"Valid moves: {legal_columns(board, order=range(COLS))}")

        ai = self.game.ai
        column = ai.choose_move(board, to_move)
        print(f"Player {to_move} to move; AI suggests column {column}")
        print(f"Scores: {ai.last_scores} ({ai.nodes_evaluated} nodes)")
        return 0

    def benchmark(self) -> int:
        """Benchmark the search and the win scan on random positions."""
        rng = random.Random(self.args.seed)
        ai = self.game.ai
        print(f"Running benchmark with {self.args.iterations} positions, depth {ai.depth}...")

        boards = []
        for _ in range(self.args.iterations):
            game = ConnectFourGame(ai=ai)
            for _ in range(rng.randint(0, 20)):
                moves = game.get_valid_moves()
                if not moves:
                    break
                game.attempt_human_move(rng.choice(moves), game.current_player)
            boards.append(game.board)

        debug.start_timer("win_check")
        for board in boards:
            find_winner(board)
        win_time = debug.end_timer("win_check", "cli")
        print(f"Win scan: {win_time:.6f} seconds total, "
              f"{win_time / len(boards) * 1000:.6f} ms per board")

        total_nodes = 0
        debug.start_timer("search")
        for board in boards:
            ai.choose_move(board, 0)
            total_nodes += ai.nodes_evaluated
        search_time = debug.end_timer("search", "cli")
        print(f"Search: {search_time:.6f} seconds total, "
              f"{search_time / len(boards) * 1000:.6f} ms per move, {total_nodes} nodes")
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
