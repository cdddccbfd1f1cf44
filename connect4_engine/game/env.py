"""
env.py - Gymnasium environment for Connect Four

This module wraps ConnectFourGame in the OpenAI Gymnasium interface, so an
agent can play the engine's board, optionally against the negamax player.
"""

from typing import Dict, Optional, Tuple, Union

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from connect4_engine.ai.negamax import NegamaxPlayer
from connect4_engine.debug import debug
from connect4_engine.game.rules import ConnectFourGame
from connect4_engine.utils import ROWS, COLS, GameResult, other_player


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    Without an opponent the environment plays both sides in turn and rewards
    are given to whoever just moved. With an opponent, the agent always plays
    agent_player and the opponent replies after each legal agent move.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None,
                 opponent: Optional[NegamaxPlayer] = None,
                 agent_player: int = 0):
        """
        Initialize the Connect Four environment.

        Args:
            render_mode: Mode for rendering the environment
            opponent: Search that answers the agent's moves (None for self-play)
            agent_player: Ordinal the agent plays when an opponent is set
        """
        debug.debug("Initializing ConnectFourEnv", "env")

        self.action_space = spaces.Discrete(COLS)

        # Observation space: 6x7 board with 3 possible values (0, 1, 2)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(ROWS, COLS), dtype=np.int8
        )

        self.opponent = opponent
        self.agent_player = agent_player
        self.game = ConnectFourGame(ai=opponent)
        self.render_mode = render_mode

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01  # Small negative reward to encourage faster solutions

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to initial state.

        Args:
            seed: Random seed for reproducibility
            options: May carry a serialized 'state' to start from

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)

        self.game.reset()
        if options and options.get('state'):
            self.game.load_state(options['state'])

        # The opponent opens when the agent plays second
        if self.opponent is not None and self.game.current_player != self.agent_player:
            self.game.request_ai_move(other_player(self.agent_player))

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Take a step in the environment by dropping a piece.

        Args:
            action: Column to drop into

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        mover = self.agent_player if self.opponent is not None else self.game.current_player
        debug.debug(f"Environment step: player {mover} -> column {action}", "env")

        if not self.game.attempt_human_move(int(action), mover):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        if self.opponent is not None and not self.game.is_game_over():
            self.game.request_ai_move(other_player(mover))

        reward = self._reward_for(mover)
        terminated = self.game.is_game_over()
        if terminated:
            debug.info(f"Game over: {self.game.game_result.name}", "env")

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def _reward_for(self, player: int) -> float:
        result = self.game.game_result
        if result == GameResult.DRAW:
            return self.reward_draw
        if result == GameResult.IN_PROGRESS:
            return self.reward_step
        return self.reward_win if result == GameResult.win_for(player) else self.reward_lose

    def render(self) -> Optional[Union[str, np.ndarray]]:
        """
        Render the current state of the environment.

        Returns:
            The ASCII board for 'ascii', None otherwise
        """
        if self.render_mode == "ascii":
            return self.game.render()
        if self.render_mode == "human":
            print(self.game.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.board.get_state()

    def _get_info(self) -> Dict:
        valid_moves = self.game.get_valid_moves()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.game.current_player,
            'game_result': self.game.game_result.name,
            'winner': self.game.winner_if_any(),
            'winning_line': self.game.winning_line(),
            'state': self.game.current_state(),
            'moves_made': len(self.game.moves_made),
        }

    def close(self):
        """Clean up resources."""
        pass
