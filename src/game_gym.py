import random

import gymnasium as gym
from gymnasium import spaces
import numpy as np

from best_score import MemoryScoreStore
from game import Game2028
from moves import SIZE, Direction, max_value, resolve, to_values


class Game2028Env(gym.Env):
    """
    gymnasium environment for the 2028 game

    headless: moves are settled immediately and the best score only lives
    in memory. info carries the afterstate (board after the move, before
    the random tile) for agents that learn from it.
    """

    metadata = {"render_modes": ["human"]}

    def __init__(self, render_mode=None):
        super().__init__()

        self.render_mode = render_mode
        self.game = Game2028(store=MemoryScoreStore())

        # actions -> 4 possible moves
        # 0 = up, 1 = down, 2 = left, 3 = right
        self.action_space = spaces.Discrete(4)

        # raw tile values, 0 for empty
        self.observation_space = spaces.Box(
            low=0,
            high=131072,
            shape=(SIZE, SIZE),
            dtype=np.int32
        )

        self.action_to_direction = {
            0: Direction.UP,
            1: Direction.DOWN,
            2: Direction.LEFT,
            3: Direction.RIGHT,
        }

    def _get_observation(self):
        return np.array(self.game.values, dtype=np.int32)

    def get_afterstate(self, action):
        """
        board after the player's move but before the random tile

        returns:
            afterstate_board: np array, or None if the move changes nothing
            reward: points earned from merging
            valid: if the move was valid
        """
        result = resolve(self.game.board, self.action_to_direction[int(action)])
        if not result.changed:
            return None, 0, False
        return np.array(to_values(result.board), dtype=np.int32), result.score_gain, True

    def reset(self, seed=None, options=None):
        """reset the game to start a new episode"""
        super().reset(seed=seed)

        if seed is not None:
            self.game.rng = random.Random(seed)
        self.game.reset()

        observation = self._get_observation()
        info = {"score": self.game.score}

        return observation, info

    def step(self, action):
        """take one step in the environment"""
        afterstate_board, _, valid = self.get_afterstate(action)

        direction = self.action_to_direction[int(action)]
        result = self.game.make_move(direction)

        moved = result is not None and result.changed
        points = result.score_gain if moved else 0
        reward = float(points)

        observation = self._get_observation()

        terminated = self.game.game_over
        truncated = False

        info = {
            "score": self.game.score,
            "moved": moved,
            "points_gained": points,
            "afterstate": afterstate_board if valid else None,
            "max_tile": max_value(self.game.board),
            "won": self.game.state.won,
        }

        if self.render_mode == "human":
            self.render()

        return observation, reward, terminated, truncated, info

    def render(self):
        """display the game state"""
        self.game.print_board()

    def close(self):
        pass
