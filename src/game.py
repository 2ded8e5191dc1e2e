"""
game session: owns the live board, score, best score and status
"""
import random
import time
from dataclasses import dataclass, replace
from enum import Enum

from best_score import MemoryScoreStore
from moves import (
    TARGET,
    Tile,
    empty_board,
    empty_cells,
    has_any_move,
    has_value_at_least,
    resolve,
    spawn_value,
    to_values,
)


# how long a slide takes on screen, in milliseconds
MOVE_MS = 120


class GameStatus(Enum):
    ACTIVE = "active"
    WON = "won"
    OVER = "over"


@dataclass(frozen=True)
class GameState:
    board: list
    score: int = 0
    best: int = 0
    won: bool = False
    over: bool = False
    next_id: int = 1


@dataclass(frozen=True)
class MoveOutcome:
    """what settling a move did to the session"""
    result: object
    spawned: tuple = None  # (row, col, tile) or None when the board was full
    just_won: bool = False
    over: bool = False


class Transition:
    """
    a move that has been resolved but not yet committed

    the board is already updated; score, spawn and terminal checks wait for
    Game2028.settle. reset() cancels whatever transition is in flight.
    """

    def __init__(self, result, started=None):
        self.result = result
        self.started = time.monotonic() if started is None else started
        self.cancelled = False

    def progress(self, now=None):
        """fraction of the slide animation elapsed, 0.0 - 1.0"""
        if now is None:
            now = time.monotonic()
        elapsed_ms = (now - self.started) * 1000
        return min(max(elapsed_ms / MOVE_MS, 0.0), 1.0)

    def done(self, now=None):
        return self.progress(now) >= 1.0

    def cancel(self):
        self.cancelled = True


class Game2028:
    def __init__(self, rng=None, store=None, target=TARGET):
        """initialize 4x4 game with two starting tiles"""
        self.target = target
        self.rng = rng if rng is not None else random.Random()
        self.store = store if store is not None else MemoryScoreStore()
        self.pending = None
        self.state = None

        self.reset()

    @property
    def board(self):
        return self.state.board

    @property
    def values(self):
        return to_values(self.state.board)

    @property
    def score(self):
        return self.state.score

    @property
    def best(self):
        return self.state.best

    @property
    def status(self):
        if self.state.over:
            return GameStatus.OVER
        if self.state.won:
            return GameStatus.WON
        return GameStatus.ACTIVE

    @property
    def game_over(self):
        return self.state.over

    def reset(self):
        """start a new game, dropping any move still in flight"""
        if self.pending is not None:
            self.pending.cancel()
            self.pending = None

        state = GameState(board=empty_board(), best=self.store.load())
        state, _ = self._add_random_tile(state)
        state, _ = self._add_random_tile(state)
        self.state = state

    def _add_random_tile(self, state):
        """
        place a new tile on a uniformly chosen empty cell

        returns the new state and (row, col, tile), or None if the board is full
        """
        empty = empty_cells(state.board)
        if not empty:
            return state, None

        row, col = self.rng.choice(empty)
        tile = Tile(state.next_id, spawn_value(self.rng))

        board = [list(r) for r in state.board]
        board[row][col] = tile
        return replace(state, board=board, next_id=state.next_id + 1), (row, col, tile)

    def move(self, direction):
        """
        resolve a move and hold it as the pending transition

        returns None if the move was rejected (game over, or the previous
        move has not settled yet)
        """
        if self.state.over or self.pending is not None:
            return None

        result = resolve(self.state.board, direction)
        if not result.changed:
            return result

        self.pending = Transition(result)
        self.state = replace(self.state, board=result.board)
        return result

    def settle(self, transition=None):
        """
        commit the pending move: score, best score, spawn, then win and
        game over checks in that order
        """
        pending = self.pending
        if pending is None or pending.cancelled:
            return None
        if transition is not None and transition is not pending:
            return None
        self.pending = None

        result = pending.result
        score = self.state.score + result.score_gain
        best = max(self.state.best, score)
        self.store.save(best)

        state = replace(self.state, score=score, best=best)
        state, spawned = self._add_random_tile(state)

        just_won = False
        if not state.won and has_value_at_least(state.board, self.target):
            state = replace(state, won=True)
            just_won = True

        if not has_any_move(state.board):
            state = replace(state, over=True)

        self.state = state
        return MoveOutcome(result=result, spawned=spawned, just_won=just_won, over=state.over)

    def make_move(self, direction):
        """
        move and settle in one go (no animation)

        returns the MoveResult, or None if the move was rejected
        """
        result = self.move(direction)
        if result is not None and result.changed:
            self.settle()
        return result

    def print_board(self):
        """print the board to console"""
        print(f"Score: {self.score}  Best: {self.best}")
        print("-" * 25)
        for row in self.values:
            print("|", end="")
            for cell in row:
                if cell == 0:
                    print("    |", end="")
                else:
                    print(f"{cell:4}|", end="")
            print()
        print("-" * 25)
        if self.status is GameStatus.OVER:
            print("GAME OVER!")
        elif self.status is GameStatus.WON:
            print(f"{self.target} reached!")
        print()
