import random

import pytest

from best_score import MemoryScoreStore
from game import MOVE_MS, Game2028, GameState, GameStatus, Transition
from moves import Direction, from_values, resolve


class StubRng:
    """always spawns a 2 in the first empty cell"""

    def random(self):
        return 0.5

    def choice(self, seq):
        return seq[0]


def set_board(game, rows):
    game.state = GameState(board=from_values(rows), best=game.state.best, next_id=17)


def tile_count(game):
    return sum(1 for row in game.values for v in row if v)


@pytest.fixture
def game():
    return Game2028(rng=random.Random(1), store=MemoryScoreStore())


def test_new_game_has_two_tiles(game):
    assert tile_count(game) == 2
    assert {v for row in game.values for v in row if v} <= {2, 4}
    assert game.score == 0
    assert game.status is GameStatus.ACTIVE
    assert game.pending is None


def test_reset_restarts_ids_and_loads_best():
    store = MemoryScoreStore(500)
    game = Game2028(rng=random.Random(5), store=store)
    game.make_move(Direction.LEFT)
    game.make_move(Direction.UP)
    game.reset()

    ids = sorted(tile.id for row in game.board for tile in row if tile is not None)
    assert ids == [1, 2]
    assert game.best == 500
    assert game.score == 0


def test_effective_move_scores_and_spawns(game):
    set_board(game, [
        [2, 2, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ])
    result = game.make_move(Direction.LEFT)

    assert result.changed
    assert game.values[0][0] == 4
    assert game.score == 4
    assert game.best == 4
    assert game.store.value == 4
    assert tile_count(game) == 2


def test_noop_move_does_not_spawn(game):
    set_board(game, [
        [2, 4, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ])
    result = game.make_move(Direction.LEFT)

    assert not result.changed
    assert tile_count(game) == 2
    assert game.pending is None
    assert game.score == 0


def test_score_waits_for_settle(game):
    set_board(game, [
        [4, 4, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ])
    result = game.move(Direction.LEFT)

    assert result.changed
    assert game.pending is not None
    # board already moved, score not yet
    assert game.values[0] == [8, 0, 0, 0]
    assert game.score == 0

    outcome = game.settle()
    assert outcome.result is result
    assert game.score == 8
    assert game.pending is None

    row, col, tile = outcome.spawned
    assert game.board[row][col] == tile
    assert tile.id == 17


def test_moves_are_rejected_while_settling(game):
    set_board(game, [
        [2, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ])
    assert game.move(Direction.RIGHT).changed
    assert game.move(Direction.LEFT) is None
    game.settle()
    assert game.move(Direction.LEFT) is not None


def test_reset_cancels_pending_transition(game):
    set_board(game, [
        [2, 2, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ])
    game.move(Direction.LEFT)
    transition = game.pending
    game.reset()

    assert transition.cancelled
    assert game.settle(transition) is None
    assert game.score == 0
    assert tile_count(game) == 2


def test_settle_ignores_a_stale_transition(game):
    set_board(game, [
        [2, 2, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ])
    game.move(Direction.LEFT)
    stale = Transition(game.pending.result)
    assert game.settle(stale) is None
    assert game.pending is not None


def test_win_fires_once_and_play_continues(game):
    set_board(game, [
        [1024, 1024, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ])
    game.move(Direction.LEFT)
    outcome = game.settle()
    assert outcome.just_won
    assert game.status is GameStatus.WON
    assert game.score == 2048

    game.move(Direction.RIGHT)
    outcome = game.settle()
    assert outcome is not None
    assert not outcome.just_won
    assert game.status is GameStatus.WON


def test_custom_target():
    game = Game2028(rng=random.Random(2), target=8)
    set_board(game, [
        [4, 4, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ])
    game.make_move(Direction.LEFT)
    assert game.status is GameStatus.WON


def test_game_over_after_last_spawn():
    game = Game2028(rng=StubRng())
    # only the top row can slide; the spawned 2 then locks the board
    set_board(game, [
        [4, 8, 16, 0],
        [8, 16, 2, 4],
        [16, 2, 4, 8],
        [2, 4, 8, 16],
    ])

    game.move(Direction.RIGHT)
    outcome = game.settle()

    assert game.values == [
        [2, 4, 8, 16],
        [8, 16, 2, 4],
        [16, 2, 4, 8],
        [2, 4, 8, 16],
    ]
    assert outcome.over
    assert game.status is GameStatus.OVER
    assert game.move(Direction.LEFT) is None
    assert game.make_move(Direction.UP) is None


def test_best_score_only_grows():
    store = MemoryScoreStore(100)
    game = Game2028(rng=random.Random(3), store=store)
    set_board(game, [
        [2, 2, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ])
    game.make_move(Direction.LEFT)
    assert game.best == 100
    assert store.value == 100


def test_transition_progress():
    result = resolve(from_values([[2, 0, 0, 0]] + [[0] * 4] * 3), Direction.RIGHT)
    transition = Transition(result, started=10.0)

    assert transition.progress(10.0) == 0.0
    assert transition.progress(10.0 + MOVE_MS / 2000) == pytest.approx(0.5)
    assert not transition.done(10.05)
    assert transition.done(10.0 + MOVE_MS / 500)
    assert transition.progress(99.0) == 1.0
