"""
move resolution for the 2028 board

pure functions only: a board goes in, a new board plus a changelog comes out.
nothing here touches randomness except spawn_value, which takes its source
as an argument.
"""
import random
from dataclasses import dataclass
from enum import Enum


SIZE = 4
TARGET = 2028

# 90% chance for 2 and 10% chance for 4
FOUR_PROBABILITY = 0.1


class Direction(Enum):
    """the four ways tiles can slide"""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Tile:
    id: int
    value: int


@dataclass(frozen=True)
class TileShift:
    """where a tile started and where it ends up this move"""
    tile_id: int
    value: int
    origin: tuple
    destination: tuple


@dataclass(frozen=True)
class Merge:
    survivor_id: int
    removed_id: int
    destination: tuple
    new_value: int


@dataclass(frozen=True)
class MoveResult:
    changed: bool
    board: list
    score_gain: int
    shifts: tuple = ()
    merges: tuple = ()


def empty_board():
    """4x4 board with no tiles"""
    return [[None for _ in range(SIZE)] for _ in range(SIZE)]


def check_board(board):
    """raise ValueError unless board is a SIZE x SIZE grid"""
    if len(board) != SIZE or any(len(row) != SIZE for row in board):
        raise ValueError(f"Board must be a {SIZE}x{SIZE} grid")


def empty_cells(board):
    """(row, col) of every empty cell, row-major"""
    return [(r, c) for r in range(SIZE) for c in range(SIZE) if board[r][c] is None]


def from_values(rows):
    """
    build a board from plain values (0 = empty)

    tile ids are handed out row-major starting at 1
    """
    check_board(rows)
    board = empty_board()
    next_id = 1
    for r in range(SIZE):
        for c in range(SIZE):
            if rows[r][c]:
                board[r][c] = Tile(next_id, rows[r][c])
                next_id += 1
    return board


def to_values(board):
    """drop tile identity, 0 for empty cells"""
    return [[tile.value if tile is not None else 0 for tile in row] for row in board]


def max_value(board):
    return max((tile.value for row in board for tile in row if tile is not None), default=0)


def _line_coords(direction, index):
    """
    cells of one line ordered from the leading edge backwards

    tiles travel toward coords[0]
    """
    if direction in (Direction.LEFT, Direction.RIGHT):
        coords = [(index, c) for c in range(SIZE)]
    else:
        coords = [(r, index) for r in range(SIZE)]

    if direction in (Direction.RIGHT, Direction.DOWN):
        coords.reverse()
    return coords


def resolve(board, direction):
    """
    slide every tile in the given direction and merge equal neighbours

    each line is scanned from the leading edge; the first tile of an equal
    pair survives with the doubled value and the second one is removed.
    a tile takes part in at most one merge per move, so [2, 2, 2] -> [4, 2].

    returns a MoveResult; the input board is left untouched
    """
    check_board(board)
    direction = Direction(direction)

    new_board = empty_board()
    shifts = []
    merges = []
    score_gain = 0
    changed = False

    for index in range(SIZE):
        coords = _line_coords(direction, index)
        # non-empty entries in travel order
        line = [(pos, board[pos[0]][pos[1]]) for pos in coords if board[pos[0]][pos[1]] is not None]

        slot = 0
        i = 0
        while i < len(line):
            origin, tile = line[i]
            destination = coords[slot]

            if i + 1 < len(line) and line[i + 1][1].value == tile.value:
                other_origin, other = line[i + 1]
                merged_value = tile.value * 2
                new_board[destination[0]][destination[1]] = Tile(tile.id, merged_value)
                shifts.append(TileShift(tile.id, tile.value, origin, destination))
                shifts.append(TileShift(other.id, other.value, other_origin, destination))
                merges.append(Merge(tile.id, other.id, destination, merged_value))
                score_gain += merged_value
                changed = True
                i += 2  # skip the tile that was absorbed
            else:
                new_board[destination[0]][destination[1]] = tile
                shifts.append(TileShift(tile.id, tile.value, origin, destination))
                if origin != destination:
                    changed = True
                i += 1

            slot += 1

    return MoveResult(
        changed=changed,
        board=new_board,
        score_gain=score_gain,
        shifts=tuple(shifts),
        merges=tuple(merges),
    )


def has_any_move(board):
    """
    true if some direction would change the board

    an empty cell or an equal right/down neighbour is enough; checking only
    right and down covers every adjacent pair once
    """
    check_board(board)
    for r in range(SIZE):
        for c in range(SIZE):
            tile = board[r][c]
            if tile is None:
                return True

            right = board[r][c + 1] if c + 1 < SIZE else None
            down = board[r + 1][c] if r + 1 < SIZE else None

            if (right is not None and right.value == tile.value) or \
                    (down is not None and down.value == tile.value):
                return True
    return False


def has_value_at_least(board, threshold):
    """true if any tile value is >= threshold"""
    return any(tile is not None and tile.value >= threshold for row in board for tile in row)


def spawn_value(rng=random):
    """value for a freshly spawned tile"""
    return 4 if rng.random() < FOUR_PROBABILITY else 2
