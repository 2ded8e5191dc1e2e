"""
input translation: keys, swipes and d-pad buttons -> Direction
"""
import pygame

from moves import Direction


# swipe thresholds
MIN_SWIPE_DISTANCE = 24  # px
MAX_SWIPE_MS = 700

KEY_DIRECTIONS = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}


def direction_from_key(key):
    """direction for a pygame key code, None for anything else"""
    return KEY_DIRECTIONS.get(key)


def direction_from_swipe(dx, dy, duration_ms):
    """
    direction of a swipe gesture

    too slow or too short gestures are ignored; otherwise the dominant axis
    wins, ties go to the vertical axis
    """
    if duration_ms > MAX_SWIPE_MS:
        return None
    if abs(dx) < MIN_SWIPE_DISTANCE and abs(dy) < MIN_SWIPE_DISTANCE:
        return None

    if abs(dx) > abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


class SwipeTracker:
    """follows one drag (mouse or finger) from press to release"""

    def __init__(self):
        self.active = False
        self.start_pos = (0, 0)
        self.start_ms = 0

    def start(self, pos, t_ms):
        self.active = True
        self.start_pos = pos
        self.start_ms = t_ms

    def cancel(self):
        self.active = False

    def finish(self, pos, t_ms):
        """end the drag, returns a Direction or None"""
        if not self.active:
            return None
        self.active = False

        dx = pos[0] - self.start_pos[0]
        dy = pos[1] - self.start_pos[1]
        return direction_from_swipe(dx, dy, t_ms - self.start_ms)


def finger_pos(event, window_size):
    """finger events carry normalised coordinates, scale them to pixels"""
    return event.x * window_size[0], event.y * window_size[1]
