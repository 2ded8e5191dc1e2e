import pygame
import sys

from best_score import BestScoreStore
from controls import SwipeTracker, direction_from_key, finger_pos
from game import Game2028, GameStatus
from moves import SIZE, Direction


COLORS = {
    'background': (250, 248, 239),
    'grid_background': (187, 173, 160),
    'empty_cell': (205, 193, 180),
    'text_dark': (119, 110, 101),
    'text_light': (249, 246, 242),
    'button': (143, 122, 102),
    'won': (46, 125, 50),
    'over': (200, 0, 0),
    # tile colors
    2: (238, 228, 218),
    4: (237, 224, 200),
    8: (242, 177, 121),
    16: (245, 149, 99),
    32: (246, 124, 95),
    64: (246, 94, 59),
    128: (237, 207, 114),
    256: (237, 204, 97),
    512: (237, 200, 80),
    1024: (237, 197, 63),
    2048: (237, 194, 46),
}

# anything past the palette
BEYOND_COLOR = (60, 58, 50)


class Button:
    def __init__(self, rect, text, font, direction=None):
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.direction = direction

    def draw(self, surf):
        pygame.draw.rect(surf, COLORS['button'], self.rect, border_radius=6)
        label = self.font.render(self.text, True, COLORS['text_light'])
        surf.blit(label, label.get_rect(center=self.rect.center))

    def hit(self, pos):
        return self.rect.collidepoint(pos)


class GameGUI:
    def __init__(self, game=None):
        """initialize game GUI"""
        pygame.init()
        self.game = game if game is not None else Game2028(store=BestScoreStore())

        # GUI settings
        self.cell_size = 100
        self.cell_margin = 10
        self.header_height = 120
        self.dpad_height = 150

        # window size
        grid_size = SIZE * self.cell_size + (SIZE + 1) * self.cell_margin
        self.grid_size = grid_size
        self.window_width = grid_size
        self.window_height = grid_size + self.header_height + self.dpad_height

        # create window
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("2028")

        # fonts
        self.font_large = pygame.font.Font(None, 48)
        self.font_medium = pygame.font.Font(None, 36)
        self.font_small = pygame.font.Font(None, 24)

        self.new_game_btn = Button((self.window_width - 130, 20, 110, 36), "New Game", self.font_small)
        self.dpad = self._build_dpad()
        self.swipe = SwipeTracker()

        # game clock
        self.clock = pygame.time.Clock()

    def _build_dpad(self):
        """up / left / right / down buttons under the board"""
        size = 44
        cx = self.window_width // 2
        top = self.header_height + self.grid_size + 10
        layout = [
            (Direction.UP, cx - size // 2, top),
            (Direction.LEFT, cx - size // 2 - size - 6, top + size + 6),
            (Direction.RIGHT, cx + size // 2 + 6, top + size + 6),
            (Direction.DOWN, cx - size // 2, top + size + 6),
        ]
        return [
            Button((x, y, size, size), direction.value[0].upper(), self.font_small, direction)
            for direction, x, y in layout
        ]

    def get_tile_color(self, value):
        """get background color for a tile value"""
        if value in COLORS:
            return COLORS[value]
        elif value > 2048:
            return BEYOND_COLOR
        else:
            return COLORS['empty_cell']

    def get_text_color(self, value):
        """get text color for a tile value"""
        if value <= 4:
            return COLORS['text_dark']
        else:
            return COLORS['text_light']

    def status_message(self):
        status = self.game.status
        if status is GameStatus.OVER:
            return "No moves left. Game over!", COLORS['over']
        if status is GameStatus.WON:
            return f"You reached {self.game.target}! Keep going.", COLORS['won']
        return "Arrows / WASD / swipe to move", COLORS['text_dark']

    def cell_origin(self, row, col):
        """top-left pixel of a cell (fractional positions allowed while sliding)"""
        x = col * (self.cell_size + self.cell_margin) + self.cell_margin
        y = row * (self.cell_size + self.cell_margin) + self.cell_margin + self.header_height
        return x, y

    def draw_board(self):
        """draw the game board"""
        # clear screen with background color
        self.screen.fill(COLORS['background'])

        self.draw_header()

        # draw the grid background
        grid_rect = pygame.Rect(0, self.header_height, self.window_width, self.grid_size)
        pygame.draw.rect(self.screen, COLORS['grid_background'], grid_rect)

        # empty cells first, tiles slide over them
        for row in range(SIZE):
            for col in range(SIZE):
                x, y = self.cell_origin(row, col)
                cell_rect = pygame.Rect(x, y, self.cell_size, self.cell_size)
                pygame.draw.rect(self.screen, COLORS['empty_cell'], cell_rect, border_radius=8)

        self.draw_tiles()

        for btn in self.dpad:
            btn.draw(self.screen)

    def draw_header(self):
        """draw the header with score, best score and status"""
        score_text = self.font_large.render(f"Score: {self.game.score}", True, COLORS['text_dark'])
        self.screen.blit(score_text, (20, 20))

        best_text = self.font_small.render(f"Best: {self.game.best}", True, COLORS['text_dark'])
        self.screen.blit(best_text, (20, 62))

        message, color = self.status_message()
        status_surface = self.font_small.render(message, True, color)
        self.screen.blit(status_surface, (20, 90))

        self.new_game_btn.draw(self.screen)

    def draw_tiles(self):
        pending = self.game.pending
        if pending is None:
            for row in range(SIZE):
                for col in range(SIZE):
                    tile = self.game.board[row][col]
                    if tile is not None:
                        self.draw_tile(tile.value, self.cell_origin(row, col))
            return

        # mid-slide: every tile that existed before the move, merged-away ones included
        t = pending.progress()
        for shift in pending.result.shifts:
            (r0, c0), (r1, c1) = shift.origin, shift.destination
            row = r0 + (r1 - r0) * t
            col = c0 + (c1 - c0) * t
            self.draw_tile(shift.value, self.cell_origin(row, col))

    def draw_tile(self, value, origin):
        """draw a single tile at a pixel position"""
        x, y = origin
        cell_rect = pygame.Rect(int(x), int(y), self.cell_size, self.cell_size)
        pygame.draw.rect(self.screen, self.get_tile_color(value), cell_rect, border_radius=8)

        # choose font size based on number of digits
        if value < 100:
            font = self.font_large
        elif value < 1000:
            font = self.font_medium
        else:
            font = self.font_small

        text_surface = font.render(str(value), True, self.get_text_color(value))
        self.screen.blit(text_surface, text_surface.get_rect(center=cell_rect.center))

    def try_move(self, direction):
        if direction is None:
            return
        self.game.move(direction)

    def restart(self):
        self.game.reset()
        self.swipe.cancel()
        print("Game restarted!")

    def update(self):
        """settle the pending move once its slide has finished"""
        pending = self.game.pending
        if pending is None or not pending.done():
            return

        outcome = self.game.settle(pending)
        if outcome is None:
            return
        if outcome.just_won:
            print(f"Reached {self.game.target}! Score: {self.game.score}")
        if outcome.over:
            print(f"Game over! Final score: {self.game.score}")

    def handle_keypress(self, key):
        """keyboard input"""
        if key == pygame.K_ESCAPE:
            return False  # quit

        elif key == pygame.K_r:
            self.restart()

        else:
            self.try_move(direction_from_key(key))

        return True  # continue

    def handle_press(self, pos):
        """mouse button / finger down"""
        if self.new_game_btn.hit(pos):
            self.restart()
            return

        for btn in self.dpad:
            if btn.hit(pos):
                self.try_move(btn.direction)
                return

        self.swipe.start(pos, pygame.time.get_ticks())

    def handle_release(self, pos):
        self.try_move(self.swipe.finish(pos, pygame.time.get_ticks()))

    def handle_event(self, event):
        """returns False when the window should close"""
        if event.type == pygame.QUIT:
            return False
        elif event.type == pygame.KEYDOWN:
            return self.handle_keypress(event.key)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            # touches also arrive as finger events
            if not getattr(event, 'touch', False):
                self.handle_press(event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            if not getattr(event, 'touch', False):
                self.handle_release(event.pos)
        elif event.type == pygame.FINGERDOWN:
            self.handle_press(finger_pos(event, self.screen.get_size()))
        elif event.type == pygame.FINGERUP:
            self.handle_release(finger_pos(event, self.screen.get_size()))
        return True

    def run(self):
        """main loop"""
        print("2028 Game Started!")
        print("Use arrow keys, WASD, the d-pad or swipe to move tiles")
        print("Press R to restart, ESC to quit")
        print()

        running = True
        while running:
            for event in pygame.event.get():
                if not self.handle_event(event):
                    running = False
                    break

            self.update()
            self.draw_board()

            # update display
            pygame.display.flip()

            # frame rate
            self.clock.tick(60)

        pygame.quit()


def main():
    try:
        gui = GameGUI()
        gui.run()
    except Exception as e:
        print(f"Error running game: {e}")
        pygame.quit()
        sys.exit(1)


if __name__ == "__main__":
    main()
