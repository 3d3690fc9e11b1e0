# renderer.py
# Draws session snapshots with pygame. Purely cosmetic: nothing here
# feeds back into the game state.

import pygame

from .maze import Cell, Position

TILE = 24
HUD_HEIGHT = 40
# locked-on ghosts flash on this cadence
ANGRY_BLINK_MS = 300

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
WALL = (33, 33, 255)
PICKUP = (255, 184, 255)
SPECIAL = (255, 255, 0)
PLAYER = (255, 255, 0)
FRIGHTENED = (100, 100, 255)
ANGRY = (255, 255, 255)
DIM = (200, 200, 200)


def board_size(maze):
    return maze.width * TILE, maze.height * TILE


class Renderer:
    def __init__(self, screen):
        self.screen = screen
        self.font = pygame.font.SysFont("Arial", 22)
        self.bigfont = pygame.font.SysFont("Arial", 48)
        self.small = pygame.font.SysFont("Arial", 18)
        self._walls = None
        self._walls_for = None

    def _offset(self, maze):
        w, _ = board_size(maze)
        return (self.screen.get_width() - w) // 2, HUD_HEIGHT

    def _wall_surface(self, maze):
        # walls never change, so draw them once per maze
        if self._walls_for is not maze:
            surf = pygame.Surface(board_size(maze), flags=pygame.SRCALPHA)
            surf.fill((0, 0, 0, 0))
            for y in range(maze.height):
                for x in range(maze.width):
                    if maze.cell_at(Position(x, y)) is Cell.WALL:
                        pygame.draw.rect(surf, WALL, (x * TILE, y * TILE, TILE, TILE))
            self._walls = surf
            self._walls_for = maze
        return self._walls

    def _center(self, offset, pos):
        return offset[0] + pos.x * TILE + TILE // 2, offset[1] + pos.y * TILE + TILE // 2

    def draw(self, snap, records=None, now_ms=0):
        self.screen.fill(BLACK)
        maze = snap.maze
        offset = self._offset(maze)
        self.screen.blit(self._wall_surface(maze), offset)

        for pos in snap.pickups:
            pygame.draw.circle(self.screen, PICKUP, self._center(offset, pos), 3)
        for pos in snap.special_pickups:
            pygame.draw.circle(self.screen, SPECIAL, self._center(offset, pos), 6)

        pygame.draw.circle(self.screen, PLAYER, self._center(offset, snap.player), TILE // 2 - 2)

        blink_on = (now_ms // ANGRY_BLINK_MS) % 2 == 0
        for ghost in snap.ghosts:
            if snap.invincible:
                color = FRIGHTENED
            elif ghost.lock_on and blink_on:
                color = ANGRY
            else:
                color = ghost.color
            pygame.draw.circle(self.screen, color, self._center(offset, ghost.position), TILE // 2 - 2)

        self._draw_hud(snap, records)
        if not snap.playing:
            self._draw_banner("YOU WON!" if snap.won else "GAME OVER", (0, 255, 0) if snap.won else (255, 0, 0))

    def _draw_hud(self, snap, records):
        w = self.screen.get_width()
        score_surf = self.font.render(f"SCORE: {snap.score}", True, WHITE)
        time_surf = self.font.render(f"TIME: {snap.timer}s", True, WHITE)
        mode_surf = self.font.render(f"MODE: {snap.difficulty.upper()}", True, WHITE)
        self.screen.blit(score_surf, (10, 8))
        self.screen.blit(time_surf, (w // 2 - time_surf.get_width() // 2, 8))
        self.screen.blit(mode_surf, (w - mode_surf.get_width() - 10, 8))
        if records is not None:
            best = self.small.render(
                f"BEST {records.best_score} ({records.best_time}s)   LAST {records.last_score} ({records.last_time}s)",
                True, DIM)
            self.screen.blit(best, (10, self.screen.get_height() - best.get_height() - 4))

    def _draw_banner(self, text, color):
        surf = self.bigfont.render(text, True, color)
        w, h = self.screen.get_size()
        self.screen.blit(surf, (w // 2 - surf.get_width() // 2, h // 2 - surf.get_height() // 2))

    def draw_dialog(self, title, lines, footer=None):
        """Centered panel on top of whatever is already on screen."""
        w, h = self.screen.get_size()
        overlay = pygame.Surface((w, h), flags=pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 180))
        self.screen.blit(overlay, (0, 0))
        # grows to fit every line
        panel_h = max(360, 150 + len(lines) * 30)
        rect = pygame.Rect(w // 2 - 260, h // 2 - panel_h // 2, 520, panel_h)
        pygame.draw.rect(self.screen, (20, 20, 60), rect)
        pygame.draw.rect(self.screen, (200, 200, 255), rect, 4)
        t = self.bigfont.render(title, True, SPECIAL)
        self.screen.blit(t, (rect.centerx - t.get_width() // 2, rect.top + 16))
        for i, (text, color) in enumerate(lines):
            surf = self.font.render(text, True, color)
            self.screen.blit(surf, (rect.centerx - surf.get_width() // 2, rect.top + 90 + i * 30))
        if footer:
            f = self.small.render(footer, True, DIM)
            self.screen.blit(f, (rect.centerx - f.get_width() // 2, rect.bottom - 36))
