"""A window, keyboard, sprites and sound on top of pygame."""

from __future__ import annotations

import math
import os
from enum import Enum

import pygame

WINDOW_TITLE = "Marine Siege"
WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
FRAME_RATE = 60


class Key(str, Enum):
    """The keys the game reads, by the names scenes look for."""

    W = "w"
    A = "a"
    S = "s"
    D = "d"
    R = "r"
    SPACE = "space"
    RETURN = "return"
    RSHIFT = "rshift"
    ESCAPE = "escape"


_PYGAME_CODES = {
    Key.W: pygame.K_w,
    Key.A: pygame.K_a,
    Key.S: pygame.K_s,
    Key.D: pygame.K_d,
    Key.R: pygame.K_r,
    Key.SPACE: pygame.K_SPACE,
    Key.RETURN: pygame.K_RETURN,
    Key.RSHIFT: pygame.K_RSHIFT,
    Key.ESCAPE: pygame.K_ESCAPE,
}


def _require_file(path: str) -> None:
    if not os.path.isfile(path):
        raise FileNotFoundError(path)


class PygameEngine:
    """Opens a window and offers what the scenes need to draw, play and read keys."""

    def __init__(
        self,
        title: str = WINDOW_TITLE,
        width: int = WINDOW_WIDTH,
        height: int = WINDOW_HEIGHT,
        frame_rate: int = FRAME_RATE,
    ) -> None:
        pygame.display.init()
        self.surface = pygame.display.set_mode((width, height))
        pygame.display.set_caption(title)
        try:
            pygame.mixer.init()
            self._audio = True
        except pygame.error:
            self._audio = False
        self._clock = pygame.time.Clock()
        self._frame_rate = frame_rate
        self._closed = False

    def __enter__(self) -> PygameEngine:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # -------------------------------------------------------------- resources

    def load_texture(self, path: str) -> pygame.Surface:
        """Load an image file for drawing."""
        _require_file(path)
        return pygame.image.load(path).convert_alpha()

    def load_audio(self, path: str):
        """Load a sound file; returns None when no audio device is available."""
        _require_file(path)
        if not self._audio:
            return None
        return pygame.mixer.Sound(path)

    def play_audio(self, sound, loop: bool, volume: float):
        """Start ``sound`` and return a handle to it, or None if it cannot play."""
        if sound is None or not self._audio:
            return None
        sound.set_volume(volume)
        return sound.play(loops=-1 if loop else 0)

    def is_playing_audio(self, handle) -> bool:
        """Tell whether the sound behind ``handle`` is still playing."""
        if handle is None:
            return False
        return bool(handle.get_busy())

    # ---------------------------------------------------------------- drawing

    def draw_sprite(self, x, y, texture, scale_x, scale_y, angle) -> None:
        """Draw ``texture`` with its top-left corner at (x, y), scaled and turned by ``angle`` radians."""
        if texture is None:
            return
        image = texture
        if scale_x != 1.0 or scale_y != 1.0:
            w, h = texture.get_size()
            size = (max(1, round(w * scale_x)), max(1, round(h * scale_y)))
            image = pygame.transform.scale(texture, size)
        if angle:
            image = pygame.transform.rotate(image, -math.degrees(angle))
        self.surface.blit(image, (int(x), int(y)))

    def draw_quad(
        self, x1, y1, x2, y2, x3, y3, x4, y4, src_x, src_y, src_w, src_h, texture
    ) -> None:
        """Draw a region of ``texture`` onto the rectangle with the given corners.

        The corners are left-up, right-up, left-down and right-down.
        """
        if texture is None:
            return
        region = pygame.Rect(src_x, src_y, src_w, src_h).clip(texture.get_rect())
        if region.width == 0 or region.height == 0:
            return
        source = texture.subsurface(region)
        width = math.hypot(x2 - x1, y2 - y1)
        height = math.hypot(x3 - x1, y3 - y1)
        image = pygame.transform.scale(source, (max(1, round(width)), max(1, round(height))))
        angle = math.degrees(math.atan2(y2 - y1, x2 - x1))
        if angle:
            image = pygame.transform.rotate(image, -angle)
        center = ((x1 + x2 + x3 + x4) / 4.0, (y1 + y2 + y3 + y4) / 4.0)
        self.surface.blit(image, image.get_rect(center=center))

    # ------------------------------------------------------------ frame cycle

    def process_messages(self) -> bool:
        """Handle window events; return False once the window is asked to close."""
        running = True
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
        return running

    def begin_frame(self) -> None:
        """Clear the window for a new frame."""
        self.surface.fill((0, 0, 0))

    def end_frame(self) -> None:
        """Show the frame and wait to keep the frame rate."""
        pygame.display.flip()
        self._clock.tick(self._frame_rate)

    def pressed_keys(self) -> frozenset[str]:
        """Return the names of the game keys held down now."""
        state = pygame.key.get_pressed()
        return frozenset(key.value for key, code in _PYGAME_CODES.items() if state[code])

    def close(self) -> None:
        """Shut the window and the sound device."""
        if self._closed:
            return
        self._closed = True
        if self._audio:
            pygame.mixer.quit()
        pygame.display.quit()
        pygame.quit()