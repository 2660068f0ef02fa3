"""The title screen."""

from __future__ import annotations

from collections.abc import Container

from .scene import Scene, SceneId

TITLE_IMAGE = "./images/ui/title.png"
_CONFIRM_KEY = "return"


class TitleScene(Scene):
    """Shows the title picture and starts the stage when Return is pressed."""

    def __init__(self) -> None:
        self._texture = None

    def initialize(self, engine) -> None:
        self._texture = engine.load_texture(TITLE_IMAGE)

    def update(self, keys: Container[str], pre_keys: Container[str]) -> None:
        if self._just_pressed(keys, pre_keys, _CONFIRM_KEY):
            self.transition_to(SceneId.STAGE)

    def draw(self, engine) -> None:
        engine.draw_sprite(0, 0, self._texture, 1.0, 1.0, 0.0)