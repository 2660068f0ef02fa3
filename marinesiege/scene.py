"""Scene identifiers and the base class shared by every game screen.

Keyboard state is handed to scenes as containers of lower-case key names
(for example ``"return"`` or ``"space"``): ``keys`` holds the keys down in
this frame, ``pre_keys`` those that were down in the frame before.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Container
from enum import IntEnum


class SceneId(IntEnum):
    """The screens the game can show."""

    TITLE = 0
    STAGE = 1
    CLEAR = 2


class Scene(ABC):
    """A screen of the game.

    Every scene shares one marker of which scene is current, so a scene asks
    for a change of screen by calling :meth:`transition_to`.
    """

    _current: SceneId = SceneId.TITLE

    @abstractmethod
    def initialize(self, engine) -> None:
        """Prepare the scene and load what it draws through ``engine``."""

    @abstractmethod
    def update(self, keys: Container[str], pre_keys: Container[str]) -> None:
        """Advance the scene by one frame."""

    @abstractmethod
    def draw(self, engine) -> None:
        """Draw the scene through ``engine``."""

    def transition_to(self, next_scene: SceneId | int) -> None:
        """Make ``next_scene`` the current scene for every scene."""
        Scene._current = SceneId(next_scene)

    def scene_no(self) -> SceneId:
        """Return the scene that is current."""
        return Scene._current

    @classmethod
    def reset(cls) -> None:
        """Make the title screen current again."""
        Scene._current = SceneId.TITLE

    @staticmethod
    def _just_pressed(keys: Container[str], pre_keys: Container[str], key: str) -> bool:
        return key in keys and key not in pre_keys