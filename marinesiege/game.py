"""The game loop that moves between the title, the stage and the closing screen."""

from __future__ import annotations

import argparse
from collections.abc import Iterable, Mapping

from .clear import ClearScene
from .scene import Scene, SceneId
from .stage import StageScene
from .title import TitleScene

_QUIT_KEY = "escape"


class GameManager:
    """Runs one scene per frame and initializes a scene whenever it becomes current."""

    def __init__(self, engine, scenes: Mapping[SceneId, Scene] | None = None) -> None:
        self._engine = engine
        if scenes is None:
            scenes = {
                SceneId.TITLE: TitleScene(),
                SceneId.STAGE: StageScene(),
                SceneId.CLEAR: ClearScene(),
            }
        self._scenes = dict(scenes)
        Scene.reset()
        self._current = SceneId.TITLE
        self._previous = self._current
        self._keys: frozenset[str] = frozenset()
        self._scenes[self._current].initialize(engine)

    def current_scene(self) -> SceneId:
        """Return the scene that ran in the last frame."""
        return self._current

    def step(self, keys: Iterable[str]) -> bool:
        """Run one frame with ``keys`` held down; return False when Escape was just pressed."""
        pre_keys = self._keys
        self._keys = frozenset(keys)

        self._previous = self._current
        self._current = self._scenes[self._current].scene_no()
        scene = self._scenes[self._current]
        if self._previous != self._current:
            scene.initialize(self._engine)

        scene.update(self._keys, pre_keys)
        scene.draw(self._engine)

        return not (_QUIT_KEY in self._keys and _QUIT_KEY not in pre_keys)

    def run(self) -> int:
        """Run frames until the window closes or Escape is pressed."""
        engine = self._engine
        while engine.process_messages():
            engine.begin_frame()
            keep_going = self.step(engine.pressed_keys())
            engine.end_frame()
            if not keep_going:
                break
        return 0


def main(argv=None) -> int:
    """Open the game window and play until it is closed."""
    parser = argparse.ArgumentParser(
        prog="marinesiege", description="Hold the room against the swarm."
    )
    parser.parse_args(argv)

    from .engine import PygameEngine

    with PygameEngine() as engine:
        return GameManager(engine).run()


if __name__ == "__main__":
    raise SystemExit(main())