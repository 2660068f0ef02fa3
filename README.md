# marinesiege

A small top-down arcade shooter. You play a marine trapped in a room.
Creatures pour in from every edge of the screen and head straight for you.
Bosses join them later. Shoot them, pick up the gems they drop, and unlock
stronger attacks as your score grows.

## Installation

```
pip install .
```

The game runs on pygame.

## Game files

Pictures and sounds are not part of the package. The game loads them from
paths relative to the directory you start it from:

- pictures under `./images/` (`ui/`, `num/`, `player/`, `enemy/`)
- sounds under `./Sounds/` (`bgm.wav`, `9mm2.mp3`, `reload.mp3`)

If a file is missing, loading it raises `FileNotFoundError`. If no audio device
can be opened, the sound files still have to be present, but the game runs
without sound.

## Running

```
marinesiege
```

This opens a 1280×720 window titled "Marine Siege" on the title screen and
runs at 60 frames per second. The command takes no options apart from
`--help`.

## Controls

| Key           | Action                                                                          |
|---------------|---------------------------------------------------------------------------------|
| Enter         | On the title screen, start the stage. On the end screen, go back to the title. During play, once the score is at least 4000, start a chainsword storm |
| W / A / S / D | Move                                                                            |
| Space         | Fire a bolt towards the nearest living enemy                                    |
| Right Shift   | Fire a homing blade once the score is at least 2000                             |
| R             | Reload all ten bolts                                                            |
| Escape        | Quit (closing the window quits too)                                             |

There is a short cooldown after each shot. The magazine holds ten bolts and
refills only when you press R. Each gem you pick up adds 2 to the score,
which is shown as five digits. Once the score passes 6000, the bosses enter
the room. The chainsword storm lasts 120 frames and hurts every enemy close
to the marine. Touching an enemy costs one point of health, at most once
every 60 frames. When health reaches zero, the game moves to the end screen.

## Using it as a library

The game logic does not need a window. A scene talks to its engine only
through `load_texture`, `load_audio`, `play_audio`, `is_playing_audio`,
`draw_sprite` and `draw_quad`, so any object that has these methods can take
the place of the real engine.

- `marinesiege.game.GameManager(engine, scenes=None)` holds the title, stage
  and end scenes. `step(keys)` runs one frame with the given key names held
  down. It returns `False` on the frame Escape is first pressed.
  `current_scene()` returns the `SceneId` that ran last, and `run()` loops
  over frames until the window closes or Escape is pressed.
- `marinesiege.scene` defines `SceneId` (`TITLE`, `STAGE`, `CLEAR`) and the
  base class `Scene`. A scene has `initialize(engine)`,
  `update(keys, pre_keys)`, `draw(engine)`, `transition_to(scene)` and
  `scene_no()`. `Scene.reset()` makes the title current again.
- `marinesiege.title.TitleScene`, `marinesiege.clear.ClearScene` and
  `marinesiege.stage.StageScene` are the three screens.
  `StageScene(rng=None)` takes an optional `random.Random` for repeatable
  spawns. It also offers `score_digits()` and `closest_enemy()`.
- `marinesiege.entities` holds `Player`, `Bullet`, `Enemy`, `Item` and
  `Facing`.
- `marinesiege.geometry` holds `Vector2`, `Quad`, `rotated_quad`,
  `bullet_step`, `home_in` and `random_edge_position`.
- `marinesiege.engine.PygameEngine` provides the real window, textures, sound
  and keyboard through `pressed_keys()`. It can be used as a context manager.
  `Key` lists the key names the scenes read.

## What it does not do

The game keeps no high scores and saves nothing between runs. When health
runs out, the game shows the same end screen it uses for a win; there is no
separate game-over screen.

## Development

```
pip install -e .[test]
pytest
```