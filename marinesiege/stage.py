"""The playing field: the marine holds the room against waves of enemies."""

from __future__ import annotations

import math
import random
from collections.abc import Container

from .entities import (
    HURT_COOLDOWN,
    MAGAZINE_SIZE,
    RESPAWN_FRAMES,
    Bullet,
    Enemy,
    Facing,
    Item,
    Player,
)
from .geometry import Vector2, bullet_step, home_in, random_edge_position, rotated_quad
from .scene import Scene, SceneId

ROOM_WIDTH = 1280
ROOM_HEIGHT = 720
MINION_COUNT = 150
BOSS_COUNT = 10
ENEMY_COUNT = MINION_COUNT + BOSS_COUNT

SHOOT_COOLDOWN = 10
HIT_MARGIN = 30.0
PICKUP_RANGE = 50.0
POINTS_PER_GEM = 2
HOMING_KILLS_NEEDED = 2000
BLADESTORM_KILLS_NEEDED = 4000
BOSS_KILLS_NEEDED = 6000
BLADESTORM_FRAMES = 120
BLADESTORM_RANGE = 80.0
HOMING_BOLT_MAX_KILLS = 10
_PARKED = Vector2(-128.0, -128.0)

NUMBER_IMAGES = tuple(f"./images/num/num{n}.png" for n in range(1, 11))
BOLT_IMAGE = "./images/ui/bolt.png"
HOLDER_UP_IMAGE = "./images/ui/holderup.png"
HOLDER_UNDER_IMAGE = "./images/ui/holderunder.png"
MONITOR_IMAGE = "./images/ui/monita.png"
HP_COUNTER_IMAGE = "./images/ui/hpcounter.png"
HP_BLOCK_IMAGE = "./images/ui/hp.png"
BULLET_IMAGE = "./images/player/bullet.png"
FLY_BLADE_IMAGE = "./images/player/flyblade.png"
PLAYER_LEFT_IMAGES = tuple(f"./images/player/UMARINEL{n}.png" for n in range(1, 5))
PLAYER_RIGHT_IMAGES = tuple(f"./images/player/UMARINER{n}.png" for n in range(1, 5))
BLADESTORM_IMAGES = tuple(f"./images/player/bladestorm{n}.png" for n in range(1, 5))
ENEMY_LEFT_IMAGES = tuple(f"./images/enemy/NGLINGL{n}.png" for n in range(1, 5))
ENEMY_RIGHT_IMAGES = tuple(f"./images/enemy/NGLINGR{n}.png" for n in range(1, 5))
# Death and explosion frames are stored last frame first.
ENEMY_DEATH_IMAGES = tuple(f"./images/enemy/death{n}.png" for n in range(4, 0, -1))
BOSS_IMAGES = tuple(f"./images/enemy/BOOS{n}.png" for n in range(1, 5))
BOSS_EXPLOSION_IMAGES = tuple(f"./images/enemy/Explosion{n}.png" for n in range(15, 0, -1))
POINT_IMAGE = "./images/enemy/point.png"
MAP_IMAGE = "./images/ui/room.png"
GAME_OVER_IMAGE = "./images/ui/gameover.png"
GAME_CLEAR_IMAGE = "./images/ui/gameclear.png"
BGM_SOUND = "./Sounds/bgm.wav"
GUN_SOUND = "./Sounds/9mm2.mp3"
RELOAD_SOUND = "./Sounds/reload.mp3"


def _just_pressed(keys: Container[str], pre_keys: Container[str], key: str) -> bool:
    return key in keys and key not in pre_keys


class StageScene(Scene):
    """The stage: movement, shooting, enemies, bosses, gems and the score."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._given_rng = rng
        self._rng = rng if rng is not None else random.Random()
        self._engine = None
        self.player = Player.spawn()
        self.bullets: list[Bullet] = []
        self.enemies: list[Enemy] = []
        self.points: list[Item] = []
        self.enemy_facing: list[Facing] = []
        self.facing = Facing.LEFT
        self.bladestorm = False
        self.bladestorm_time = BLADESTORM_FRAMES
        self.frame = 0
        self.blade_frame = 0
        self.dead_bosses = 0
        self._shot_angles = [0.0] * MAGAZINE_SIZE
        self._bgm_handle = None
        self._gun_handle = None
        self._reload_handle = None

    # ------------------------------------------------------------------ setup

    def initialize(self, engine) -> None:
        self._engine = engine
        if self._given_rng is None:
            self._rng = random.Random()

        self.player = Player.spawn()
        self.bullets = [Bullet.holstered() for _ in range(MAGAZINE_SIZE)]
        self.enemies = [Enemy.minion(self._edge_position()) for _ in range(MINION_COUNT)]
        self.enemies += [Enemy.boss(self._edge_position()) for _ in range(BOSS_COUNT)]
        self.enemy_facing = [Facing.LEFT] * MINION_COUNT
        self.points = [Item.hidden() for _ in range(ENEMY_COUNT)]

        self.bladestorm = False
        self.bladestorm_time = BLADESTORM_FRAMES
        self.facing = Facing.LEFT
        self.frame = 0
        self.blade_frame = 0
        self.dead_bosses = 0
        self._shot_angles = [0.0] * MAGAZINE_SIZE

        self._load_resources(engine)

    def _load_resources(self, engine) -> None:
        load = engine.load_texture
        self._number_tex = [load(p) for p in NUMBER_IMAGES]
        self._bolt_tex = load(BOLT_IMAGE)
        self._holder_up_tex = load(HOLDER_UP_IMAGE)
        self._holder_under_tex = load(HOLDER_UNDER_IMAGE)
        self._monitor_tex = load(MONITOR_IMAGE)
        self._hp_counter_tex = load(HP_COUNTER_IMAGE)
        self._hp_block_tex = load(HP_BLOCK_IMAGE)
        self._bullet_tex = load(BULLET_IMAGE)
        self._fly_blade_tex = load(FLY_BLADE_IMAGE)
        self._player_left_tex = [load(p) for p in PLAYER_LEFT_IMAGES]
        self._player_right_tex = [load(p) for p in PLAYER_RIGHT_IMAGES]
        self._bladestorm_tex = [load(p) for p in BLADESTORM_IMAGES]
        self._enemy_left_tex = [load(p) for p in ENEMY_LEFT_IMAGES]
        self._enemy_right_tex = [load(p) for p in ENEMY_RIGHT_IMAGES]
        self._enemy_death_tex = [load(p) for p in ENEMY_DEATH_IMAGES]
        self._boss_tex = [load(p) for p in BOSS_IMAGES]
        self._boss_explosion_tex = [load(p) for p in BOSS_EXPLOSION_IMAGES]
        self._point_tex = load(POINT_IMAGE)
        self._map_tex = load(MAP_IMAGE)
        self._game_over_tex = load(GAME_OVER_IMAGE)
        self._game_clear_tex = load(GAME_CLEAR_IMAGE)

        self._bgm = engine.load_audio(BGM_SOUND)
        self._gun = engine.load_audio(GUN_SOUND)
        self._reload = engine.load_audio(RELOAD_SOUND)
        self._bgm_handle = None
        self._gun_handle = None
        self._reload_handle = None

    def _edge_position(self) -> Vector2:
        return random_edge_position(ROOM_WIDTH, ROOM_HEIGHT, self._rng)

    def _play(self, handle, sound, loop: bool):
        if handle is None or not self._engine.is_playing_audio(handle):
            return self._engine.play_audio(sound, loop, 1.0)
        return handle

    def _tick_frames(self) -> None:
        self.frame = (self.frame + 1) % 60
        self.blade_frame = (self.blade_frame + 1) % 20

    # ---------------------------------------------------------------- queries

    def closest_enemy(self) -> int | None:
        """Return the index of the live enemy nearest the marine, or None."""
        best_index = None
        best_distance = 10000.0
        for index, enemy in enumerate(self.enemies):
            if not enemy.is_alive:
                continue
            distance = (self.player.pos - enemy.pos).length()
            if distance < best_distance:
                best_distance = distance
                best_index = index
        return best_index

    def score_digits(self) -> tuple[int, int, int, int, int]:
        """Return the five score digits shown on the monitor, most significant first."""
        rest = self.player.kill_counter
        digits = [rest // 10000]
        rest %= 10000
        for divisor in (1000, 100, 10):
            digits.append(rest // divisor)
            rest %= divisor
        digits.append(rest)
        return tuple(digits)

    # ----------------------------------------------------------------- update

    def update(self, keys: Container[str], pre_keys: Container[str]) -> None:
        player = self.player
        self._tick_frames()
        target = self.closest_enemy()

        self._bgm_handle = self._play(self._bgm_handle, self._bgm, True)

        self._move_player(keys)

        ready = player.shoot_cooldown <= 0 and player.bolts > 0
        if _just_pressed(keys, pre_keys, "space") and ready:
            self._gun_handle = self._play(self._gun_handle, self._gun, False)
            self._fire(Bullet.STRAIGHT, target)
        ready = player.shoot_cooldown <= 0 and player.bolts > 0
        if (
            _just_pressed(keys, pre_keys, "rshift")
            and ready
            and player.kill_counter >= HOMING_KILLS_NEEDED
        ):
            self._fire(Bullet.HOMING, target)

        for bullet in self.bullets:
            if not bullet.is_shot:
                continue
            if bullet.kind == Bullet.STRAIGHT:
                bullet.pos = bullet_step(bullet.pos, bullet.heading, bullet.speed)
            elif bullet.kind == Bullet.HOMING and target is not None:
                bullet.pos = home_in(bullet.pos, self.enemies[target].pos, bullet.speed)

        if player.shoot_cooldown > 0:
            player.shoot_cooldown -= 1

        if "r" in keys:
            self._reload_handle = self._play(self._reload_handle, self._reload, False)
            player.bolts = MAGAZINE_SIZE
            for bullet in self.bullets:
                bullet.reload()

        self._resolve_bullet_hits()
        self._resolve_player_damage()
        if player.hp <= 0:
            self.transition_to(SceneId.CLEAR)

        self._park_spent_bullets()
        self._run_bladestorm(keys, pre_keys)
        self._collect_dead()
        self._move_enemies()
        self._respawn()
        self._pick_up_gem()

        self._tick_frames()
        self._shot_angles = [math.atan2(b.heading.y, b.heading.x) for b in self.bullets]

    def _move_player(self, keys: Container[str]) -> None:
        player = self.player
        x, y = player.pos.x, player.pos.y
        if "w" in keys and y > 48.0 + player.radius + 48.0 / 2.0:
            y -= player.speed
        if "s" in keys and y < ROOM_HEIGHT - 90.0 - player.radius / 2.0:
            y += player.speed
        if "a" in keys:
            self.facing = Facing.LEFT
            if x > 64.0 + player.radius / 2.0:
                x -= player.speed
        if "d" in keys:
            self.facing = Facing.RIGHT
            if x < ROOM_WIDTH - 64.0 - player.radius / 2.0:
                x += player.speed
        player.pos = Vector2(x, y)

    def _fire(self, kind: int, target: int | None) -> None:
        player = self.player
        bullet = self.bullets[MAGAZINE_SIZE - player.bolts]
        if bullet.is_shot:
            return
        bullet.is_shot = True
        bullet.pos = player.pos
        bullet.kind = kind
        player.bolts -= 1
        player.shoot_cooldown = SHOOT_COOLDOWN
        if target is not None:
            direction = self.enemies[target].pos - player.pos
            if direction.length() != 0:
                bullet.heading = direction.normalized()

    def _resolve_bullet_hits(self) -> None:
        for bullet in self.bullets:
            if not bullet.is_shot:
                continue
            for enemy in self.enemies:
                if not enemy.is_alive:
                    continue
                reach = enemy.radius + bullet.radius + HIT_MARGIN
                if (bullet.pos - enemy.pos).length() < reach:
                    enemy.hp -= 1
                    if bullet.kind == Bullet.HOMING:
                        bullet.kill_counter += 1
                    break

    def _resolve_player_damage(self) -> None:
        player = self.player
        if player.hp <= 0:
            return
        player.hurt_cooldown -= 1
        for enemy in self.enemies:
            if player.hp < 0 or not enemy.is_alive:
                continue
            touching = (player.pos - enemy.pos).length() < enemy.radius + player.radius
            if touching and player.hurt_cooldown <= 0:
                player.hp -= 1
                player.hurt_cooldown = HURT_COOLDOWN
                break

    def _park_spent_bullets(self) -> None:
        for bullet in self.bullets:
            if bullet.kind == Bullet.STRAIGHT:
                x, y = bullet.pos.x, bullet.pos.y
                if x < 0.0 or x > ROOM_WIDTH or y < 0.0 or y > ROOM_HEIGHT:
                    bullet.pos = _PARKED
            elif bullet.kind == Bullet.HOMING and bullet.kill_counter >= HOMING_BOLT_MAX_KILLS:
                bullet.pos = _PARKED

    def _run_bladestorm(self, keys: Container[str], pre_keys: Container[str]) -> None:
        if (
            _just_pressed(keys, pre_keys, "return")
            and self.player.kill_counter >= BLADESTORM_KILLS_NEEDED
        ):
            self.bladestorm = True

        if self.bladestorm and self.bladestorm_time > 0:
            self.bladestorm_time -= 1
            for enemy in self.enemies:
                if not enemy.is_alive:
                    continue
                if (enemy.pos - self.player.pos).length() < BLADESTORM_RANGE + enemy.radius:
                    enemy.hp -= 1
        elif self.bladestorm_time <= 0:
            self.bladestorm = False
            self.bladestorm_time = BLADESTORM_FRAMES

    def _collect_dead(self) -> None:
        for index, (enemy, gem) in enumerate(zip(self.enemies, self.points)):
            if enemy.hp <= 0:
                enemy.is_alive = False
                gem.is_alive = True
                gem.pos = enemy.pos
                if index >= MINION_COUNT:
                    self.dead_bosses += 1

    def _move_enemies(self) -> None:
        target = self.player.pos
        for enemy in self.enemies[:MINION_COUNT]:
            if enemy.is_alive:
                enemy.pos = home_in(enemy.pos, target, enemy.speed)
            else:
                enemy.respawn_time -= 1
        for boss in self.enemies[MINION_COUNT:]:
            boss.pos = home_in(boss.pos, target, boss.speed)
            if boss.hp <= 0:
                boss.respawn_time -= 1
        self.enemy_facing = [
            Facing.LEFT if target.x - enemy.pos.x >= 0 else Facing.RIGHT
            for enemy in self.enemies[:MINION_COUNT]
        ]

    def _respawn(self) -> None:
        for enemy in self.enemies[:MINION_COUNT]:
            if enemy.respawn_time <= 0:
                enemy.is_alive = True
                enemy.hp = 1
                enemy.respawn_time = RESPAWN_FRAMES
                enemy.pos = self._edge_position()
        if self.player.kill_counter > BOSS_KILLS_NEEDED:
            for boss in self.enemies[MINION_COUNT:]:
                if not boss.is_alive and boss.hp == 100:
                    boss.is_alive = True
                    boss.pos = self._edge_position()

    def _pick_up_gem(self) -> None:
        player = self.player
        if player.hp <= 0:
            return
        for gem in self.points:
            if not gem.is_alive:
                continue
            if (player.pos - gem.pos).length() < player.radius + PICKUP_RANGE:
                gem.is_alive = False
                player.kill_counter += POINTS_PER_GEM
                break

    # ------------------------------------------------------------------- draw

    @staticmethod
    def _sprite(engine, pos: Vector2, offset: int, texture, scale: float = 1.0) -> None:
        engine.draw_sprite(int(pos.x) - offset, int(pos.y) - offset, texture, scale, scale, 0.0)

    def draw(self, engine) -> None:
        engine.draw_sprite(0, 0, self._map_tex, 1.0, 1.0, 0.0)
        anim = self.frame // 15

        for gem in self.points:
            if gem.is_alive:
                self._sprite(engine, gem.pos, 32, self._point_tex)

        minions = self.enemies[:MINION_COUNT]
        bosses = self.enemies[MINION_COUNT:]
        for enemy in minions:
            if not enemy.is_alive and 60 <= enemy.respawn_time < RESPAWN_FRAMES:
                frame = int((enemy.respawn_time - 61) / 15)
                self._sprite(engine, enemy.pos, 32, self._enemy_death_tex[frame])

        for enemy, facing in zip(minions, self.enemy_facing):
            if enemy.is_alive:
                textures = self._enemy_right_tex if facing is Facing.LEFT else self._enemy_left_tex
                self._sprite(engine, enemy.pos, 32, textures[anim])

        for boss in bosses:
            if boss.is_alive:
                self._sprite(engine, boss.pos, 64, self._boss_tex[anim])
        for boss in bosses:
            if boss.hp == 0 and 60 <= boss.respawn_time < RESPAWN_FRAMES:
                frame = int((boss.respawn_time - 61) / 4)
                self._sprite(engine, boss.pos, 64, self._boss_explosion_tex[frame])

        for bullet, angle in zip(self.bullets, self._shot_angles):
            if not bullet.is_shot:
                continue
            if bullet.kind == Bullet.STRAIGHT:
                texture = self._bullet_tex
            elif bullet.kind == Bullet.HOMING:
                texture = self._fly_blade_tex
            else:
                continue
            quad = rotated_quad(bullet.pos, angle)
            corners = (quad.left_up, quad.right_up, quad.left_down, quad.right_down)
            coords = [int(c) for corner in corners for c in (corner.x, corner.y)]
            engine.draw_quad(*coords, 0, 0, 64, 64, texture)

        if self.bladestorm and self.bladestorm_time > 0:
            self._sprite(engine, self.player.pos, 64, self._bladestorm_tex[self.blade_frame // 5])

        player_tex = self._player_left_tex if self.facing is Facing.LEFT else self._player_right_tex
        self._sprite(engine, self.player.pos, 32, player_tex[anim])

        engine.draw_sprite(1200 - 82, 200 - 82, self._holder_under_tex, 1.5, 1.5, 0.0)
        for slot, bullet in enumerate(self.bullets):
            if not bullet.is_shot:
                engine.draw_sprite(1200 - 20, 150 + slot * 48, self._bolt_tex, 1.5, 1.5, 0.0)
        engine.draw_sprite(1200 - 82, 200 - 82, self._holder_up_tex, 1.5, 1.5, 0.0)

        engine.draw_sprite(ROOM_WIDTH // 2 - 200, 5, self._monitor_tex, 1.0, 1.0, 0.0)
        for place, digit in enumerate(self.score_digits()):
            texture = self._number_tex[min(digit, 9)]
            engine.draw_sprite(465 + place * 70, 29, texture, 1.0, 1.0, 0.0)

        engine.draw_sprite(400, 550, self._hp_counter_tex, 1.0, 1.0, 0.0)
        for block in range(max(self.player.hp, 0)):
            engine.draw_sprite(460 + block * 32, 550 + 32, self._hp_block_tex, 1.0, 1.0, 0.0)