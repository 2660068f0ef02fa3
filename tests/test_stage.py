import random

import pytest

from marinesiege.entities import HURT_COOLDOWN, MAGAZINE_SIZE, RESPAWN_FRAMES, Bullet, Facing, Player
from marinesiege.geometry import Vector2
from marinesiege.scene import Scene, SceneId
from marinesiege.stage import (
    BGM_SOUND,
    BLADESTORM_FRAMES,
    BOLT_IMAGE,
    BOSS_COUNT,
    BULLET_IMAGE,
    ENEMY_COUNT,
    FLY_BLADE_IMAGE,
    GUN_SOUND,
    HP_BLOCK_IMAGE,
    MAP_IMAGE,
    MINION_COUNT,
    POINTS_PER_GEM,
    RELOAD_SOUND,
    ROOM_HEIGHT,
    ROOM_WIDTH,
    StageScene,
)


class FakeEngine:
    def __init__(self):
        self.sprites = []
        self.quads = []
        self.played = []
        self.playing = set()
        self._next = 0

    def load_texture(self, path):
        return path

    def load_audio(self, path):
        return path

    def play_audio(self, sound, loop, volume):
        self._next += 1
        self.played.append((sound, loop, volume))
        self.playing.add(self._next)
        return self._next

    def is_playing_audio(self, handle):
        return handle in self.playing

    def draw_sprite(self, x, y, texture, scale_x, scale_y, angle):
        self.sprites.append((x, y, texture))

    def draw_quad(self, x1, y1, x2, y2, x3, y3, x4, y4, src_x, src_y, src_w, src_h, texture):
        self.quads.append(((x1, y1), (x2, y2), (x3, y3), (x4, y4), texture))


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def scene(engine):
    Scene.reset()
    stage = StageScene(random.Random(0))
    stage.initialize(engine)
    yield stage
    Scene.reset()


def quiet(stage):
    for enemy in stage.enemies:
        enemy.is_alive = False
        enemy.respawn_time = 10**6


def place(stage, index, pos):
    enemy = stage.enemies[index]
    enemy.is_alive = True
    enemy.pos = pos
    enemy.respawn_time = RESPAWN_FRAMES


def on_edge(pos):
    return pos.x in (0.0, float(ROOM_WIDTH)) or pos.y in (0.0, float(ROOM_HEIGHT))


def test_initialize_sets_up_field(scene):
    assert len(scene.enemies) == ENEMY_COUNT
    assert all(e.is_alive and e.hp == 1 for e in scene.enemies[:MINION_COUNT])
    assert all(not e.is_alive and e.hp == 100 for e in scene.enemies[MINION_COUNT:])
    assert len(scene.enemies[MINION_COUNT:]) == BOSS_COUNT
    assert all(on_edge(e.pos) for e in scene.enemies)
    assert len(scene.bullets) == MAGAZINE_SIZE
    assert not any(b.is_shot for b in scene.bullets)
    assert scene.player.pos == Player.spawn().pos
    assert not any(p.is_alive for p in scene.points)


def test_background_music_starts_once(scene, engine):
    quiet(scene)
    scene.update(set(), set())
    scene.update(set(), set())
    assert scene.scene_no() is SceneId.TITLE
    assert scene.score_digits() == (0, 0, 0, 0, 0)
    assert [p for p in engine.played if p[0] == BGM_SOUND] == [(BGM_SOUND, True, 1.0)]


def test_background_music_restarts_when_stopped(scene, engine):
    quiet(scene)
    scene.update(set(), set())
    engine.playing.clear()
    scene.update(set(), set())
    assert scene.scene_no() is SceneId.TITLE
    assert scene.score_digits() == (0, 0, 0, 0, 0)
    assert len([p for p in engine.played if p[0] == BGM_SOUND]) == 2


def test_move_right_turns_and_moves(scene):
    quiet(scene)
    start = scene.player.pos
    scene.update({"d"}, set())
    assert scene.player.pos == Vector2(start.x + scene.player.speed, start.y)
    assert scene.facing is Facing.RIGHT


def test_move_up_blocked_at_top(scene):
    quiet(scene)
    scene.player.pos = Vector2(600.0, 50.0)
    scene.update({"w"}, set())
    assert scene.player.pos == Vector2(600.0, 50.0)


def test_straight_shot_flies_at_nearest_enemy(scene, engine):
    quiet(scene)
    start = scene.player.pos
    place(scene, 0, start + Vector2(300.0, 0.0))
    scene.update({"space"}, set())
    bullet = scene.bullets[0]
    assert bullet.is_shot
    assert bullet.kind == Bullet.STRAIGHT
    assert bullet.heading == Vector2(1.0, 0.0)
    assert bullet.pos == start + Vector2(bullet.speed, 0.0)
    assert scene.player.bolts == MAGAZINE_SIZE - 1
    assert (GUN_SOUND, False, 1.0) in engine.played


def test_holding_space_fires_once(scene):
    quiet(scene)
    scene.update({"space"}, set())
    scene.update({"space"}, {"space"})
    assert scene.player.bolts == MAGAZINE_SIZE - 1


def test_cooldown_blocks_quick_second_shot(scene):
    quiet(scene)
    scene.update({"space"}, set())
    scene.update(set(), {"space"})
    scene.update({"space"}, set())
    assert scene.player.bolts == MAGAZINE_SIZE - 1
    assert not scene.bullets[1].is_shot


def test_homing_shot_needs_kills(scene):
    quiet(scene)
    scene.update({"rshift"}, set())
    assert scene.player.bolts == MAGAZINE_SIZE


def test_homing_shot_flies_towards_target(scene):
    quiet(scene)
    scene.player.kill_counter = 2000
    start = scene.player.pos
    place(scene, 0, start + Vector2(0.0, -300.0))
    scene.update({"rshift"}, set())
    bullet = scene.bullets[0]
    assert bullet.kind == Bullet.HOMING
    assert bullet.pos.y < start.y
    assert bullet.pos.x == pytest.approx(start.x)


def test_reload_refills_magazine(scene, engine):
    quiet(scene)
    scene.update({"space"}, set())
    scene.update({"r"}, set())
    assert scene.player.bolts == MAGAZINE_SIZE
    assert not any(b.is_shot for b in scene.bullets)
    assert (RELOAD_SOUND, False, 1.0) in engine.played


def test_bullet_kills_enemy_and_drops_gem(scene):
    quiet(scene)
    bullet = scene.bullets[0]
    bullet.is_shot = True
    bullet.kind = Bullet.STRAIGHT
    bullet.heading = Vector2(0.0, 0.0)
    bullet.pos = Vector2(200.0, 200.0)
    place(scene, 3, Vector2(200.0, 200.0))
    scene.update(set(), set())
    assert not scene.enemies[3].is_alive
    assert scene.points[3].is_alive
    assert scene.points[3].pos == Vector2(200.0, 200.0)
    assert scene.enemies[3].respawn_time == RESPAWN_FRAMES - 1


def test_straight_bullet_parked_when_leaving_room(scene):
    quiet(scene)
    bullet = scene.bullets[0]
    bullet.is_shot = True
    bullet.kind = Bullet.STRAIGHT
    bullet.heading = Vector2(1.0, 0.0)
    bullet.pos = Vector2(ROOM_WIDTH - 5.0, 300.0)
    scene.update(set(), set())
    assert bullet.pos == Vector2(-128.0, -128.0)


def test_homing_bullet_parked_after_ten_kills(scene):
    quiet(scene)
    bullet = scene.bullets[0]
    bullet.is_shot = True
    bullet.kind = Bullet.HOMING
    bullet.kill_counter = 10
    bullet.pos = Vector2(300.0, 300.0)
    scene.update(set(), set())
    assert bullet.pos == Vector2(-128.0, -128.0)


def test_enemy_contact_hurts_player(scene):
    quiet(scene)
    scene.player.hurt_cooldown = 1
    before = scene.player.hp
    place(scene, 0, scene.player.pos)
    scene.update(set(), set())
    assert scene.player.hp == before - 1
    assert scene.player.hurt_cooldown == HURT_COOLDOWN


def test_hurt_cooldown_protects_player(scene):
    quiet(scene)
    before = scene.player.hp
    place(scene, 0, scene.player.pos)
    scene.update(set(), set())
    assert scene.player.hp == before


def test_last_hit_ends_game(scene):
    quiet(scene)
    scene.player.hp = 1
    scene.player.hurt_cooldown = 1
    place(scene, 0, scene.player.pos)
    scene.update(set(), set())
    assert scene.scene_no() is SceneId.CLEAR


def test_gem_pickup_scores(scene):
    quiet(scene)
    for index in (5, 6):
        scene.points[index].is_alive = True
        scene.points[index].pos = scene.player.pos
    scene.update(set(), set())
    assert scene.player.kill_counter == POINTS_PER_GEM
    assert [p.is_alive for p in scene.points[5:7]] == [False, True]


def test_bladestorm_needs_kills(scene):
    quiet(scene)
    place(scene, 0, scene.player.pos + Vector2(50.0, 0.0))
    scene.update({"return"}, set())
    assert not scene.bladestorm
    assert scene.enemies[0].is_alive


def test_bladestorm_cuts_nearby_enemies(scene):
    quiet(scene)
    scene.player.kill_counter = 4000
    place(scene, 0, scene.player.pos + Vector2(50.0, 0.0))
    scene.update({"return"}, set())
    assert scene.bladestorm
    assert scene.bladestorm_time == BLADESTORM_FRAMES - 1
    assert not scene.enemies[0].is_alive


def test_bladestorm_ends_when_time_runs_out(scene):
    quiet(scene)
    scene.bladestorm = True
    scene.bladestorm_time = 0
    scene.update(set(), set())
    assert not scene.bladestorm
    assert scene.bladestorm_time == BLADESTORM_FRAMES


def test_dead_minion_respawns_on_edge(scene):
    quiet(scene)
    enemy = scene.enemies[7]
    enemy.respawn_time = 1
    scene.update(set(), set())
    assert enemy.is_alive
    assert enemy.hp == 1
    assert enemy.respawn_time == RESPAWN_FRAMES
    assert on_edge(enemy.pos)


@pytest.mark.parametrize("kills, expected", [(6000, False), (6001, True)])
def test_bosses_appear_after_enough_kills(scene, kills, expected):
    quiet(scene)
    scene.player.kill_counter = kills
    scene.update(set(), set())
    assert all(b.is_alive is expected for b in scene.enemies[MINION_COUNT:])


def test_closest_enemy(scene):
    quiet(scene)
    assert scene.closest_enemy() is None
    place(scene, 2, scene.player.pos + Vector2(100.0, 0.0))
    place(scene, 4, scene.player.pos + Vector2(0.0, 50.0))
    assert scene.closest_enemy() == 4


@pytest.mark.parametrize(
    "kills, digits",
    [(12345, (1, 2, 3, 4, 5)), (7, (0, 0, 0, 0, 7)), (0, (0, 0, 0, 0, 0))],
)
def test_score_digits(scene, kills, digits):
    scene.player.kill_counter = kills
    assert scene.score_digits() == digits


def test_draw_starts_with_map_and_shows_health(scene, engine):
    scene.player.hp = 3
    scene.draw(engine)
    assert engine.sprites[0] == (0, 0, MAP_IMAGE)
    assert len([s for s in engine.sprites if s[2] == HP_BLOCK_IMAGE]) == 3


def test_draw_shows_bullets_in_flight(scene, engine):
    quiet(scene)
    scene.update({"space"}, set())
    scene.bullets[1].is_shot = True
    scene.bullets[1].kind = Bullet.HOMING
    scene.draw(engine)
    assert [q[4] for q in engine.quads] == [BULLET_IMAGE, FLY_BLADE_IMAGE]
    bolts = [s for s in engine.sprites if s[2] == BOLT_IMAGE]
    assert len(bolts) == MAGAZINE_SIZE - 2