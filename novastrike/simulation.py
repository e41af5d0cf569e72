"""
One logical tick of the game world

Order within a tick is fixed and is the only ordering guarantee:

1. scroll the starfield
2. update the player, then bullets, enemies, particles and pickups,
   dropping whatever expired
3. resolve collisions: player bullets vs enemies, enemy bullets vs player,
   enemy bodies vs player, pickups vs player
4. roll an enemy spawn
5. age the active powerups
6. recompute the stage

Collision passes only clear ``alive`` flags; the live collections are
compacted once the passes are done, so an entity consumed by one pass is
invisible to every later pass and nothing is removed mid-iteration.
"""

from __future__ import annotations

from .controls import InputSnapshot
from .entities import (
    BULLET_RADIUS,
    ENEMY_BODY_RADIUS,
    ENEMY_RADIUS,
    PLAYER_RADIUS,
    POWERUP_RADIUS,
)
from .state import SessionState
from .utils import circle_collide

ENEMY_BULLET_DAMAGE = 20
ENEMY_BODY_DAMAGE = 30


def step(state: SessionState, snapshot: InputSnapshot) -> None:
    """Advance ``state`` by one tick; a finished session is left untouched"""
    if state.game_over:
        return

    state.starfield.update(state.game_speed)

    _update_entities(state, snapshot)
    _handle_collisions(state)

    enemy = state.spawner.maybe_spawn(state.stage, state.rng)
    if enemy is not None:
        state.enemies.append(enemy)

    state.active_powerups.tick()
    state.progress.update(state.score)
    state.tick += 1


# ----------------------------
# Updates
# ----------------------------

def _update_entities(state: SessionState, snapshot: InputSnapshot) -> None:
    w, h = state.width, state.height

    state.player.update(state, snapshot)

    for b in state.bullets:
        b.update()
        if b.is_expired(w, h):
            b.alive = False
    state.bullets = [b for b in state.bullets if b.alive]

    # Enemies may append fresh bullets here; those first move next tick.
    for e in state.enemies:
        e.update(state)
        if e.is_expired(w, h):
            e.alive = False
    state.enemies = [e for e in state.enemies if e.alive]
    state.bullets = [b for b in state.bullets if not b.is_expired(w, h)]

    state.particles.update()

    for p in state.pickups:
        p.update()
        if p.is_expired(w, h):
            p.alive = False
    state.pickups = [p for p in state.pickups if p.alive]


# ----------------------------
# Collisions
# ----------------------------

def _handle_collisions(state: SessionState) -> None:
    player = state.player

    # Player bullets vs enemies: a bullet is spent on the first enemy it touches
    for b in state.bullets:
        if not (b.alive and b.owned_by_player):
            continue
        for e in state.enemies:
            if not e.alive:
                continue
            if circle_collide(b.x, b.y, BULLET_RADIUS, e.x, e.y, ENEMY_RADIUS):
                if e.take_damage(b.damage, state):
                    e.alive = False
                b.alive = False
                break

    # Enemy bullets vs player
    for b in state.bullets:
        if not b.alive or b.owned_by_player:
            continue
        if circle_collide(b.x, b.y, BULLET_RADIUS, player.x, player.y, PLAYER_RADIUS):
            player.take_damage(ENEMY_BULLET_DAMAGE, state)
            b.alive = False

    # Enemy bodies vs player
    for e in state.enemies:
        if not e.alive:
            continue
        if circle_collide(e.x, e.y, ENEMY_BODY_RADIUS, player.x, player.y, PLAYER_RADIUS):
            player.take_damage(ENEMY_BODY_DAMAGE, state)
            e.alive = False

    # Pickups vs player
    for p in state.pickups:
        if not p.alive:
            continue
        if circle_collide(p.x, p.y, POWERUP_RADIUS, player.x, player.y, PLAYER_RADIUS):
            p.collect(state)
            p.alive = False

    state.bullets = [b for b in state.bullets if b.alive]
    state.enemies = [e for e in state.enemies if e.alive]
    state.pickups = [p for p in state.pickups if p.alive]
