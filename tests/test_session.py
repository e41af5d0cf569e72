import pytest
from statemachine.exceptions import TransitionNotAllowed

from novastrike.canvas import ArrayCanvas
from novastrike.controls import NO_INPUT
from novastrike.entities import Bullet, UnknownCharacterError
from novastrike.events import EventBus, SoundEvent
from novastrike.powerups import PowerupKind
from novastrike.session import GameSession, HudSnapshot


def lose_game(session):
    state = session.state
    state.lives = 1
    state.health = 10
    state.bullets.append(Bullet(x=state.player.x, y=state.player.y - 4, vx=0, vy=4,
                                damage=1, color="#ff4040", owned_by_player=False))
    session.tick(NO_INPUT)


def test_starts_idle():
    session = GameSession(seed=0)
    assert session.phase == "start"
    assert session.state is None
    assert not session.tick(NO_INPUT)


def test_start_game_resets_session():
    session = GameSession(seed=0, character="blaze")
    state = session.start_game()

    assert session.phase == "playing"
    assert (state.score, state.stage, state.lives, state.health) == (0, 1, 3, 100)
    assert state.game_speed == 1.0
    assert state.bullets == [] and state.enemies == [] and state.pickups == []
    assert len(state.active_powerups) == 0
    assert state.character.name == "Blaze"
    assert len(state.starfield) == 100


def test_unknown_character_rejected_before_start():
    session = GameSession(seed=0)
    with pytest.raises(UnknownCharacterError):
        session.start_game("zephyr")
    assert session.phase == "start"
    assert session.state is None

    with pytest.raises(UnknownCharacterError):
        GameSession(character="zephyr")


def test_tick_runs_only_while_playing():
    session = GameSession(seed=0)
    session.start_game()
    assert session.tick(NO_INPUT)
    assert session.state.tick == 1


def test_lives_exhausted_moves_to_game_over_and_freezes():
    session = GameSession(seed=0)
    session.start_game()
    session.state.score = 730
    lose_game(session)

    assert session.phase == "gameOver"
    assert session.is_game_over
    frozen = session.hud()
    assert frozen.score == 730
    assert frozen.stage == 2
    assert frozen.lives == 0

    assert not session.tick(NO_INPUT)
    assert session.hud() == frozen


def test_invalid_transitions_raise():
    session = GameSession(seed=0)
    with pytest.raises(TransitionNotAllowed):
        session.restart_game()
    session.start_game()
    with pytest.raises(TransitionNotAllowed):
        session.start_game()
    with pytest.raises(TransitionNotAllowed):
        session.restart_game()


def test_restart_cycle_builds_fresh_state():
    session = GameSession(seed=0)
    first = session.start_game()
    first.active_powerups.activate(PowerupKind.SHIELD)
    lose_game(session)

    session.restart_game()
    assert session.phase == "start"

    session.select_character("viper")
    second = session.start_game()
    assert second is not first
    assert second.score == 0 and second.lives == 3 and second.health == 100
    assert len(second.active_powerups) == 0
    assert second.character.name == "Viper"


def test_hud_sink_gets_snapshot_each_tick():
    seen = []
    session = GameSession(seed=0, hud_sink=seen.append)
    session.start_game()
    session.state.active_powerups.activate(PowerupKind.RAPID_FIRE)
    session.tick(NO_INPUT)
    session.tick(NO_INPUT)

    assert len(seen) == 2
    assert seen[-1] == HudSnapshot(
        score=0, lives=3, health=100, stage=1,
        character_name="Nova", active_powerups=("rapidFire",),
    )
    assert seen[-1].health_percent == 100.0


def test_broken_hud_sink_does_not_abort_tick():
    def broken(_hud):
        raise RuntimeError("display gone")

    session = GameSession(seed=0, hud_sink=broken)
    session.start_game()
    assert session.tick(NO_INPUT)
    assert session.hud_sink is None
    assert session.tick(NO_INPUT)


def test_event_bus_detaches_failing_listener():
    bus = EventBus()
    heard = []

    def broken(_event):
        raise OSError("no audio device")

    bus.subscribe(broken)
    bus.subscribe(heard.append)
    bus.emit(SoundEvent.SHOOT)
    bus.emit(SoundEvent.EXPLOSION)

    assert heard == [SoundEvent.SHOOT, SoundEvent.EXPLOSION]
    assert len(bus) == 1


def test_event_bus_without_listeners_is_silent():
    EventBus().emit(SoundEvent.POWERUP)


def test_same_seed_same_game():
    def play(seed):
        session = GameSession(seed=seed)
        session.start_game()
        for _ in range(600):
            session.tick(NO_INPUT)
        s = session.state
        return s.score, s.health, [(e.kind, e.x, e.y) for e in s.enemies]

    assert play(11) == play(11)


def test_draw_renders_entities():
    session = GameSession(seed=0, star_count=0)
    canvas = ArrayCanvas(800, 600)
    session.draw(canvas)  # nothing to draw before the first game
    blank = canvas.frame()

    session.start_game()
    session.draw(canvas)
    frame = canvas.frame()

    assert frame.shape == (600, 800, 3)
    # nova's ship colour at the player's position
    assert tuple(frame[500, 390]) == (0, 212, 255)
    assert (blank != frame).any()


def test_restart_clears_finished_game_from_screen():
    session = GameSession(seed=0, star_count=0)
    canvas = ArrayCanvas(800, 600)
    session.draw(canvas)
    blank = canvas.frame()

    session.start_game()
    session.state.score = 250
    lose_game(session)
    session.restart_game()

    assert session.state is None
    assert session.hud() == HudSnapshot(0, 3, 100, 1, "Nova", ())
    canvas.clear()
    session.draw(canvas)
    assert (canvas.frame() == blank).all()


def test_start_while_playing_keeps_selected_pilot():
    session = GameSession(seed=0)
    session.start_game("nova")
    with pytest.raises(TransitionNotAllowed):
        session.start_game("viper")
    assert session.selected_character.name == "Nova"
    assert session.state.character.name == "Nova"
