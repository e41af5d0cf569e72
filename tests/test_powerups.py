from novastrike.powerups import POWERUP_DURATION_TICKS, PowerupKind, PowerupRegistry


def test_activate_sets_full_duration():
    reg = PowerupRegistry()
    reg.activate(PowerupKind.TRIPLE_SHOT)
    assert reg.remaining(PowerupKind.TRIPLE_SHOT) == POWERUP_DURATION_TICKS == 600
    assert PowerupKind.TRIPLE_SHOT in reg
    assert PowerupKind.SHIELD not in reg


def test_recollect_resets_instead_of_stacking():
    reg = PowerupRegistry()
    reg.activate(PowerupKind.RAPID_FIRE)
    for _ in range(250):
        reg.tick()
    assert reg.remaining(PowerupKind.RAPID_FIRE) == 350

    reg.activate(PowerupKind.RAPID_FIRE)
    assert reg.remaining(PowerupKind.RAPID_FIRE) == 600


def test_entries_expire_and_are_removed():
    reg = PowerupRegistry(duration=3)
    reg.activate(PowerupKind.POWER_SHOT)
    assert reg.tick() == []
    assert reg.tick() == []
    assert reg.tick() == [PowerupKind.POWER_SHOT]
    assert len(reg) == 0
    assert reg.remaining(PowerupKind.POWER_SHOT) == 0


def test_never_holds_non_positive_countdown():
    reg = PowerupRegistry(duration=5)
    reg.activate(PowerupKind.SHIELD)
    reg.activate(PowerupKind.TRIPLE_SHOT)
    for _ in range(10):
        reg.tick()
        assert all(reg.remaining(k) > 0 for k in PowerupKind if k in reg)


def test_active_names_and_clear():
    reg = PowerupRegistry()
    reg.activate(PowerupKind.SHIELD)
    reg.activate(PowerupKind.TRIPLE_SHOT)
    assert reg.active_names() == ["shield", "tripleShot"]
    reg.clear()
    assert reg.active_names() == []
