from laneshooter.config.settings import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.playfield.width == 400
    assert settings.playfield.lane_count == 4
    assert settings.timing.fire_cooldown == 300
    assert settings.timing.spawn_interval == 500
    assert settings.entities.projectile_speed == 7
    assert settings.player_y == 350
    assert settings.input_mode == "auto"
    assert settings.seed is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("LANESHOOTER_SEED", "99")
    monkeypatch.setenv("LANESHOOTER_INPUT_MODE", "continuous")
    monkeypatch.setenv("LANESHOOTER_TIMING__FIRE_COOLDOWN", "200")

    settings = Settings(_env_file=None)
    assert settings.seed == 99
    assert settings.input_mode == "continuous"
    assert settings.timing.fire_cooldown == 200
    assert settings.timing.lane_debounce == 100


def test_unprefixed_env_is_ignored(monkeypatch):
    monkeypatch.setenv("FIRE_COOLDOWN", "1")
    monkeypatch.setenv("WIDTH", "1")
    settings = Settings(_env_file=None)
    assert settings.timing.fire_cooldown == 300
    assert settings.playfield.width == 400
