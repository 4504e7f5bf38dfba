from triword.backend.config import load_settings


def test_load_settings_reads_expected_env(monkeypatch) -> None:
    monkeypatch.setenv("TRIWORD_HOST", "0.0.0.0")
    monkeypatch.setenv("TRIWORD_PORT", "9000")
    monkeypatch.setenv("TRIWORD_TARGET_SCORE", "30")
    monkeypatch.setenv("TRIWORD_GAME_SECONDS", "90")
    monkeypatch.setenv("TRIWORD_TICK_SECONDS", "0.5")
    monkeypatch.setenv("TRIWORD_WORDLIST_PATH", "/tmp/words.txt")
    monkeypatch.setenv("TRIWORD_LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.host == "0.0.0.0"
    assert settings.port == 9000
    assert settings.target_score == 30
    assert settings.game_seconds == 90
    assert settings.tick_seconds == 0.5
    assert settings.wordlist_path == "/tmp/words.txt"
    assert settings.log_level == "DEBUG"


def test_load_settings_applies_defaults(monkeypatch) -> None:
    for name in (
        "TRIWORD_HOST",
        "TRIWORD_PORT",
        "TRIWORD_GRID_ROWS",
        "TRIWORD_GRID_COLS",
        "TRIWORD_TARGET_SCORE",
        "TRIWORD_GAME_SECONDS",
        "TRIWORD_FREEZE_BONUS_SECONDS",
        "TRIWORD_GRACE_SECONDS",
        "TRIWORD_WORDLIST_PATH",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.host == "127.0.0.1"
    assert settings.port == 8000
    assert (settings.grid_rows, settings.grid_cols) == (4, 4)
    assert settings.target_score == 50
    assert settings.game_seconds == 180
    assert settings.freeze_bonus_seconds == 10
    assert settings.grace_seconds == 3600
    assert settings.wordlist_path is None
