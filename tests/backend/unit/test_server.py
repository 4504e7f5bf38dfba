from triword.server import parse_args


def test_parse_args_defaults_come_from_settings(monkeypatch) -> None:
    monkeypatch.setenv("TRIWORD_HOST", "0.0.0.0")
    monkeypatch.setenv("TRIWORD_PORT", "8123")
    monkeypatch.delenv("TRIWORD_LOG_LEVEL", raising=False)

    args = parse_args([])

    assert args.host == "0.0.0.0"
    assert args.port == 8123
    assert args.log_level == "INFO"
    assert args.reload is False


def test_parse_args_overrides() -> None:
    args = parse_args(["--port", "9001", "--log-level", "debug", "--reload"])

    assert args.port == 9001
    assert args.log_level == "debug"
    assert args.reload is True
