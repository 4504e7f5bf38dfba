from triword.backend.security import SESSION_ID_LENGTH, generate_session_id, generate_token


def test_generate_token_returns_non_empty_random_value() -> None:
    first = generate_token()
    second = generate_token()

    assert first
    assert second
    assert first != second


def test_generate_session_id_is_short_hex_code() -> None:
    session_id = generate_session_id()

    assert len(session_id) == SESSION_ID_LENGTH
    int(session_id, 16)
