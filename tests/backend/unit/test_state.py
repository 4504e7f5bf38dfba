from triword.backend.lexicon import Lexicon
from triword.backend.models import Player, PowerKind, SessionStatus
from triword.backend.session import GameSession
from triword.backend.state import build_snapshot, topic_for


def _session() -> GameSession:
    session = GameSession(session_id="s1", grid=[["C", "A"], ["X", "T"]], lexicon=Lexicon(["CAT"]))
    session.players.append(Player(id="p1", name="Ann", power_kind=PowerKind.SWAP))
    session.join("p2", "Bob")
    session.join("p3", "Cy")
    return session


def test_build_snapshot_exposes_session_fields() -> None:
    session = _session()
    session.select_cell("p1", 0, 0)
    session.select_cell("p1", 0, 1)

    snapshot = build_snapshot(session)

    assert snapshot["id"] == "s1"
    assert snapshot["version"] == 1
    assert snapshot["status"] == "playing"
    assert snapshot["grid"] == [["C", "A"], ["X", "T"]]
    assert [p["powerType"] for p in snapshot["players"]] == ["SWAP", "TRANSFORM", "FREEZE"]
    assert all(p["powerReady"] for p in snapshot["players"])
    assert snapshot["selectedCells"] == [{"row": 0, "col": 0}, {"row": 0, "col": 1}]
    assert snapshot["currentWord"] == "CA"
    assert snapshot["wordsFound"] == []
    assert snapshot["score"] == 0
    assert snapshot["targetScore"] == 50
    assert snapshot["timeLeft"] == 180
    assert snapshot["endReason"] is None


def test_build_snapshot_does_not_share_mutable_state() -> None:
    session = _session()
    snapshot = build_snapshot(session)

    session.grid[0][0] = "Z"
    session.select_cell("p2", 1, 1)
    session.status = SessionStatus.ENDED

    assert snapshot["grid"][0][0] == "C"
    assert snapshot["selectedCells"] == []
    assert snapshot["status"] == "playing"


def test_build_snapshot_lists_found_words_in_order() -> None:
    session = _session()
    for row, col in [(0, 0), (0, 1), (1, 1)]:
        session.select_cell("p3", row, col)
    session.submit_word("p3")

    snapshot = build_snapshot(session)

    assert snapshot["wordsFound"] == [{"text": "CAT", "points": 1, "playerId": "p3"}]
    assert snapshot["score"] == 1
    assert snapshot["message"] == "CAT (+1 points)"


def test_topic_for_names_per_session_channel() -> None:
    assert topic_for("abcd1234") == "game-abcd1234"
