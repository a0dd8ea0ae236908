from app.domain.common.fsm import can_transition_phase
from app.domain.common.validation import can_see_target, is_guesser, is_host, is_psychic
from app.domain.room import Room


def _room():
    room = Room("ABCD", "p1")
    room.add_player("p1", "A")
    room.add_player("p2", "B")
    room.start_game("p1")
    return room


def test_is_host():
    room = _room()
    assert is_host(room, "p1") is True
    assert is_host(room, "p2") is False
    assert is_host(room, None) is False


def test_is_psychic_and_guesser():
    room = _room()
    assert is_psychic(room, "p1") is True
    assert is_guesser(room, "p1") is False
    assert is_guesser(room, "p2") is True
    assert is_guesser(room, "ghost") is False


def test_can_see_target():
    room = _room()
    assert can_see_target(room, "p1") is True
    assert can_see_target(room, "p2") is False
    room.phase = "game_over"
    assert can_see_target(room, "p2") is True
    assert can_see_target(room, None) is True


def test_phase_transitions():
    assert can_transition_phase("lobby", "psychic_clue") is True
    assert can_transition_phase("psychic_clue", "dial") is True
    assert can_transition_phase("dial", "reveal") is True
    assert can_transition_phase("reveal", "dial") is False
    assert can_transition_phase("psychic_clue", "reveal") is False
    assert can_transition_phase("lobby", "dial") is False
