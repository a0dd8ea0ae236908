import random

import pytest

from app.domain.cards import CardSource
from app.domain.room import Room


def make_room(*names, rounds=10, catalog=None):
    room = Room(
        "ABCD",
        "p1",
        total_rounds=rounds,
        rng=random.Random(42),
        cards=CardSource(catalog, rng=random.Random(1)) if catalog is not None else None,
    )
    for i, name in enumerate(names, start=1):
        room.add_player(f"p{i}", name)
    return room


def started_room(*names, **kw):
    room = make_room(*names, **kw)
    assert room.start_game("p1") is True
    return room


def test_new_room_is_lobby_with_host_flag():
    room = make_room("Alice", "Bob")
    assert room.phase == "lobby"
    assert room.players["p1"].is_host is True
    assert room.players["p2"].is_host is False


def test_add_player_defaults():
    room = make_room()
    p = room.add_player("p1")
    assert p.name == "Player 1"
    assert p.emoji == "😎"
    assert p.color == "#7c3aed"


def test_start_game_needs_two_players_and_host():
    room = make_room("Alice")
    assert room.start_game("p1") is False
    assert room.phase == "lobby"

    room.add_player("p2", "Bob")
    assert room.start_game("p2") is False
    assert room.start_game("p1") is True
    assert room.phase == "psychic_clue"
    assert room.current_round == 1


def test_round_start_seeds_dials_and_target():
    room = started_room("Alice", "Bob", "Charlie")
    assert room.psychic_id == "p1"
    assert room.dial_positions == {"p2": 50, "p3": 50}
    assert room.average_dial_position == 50
    assert room.ready_players == set()
    assert room.clue == ""
    assert 10 <= room.target_position <= 90
    assert room.current_card is not None


def test_targets_cover_only_integer_range():
    room = started_room("Alice", "Bob", rounds=10_000)
    seen = set()
    for _ in range(2000):
        room.cards.reset()
        room.start_new_round()
        seen.add(room.target_position)
    assert min(seen) == 10
    assert max(seen) == 90
    assert all(isinstance(t, int) for t in seen)


def test_submit_clue_only_by_psychic_in_clue_phase():
    room = started_room("Alice", "Bob")
    assert room.submit_clue("p2", "Volcano") is False
    assert room.phase == "psychic_clue"

    assert room.submit_clue("p1", "Volcano") is True
    assert room.phase == "dial"
    assert room.clue == "Volcano"

    # second clue is a no-op
    assert room.submit_clue("p1", "Other") is False
    assert room.clue == "Volcano"


def test_move_dial_rules_and_average():
    room = started_room("Alice", "Bob", "Charlie")
    assert room.move_dial("p2", 70) is False  # still psychic_clue

    room.submit_clue("p1", "Volcano")
    assert room.move_dial("p1", 10) is False  # psychic
    assert "p1" not in room.dial_positions

    assert room.move_dial("p2", 70) is True
    assert room.average_dial_position == 60
    assert room.move_dial("p3", 50) is True
    assert room.average_dial_position == 60

    # latest position per guesser counts
    assert room.move_dial("p3", 90) is True
    assert room.average_dial_position == 80

    before = room.average_dial_position
    assert room.recalculate_average() == before
    assert room.recalculate_average() == before


def test_move_dial_clamps():
    room = started_room("Alice", "Bob")
    room.submit_clue("p1", "x")
    room.move_dial("p2", 150)
    assert room.dial_positions["p2"] == 100
    room.move_dial("p2", -20)
    assert room.dial_positions["p2"] == 0


def test_set_ready_returns_all_ready():
    room = started_room("Alice", "Bob", "Charlie")
    room.submit_clue("p1", "x")

    assert room.set_ready("p1") is False
    assert "p1" not in room.ready_players

    assert room.set_ready("p2") is False
    assert room.ready_players == {"p2"}
    assert room.set_ready("p3") is True


def test_set_ready_rejected_outside_dial():
    room = started_room("Alice", "Bob")
    assert room.set_ready("p2") is False
    assert room.ready_players == set()


def test_reveal_scores_and_appends():
    room = started_room("Alice", "Bob")
    room.submit_clue("p1", "Volcano")
    room.target_position = 64
    room.move_dial("p2", 60)

    result = room.reveal_and_score()
    assert room.phase == "reveal"
    assert result.distance == 4
    assert result.points == 4
    assert result.target == 64
    assert room.total_score == 4
    assert len(room.scores) == 1
    entry = room.scores[0]
    assert entry.round == 1
    assert entry.clue == "Volcano"
    assert entry.psychic_name == "Alice"
    assert entry.dial == 60


@pytest.mark.parametrize(
    "target,points",
    [(60, 4), (64, 4), (65, 3), (70, 3), (71, 2), (78, 2), (79, 0), (90, 0), (50, 3), (42, 2)],
)
def test_reveal_bucket_boundaries(target, points):
    room = started_room("Alice", "Bob")
    room.submit_clue("p1", "x")
    room.move_dial("p2", 60)
    room.target_position = target
    assert room.reveal_and_score().points == points


def test_psychic_rotates_in_join_order_and_wraps():
    room = started_room("Alice", "Bob", "Charlie")
    seen = [room.psychic_id]
    for _ in range(4):
        assert room.next_round("p1") is True
        seen.append(room.psychic_id)
    assert seen == ["p1", "p2", "p3", "p1", "p2"]


def test_psychic_rotation_uses_current_member_count():
    room = started_room("Alice", "Bob", "Charlie")
    room.next_round("p1")  # psychic p2, index now 2
    room.remove_player("p3")
    room.next_round("p1")  # 2 % 2 -> p1
    assert room.psychic_id == "p1"
    assert "p3" not in room.dial_positions


def test_next_round_host_only():
    room = started_room("Alice", "Bob")
    assert room.next_round("p2") is False
    assert room.current_round == 1


def test_next_round_skips_stalled_round_without_scoring():
    room = started_room("Alice", "Bob")
    assert room.next_round("p1") is True
    assert room.current_round == 2
    assert room.scores == []


def test_game_over_after_total_rounds():
    room = started_room("Alice", "Bob", rounds=2)
    room.next_round("p1")
    assert room.phase == "psychic_clue"
    assert room.next_round("p1") is True
    assert room.phase == "game_over"
    assert room.next_round("p1") is False


def test_game_over_when_deck_runs_out():
    room = started_room("Alice", "Bob", catalog=[("Hot", "Cold"), ("Soft", "Hard")])
    room.next_round("p1")
    assert room.phase == "psychic_clue"
    room.next_round("p1")
    assert room.phase == "game_over"


def test_each_round_draws_a_new_card():
    room = started_room("Alice", "Bob")
    cards = {room.current_card}
    for _ in range(5):
        room.next_round("p1")
        cards.add(room.current_card)
    assert len(cards) == 6


def test_play_again_resets_everything():
    room = started_room("Alice", "Bob", rounds=1)
    room.submit_clue("p1", "x")
    room.set_ready("p2")
    room.reveal_and_score()
    room.next_round("p1")
    assert room.phase == "game_over"

    assert room.play_again("p2") is False
    assert room.play_again("p1") is True
    assert room.phase == "psychic_clue"
    assert room.current_round == 1
    assert room.scores == []
    assert room.total_score == 0
    assert room.psychic_id == "p1"


def test_play_again_only_from_game_over():
    room = started_room("Alice", "Bob")
    assert room.play_again("p1") is False
    assert room.current_round == 1


def test_remove_host_promotes_earliest_remaining():
    room = make_room("Alice", "Bob", "Charlie")
    assert room.remove_player("p1") is True
    assert room.host_id == "p2"
    assert room.players["p2"].is_host is True
    assert "p1" not in room.players


def test_remove_non_host_keeps_host():
    room = make_room("Alice", "Bob", "Charlie")
    assert room.remove_player("p3") is False
    assert room.host_id == "p1"


def test_remove_last_player_clears_host():
    room = make_room("Alice")
    room.remove_player("p1")
    assert room.is_empty
    assert room.host_id is None


def test_remove_in_dial_recomputes_average_and_ready():
    room = started_room("Alice", "Bob", "Charlie")
    room.submit_clue("p1", "x")
    room.move_dial("p2", 70)
    room.move_dial("p3", 30)
    room.set_ready("p2")
    assert room.all_guessers_ready() is False

    room.remove_player("p3")
    assert room.average_dial_position == 70
    assert room.all_guessers_ready() is True


def test_zero_guessers_never_ready():
    room = started_room("Alice", "Bob")
    room.submit_clue("p1", "x")
    room.remove_player("p2")
    assert room.total_guessers == 0
    assert room.all_guessers_ready() is False


def test_psychic_leaving_keeps_members_minus_one_guessers():
    room = started_room("Alice", "Bob", "Charlie")
    room.submit_clue("p1", "x")
    room.set_ready("p2")
    assert room.all_guessers_ready() is False

    room.remove_player("p1")
    assert room.total_guessers == 1
    assert room.all_guessers_ready() is True


def test_injected_deck_is_used_before_reset():
    deck = CardSource([("Hot", "Cold")], rng=random.Random(1))
    assert len(deck) == 0
    room = Room("ABCD", "p1", cards=deck)
    assert room.cards is deck


def test_public_state_hides_target_from_guessers():
    room = started_room("Alice", "Bob")
    psychic_view = room.public_state("p1")
    guesser_view = room.public_state("p2")
    assert psychic_view.target_position == room.target_position
    assert psychic_view.is_psychic is True
    assert guesser_view.target_position is None
    assert guesser_view.is_psychic is False

    room.submit_clue("p1", "x")
    assert room.public_state("p2").target_position is None

    room.set_ready("p2")
    room.reveal_and_score()
    assert room.public_state("p2").target_position == room.target_position


def test_public_state_counts_and_ready_flag():
    room = started_room("Alice", "Bob", "Charlie")
    room.submit_clue("p1", "x")
    room.set_ready("p2")
    view = room.public_state("p2")
    assert view.ready_count == 1
    assert view.total_guessers == 2
    assert view.is_ready is True
    assert room.public_state("p3").is_ready is False


def test_public_state_wire_shape():
    room = started_room("Alice", "Bob")
    wire = room.public_state("p2").model_dump(mode="json", by_alias=True)
    assert wire["roomCode"] == "ABCD"
    assert wire["targetPosition"] is None
    assert wire["totalGuessers"] == 1
    assert wire["players"][0]["isHost"] is True
    assert isinstance(wire["currentCard"], list)


def test_lobby_total_guessers_is_members_minus_one():
    room = make_room("Alice", "Bob", "Charlie")
    assert room.public_state("p1").total_guessers == 2
    assert make_room().public_state(None).total_guessers == 0


def test_room_full_at_cap():
    room = Room("ABCD", "p1", cap=3)
    for i in range(3):
        room.add_player(f"p{i}")
    assert room.is_full
