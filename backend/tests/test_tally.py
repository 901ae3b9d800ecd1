from imposter.game.models import Player, Room
from imposter.game.tally import count_ballots, eliminated_ids, is_complete, resolve, resolve_departure


def _room(player_ids, imposters, votes, category="movies"):
    room = Room(code="ABCDE", status="playing", round=1, category=category)
    room.majority_item = "Inception"
    room.minority_item = "The Matrix"
    for i, pid in enumerate(player_ids):
        room.players[pid] = Player(id=pid, name=pid, is_host=i == 0, is_imposter=pid in imposters)
    room.imposter_ids = set(imposters)
    room.votes = dict(votes)
    return room


def test_count_ballots():
    assert count_ballots({"a": "b", "c": "b", "b": "a"}) == {"b": 2, "a": 1}


def test_eliminated_includes_every_tied_target_in_roster_order():
    votes = {"a": "c", "b": "c", "c": "a", "d": "a"}
    assert eliminated_ids(votes, order=["a", "b", "c", "d"]) == ["a", "c"]


def test_all_tied_eliminates_everyone_voted_for():
    votes = {"a": "b", "b": "c", "c": "a"}
    assert eliminated_ids(votes, order=["a", "b", "c"]) == ["a", "b", "c"]


def test_is_complete_needs_every_active_player():
    room = _room(["a", "b", "c"], {"a"}, {"a": "b", "b": "a"})
    assert not is_complete(room)
    room.votes["c"] = "a"
    assert is_complete(room)


def test_single_imposter_caught():
    room = _room(["A", "B", "C"], {"A"}, {"B": "A", "C": "A", "A": "B"})

    outcome = resolve(room)

    assert outcome.eliminated_ids == ["A"]
    assert outcome.winner == "crewmates"
    assert outcome.imposter_ids == ["A"]
    assert outcome.majority_item == "Inception"
    assert outcome.minority_item == "The Matrix"
    assert room.status == "finished"
    assert room.outcome is outcome
    assert room.votes == {}


def test_single_imposter_escapes():
    room = _room(["A", "B", "C"], {"A"}, {"B": "C", "C": "B", "A": "B"})

    outcome = resolve(room)

    assert outcome.eliminated_ids == ["B"]
    assert outcome.winner == "imposters"
    assert room.status == "finished"


def test_single_imposter_tied_with_crewmate_still_counts_as_caught():
    room = _room(["A", "B", "C", "D"], {"A"}, {"B": "A", "C": "A", "A": "B", "D": "B"})

    outcome = resolve(room)

    assert outcome.eliminated_ids == ["A", "B"]
    assert outcome.winner == "crewmates"


def test_multi_imposter_one_caught_other_survives():
    room = _room(["A", "B", "C", "D"], {"A", "B"}, {"C": "A", "D": "A", "A": "C", "B": "C"})

    outcome = resolve(room)

    assert "A" in outcome.eliminated_ids
    assert outcome.winner == "imposters"
    assert outcome.imposter_ids == ["A", "B"]
    assert room.status == "finished"


def test_multi_imposter_all_caught():
    room = _room(
        ["A", "B", "C", "D", "E"],
        {"A", "B"},
        {"C": "A", "D": "B", "E": "A", "A": "B", "B": "C"},
    )
    # A and B tie at two votes each.
    outcome = resolve(room)

    assert outcome.eliminated_ids == ["A", "B"]
    assert outcome.winner == "crewmates"


def test_multi_imposter_crewmate_eliminated_round_continues():
    room = _room(
        ["A", "B", "C", "D", "E", "F"],
        {"A", "B"},
        {"A": "C", "B": "C", "C": "D", "D": "C", "E": "C", "F": "A"},
    )

    outcome = resolve(room)

    assert outcome.eliminated_ids == ["C"]
    assert outcome.winner is None
    assert room.status == "playing"
    assert room.round == 2
    assert room.votes == {}
    assert room.eliminated_ids == {"C"}
    public = outcome.to_dict()
    assert "imposterIds" not in public
    assert "minorityItem" not in public


def test_multi_imposter_crewmate_eliminated_gives_imposters_majority():
    room = _room(
        ["A", "B", "C", "D"],
        {"A", "B"},
        {"A": "C", "B": "C", "C": "D", "D": "A"},
    )

    outcome = resolve(room)

    assert outcome.eliminated_ids == ["C"]
    assert outcome.winner == "imposters"
    assert room.status == "finished"


def test_multi_imposter_round_ends_when_no_imposter_remains():
    room = _room(["A", "B", "C", "D", "E"], {"D", "E"}, {"A": "B", "B": "A", "C": "A"})
    # Both imposters have already left the room.
    del room.players["D"]
    del room.players["E"]

    outcome = resolve(room)

    assert outcome.eliminated_ids == ["A"]
    assert outcome.winner == "crewmates"
    assert outcome.imposter_ids == ["D", "E"]
    assert room.status == "finished"


def test_single_imposter_gone_is_not_an_imposter_win():
    room = _room(["A", "B", "C", "D"], {"D"}, {"A": "B", "B": "C", "C": "B"})
    del room.players["D"]

    outcome = resolve(room)

    assert outcome.winner == "crewmates"


def test_resolve_departure_only_fires_without_imposters():
    room = _room(["A", "B", "C"], {"C"}, {"A": "B"})
    assert resolve_departure(room) is None

    del room.players["C"]
    outcome = resolve_departure(room)

    assert outcome.winner == "crewmates"
    assert outcome.eliminated_ids == []
    assert room.status == "finished"
    assert room.votes == {}
    assert resolve_departure(room) is None


def test_continuing_outcome_carries_next_round():
    room = _room(
        ["A", "B", "C", "D", "E", "F"],
        {"A", "B"},
        {"A": "C", "B": "C", "C": "D", "D": "C", "E": "C", "F": "A"},
    )

    outcome = resolve(room)

    assert outcome.round == 2
    assert outcome.to_dict()["round"] == 2
