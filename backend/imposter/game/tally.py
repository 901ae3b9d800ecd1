from __future__ import annotations

import logging
from collections import Counter

from .models import Outcome, Room

logger = logging.getLogger(__name__)


def count_ballots(votes: dict[str, str]) -> Counter:
    return Counter(votes.values())


def eliminated_ids(votes: dict[str, str], order: list[str] | None = None) -> list[str]:
    """Every target tied at the highest count.

    Ties are never broken; the result is in ``order`` (roster order) when given.
    """
    counts = count_ballots(votes)
    if not counts:
        return []
    top = max(counts.values())
    tied = [target for target, n in counts.items() if n == top]
    if order:
        rank = {pid: i for i, pid in enumerate(order)}
        tied.sort(key=lambda pid: rank.get(pid, len(rank)))
    return tied


def is_complete(room: Room) -> bool:
    active = room.active_ids()
    if not active:
        return False
    return all(pid in room.votes for pid in active)


def _outcome(room: Room, eliminated: list[str], winner, message: str) -> Outcome:
    return Outcome(
        eliminated_ids=eliminated,
        winner=winner,
        category=room.category,
        majority_item=room.majority_item,
        minority_item=room.minority_item,
        imposter_ids=[pid for pid in room.players if pid in room.imposter_ids]
        + sorted(pid for pid in room.imposter_ids if pid not in room.players),
        message=message,
    )


def remaining_imposters(room: Room) -> int:
    return sum(1 for pid in room.active_ids() if pid in room.imposter_ids)


def _apply(room: Room, outcome: Outcome) -> Outcome:
    room.votes = {}
    if outcome.finished:
        room.status = "finished"
        room.outcome = outcome
        logger.info("Room %s finished: %s win (eliminated %s)", room.code, outcome.winner, outcome.eliminated_ids)
    else:
        room.round += 1
        logger.info("Room %s continues to round %d (eliminated %s)", room.code, room.round, outcome.eliminated_ids)
    outcome.round = room.round
    return outcome


def resolve(room: Room) -> Outcome:
    """Compute the result of a complete tally and apply it to ``room``.

    Finishing outcomes move the room to ``finished``. A multi-imposter round
    that continues stays ``playing`` with votes cleared and ``round`` advanced.
    Crewmates win whenever no imposter is left, however that came about.
    """
    eliminated = eliminated_ids(room.votes, order=list(room.players))
    caught = any(pid in room.imposter_ids for pid in eliminated)

    if len(room.imposter_ids) <= 1:
        if caught:
            outcome = _outcome(
                room,
                eliminated,
                "crewmates",
                "The players successfully identified and eliminated the imposter!",
            )
        elif remaining_imposters(room) == 0:
            outcome = _outcome(room, eliminated, "crewmates", "The imposter left the game!")
        else:
            outcome = _outcome(room, eliminated, "imposters", "The players failed to identify the imposter!")
        return _apply(room, outcome)

    room.eliminated_ids.update(eliminated)
    imposters_left = remaining_imposters(room)
    crewmates_left = len(room.active_ids()) - imposters_left

    if imposters_left == 0:
        message = "Every imposter has been eliminated!" if caught else "No imposters remain!"
        outcome = _outcome(room, eliminated, "crewmates", message)
    elif caught:
        outcome = _outcome(room, eliminated, "imposters", "An imposter was caught, but the others escaped!")
    elif imposters_left >= crewmates_left:
        outcome = _outcome(room, eliminated, "imposters", "The imposters have taken over!")
    else:
        outcome = _outcome(room, eliminated, None, "No imposter was eliminated. Vote again!")
    return _apply(room, outcome)


def resolve_departure(room: Room) -> Outcome | None:
    """Finish a running round when its last imposter has left the room."""
    if room.status != "playing" or not room.imposter_ids:
        return None
    if remaining_imposters(room) > 0:
        return None
    return _apply(room, _outcome(room, [], "crewmates", "The imposters left the game!"))
