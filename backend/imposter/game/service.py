from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from .assignment import assign, clamp_imposter_count
from .catalog import Catalog
from .errors import (
    GameInProgress,
    GameNotInProgress,
    InsufficientPlayers,
    InvalidState,
    NotHost,
    RoomFull,
)
from .models import Outcome, Player, Room
from .store import SessionStore
from .tally import is_complete, resolve, resolve_departure

logger = logging.getLogger(__name__)


@dataclass
class Departure:
    code: str
    room: Room | None
    outcome: Outcome | None = None

    @property
    def destroyed(self) -> bool:
        return self.room is None


class GameEngine:
    """Room lifecycle: waiting -> playing -> finished (-> playing again)."""

    def __init__(
        self,
        store: SessionStore,
        catalog: Catalog,
        rng: random.Random | None = None,
        min_players: int = 3,
        max_players: int = 8,
        default_imposter_count: int = 1,
        distinct_items: bool = False,
    ) -> None:
        self.store = store
        self.catalog = catalog
        self.rng = rng or random.SystemRandom()
        self.min_players = min_players
        self.max_players = max_players
        self.default_imposter_count = default_imposter_count
        self.distinct_items = distinct_items

    def create_room(self, player_id: str, name: str = "Host") -> Room:
        return self.store.create(player_id, name)

    def join(self, code: str, player_id: str, name: str) -> Room:
        with self.store.lock:
            room = self.store.require(code)

            existing = room.players.get(player_id)
            if existing is not None:
                existing.name = name
                return room

            if room.status != "waiting":
                raise GameInProgress()
            if len(room.players) >= self.max_players:
                raise RoomFull()

            room.players[player_id] = Player(id=player_id, name=name)
            logger.info("Player %s joined room %s (%d players)", player_id, room.code, len(room.players))
            return room

    def start(self, code: str, player_id: str, imposter_count: int | None = None) -> Room:
        with self.store.lock:
            room = self.store.require(code)

            if room.status == "playing":
                raise GameInProgress()
            if room.host_id != player_id:
                raise NotHost()
            if len(room.players) < self.min_players:
                raise InsufficientPlayers(
                    f"At least {self.min_players} players are needed to start"
                )

            requested = self.default_imposter_count if imposter_count is None else imposter_count
            roster = list(room.players)
            assignment = assign(
                roster,
                clamp_imposter_count(requested, len(roster)),
                self.catalog,
                self.rng,
                distinct_items=self.distinct_items,
            )

            room.votes = {}
            room.eliminated_ids = set()
            room.outcome = None
            room.round = 1
            room.category = assignment.category
            room.majority_item = assignment.majority_item
            room.minority_item = assignment.minority_item
            room.imposter_ids = set(assignment.imposter_ids)
            for p in room.players.values():
                p.clear_secrets()
                p.category = assignment.category
                p.item = assignment.item_for(p.id)
                p.is_imposter = p.id in assignment.imposter_ids

            room.status = "playing"
            logger.info(
                "Room %s started with %d players, %d imposter(s)",
                room.code,
                len(roster),
                len(assignment.imposter_ids),
            )
            return room

    def vote(self, code: str, voter_id: str, target_id: str) -> tuple[Room, Outcome | None]:
        with self.store.lock:
            room = self.store.require(code)

            if room.status != "playing":
                raise GameNotInProgress()
            if voter_id not in room.players or voter_id in room.eliminated_ids:
                raise InvalidState("You cannot vote in this round")
            if target_id not in room.players or target_id in room.eliminated_ids:
                raise InvalidState("Unknown vote target")

            room.votes[voter_id] = target_id

            if is_complete(room):
                return room, resolve(room)
            return room, None

    def leave(self, code: str, player_id: str) -> Departure | None:
        with self.store.lock:
            room = self.store.get(code)
            if room is None or player_id not in room.players:
                return None
            return self._remove_player(room, player_id)

    def disconnect(self, player_id: str) -> list[Departure]:
        with self.store.lock:
            return [self._remove_player(r, player_id) for r in self.store.rooms_for_player(player_id)]

    def _remove_player(self, room: Room, player_id: str) -> Departure:
        player = room.players.pop(player_id)
        logger.info("Player %s left room %s", player_id, room.code)

        if not room.players:
            self.store.delete(room.code)
            return Departure(code=room.code, room=None)

        if player.is_host:
            successor = next(iter(room.players.values()))
            successor.is_host = True
            logger.info("Room %s host reassigned to %s", room.code, successor.id)

        room.eliminated_ids.discard(player_id)
        room.votes.pop(player_id, None)
        # Ballots cast for the departed player no longer count; those voters vote again.
        room.votes = {v: t for v, t in room.votes.items() if t != player_id}

        outcome = resolve_departure(room)
        if outcome is None and room.status == "playing" and is_complete(room):
            outcome = resolve(room)
        return Departure(code=room.code, room=room, outcome=outcome)

    def state_for(self, code: str, viewer_id: str | None = None) -> dict:
        with self.store.lock:
            room = self.store.require(code)
            return room_state(room, viewer_id, min_players=self.min_players, max_players=self.max_players)

    def states_by_viewer(self, code: str) -> dict[str, dict]:
        """Filtered snapshot for each roster member, built under one lock."""
        with self.store.lock:
            room = self.store.get(code)
            if room is None:
                return {}
            return {
                pid: room_state(room, pid, min_players=self.min_players, max_players=self.max_players)
                for pid in room.players
            }


def room_state(
    room: Room,
    viewer_id: str | None = None,
    min_players: int | None = None,
    max_players: int | None = None,
) -> dict:
    finished = room.status == "finished"

    players = []
    for p in room.players.values():
        d = {
            "id": p.id,
            "name": p.name,
            "isHost": p.is_host,
            "eliminated": p.id in room.eliminated_ids,
            "hasVoted": p.id in room.votes,
        }
        if finished:
            d["item"] = p.item
            d["isImposter"] = p.is_imposter
        players.append(d)

    payload = {
        "code": room.code,
        "status": room.status,
        "round": room.round,
        "category": room.category if room.status != "waiting" else None,
        "hostId": room.host_id,
        "imposterCount": len(room.imposter_ids) if room.status != "waiting" else 0,
        "players": players,
        "votes": dict(room.votes),
        "minPlayers": min_players,
        "maxPlayers": max_players,
    }

    viewer = room.players.get(viewer_id) if viewer_id else None
    if viewer is not None and room.status != "waiting":
        payload["you"] = {
            "id": viewer.id,
            "category": viewer.category,
            "item": viewer.item,
            "isImposter": viewer.is_imposter,
        }

    if finished:
        payload["reveal"] = {
            "category": room.category,
            "majorityItem": room.majority_item,
            "minorityItem": room.minority_item,
            "imposterIds": [pid for pid in room.players if pid in room.imposter_ids],
        }
        if room.outcome is not None:
            payload["outcome"] = room.outcome.to_dict()

    return payload
