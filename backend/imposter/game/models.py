from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


RoomStatus = Literal["waiting", "playing", "finished"]
Winner = Literal["imposters", "crewmates"]


@dataclass
class Player:
    id: str
    name: str
    is_host: bool = False
    # Secret attributes, populated by the assignment at start.
    item: str | None = None
    category: str | None = None
    is_imposter: bool = False

    def clear_secrets(self) -> None:
        self.item = None
        self.category = None
        self.is_imposter = False


@dataclass
class Outcome:
    eliminated_ids: list[str]
    winner: Winner | None
    category: str | None
    majority_item: str | None
    minority_item: str | None
    imposter_ids: list[str]
    message: str = ""
    # Round the room is in once this outcome has been applied.
    round: int = 0

    @property
    def finished(self) -> bool:
        return self.winner is not None

    def to_dict(self) -> dict:
        payload = {
            "eliminatedIds": list(self.eliminated_ids),
            "winner": self.winner,
            "message": self.message,
            "round": self.round,
        }
        # A continuing round must not leak who the imposters are.
        if self.finished:
            payload.update(
                {
                    "category": self.category,
                    "majorityItem": self.majority_item,
                    "minorityItem": self.minority_item,
                    "imposterIds": list(self.imposter_ids),
                }
            )
        return payload


@dataclass
class Room:
    code: str
    status: RoomStatus = "waiting"
    round: int = 0
    category: str | None = None
    majority_item: str | None = None
    minority_item: str | None = None
    imposter_ids: set[str] = field(default_factory=set)
    # voter id -> target id
    votes: dict[str, str] = field(default_factory=dict)
    eliminated_ids: set[str] = field(default_factory=set)
    outcome: Outcome | None = None
    # Insertion order is join order.
    players: dict[str, Player] = field(default_factory=dict)

    @property
    def host_id(self) -> str | None:
        for p in self.players.values():
            if p.is_host:
                return p.id
        return None

    def active_ids(self) -> list[str]:
        return [pid for pid in self.players if pid not in self.eliminated_ids]
