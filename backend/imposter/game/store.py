from __future__ import annotations

import logging
import secrets
import string
from threading import RLock

from .errors import RoomNotFound
from .models import Player, Room

logger = logging.getLogger(__name__)


CODE_ALPHABET = string.ascii_uppercase + string.digits


def normalize_code(code: str) -> str:
    return (code or "").strip().upper()


class SessionStore:
    """In-memory registry of rooms keyed by room code.

    Every mutation of a room happens while holding ``lock``; callers use
    ``with store.lock:`` around read-modify-write sequences.
    """

    def __init__(self, code_length: int = 5) -> None:
        self.code_length = code_length
        self.lock = RLock()
        self._rooms: dict[str, Room] = {}

    def _new_code(self) -> str:
        code = "".join(secrets.choice(CODE_ALPHABET) for _ in range(self.code_length))
        while code in self._rooms:
            code = "".join(secrets.choice(CODE_ALPHABET) for _ in range(self.code_length))
        return code

    def create(self, creator_id: str, creator_name: str) -> Room:
        with self.lock:
            room = Room(code=self._new_code())
            room.players[creator_id] = Player(id=creator_id, name=creator_name, is_host=True)
            self._rooms[room.code] = room
            logger.info("Room %s created by %s", room.code, creator_id)
            return room

    def get(self, code: str) -> Room | None:
        with self.lock:
            return self._rooms.get(normalize_code(code))

    def require(self, code: str) -> Room:
        room = self.get(code)
        if room is None:
            raise RoomNotFound()
        return room

    def delete(self, code: str) -> bool:
        with self.lock:
            code = normalize_code(code)
            if code in self._rooms:
                del self._rooms[code]
                logger.info("Room %s destroyed", code)
                return True
            return False

    def list_rooms(self) -> list[Room]:
        with self.lock:
            return list(self._rooms.values())

    def rooms_for_player(self, player_id: str) -> list[Room]:
        with self.lock:
            return [r for r in self._rooms.values() if player_id in r.players]

    def __len__(self) -> int:
        with self.lock:
            return len(self._rooms)

    def __contains__(self, code: str) -> bool:
        with self.lock:
            return normalize_code(code) in self._rooms
