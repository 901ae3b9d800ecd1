from __future__ import annotations


class GameError(Exception):
    """Request-scoped failure reported back to the originating connection."""

    code = "game_error"
    default_message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def to_dict(self) -> dict:
        return {"ok": False, "error": self.code, "message": self.message}


class RoomNotFound(GameError):
    code = "room_not_found"
    default_message = "Game not found"


class RoomFull(GameError):
    code = "room_full"
    default_message = "Game is full"


class GameInProgress(GameError):
    code = "game_in_progress"
    default_message = "Game already in progress"


class GameNotInProgress(GameError):
    code = "game_not_in_progress"
    default_message = "Game not in progress"


class NotHost(GameError):
    code = "not_host"
    default_message = "Only the host can do that"


class InsufficientPlayers(GameError):
    code = "insufficient_players"
    default_message = "Not enough players to start"


class InvalidState(GameError):
    code = "invalid_state"
    default_message = "Invalid request"
