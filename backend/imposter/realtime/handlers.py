from __future__ import annotations

import functools
import logging
from typing import Any

from flask import request
from flask_socketio import SocketIO, join_room, leave_room

from ..game.errors import GameError, InvalidState
from ..game.models import Outcome
from ..game.service import GameEngine
from . import events

logger = logging.getLogger(__name__)


def _validate_name(name: str, max_length: int = 16) -> bool:
    n = (name or "").strip()
    if not n:
        return False
    if len(n) > max_length:
        return False
    # Avoid obvious HTML/script injection.
    if "<" in n or ">" in n:
        return False
    # No control characters.
    for ch in n:
        if ord(ch) < 32:
            return False
    return True


def _payload(data: Any) -> dict:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidState("invalid_payload")
    return data


def _room_code(payload: dict) -> str:
    room_code = payload.get("roomCode")
    if not isinstance(room_code, str) or not room_code.strip():
        raise InvalidState("invalid_room")
    return room_code.strip().upper()


def _imposter_count(payload: dict) -> int | None:
    raw: Any = payload.get("imposterCount")
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise InvalidState("invalid_imposter_count")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise InvalidState("invalid_imposter_count") from None


def acknowledged(handler):
    """Turn the handler's result or failure into a single acknowledgement."""

    @functools.wraps(handler)
    def wrapper(data=None, *_extra):
        try:
            result = handler(data)
        except GameError as exc:
            logger.debug("%s rejected for %s: %s", handler.__name__, request.sid, exc.code)
            return exc.to_dict()
        except Exception:
            logger.exception("%s failed for %s", handler.__name__, request.sid)
            return InvalidState().to_dict()
        ack = {"ok": True}
        if result:
            ack.update(result)
        return ack

    return wrapper


def register_socketio_handlers(socketio: SocketIO, engine: GameEngine, max_name_length: int = 16) -> None:
    def _broadcast_room_state(room_code: str) -> None:
        # Each member only ever receives their own secrets.
        for player_id, state in engine.states_by_viewer(room_code).items():
            socketio.emit(events.ROOM_STATE, state, to=player_id)

    def _broadcast_outcome(room_code: str, outcome: Outcome | None) -> None:
        if outcome is None:
            return
        # The outcome carries the round it produced; the room may have moved on since.
        payload = {"roomCode": room_code, **outcome.to_dict()}
        event = events.GAME_OVER if outcome.finished else events.GAME_ROUND
        socketio.emit(event, payload, to=room_code)

    @socketio.on(events.ROOM_CREATE)
    @acknowledged
    def room_create(data):
        payload = _payload(data)
        name = payload.get("playerName") or "Host"
        if not isinstance(name, str) or not _validate_name(name, max_name_length):
            raise InvalidState("invalid_name")

        room = engine.create_room(request.sid, name.strip())
        join_room(room.code)
        _broadcast_room_state(room.code)
        return {"roomCode": room.code, "playerId": request.sid}

    @socketio.on(events.ROOM_JOIN)
    @acknowledged
    def room_join(data):
        payload = _payload(data)
        room_code = _room_code(payload)
        name = payload.get("playerName")
        if not isinstance(name, str) or not _validate_name(name, max_name_length):
            raise InvalidState("invalid_name")

        room = engine.join(room_code, request.sid, name.strip())
        join_room(room.code)
        _broadcast_room_state(room.code)
        return {"roomCode": room.code, "playerId": request.sid}

    @socketio.on(events.ROOM_STATE)
    @acknowledged
    def room_state(data):
        room_code = _room_code(_payload(data))
        return {"state": engine.state_for(room_code, viewer_id=request.sid)}

    @socketio.on(events.ROOM_LEAVE)
    @acknowledged
    def room_leave(data):
        room_code = _room_code(_payload(data))
        leave_room(room_code)
        departure = engine.leave(room_code, request.sid)
        if departure is not None and not departure.destroyed:
            _broadcast_outcome(departure.code, departure.outcome)
            _broadcast_room_state(departure.code)
        return None

    @socketio.on(events.GAME_START)
    @acknowledged
    def game_start(data):
        payload = _payload(data)
        room_code = _room_code(payload)
        room = engine.start(room_code, request.sid, _imposter_count(payload))
        _broadcast_room_state(room.code)
        return None

    @socketio.on(events.GAME_VOTE)
    @acknowledged
    def game_vote(data):
        payload = _payload(data)
        room_code = _room_code(payload)
        target_id = payload.get("targetId")
        if not isinstance(target_id, str) or not target_id:
            raise InvalidState("invalid_target")

        room, outcome = engine.vote(room_code, request.sid, target_id)
        _broadcast_outcome(room.code, outcome)
        _broadcast_room_state(room.code)
        return None

    @socketio.on("disconnect")
    def on_disconnect(*_args):
        for departure in engine.disconnect(request.sid):
            if departure.destroyed:
                continue
            _broadcast_outcome(departure.code, departure.outcome)
            _broadcast_room_state(departure.code)
