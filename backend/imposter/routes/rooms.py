from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from ..game.errors import RoomNotFound

bp = Blueprint("rooms", __name__)


@bp.get("/rooms/<code>")
def get_room(code: str):
    engine = current_app.extensions["imposter"]
    try:
        # No viewer: the public snapshot never carries secrets.
        state = engine.state_for(code)
    except RoomNotFound as exc:
        return jsonify({"error": exc.code}), 404
    return jsonify(state)
