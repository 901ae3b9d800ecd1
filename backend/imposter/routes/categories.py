from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from ..game.catalog import describe

bp = Blueprint("categories", __name__)


@bp.get("/categories")
def get_categories():
    engine = current_app.extensions["imposter"]
    return jsonify({"categories": describe(engine.catalog)})
