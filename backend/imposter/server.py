from __future__ import annotations

import logging
import random
import sys
from pathlib import Path

from flask import Flask, send_from_directory
from flask_cors import CORS
from flask_socketio import SocketIO
from werkzeug.middleware.proxy_fix import ProxyFix

from .config import Config
from .game.catalog import load_catalog
from .game.service import GameEngine
from .game.store import SessionStore
from .routes.categories import bp as categories_bp
from .routes.health import bp as health_bp
from .routes.rooms import bp as rooms_bp
from .realtime.handlers import register_socketio_handlers

logger = logging.getLogger(__name__)


def _async_mode(configured: str) -> str:
    if configured:
        return configured
    # Default choice:
    # - Windows: threading (eventlet has known compatibility issues on newer Python)
    # - Python >= 3.13: threading (safer default)
    # - Otherwise: eventlet
    if sys.platform.startswith("win") or sys.version_info >= (3, 13):
        return "threading"
    return "eventlet"


def create_app(config_class=Config, rng: random.Random | None = None) -> tuple[Flask, SocketIO]:
    dist_dir = Path(__file__).resolve().parents[2] / "frontend" / "dist"

    static_folder = str(dist_dir) if dist_dir.exists() else None
    static_url_path = "/" if dist_dir.exists() else None

    app = Flask(
        __name__,
        static_folder=static_folder,
        static_url_path=static_url_path,
    )
    app.config.from_object(config_class)

    if app.config.get("TRUST_PROXY_HEADERS", False):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)

    cors_origins = app.config.get("CORS_ORIGINS", "*")
    CORS(app, resources={r"/api/*": {"origins": cors_origins}})

    socketio = SocketIO(
        app,
        cors_allowed_origins=cors_origins,
        async_mode=_async_mode(app.config.get("SOCKETIO_ASYNC_MODE", "")),
    )

    engine = GameEngine(
        store=SessionStore(code_length=app.config["ROOM_CODE_LENGTH"]),
        catalog=load_catalog(app.config.get("CATALOG_PATH") or None),
        rng=rng,
        min_players=app.config["MIN_PLAYERS"],
        max_players=app.config["MAX_PLAYERS"],
        default_imposter_count=app.config["DEFAULT_IMPOSTER_COUNT"],
        distinct_items=app.config["DISTINCT_ITEMS"],
    )
    app.extensions["imposter"] = engine

    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(rooms_bp, url_prefix="/api")
    app.register_blueprint(categories_bp, url_prefix="/api")

    register_socketio_handlers(socketio, engine, max_name_length=app.config["MAX_NAME_LENGTH"])

    if dist_dir.exists():
        logger.info("Serving frontend from %s", dist_dir)

        @app.get("/")
        def index():
            return send_from_directory(dist_dir, "index.html")

        @app.get("/<path:path>")
        def static_proxy(path: str):
            file_path = dist_dir / path
            if file_path.exists() and file_path.is_file():
                return send_from_directory(dist_dir, path)
            return send_from_directory(dist_dir, "index.html")

    return app, socketio
