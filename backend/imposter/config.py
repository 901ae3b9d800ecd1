import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev")

    # CORS
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")

    # Reverse proxy / IP headers
    TRUST_PROXY_HEADERS = os.environ.get("TRUST_PROXY_HEADERS", "1") == "1"

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    # Rooms
    ROOM_CODE_LENGTH = int(os.environ.get("ROOM_CODE_LENGTH", "5"))
    MIN_PLAYERS = int(os.environ.get("MIN_PLAYERS", "3"))
    MAX_PLAYERS = int(os.environ.get("MAX_PLAYERS", "8"))
    MAX_NAME_LENGTH = int(os.environ.get("MAX_NAME_LENGTH", "16"))

    # Game
    DEFAULT_IMPOSTER_COUNT = int(os.environ.get("DEFAULT_IMPOSTER_COUNT", "1"))
    # Off by default: majority and minority items are drawn independently and may coincide.
    DISTINCT_ITEMS = os.environ.get("DISTINCT_ITEMS", "0") == "1"
    CATALOG_PATH = os.environ.get("CATALOG_PATH", "")

    # Realtime: empty picks a platform default (see server.create_app)
    SOCKETIO_ASYNC_MODE = os.environ.get("SOCKETIO_ASYNC_MODE", "").strip()
