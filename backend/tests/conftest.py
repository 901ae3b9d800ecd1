import random

import pytest

from imposter.config import Config
from imposter.game.catalog import load_catalog
from imposter.game.service import GameEngine
from imposter.game.store import SessionStore
from imposter.server import create_app


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    TRUST_PROXY_HEADERS = False
    SOCKETIO_ASYNC_MODE = "threading"
    MIN_PLAYERS = 3
    MAX_PLAYERS = 8
    DEFAULT_IMPOSTER_COUNT = 1
    DISTINCT_ITEMS = False
    CATALOG_PATH = ""


@pytest.fixture()
def engine():
    return GameEngine(store=SessionStore(), catalog=load_catalog(), rng=random.Random(1234))


@pytest.fixture()
def make_room(engine):
    """Create a room hosted by the first id and joined by the rest, in order."""

    def _make(*player_ids):
        room = engine.create_room(player_ids[0], name=player_ids[0])
        for pid in player_ids[1:]:
            engine.join(room.code, pid, pid)
        return room

    return _make


@pytest.fixture()
def rig():
    """Override the imposter draw of a started room so outcomes are predictable."""

    def _rig(room, *imposter_ids):
        room.imposter_ids = set(imposter_ids)
        for p in room.players.values():
            p.is_imposter = p.id in room.imposter_ids
            p.item = room.minority_item if p.is_imposter else room.majority_item

    return _rig


@pytest.fixture()
def app_socketio():
    return create_app(TestConfig, rng=random.Random(42))


@pytest.fixture()
def flask_app(app_socketio):
    return app_socketio[0]


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(app_socketio):
    application, socketio = app_socketio
    clients = []

    def _connect():
        c = socketio.test_client(application, flask_test_client=application.test_client())
        clients.append(c)
        return c

    yield _connect

    for c in clients:
        if c.is_connected():
            c.disconnect()
