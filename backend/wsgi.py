import logging

from imposter.config import Config
from imposter.server import create_app

logging.basicConfig(level=Config.LOG_LEVEL)

app, socketio = create_app()
