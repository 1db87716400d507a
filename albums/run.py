import logging
import signal

import gevent
from gevent import pywsgi
from sqlalchemy.exc import SQLAlchemyError

from .app import create_app
from .config import CONFIG_PATHS, ConfigError, load_config
from .database import Database

L = logging.getLogger("albums.run")


def main(paths=CONFIG_PATHS):
    """
    Start the service and block until SIGTERM or SIGINT.

    Returns the process exit status: 1 when configuration or database setup
    fails, before anything listens on the port.
    """
    try:
        config = load_config(paths)
    except ConfigError as e:
        L.critical(str(e))
        return 1

    db = None
    try:
        try:
            db = Database(config.dsn,
                          max_open=config.max_open_connections,
                          max_idle=config.max_idle_connections)
            db.ensure_schema()
        except (SQLAlchemyError, ImportError):
            L.critical("Failed to initialize database", exc_info=True)
            return 1

        app = create_app(db, debug=config.debug)
        server = pywsgi.WSGIServer(('', config.port), app)
        for sig in (signal.SIGTERM, signal.SIGINT):
            gevent.signal_handler(sig, server.stop)

        L.info("Server starting on port {} ...".format(config.port))
        server.serve_forever()
    finally:
        if db is not None:
            db.close()
            L.info("Database connections released")
    return 0
