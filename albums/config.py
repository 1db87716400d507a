import configparser
import logging
import os
from typing import Mapping, NamedTuple, Sequence

fmt = logging.Formatter("[%(asctime)s] %(levelname)s: %(filename)s:%(funcName)s(%(lineno)s): %(message)s")
logger = logging.getLogger("albums")
logger.setLevel(logging.DEBUG)

# stderr logging
sh = logging.StreamHandler()
sh.setLevel(logging.DEBUG)
sh.setFormatter(fmt)
logger.addHandler(sh)

CONFIG_PATHS = ['/etc/albums/api.conf', 'albums-api.conf']

DEFAULT_PORT = 8080
DEFAULT_MAX_OPEN = 88
DEFAULT_MAX_IDLE = 30


class ConfigError(Exception):
    pass


class Config(NamedTuple):
    """
    Settings read once at startup, before any component is constructed.

    Only `dsn` is required. The pool bounds are fixed for the lifetime of
    the process.
    """
    dsn: str
    port: int = DEFAULT_PORT
    max_open_connections: int = DEFAULT_MAX_OPEN
    max_idle_connections: int = DEFAULT_MAX_IDLE
    debug: bool = False


def _int(value, name):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {value!r}")


def load_config(paths: Sequence[str] = CONFIG_PATHS, environ: Mapping[str, str] = os.environ) -> Config:
    """
    Build a `Config` from the optional config files, then apply the
    environment on top (`DB_DSN`, `PORT`, `FLASK_DEBUG`).
    """
    config = configparser.ConfigParser()
    config.read(paths)

    cfg_db = config['database'] if config.has_section('database') else {}
    cfg_server = config['server'] if config.has_section('server') else {}

    dsn = environ.get('DB_DSN') or cfg_db.get('dsn')
    if not dsn:
        raise ConfigError("DB_DSN environment variable not set")

    port = _int(environ.get('PORT') or cfg_server.get('port', DEFAULT_PORT), 'port')
    if not 0 < port < 65536:
        raise ConfigError(f"port out of range: {port}")

    max_open = _int(cfg_db.get('max_open', DEFAULT_MAX_OPEN), 'max_open')
    max_idle = _int(cfg_db.get('max_idle', DEFAULT_MAX_IDLE), 'max_idle')
    if max_open < 1 or max_idle < 0 or max_idle > max_open:
        raise ConfigError(f"invalid pool bounds: max_open={max_open}, max_idle={max_idle}")

    if 'FLASK_DEBUG' in environ:
        debug = environ['FLASK_DEBUG'] == '1'
    else:
        debug = str(cfg_server.get('debug', '0')).lower() in ('1', 'true', 'yes', 'on')

    return Config(
        dsn=dsn,
        port=port,
        max_open_connections=max_open,
        max_idle_connections=max_idle,
        debug=debug,
    )
