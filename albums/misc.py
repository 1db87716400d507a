import json
from functools import wraps

import flask

from .database import Database

EXTENSION_KEY = "albums.database"


class StrictFormRequest(flask.Request):
    """
    Request whose form parser raises `ValueError` on a malformed body instead
    of returning an empty form.
    """

    def make_form_data_parser(self):
        parser = super().make_form_data_parser()
        parser.silent = False
        return parser


def json_response(ret, status=None):
    return flask.Response(
        json.dumps(ret, ensure_ascii=False, separators=(',', ':')),
        status=status,
        headers={
            "Content-Type": "application/json; charset=utf-8",
        }
    )


def json_api(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        ret = fn(*args, **kwargs)
        status = None
        if isinstance(ret, flask.Response):
            return ret
        if isinstance(ret, tuple):
            status = ret[1]
            ret = ret[0]
        return json_response(ret, status)

    return wrapper


def get_database(app: flask.Flask = None) -> Database:
    app = app or flask.current_app
    return app.extensions[EXTENSION_KEY]


def with_database(fn):
    """
	Injects an argument `db` holding the storage gateway the application was built with.
	"""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        if "db" in kwargs:
            raise RuntimeError("A db argument already exists!")
        kwargs["db"] = get_database()
        return fn(*args, **kwargs)

    return wrapper
