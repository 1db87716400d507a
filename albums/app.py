import logging

import flask
from werkzeug.exceptions import HTTPException

from . import album
from .database import Database
from .misc import EXTENSION_KEY, StrictFormRequest, json_api, json_response

L = logging.getLogger("albums.app")


def request_logger():
    L.info("Request: {} {}".format(flask.request.method, flask.request.path))


def response_logger(response: flask.Response):
    L.info("Response: {} {} -> {}".format(flask.request.method, flask.request.path, response.status_code))
    return response


def http_error(e: HTTPException):
    return json_response({"error": e.description}, e.code)


def internal_error(e: Exception):
    L.exception("Unhandled exception while serving {}".format(flask.request.path))
    return json_response({"error": "Internal server error"}, 500)


@json_api
def health():
    return {"status": "ok"}


def create_app(db: Database, debug: bool = False) -> flask.Flask:
    """
    Build the Flask application around an already initialized storage gateway.

    The gateway is reachable from handlers through `misc.with_database`; the
    caller keeps ownership and is responsible for closing it.
    """
    app = flask.Flask(__name__)
    app.debug = debug
    app.request_class = StrictFormRequest
    app.config['MAX_CONTENT_LENGTH'] = album.MAX_UPLOAD_SIZE
    app.extensions[EXTENSION_KEY] = db

    app.before_request(request_logger)
    app.after_request(response_logger)
    app.register_error_handler(HTTPException, http_error)
    app.register_error_handler(Exception, internal_error)

    app.add_url_rule("/health", "health", health, methods=["GET"])
    app.register_blueprint(album.api)
    return app
