import logging
import re

import flask
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import RequestEntityTooLarge

from .misc import json_api, with_database

L = logging.getLogger("albums.album")

api = flask.Blueprint("album", "album", url_prefix="/albums")

MAX_UPLOAD_SIZE = 10 << 20
MAX_TEXT_LENGTH = 255

# Albums.id and Albums.year are INT columns
INT_PATTERN = re.compile(r"[+-]?[0-9]+")
INT_MIN, INT_MAX = -(1 << 31), (1 << 31) - 1


def parse_int(value: str):
    """
    Parse a plain decimal integer that fits an INT column, or return None.

    Unlike `int()` this rejects whitespace, underscores and non-ASCII digits.
    """
    if not INT_PATTERN.fullmatch(value):
        return None
    value = int(value)
    if not INT_MIN <= value <= INT_MAX:
        return None
    return value


@api.route("", methods=["POST"])
@json_api
@with_database
def create(db):
    if flask.request.mimetype != "multipart/form-data":
        return {"error": "Invalid form data"}, 400
    try:
        form = flask.request.form
        files = flask.request.files
    except (RequestEntityTooLarge, ValueError) as e:
        L.info("Rejected album form: {}".format(e))
        return {"error": "Invalid form data"}, 400

    artist = form.get("artist", "")
    title = form.get("title", "")
    year = form.get("year", "")

    if not artist or not title or not year:
        return {"error": "Artist, title, and year are required"}, 400
    if len(artist) > MAX_TEXT_LENGTH or len(title) > MAX_TEXT_LENGTH:
        return {"error": "Artist and title must be at most {} characters".format(MAX_TEXT_LENGTH)}, 400

    year = parse_int(year)
    if year is None or year <= 0:
        return {"error": "Year must be a positive integer"}, 400

    image = files.get("image")
    if image is None:
        return {"error": "Image is required"}, 400
    try:
        data = image.read()
    except OSError:
        L.exception("Failed to read uploaded image")
        return {"error": "Failed to read image file"}, 500
    finally:
        image.close()
    if not data:
        return {"error": "Image is required"}, 400

    try:
        album_id = db.insert_album(artist, title, year, data)
    except SQLAlchemyError:
        L.exception("Failed to insert album")
        return {"error": "Failed to insert album"}, 500

    L.info("Created album {} ({} bytes of image)".format(album_id, len(data)))
    return {"AlbumID": album_id}, 201


@api.route("/<album_id>")
@json_api
@with_database
def get(album_id, db):
    album_id = parse_int(album_id)
    if album_id is None:
        return {"error": "Invalid album ID"}, 400

    try:
        album = db.get_album_by_id(album_id)
    except SQLAlchemyError:
        L.exception("Failed to look up album {}".format(album_id))
        return {"error": "Database error"}, 500

    if album is None:
        return {"error": "Album not found"}, 404
    return album.json(), 200
