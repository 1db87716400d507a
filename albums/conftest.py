import io

import pytest

from .app import create_app
from .database import Database

# 17 bytes, the size of the canonical example upload
IMAGE = b'\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00'


def album_form(artist="Radiohead", title="OK Computer", year="1997", image=IMAGE):
    data = {}
    for name, value in (("artist", artist), ("title", title), ("year", year)):
        if value is not None:
            data[name] = value
    if image is not None:
        data["image"] = (io.BytesIO(image), "cover.png")
    return data


@pytest.fixture
def db(tmp_path):
    database = Database("sqlite:///{}".format(tmp_path / "albums.db"), max_open=4, max_idle=2)
    database.ensure_schema()
    yield database
    database.close()


@pytest.fixture
def broken_db(tmp_path):
    # schema never created, every statement fails
    database = Database("sqlite:///{}".format(tmp_path / "empty.db"), max_open=4, max_idle=2)
    yield database
    database.close()


@pytest.fixture
def client(db):
    return create_app(db).test_client()
