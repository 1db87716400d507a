import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker

if TYPE_CHECKING:
    from .types import Album

Base = declarative_base()

L = logging.getLogger("albums.database")


class Database:
    """
    Storage gateway: owns the connection pool and the Albums table.

    Every operation borrows one pooled connection for a single statement and
    hands it back when done. Errors from the driver surface as
    `sqlalchemy.exc.SQLAlchemyError`.
    """

    def __init__(self, connection_string, max_open=88, max_idle=30):
        self.engine = create_engine(
            connection_string,
            pool_size=max_idle,
            max_overflow=max_open - max_idle,
            pool_recycle=-1,
        )
        self._sessionmaker = sessionmaker(
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        session = self._sessionmaker()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ensure_schema(self):
        # registers the Albums table on Base.metadata
        from . import types  # noqa: F401

        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        Base.metadata.create_all(bind=self.engine)
        L.info("Schema ready on {}".format(self.engine.url.render_as_string(hide_password=True)))

    def insert_album(self, artist: str, title: str, year: int, image: bytes) -> int:
        from .types import Album

        with self.session() as session:
            album = Album(artist=artist, title=title, year=year, image=image)
            session.add(album)
            session.flush()
            return album.id

    def get_album_by_id(self, album_id: int) -> Optional["Album"]:
        from .types import Album

        with self.session() as session:
            return session.get(Album, album_id)

    def close(self):
        self.engine.dispose()
