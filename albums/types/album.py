import base64

import sqlalchemy as sa
from sqlalchemy.dialects import mysql

from ..database import Base


class Album(Base):
    __tablename__ = "Albums"
    __table_args__ = {"mysql_engine": "InnoDB"}

    id = sa.Column(sa.Integer, primary_key=True, autoincrement=True)
    artist = sa.Column(sa.String(255), nullable=False)
    year = sa.Column(sa.Integer, nullable=False)
    title = sa.Column(sa.String(255), nullable=False)
    image = sa.Column(sa.LargeBinary().with_variant(mysql.MEDIUMBLOB(), "mysql"), nullable=False)

    def json(self):
        return dict(
            id=self.id,
            artist=self.artist,
            title=self.title,
            year=self.year,
            image=base64.b64encode(self.image).decode('ascii'),
        )

    def __str__(self):
        return "{} - {} ({})".format(self.artist, self.title, self.year)
