from sqlalchemy import Column, Numeric, SmallInteger, String

from articulos_api.db import Base


class Lista(Base):
    __tablename__ = "_listas"

    codlis = Column(SmallInteger, primary_key=True, autoincrement=False)
    nomlis = Column(String(50), nullable=True, default=None)
    porlis = Column(Numeric(4, 2), nullable=True, default=None)

    def __repr__(self):
        return f"<Lista codlis={self.codlis} nomlis={self.nomlis}>"
