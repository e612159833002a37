from sqlalchemy import CheckConstraint, Column, Numeric, String

from articulos_api.db import Base

# columns an upsert may overwrite; codart is the immutable key
ARTICULO_FIELDS = ("npm", "stock", "pcosto", "pordif")


class Articulo(Base):
    __tablename__ = "_articulos"
    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_articulos_stock_nonneg"),
    )

    codart = Column(Numeric(5, 0), primary_key=True, autoincrement=False)
    npm = Column(String(200), nullable=True, default=None)
    stock = Column(Numeric(10, 0), nullable=True)
    pcosto = Column(Numeric(11, 4), nullable=True, default=None)
    pordif = Column(Numeric(6, 2), nullable=True, default=None)

    def __repr__(self):
        return f"<Articulo codart={self.codart} npm={self.npm}>"
