from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from articulos_api.models.articulo import ARTICULO_FIELDS, Articulo

# dialects with a native INSERT ... ON CONFLICT clause
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class ArticuloRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, codart: int) -> Optional[Articulo]:
        return self.db.get(Articulo, codart)

    def exists(self, codart: int) -> bool:
        return (
            self.db.query(Articulo.codart).filter(Articulo.codart == codart).first()
            is not None
        )

    def list(self, page: int = 1, limit: int = 10) -> Tuple[List[Articulo], int]:
        items = (
            self.db.query(Articulo)
            .order_by(Articulo.codart)
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        total = self.db.query(func.count(Articulo.codart)).scalar() or 0
        return items, total

    def add(self, codart: int, **values) -> Articulo:
        a = Articulo(codart=codart, **values)
        self.db.add(a)
        self.db.flush()
        return a

    def update(self, articulo: Articulo, **values) -> Articulo:
        for field in ARTICULO_FIELDS:
            setattr(articulo, field, values.get(field))
        self.db.flush()
        return articulo

    def delete(self, articulo: Articulo) -> None:
        self.db.delete(articulo)
        self.db.flush()

    def upsert_statement(self):
        """
        INSERT ... ON CONFLICT (codart) DO UPDATE for the session's dialect.
        Every non-key column takes the incoming (EXCLUDED) value.
        """
        dialect = self.db.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise NotImplementedError(f"native upsert not available for dialect {dialect!r}")
        stmt = insert(Articulo.__table__)
        return stmt.on_conflict_do_update(
            index_elements=[Articulo.__table__.c.codart],
            set_={field: stmt.excluded[field] for field in ARTICULO_FIELDS},
        )
