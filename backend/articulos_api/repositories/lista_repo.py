from typing import List, Optional

from sqlalchemy.orm import Session

from articulos_api.models.lista import Lista


class ListaRepository:
    def __init__(self, db: Session):
        self.db = db

    def list(self) -> List[Lista]:
        return self.db.query(Lista).order_by(Lista.codlis).all()

    def get(self, codlis: int) -> Optional[Lista]:
        return self.db.get(Lista, codlis)
