import logging
import math
from typing import Dict

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from articulos_api.models.articulo import Articulo
from articulos_api.repositories.articulo_repo import ArticuloRepository
from articulos_api.schemas.articulo_schema import ArticuloIn, ArticuloOut
from articulos_api.services.errors import (
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
    describe,
)

log = logging.getLogger(__name__)


class ArticuloService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ArticuloRepository(db)

    def list_page(self, page: int = 1, limit: int = 10) -> Dict:
        """
        One page of articles ordered by code, with the total row count and
        page count (ceil(total / limit)).
        """
        if page < 1:
            raise ValidationError("page must be >= 1")
        if limit < 1:
            raise ValidationError("limit must be > 0")
        try:
            items, total = self.repo.list(page=page, limit=limit)
        except OverflowError as e:
            # OFFSET/LIMIT beyond what the driver can bind
            raise ValidationError("page or limit out of range") from e
        except SQLAlchemyError as e:
            raise StorageError(describe(e)) from e
        return {
            "articulos": [ArticuloOut.model_validate(a) for a in items],
            "total": total,
            "pagina": page,
            "totalPaginas": math.ceil(total / limit),
            "message": f"{len(items)} articles found",
        }

    def get(self, codart: int) -> Articulo:
        try:
            a = self.repo.get(codart)
        except SQLAlchemyError as e:
            raise StorageError(describe(e)) from e
        if a is None:
            raise NotFoundError("Article not found")
        return a

    def create(self, payload: ArticuloIn) -> Articulo:
        if payload.codart is None:
            raise ValidationError("codart is required")
        try:
            if self.repo.exists(payload.codart):
                raise ConflictError("codart already exists")
            a = self.repo.add(payload.codart, **payload.column_values())
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            # lost a race with a concurrent insert of the same code
            if self.repo.exists(payload.codart):
                raise ConflictError("codart already exists") from e
            raise ValidationError(describe(e)) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(describe(e)) from e
        self.db.refresh(a)
        log.info("created article %s", payload.codart)
        return a

    def update(self, codart: int, payload: ArticuloIn) -> Articulo:
        """
        Replace every non-key field with the payload's values; fields left out
        of the payload become null. A codart in the payload is ignored.
        """
        a = self.get(codart)
        try:
            self.repo.update(a, **payload.column_values())
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ValidationError(describe(e)) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(describe(e)) from e
        self.db.refresh(a)
        return a

    def delete(self, codart: int) -> None:
        a = self.get(codart)
        try:
            self.repo.delete(a)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError(describe(e)) from e
        log.info("deleted article %s", codart)
