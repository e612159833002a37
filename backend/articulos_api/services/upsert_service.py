"""
Insert-or-update of article batches.

Two modes are offered:

- `upsert_rows`: record by record. Each record is checked for existence,
  then updated or inserted and committed on its own. A failing record is
  reported in the result and the remaining records are still processed.
  Records that fail validation or have no code count as errors.
- `upsert_bulk`: the whole batch in one transaction using the database's
  native INSERT ... ON CONFLICT DO UPDATE. Records without a code are skipped.
  Any failure rolls back the whole batch.
"""
import logging
from typing import Any, Dict, List, Optional

import pydantic
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from articulos_api.repositories.articulo_repo import ArticuloRepository
from articulos_api.schemas.articulo_schema import ArticuloIn
from articulos_api.services.errors import StorageError, describe
from articulos_api.utils.transactions import atomic

log = logging.getLogger(__name__)

INSERTED = "INSERTED"
UPDATED = "UPDATED"
ERROR = "ERROR"


def _raw_codart(raw: Any) -> Optional[int]:
    codart = raw.get("codart") if isinstance(raw, dict) else None
    if isinstance(codart, int) and not isinstance(codart, bool):
        return codart
    return None


def _schema_message(e: pydantic.ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'record'}: {err['msg']}"
        for err in e.errors()
    )


class UpsertService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ArticuloRepository(db)

    def upsert_rows(self, articulos: List[Any]) -> Dict:
        """
        `articulos` may hold ArticuloIn instances or raw dicts; raw records
        are validated here, one at a time.
        """
        inserted = 0
        updated = 0
        errors = 0
        detalles = []

        for raw in articulos:
            if isinstance(raw, ArticuloIn):
                articulo = raw
            else:
                try:
                    articulo = ArticuloIn.model_validate(raw)
                except pydantic.ValidationError as e:
                    detalles.append(
                        {"codart": _raw_codart(raw), "status": ERROR, "error": _schema_message(e)}
                    )
                    errors += 1
                    continue

            codart = articulo.codart
            if codart is None:
                detalles.append(
                    {"codart": None, "status": ERROR, "error": "codart is required"}
                )
                errors += 1
                continue

            try:
                existing = self.repo.get(codart)
                if existing is not None:
                    self.repo.update(existing, **articulo.column_values())
                    status = UPDATED
                else:
                    self.repo.add(codart, **articulo.column_values())
                    status = INSERTED
                self.db.commit()
            except SQLAlchemyError as e:
                self.db.rollback()
                log.warning("upsert of article %s failed: %s", codart, describe(e))
                detalles.append({"codart": codart, "status": ERROR, "error": describe(e)})
                errors += 1
                continue

            if status == INSERTED:
                inserted += 1
            else:
                updated += 1
            detalles.append({"codart": codart, "status": status})

        log.info(
            "row-by-row upsert: %d inserted, %d updated, %d errors of %d",
            inserted,
            updated,
            errors,
            len(articulos),
        )
        return {
            "message": "Processing completed",
            "inserted": inserted,
            "updated": updated,
            "errors": errors,
            "total": len(articulos),
            "detalles": detalles,
        }

    def upsert_bulk(self, articulos: List[ArticuloIn]) -> Dict:
        try:
            stmt = self.repo.upsert_statement()
        except NotImplementedError as e:
            raise StorageError(str(e)) from e

        try:
            with atomic(self.db):
                for articulo in articulos:
                    if articulo.codart is None:
                        continue
                    self.db.execute(
                        stmt, {"codart": articulo.codart, **articulo.column_values()}
                    )
        except SQLAlchemyError as e:
            log.error("bulk upsert rolled back: %s", describe(e))
            raise StorageError(describe(e)) from e

        log.info("bulk upsert committed %d articles", len(articulos))
        return {"message": "Bulk processing completed", "total": len(articulos)}
