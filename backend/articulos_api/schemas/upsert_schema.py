from typing import Any, List, Optional

from pydantic import BaseModel

from articulos_api.schemas.articulo_schema import ArticuloIn


class UpsertIn(BaseModel):
    articulos: List[ArticuloIn]


class UpsertRowsIn(BaseModel):
    # records are validated one by one so a bad record fails alone
    articulos: List[Any]


class UpsertDetail(BaseModel):
    codart: Optional[int] = None
    status: str  # INSERTED, UPDATED, ERROR
    error: Optional[str] = None


class UpsertRowsOut(BaseModel):
    message: str
    inserted: int
    updated: int
    errors: int
    total: int
    detalles: List[UpsertDetail]


class BulkUpsertOut(BaseModel):
    message: str
    total: int
