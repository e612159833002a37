from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from articulos_api.config import settings
from articulos_api.db import get_db
from articulos_api.schemas.articulo_schema import ArticuloIn, ArticuloOut, ArticuloPage
from articulos_api.schemas.upsert_schema import (
    BulkUpsertOut,
    UpsertIn,
    UpsertRowsIn,
    UpsertRowsOut,
)
from articulos_api.services.articulo_service import ArticuloService
from articulos_api.services.errors import ServiceException
from articulos_api.services.upsert_service import UpsertService

router = APIRouter()

_ERRORS = {
    400: {"description": "Invalid data"},
    500: {"description": "Server error"},
}


def _http_error(e: ServiceException) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=str(e))


@router.get(
    "",
    summary="List articles",
    response_model=ArticuloPage,
    responses={404: {"description": "No articles on this page"}, **_ERRORS},
)
def list_articulos(
    page: int = Query(1, ge=1, le=settings.MAX_PAGE, description="Page number"),
    limit: int = Query(
        settings.DEFAULT_PAGE_SIZE,
        ge=1,
        le=settings.MAX_PAGE_SIZE,
        description="Rows per page",
    ),
    db: Session = Depends(get_db),
):
    svc = ArticuloService(db)
    try:
        result = svc.list_page(page=page, limit=limit)
    except ServiceException as e:
        raise _http_error(e)

    if not result["articulos"]:
        result["message"] = "No articles available"
        return JSONResponse(
            status_code=404, content=ArticuloPage(**result).model_dump(mode="json")
        )
    return result


@router.post(
    "/upsert",
    summary="Insert or update articles one by one",
    description=(
        "Articles whose codart exists are updated, the rest are inserted. "
        "Each article is committed on its own; failures are reported per "
        "article in `detalles` and do not stop the batch."
    ),
    response_model=UpsertRowsOut,
    response_model_exclude_none=True,
    responses=_ERRORS,
)
def upsert_articulos(payload: UpsertRowsIn, db: Session = Depends(get_db)):
    svc = UpsertService(db)
    return svc.upsert_rows(payload.articulos)


@router.post(
    "/upsert/bulk",
    summary="Bulk upsert in a single transaction",
    description=(
        "All articles are written in one transaction using INSERT ... ON "
        "CONFLICT DO UPDATE. Articles without codart are skipped. Any "
        "failure rolls back the whole batch."
    ),
    response_model=BulkUpsertOut,
    responses=_ERRORS,
)
def bulk_upsert_articulos(payload: UpsertIn, db: Session = Depends(get_db)):
    svc = UpsertService(db)
    try:
        return svc.upsert_bulk(payload.articulos)
    except ServiceException as e:
        raise HTTPException(
            status_code=e.status_code, detail=f"Bulk upsert failed: {e}"
        )


@router.get(
    "/{codart}",
    summary="Get an article by code",
    response_model=ArticuloOut,
    responses={404: {"description": "Article not found"}, 500: _ERRORS[500]},
)
def get_articulo(codart: int, db: Session = Depends(get_db)):
    svc = ArticuloService(db)
    try:
        return ArticuloOut.model_validate(svc.get(codart))
    except ServiceException as e:
        raise _http_error(e)


@router.post(
    "",
    summary="Create an article",
    status_code=status.HTTP_201_CREATED,
    response_model=ArticuloOut,
    responses=_ERRORS,
)
def create_articulo(payload: ArticuloIn, db: Session = Depends(get_db)):
    svc = ArticuloService(db)
    try:
        return ArticuloOut.model_validate(svc.create(payload))
    except ServiceException as e:
        raise _http_error(e)


@router.put(
    "/{codart}",
    summary="Update an article",
    response_model=ArticuloOut,
    responses={404: {"description": "Article not found"}, **_ERRORS},
)
def update_articulo(codart: int, payload: ArticuloIn, db: Session = Depends(get_db)):
    svc = ArticuloService(db)
    try:
        return ArticuloOut.model_validate(svc.update(codart, payload))
    except ServiceException as e:
        raise _http_error(e)


@router.delete(
    "/{codart}",
    summary="Delete an article",
    responses={404: {"description": "Article not found"}, 500: _ERRORS[500]},
)
def delete_articulo(codart: int, db: Session = Depends(get_db)):
    svc = ArticuloService(db)
    try:
        svc.delete(codart)
    except ServiceException as e:
        raise _http_error(e)
    return {"message": "Article deleted"}
