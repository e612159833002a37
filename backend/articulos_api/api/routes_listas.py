from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from articulos_api.db import get_db
from articulos_api.repositories.lista_repo import ListaRepository
from articulos_api.schemas.lista_schema import ListaOut
from articulos_api.services.errors import describe

router = APIRouter()


@router.get("", summary="List price lists", response_model=List[ListaOut])
def list_listas(db: Session = Depends(get_db)):
    repo = ListaRepository(db)
    try:
        return [ListaOut.model_validate(lista) for lista in repo.list()]
    except SQLAlchemyError as e:
        raise HTTPException(status_code=500, detail=describe(e))


@router.get(
    "/{codlis}",
    summary="Get a price list by code",
    response_model=ListaOut,
    responses={404: {"description": "Price list not found"}},
)
def get_lista(codlis: int, db: Session = Depends(get_db)):
    repo = ListaRepository(db)
    try:
        lista = repo.get(codlis)
    except SQLAlchemyError as e:
        raise HTTPException(status_code=500, detail=describe(e))
    if not lista:
        raise HTTPException(status_code=404, detail="Price list not found")
    return ListaOut.model_validate(lista)
