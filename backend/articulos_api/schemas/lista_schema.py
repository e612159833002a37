from typing import Optional

from pydantic import BaseModel, ConfigDict

from articulos_api.schemas.articulo_schema import JsonDecimal


class ListaOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    codlis: int
    nomlis: Optional[str] = None
    porlis: Optional[JsonDecimal] = None
