from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

# exact in Python and in the database, a plain number in JSON
JsonDecimal = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]


class ArticuloIn(BaseModel):
    """
    Incoming article. codart is optional at the schema level: the services
    decide what a missing code means (400 on create, per-record error or skip
    in the upserts).
    """

    codart: Optional[int] = Field(None, description="Article code", examples=[1])
    npm: Optional[str] = Field(
        None,
        max_length=200,
        description="Article name",
        examples=["LEVETIRACETAM 500 MG COMPRIMIDO CAJA X60"],
    )
    stock: Optional[JsonDecimal] = Field(None, description="Available stock", examples=[0])
    pcosto: Optional[JsonDecimal] = Field(None, description="Unit cost", examples=[1589.57])
    pordif: Optional[JsonDecimal] = Field(
        None, description="Percentage differential", examples=[0.0]
    )

    def column_values(self) -> dict:
        return {
            "npm": self.npm,
            "stock": self.stock,
            "pcosto": self.pcosto,
            "pordif": self.pordif,
        }


class ArticuloOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    codart: int
    npm: Optional[str] = None
    stock: Optional[JsonDecimal] = None
    pcosto: Optional[JsonDecimal] = None
    pordif: Optional[JsonDecimal] = None


class ArticuloPage(BaseModel):
    articulos: List[ArticuloOut]
    total: int
    pagina: int
    totalPaginas: int
    message: str
