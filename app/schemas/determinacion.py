"""
Schemas para el catálogo de determinaciones.
"""

from pydantic import BaseModel, Field

from app.models.determinacion import TipoResultado
from app.schemas.common import CamelModel


class DeterminacionCreate(CamelModel):
    nbu: str = Field(..., max_length=20)
    nombre: str = Field(..., max_length=200)
    ub: str | None = Field(None, max_length=20)
    metodo: str | None = Field(None, max_length=200)
    es_perfil: bool | None = None
    hijos_nbu: str | None = None
    tipo_resultado: TipoResultado | None = None
    unidades_resultado: str | None = Field(None, max_length=50)
    valores_referencia: str | None = None
    opciones_lista: str | None = None


class DeterminacionUpdate(CamelModel):
    nbu: str | None = Field(None, max_length=20)
    nombre: str | None = Field(None, max_length=200)
    ub: str | None = Field(None, max_length=20)
    metodo: str | None = Field(None, max_length=200)
    es_perfil: bool | None = None
    hijos_nbu: str | None = None
    tipo_resultado: TipoResultado | None = None
    unidades_resultado: str | None = Field(None, max_length=50)
    valores_referencia: str | None = None
    opciones_lista: str | None = None


class DeterminacionResponse(BaseModel):
    id: int
    nbu: str
    nombre: str
    ub: str | None
    metodo: str | None
    es_perfil: bool
    hijos_nbu: str | None
    tipo_resultado: TipoResultado
    unidades_resultado: str | None
    valores_referencia: str | None
    opciones_lista: str | None
    activo: bool

    model_config = {"from_attributes": True}


class DeterminacionCreatedResponse(BaseModel):
    success: bool = True
    id: int


class DeterminacionUpdatedResponse(BaseModel):
    success: bool = True
    determinacion: DeterminacionResponse
