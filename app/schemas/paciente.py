"""
Schemas para Paciente.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from app.models.orden import EstadoOrden
from app.schemas.common import CamelModel


class PacienteCreate(CamelModel):
    dni: str | None = Field(None, max_length=20)
    apellido_nombre: str = Field(..., max_length=200)
    fecha_nacimiento: date | None = None
    telefono: str | None = Field(None, max_length=50)
    email: str | None = Field(None, max_length=255)
    domicilio: str | None = Field(None, max_length=500)
    obra_social: str | None = Field(None, max_length=200)
    nro_afiliado: str | None = Field(None, max_length=100)


class PacienteUpdate(CamelModel):
    dni: str | None = Field(None, max_length=20)
    apellido_nombre: str | None = Field(None, max_length=200)
    fecha_nacimiento: date | None = None
    telefono: str | None = Field(None, max_length=50)
    email: str | None = Field(None, max_length=255)
    domicilio: str | None = Field(None, max_length=500)
    obra_social: str | None = Field(None, max_length=200)
    nro_afiliado: str | None = Field(None, max_length=100)


class PacienteResponse(BaseModel):
    id: int
    dni: str | None
    apellido_nombre: str
    fecha_nacimiento: date | None
    telefono: str | None
    email: str | None
    domicilio: str | None
    obra_social: str | None
    nro_afiliado: str | None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class OrdenPacienteItem(BaseModel):
    """Orden resumida dentro del detalle de un paciente."""
    id: int
    protocolo: str
    estado: EstadoOrden
    fecha_creacion: datetime
    id_medico: int | None
    lista_determinaciones_nbu: list[str]

    model_config = {"from_attributes": True}


class PacienteDetalleResponse(PacienteResponse):
    ordenes: list[OrdenPacienteItem] = Field(default_factory=list)
