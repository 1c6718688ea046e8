"""
Schemas del portal de pacientes.
"""

from datetime import datetime

from pydantic import BaseModel

from app.models.orden import EstadoOrden


class PortalLoginRequest(BaseModel):
    dni: str | None = None
    password: str | None = None


class PacientePortal(BaseModel):
    """Perfil reducido del paciente (nunca incluye el hash)."""
    id: int
    nombre: str
    dni: str
    email: str | None
    telefono: str | None


class PortalLoginResponse(BaseModel):
    success: bool = True
    paciente: PacientePortal


class PortalRegistroRequest(BaseModel):
    dni: str | None = None
    password: str | None = None
    id_paciente: int | None = None


class PortalRegistroResponse(BaseModel):
    success: bool = True
    message: str


class PortalOrdenItem(BaseModel):
    protocolo: str
    fecha: datetime
    medico: str
    estado: EstadoOrden
    id_orden: int


class PortalResultado(BaseModel):
    nbu: str
    nombre: str
    valor: str | None
    unidades: str
    valores_referencia: str


class PortalOrdenDetalle(BaseModel):
    protocolo: str
    fecha: datetime
    paciente: str
    medico: str
    resultados: list[PortalResultado]
