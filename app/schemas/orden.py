"""
Schemas para Orden y carga de Resultados.
"""

from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from app.models.determinacion import TipoResultado
from app.models.orden import EstadoOrden
from app.models.resultado import EstadoResultado
from app.schemas.common import CamelModel

# ── Creación de orden ──────────────────────────────────────────


class OrdenCreate(CamelModel):
    """Alta de orden: datos del paciente, médico y determinaciones pedidas."""
    dni_paciente: str | None = Field(None, max_length=20)
    apellido_nombre: str = Field(..., max_length=200)
    fecha_nacimiento: date | None = None
    telefono: str | None = Field(None, max_length=50)
    email: str | None = Field(None, max_length=255)
    domicilio: str | None = Field(None, max_length=500)
    obra_social: str | None = Field(None, max_length=200)
    nro_afiliado: str | None = Field(None, max_length=100)
    matricula_medico: str | None = Field(None, max_length=50)
    nombre_medico: str | None = Field(None, max_length=200)
    lista_determinaciones: list[str] = Field(default_factory=list)

    def paciente_fields(self) -> dict[str, Any]:
        """Columnas de `pacientes` para dar de alta al paciente."""
        return {
            "dni": self.dni_paciente,
            "apellido_nombre": self.apellido_nombre,
            "fecha_nacimiento": self.fecha_nacimiento,
            "telefono": self.telefono,
            "email": self.email,
            "domicilio": self.domicilio,
            "obra_social": self.obra_social,
            "nro_afiliado": self.nro_afiliado,
        }


class OrdenCreatedResponse(BaseModel):
    success: bool = True
    id: int
    protocolo: str


# ── Carga de resultados ────────────────────────────────────────


class PacienteCarga(BaseModel):
    """Datos del paciente editados desde la pantalla de carga."""
    nombre: str = Field(..., min_length=1, max_length=200)
    dni: str | None = None
    os: str | None = None
    email: str | None = None
    domicilio: str | None = None
    telefono: str | None = None
    medico: str | None = None

    def paciente_fields(self) -> dict[str, Any]:
        """Columnas de `pacientes` que se sobrescriben (vacío → null)."""
        return {
            "apellido_nombre": self.nombre,
            "dni": self.dni or None,
            "obra_social": self.os or None,
            "email": self.email or None,
            "domicilio": self.domicilio or None,
            "telefono": self.telefono or None,
        }


class ResultadoCarga(BaseModel):
    nbu: str = Field(..., min_length=1, max_length=20)
    valor: str | None = None

    @field_validator("valor", mode="before")
    @classmethod
    def valor_to_str(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class ResultadosUpdate(BaseModel):
    paciente: PacienteCarga | None = None
    resultados: list[ResultadoCarga]


# ── Respuestas ─────────────────────────────────────────────────


class OrdenListItem(BaseModel):
    id: int
    protocolo: str
    fecha_creacion: datetime
    estado: EstadoOrden
    apellido_nombre: str
    dni: str
    medico_nombre: str | None


class ResultadoGuardado(BaseModel):
    """Resultado de la orden enriquecido con datos del catálogo."""
    nbu: str
    valor: str | None
    estado: EstadoResultado
    nombre: str
    tipo: TipoResultado
    unidades: str
    vr: str
    opciones_lista: str
    es_perfil: bool
    hijos_nbu: str


class OrdenDetalleResponse(BaseModel):
    id: int
    protocolo: str
    estado: EstadoOrden
    fecha_creacion: datetime
    lista_determinaciones_nbu: list[str]
    apellido_nombre: str
    dni: str
    email: str
    obra_social: str
    domicilio: str
    telefono: str
    nro_afiliado: str
    # "" si el paciente no tiene fecha cargada
    fecha_nacimiento: date | Literal[""]
    medico_nombre: str
    resultados_guardados: list[ResultadoGuardado]
    siguiente_id: int | None
