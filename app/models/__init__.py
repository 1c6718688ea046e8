"""
Modelos SQLAlchemy — exportar todos para que Alembic los detecte.
"""

from app.models.paciente import Paciente
from app.models.medico import Medico, MATRICULA_SIN_DATO
from app.models.determinacion import Determinacion, TipoResultado
from app.models.orden import Orden, EstadoOrden
from app.models.resultado import Resultado, EstadoResultado
from app.models.paciente_usuario import PacienteUsuario

__all__ = [
    "Paciente",
    "Medico",
    "MATRICULA_SIN_DATO",
    "Determinacion",
    "TipoResultado",
    "Orden",
    "EstadoOrden",
    "Resultado",
    "EstadoResultado",
    "PacienteUsuario",
]
