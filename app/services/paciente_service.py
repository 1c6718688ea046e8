"""
Servicio de pacientes: búsqueda por DNI y CRUD.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException, ValidationException
from app.models.orden import Orden
from app.models.paciente import Paciente
from app.schemas.paciente import (
    OrdenPacienteItem,
    PacienteCreate,
    PacienteDetalleResponse,
    PacienteResponse,
    PacienteUpdate,
)

ULTIMAS_ORDENES = 10


async def search_by_dni(db: AsyncSession, dni: str) -> Paciente | None:
    """Busca un paciente por DNI. Retorna None si no existe."""
    return await db.scalar(
        select(Paciente).where(Paciente.dni == dni).order_by(Paciente.id).limit(1)
    )


async def get_paciente(db: AsyncSession, paciente_id: int) -> Paciente:
    paciente = await db.get(Paciente, paciente_id)
    if not paciente:
        raise NotFoundException(detail="Paciente no encontrado")
    return paciente


async def get_paciente_detalle(
    db: AsyncSession, paciente_id: int
) -> PacienteDetalleResponse:
    """Paciente con sus últimas órdenes."""
    paciente = await get_paciente(db, paciente_id)
    result = await db.execute(
        select(Orden)
        .where(Orden.id_paciente == paciente_id)
        .order_by(Orden.fecha_creacion.desc(), Orden.id.desc())
        .limit(ULTIMAS_ORDENES)
    )
    ordenes = [OrdenPacienteItem.model_validate(o) for o in result.scalars().all()]
    return PacienteDetalleResponse(
        **PacienteResponse.model_validate(paciente).model_dump(),
        ordenes=ordenes,
    )


async def create_paciente(db: AsyncSession, data: PacienteCreate) -> Paciente:
    """Crea un paciente. No se controla DNI duplicado."""
    paciente = Paciente(**data.model_dump())
    db.add(paciente)
    await db.flush()
    return paciente


async def update_paciente(
    db: AsyncSession, paciente_id: int, data: PacienteUpdate
) -> Paciente:
    """Actualiza solo los campos enviados."""
    paciente = await get_paciente(db, paciente_id)
    update_data = data.model_dump(exclude_unset=True)
    if "apellido_nombre" in update_data and update_data["apellido_nombre"] is None:
        raise ValidationException("El campo apellido_nombre es requerido")

    for key, value in update_data.items():
        setattr(paciente, key, value)
    await db.flush()
    return paciente
