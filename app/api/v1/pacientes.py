"""
Endpoints CRUD de pacientes.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.paciente import (
    PacienteCreate,
    PacienteDetalleResponse,
    PacienteResponse,
    PacienteUpdate,
)
from app.services import paciente_service

router = APIRouter()


@router.get("", response_model=PacienteResponse | None)
async def search_paciente(
    dni: str | None = Query(None, description="DNI del paciente"),
    db: AsyncSession = Depends(get_db),
):
    """
    Busca un paciente por DNI.
    Retorna null si no existe o si no se envía DNI.
    """
    if not dni:
        return None
    return await paciente_service.search_by_dni(db, dni)


@router.get("/{paciente_id}", response_model=PacienteDetalleResponse)
async def get_paciente(
    paciente_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Obtiene un paciente con sus últimas 10 órdenes."""
    return await paciente_service.get_paciente_detalle(db, paciente_id)


@router.post("", response_model=PacienteResponse, status_code=201)
async def create_paciente(
    data: PacienteCreate,
    db: AsyncSession = Depends(get_db),
):
    return await paciente_service.create_paciente(db, data)


@router.put("/{paciente_id}", response_model=PacienteResponse)
async def update_paciente(
    paciente_id: int,
    data: PacienteUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Actualiza solo los campos enviados."""
    return await paciente_service.update_paciente(db, paciente_id, data)
