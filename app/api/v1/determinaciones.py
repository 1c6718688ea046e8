"""
Endpoints del catálogo de determinaciones.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.common import SuccessResponse
from app.schemas.determinacion import (
    DeterminacionCreate,
    DeterminacionCreatedResponse,
    DeterminacionResponse,
    DeterminacionUpdate,
    DeterminacionUpdatedResponse,
)
from app.services import determinacion_service

router = APIRouter()


@router.get("", response_model=list[DeterminacionResponse])
async def list_determinaciones(db: AsyncSession = Depends(get_db)):
    """Lista las determinaciones activas ordenadas por nombre."""
    return await determinacion_service.list_determinaciones(db)


@router.get("/{determinacion_id}", response_model=DeterminacionResponse)
async def get_determinacion(
    determinacion_id: int,
    db: AsyncSession = Depends(get_db),
):
    return await determinacion_service.get_determinacion(db, determinacion_id)


@router.post("", response_model=DeterminacionCreatedResponse, status_code=201)
async def create_determinacion(
    data: DeterminacionCreate,
    db: AsyncSession = Depends(get_db),
):
    """Crea una determinación. Responde 409 si el NBU ya existe."""
    determinacion = await determinacion_service.create_determinacion(db, data)
    return DeterminacionCreatedResponse(id=determinacion.id)


@router.put("/{determinacion_id}", response_model=DeterminacionUpdatedResponse)
async def update_determinacion(
    determinacion_id: int,
    data: DeterminacionUpdate,
    db: AsyncSession = Depends(get_db),
):
    determinacion = await determinacion_service.update_determinacion(
        db, determinacion_id, data
    )
    return DeterminacionUpdatedResponse(
        determinacion=DeterminacionResponse.model_validate(determinacion)
    )


@router.delete("/{determinacion_id}", response_model=SuccessResponse)
async def delete_determinacion(
    determinacion_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Baja lógica (activo = false)."""
    await determinacion_service.delete_determinacion(db, determinacion_id)
    return SuccessResponse()
