"""
Endpoints de órdenes de laboratorio y carga de resultados.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.common import SuccessResponse
from app.schemas.orden import (
    OrdenCreate,
    OrdenCreatedResponse,
    OrdenDetalleResponse,
    OrdenListItem,
    ResultadosUpdate,
)
from app.services import orden_service

router = APIRouter()


@router.get("", response_model=list[OrdenListItem])
async def list_ordenes(db: AsyncSession = Depends(get_db)):
    """Lista las órdenes, más recientes primero."""
    return await orden_service.list_ordenes(db)


@router.get("/{orden_id}", response_model=OrdenDetalleResponse)
async def get_orden(
    orden_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Detalle de la orden con sus resultados guardados."""
    return await orden_service.get_orden_detalle(db, orden_id)


@router.post("", response_model=OrdenCreatedResponse, status_code=201)
async def create_orden(
    data: OrdenCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Crea una orden. Busca o crea el paciente (por DNI) y el médico
    (por matrícula), y genera un resultado Pendiente por determinación.
    """
    orden = await orden_service.create_orden(db, data)
    return OrdenCreatedResponse(id=orden.id, protocolo=orden.protocolo)


@router.put("/{orden_id}/resultados", response_model=SuccessResponse)
async def update_resultados(
    orden_id: int,
    data: ResultadosUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Guarda los resultados de la orden (reemplaza el listado completo)."""
    await orden_service.update_resultados(db, orden_id, data)
    return SuccessResponse()
