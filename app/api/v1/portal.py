"""
Endpoints del portal de pacientes.
El acceso se valida por DNI; no usa tokens de sesión.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.portal import (
    PortalLoginRequest,
    PortalLoginResponse,
    PortalOrdenDetalle,
    PortalOrdenItem,
    PortalRegistroRequest,
    PortalRegistroResponse,
)
from app.services import portal_service

router = APIRouter()


@router.post("/login", response_model=PortalLoginResponse)
async def login(
    data: PortalLoginRequest,
    db: AsyncSession = Depends(get_db),
):
    """Login del paciente con DNI y contraseña."""
    return await portal_service.login(db, data)


@router.get("/resultados/{dni}", response_model=list[PortalOrdenItem])
async def list_resultados(
    dni: str,
    db: AsyncSession = Depends(get_db),
):
    """Órdenes completadas del paciente."""
    return await portal_service.list_resultados(db, dni)


@router.get("/orden/{orden_id}", response_model=PortalOrdenDetalle)
async def get_orden(
    orden_id: int,
    dni: str | None = Query(None, description="DNI del paciente dueño de la orden"),
    db: AsyncSession = Depends(get_db),
):
    return await portal_service.get_orden(db, orden_id, dni)


@router.post("/registro", response_model=PortalRegistroResponse, status_code=201)
async def registro(
    data: PortalRegistroRequest,
    db: AsyncSession = Depends(get_db),
):
    """Crea el usuario de portal para un paciente existente."""
    return await portal_service.registrar(db, data)
