"""
Router principal de la API.
Agrupa todos los sub-routers bajo /api.
"""

from fastapi import APIRouter

from app.api.v1.pacientes import router as pacientes_router
from app.api.v1.determinaciones import router as determinaciones_router
from app.api.v1.ordenes import router as ordenes_router
from app.api.v1.portal import router as portal_router
from app.schemas.common import ErrorResponse

api_router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)

api_router.include_router(
    pacientes_router,
    prefix="/pacientes",
    tags=["Pacientes"],
)

api_router.include_router(
    determinaciones_router,
    prefix="/determinaciones",
    tags=["Determinaciones"],
)

api_router.include_router(
    ordenes_router,
    prefix="/ordenes",
    tags=["Órdenes"],
)

api_router.include_router(
    portal_router,
    prefix="/portal",
    tags=["Portal de Pacientes"],
)
