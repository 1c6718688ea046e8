"""
Servicio del catálogo de determinaciones: CRUD con baja lógica.
"""

import logging
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    ConflictException,
    NotFoundException,
    ValidationException,
)
from app.models.determinacion import Determinacion, TipoResultado
from app.schemas.determinacion import DeterminacionCreate, DeterminacionUpdate

logger = logging.getLogger(__name__)

_NBU_DUPLICADO = "Ya existe una determinación con ese NBU"

# Columnas NOT NULL que un update parcial no puede vaciar
_CAMPOS_REQUERIDOS = ("nbu", "nombre", "es_perfil", "tipo_resultado")


async def list_determinaciones(db: AsyncSession) -> list[Determinacion]:
    """Lista las determinaciones activas ordenadas por nombre."""
    result = await db.execute(
        select(Determinacion)
        .where(Determinacion.activo.is_(True))
        .order_by(Determinacion.nombre.asc())
    )
    return list(result.scalars().all())


async def get_determinacion(db: AsyncSession, determinacion_id: int) -> Determinacion:
    determinacion = await db.get(Determinacion, determinacion_id)
    if not determinacion:
        raise NotFoundException(detail="Determinación no encontrada")
    return determinacion


async def get_catalogo(
    db: AsyncSession, nbus: Iterable[str]
) -> dict[str, Determinacion]:
    """Determinaciones indexadas por NBU (incluye las dadas de baja)."""
    codigos = set(nbus)
    if not codigos:
        return {}
    result = await db.execute(
        select(Determinacion).where(Determinacion.nbu.in_(codigos))
    )
    return {d.nbu: d for d in result.scalars().all()}


async def _nbu_en_uso(
    db: AsyncSession, nbu: str, exclude_id: int | None = None
) -> bool:
    query = select(Determinacion.id).where(Determinacion.nbu == nbu)
    if exclude_id is not None:
        query = query.where(Determinacion.id != exclude_id)
    return (await db.scalar(query.limit(1))) is not None


async def _flush_unique(db: AsyncSession) -> None:
    """Flush traduciendo la violación del índice único de NBU a 409."""
    try:
        await db.flush()
    except IntegrityError as exc:
        mensaje = str(exc.orig).lower()
        if "unique" in mensaje and "nbu" in mensaje:
            raise ConflictException(_NBU_DUPLICADO) from exc
        raise


async def create_determinacion(
    db: AsyncSession, data: DeterminacionCreate
) -> Determinacion:
    """Crea una determinación activa. El NBU debe ser único."""
    if await _nbu_en_uso(db, data.nbu):
        raise ConflictException(_NBU_DUPLICADO)

    determinacion = Determinacion(
        **data.model_dump(exclude={"es_perfil", "tipo_resultado"}),
        es_perfil=data.es_perfil or False,
        tipo_resultado=data.tipo_resultado or TipoResultado.NUMERICO,
        activo=True,
    )
    db.add(determinacion)
    await _flush_unique(db)

    logger.info("Determinación creada: %s (%s)", determinacion.nbu, determinacion.nombre)
    return determinacion


async def update_determinacion(
    db: AsyncSession, determinacion_id: int, data: DeterminacionUpdate
) -> Determinacion:
    """Actualiza solo los campos enviados."""
    determinacion = await get_determinacion(db, determinacion_id)
    update_data = data.model_dump(exclude_unset=True)

    for campo in _CAMPOS_REQUERIDOS:
        if campo in update_data and update_data[campo] is None:
            raise ValidationException(f"El campo {campo} es requerido")

    nbu = update_data.get("nbu")
    if nbu and nbu != determinacion.nbu and await _nbu_en_uso(db, nbu, determinacion.id):
        raise ConflictException(_NBU_DUPLICADO)

    for key, value in update_data.items():
        setattr(determinacion, key, value)

    await _flush_unique(db)
    return determinacion


async def delete_determinacion(db: AsyncSession, determinacion_id: int) -> None:
    """Baja lógica: la determinación deja de listarse pero se conserva."""
    determinacion = await get_determinacion(db, determinacion_id)
    determinacion.activo = False
    await db.flush()
    logger.info("Determinación dada de baja: %s", determinacion.nbu)
