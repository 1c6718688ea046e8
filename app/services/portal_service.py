"""
Servicio del portal de pacientes.

El paciente accede con DNI + contraseña. Un DNI desconocido, una
credencial inactiva y una contraseña incorrecta producen el mismo error.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import (
    ConflictException,
    CredentialsException,
    NotFoundException,
    ValidationException,
)
from app.core.security import hash_password, verify_password
from app.models.orden import EstadoOrden, Orden
from app.models.paciente import Paciente
from app.models.paciente_usuario import PacienteUsuario
from app.schemas.portal import (
    PacientePortal,
    PortalLoginRequest,
    PortalLoginResponse,
    PortalOrdenDetalle,
    PortalOrdenItem,
    PortalRegistroRequest,
    PortalRegistroResponse,
    PortalResultado,
)
from app.services import determinacion_service

logger = logging.getLogger(__name__)

MEDICO_SIN_ESPECIFICAR = "Sin especificar"
_USUARIO_DUPLICADO = "Ya existe un usuario con este DNI"


async def login(db: AsyncSession, data: PortalLoginRequest) -> PortalLoginResponse:
    """Valida DNI + contraseña y registra el último acceso."""
    if not data.dni or not data.password:
        raise ValidationException("DNI y contraseña son requeridos")

    usuario = await db.scalar(
        select(PacienteUsuario)
        .where(PacienteUsuario.dni == data.dni, PacienteUsuario.activo.is_(True))
        .options(selectinload(PacienteUsuario.paciente))
    )

    if not usuario:
        logger.warning("Login de portal fallido: sin usuario activo para dni=%s", data.dni)
        raise CredentialsException()

    if not verify_password(data.password, usuario.password_hash):
        logger.warning("Login de portal fallido: contraseña incorrecta para dni=%s", data.dni)
        raise CredentialsException()

    usuario.ultimo_acceso = datetime.now(timezone.utc)
    await db.flush()

    paciente = usuario.paciente
    return PortalLoginResponse(
        paciente=PacientePortal(
            id=paciente.id,
            nombre=paciente.apellido_nombre,
            dni=usuario.dni,
            email=paciente.email,
            telefono=paciente.telefono,
        )
    )


async def registrar(
    db: AsyncSession, data: PortalRegistroRequest
) -> PortalRegistroResponse:
    """Crea la credencial de portal de un paciente existente."""
    if not data.dni or not data.password or data.id_paciente is None:
        raise ValidationException("Datos incompletos")

    paciente = await db.get(Paciente, data.id_paciente)
    if not paciente:
        raise NotFoundException(detail="Paciente no encontrado")

    if paciente.dni != data.dni:
        raise ValidationException("DNI no coincide con el paciente")

    existing = await db.scalar(
        select(PacienteUsuario.id).where(PacienteUsuario.dni == data.dni)
    )
    if existing is not None:
        raise ConflictException(_USUARIO_DUPLICADO)

    usuario = PacienteUsuario(
        dni=data.dni,
        password_hash=hash_password(data.password),
        id_paciente=paciente.id,
        activo=True,
    )
    db.add(usuario)
    try:
        await db.flush()
    except IntegrityError as exc:
        raise ConflictException(_USUARIO_DUPLICADO) from exc

    logger.info("Usuario de portal creado para paciente %s", paciente.id)
    return PortalRegistroResponse(message="Usuario creado exitosamente")


async def list_resultados(db: AsyncSession, dni: str) -> list[PortalOrdenItem]:
    """Órdenes completadas del paciente, más recientes primero."""
    result = await db.execute(select(Paciente.id).where(Paciente.dni == dni))
    paciente_ids = list(result.scalars().all())
    if not paciente_ids:
        raise NotFoundException(detail="Paciente no encontrado")

    result = await db.execute(
        select(Orden)
        .where(
            Orden.id_paciente.in_(paciente_ids),
            Orden.estado == EstadoOrden.COMPLETADO,
        )
        .options(selectinload(Orden.medico))
        .order_by(Orden.fecha_creacion.desc(), Orden.id.desc())
    )
    return [
        PortalOrdenItem(
            protocolo=o.protocolo,
            fecha=o.fecha_creacion,
            medico=o.medico.nombre_completo if o.medico else MEDICO_SIN_ESPECIFICAR,
            estado=o.estado,
            id_orden=o.id,
        )
        for o in result.scalars().all()
    ]


async def get_orden(
    db: AsyncSession, orden_id: int, dni: str | None
) -> PortalOrdenDetalle:
    """Detalle de una orden, solo si pertenece al paciente con ese DNI."""
    if not dni:
        raise ValidationException("DNI es requerido")

    orden = await db.scalar(
        select(Orden)
        .join(Orden.paciente)
        .where(Orden.id == orden_id, Paciente.dni == dni)
        .options(
            selectinload(Orden.paciente),
            selectinload(Orden.medico),
            selectinload(Orden.resultados),
        )
    )
    if not orden:
        raise NotFoundException(detail="Orden no encontrada o no tiene acceso")

    catalogo = await determinacion_service.get_catalogo(
        db, [r.nbu for r in orden.resultados]
    )
    resultados = []
    for r in orden.resultados:
        det = catalogo.get(r.nbu)
        resultados.append(
            PortalResultado(
                nbu=r.nbu,
                nombre=det.nombre if det else r.nbu,
                valor=r.valor,
                unidades=(det.unidades_resultado if det else None) or "",
                valores_referencia=(det.valores_referencia if det else None) or "",
            )
        )

    return PortalOrdenDetalle(
        protocolo=orden.protocolo,
        fecha=orden.fecha_creacion,
        paciente=orden.paciente.apellido_nombre,
        medico=orden.medico.nombre_completo if orden.medico else MEDICO_SIN_ESPECIFICAR,
        resultados=resultados,
    )
