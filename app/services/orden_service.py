"""
Servicio de órdenes: alta de órdenes y carga/conciliación de resultados.

Ciclo de vida de una orden:
- Alta: se crea en estado Pendiente con un resultado vacío (Pendiente)
  por cada determinación pedida.
- Carga de resultados: el listado recibido reemplaza al guardado. Los
  resultados existentes se actualizan, los nuevos se insertan como
  Cargado y los que no vienen en el listado se eliminan. La orden pasa
  a En Proceso (una orden Completado nunca retrocede).
"""

import logging
import random
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config import get_settings
from app.core.exceptions import NotFoundException
from app.models.medico import MATRICULA_SIN_DATO, Medico
from app.models.orden import EstadoOrden, Orden
from app.models.paciente import Paciente
from app.models.resultado import EstadoResultado, Resultado
from app.models.determinacion import TipoResultado
from app.schemas.orden import (
    OrdenCreate,
    OrdenDetalleResponse,
    OrdenListItem,
    ResultadoGuardado,
    ResultadosUpdate,
)
from app.services import determinacion_service

logger = logging.getLogger(__name__)
settings = get_settings()


# ── Protocolo ────────────────────────────────────────


def generate_protocolo(now: datetime | None = None) -> str:
    """Genera un protocolo YYYYMMDD + sufijo aleatorio 100-999."""
    now = now or datetime.now(timezone.utc)
    return f"{now:%Y%m%d}{random.randint(100, 999)}"


async def _next_protocolo(db: AsyncSession) -> str:
    """
    Genera un protocolo evitando los ya usados.
    Tras PROTOCOLO_MAX_INTENTOS colisiones se acepta el último generado.
    """
    protocolo = generate_protocolo()
    for _ in range(settings.PROTOCOLO_MAX_INTENTOS):
        existing = await db.scalar(
            select(Orden.id).where(Orden.protocolo == protocolo).limit(1)
        )
        if existing is None:
            return protocolo
        protocolo = generate_protocolo()
    logger.warning("Protocolo %s repetido tras %d intentos", protocolo, settings.PROTOCOLO_MAX_INTENTOS)
    return protocolo


# ── Paciente y médico de la orden ────────────────────


async def _resolve_paciente(db: AsyncSession, data: OrdenCreate) -> Paciente:
    """Busca el paciente por DNI; si no hay DNI o no existe, lo crea."""
    paciente = None
    if data.dni_paciente:
        paciente = await db.scalar(
            select(Paciente)
            .where(Paciente.dni == data.dni_paciente)
            .order_by(Paciente.id)
            .limit(1)
        )

    if paciente is None:
        paciente = Paciente(**data.paciente_fields())
        db.add(paciente)
        await db.flush()
    return paciente


async def _resolve_medico(
    db: AsyncSession, nombre: str | None, matricula: str | None
) -> Medico | None:
    """Busca el médico por matrícula o lo crea. Sin nombre no hay médico."""
    if not nombre:
        return None

    medico = None
    if matricula:
        medico = await db.scalar(
            select(Medico).where(Medico.matricula == matricula).order_by(Medico.id).limit(1)
        )

    if medico is None:
        medico = Medico(matricula=matricula, nombre_completo=nombre)
        db.add(medico)
        await db.flush()
    return medico


# ── Alta de orden ────────────────────────────────────


async def create_orden(db: AsyncSession, data: OrdenCreate) -> Orden:
    """Crea la orden en estado Pendiente con sus resultados vacíos."""
    paciente = await _resolve_paciente(db, data)
    medico = await _resolve_medico(db, data.nombre_medico, data.matricula_medico)
    protocolo = await _next_protocolo(db)

    # Un resultado por código; los repetidos se cargan una sola vez
    codigos = list(dict.fromkeys(data.lista_determinaciones))

    orden = Orden(
        protocolo=protocolo,
        id_paciente=paciente.id,
        id_medico=medico.id if medico else None,
        lista_determinaciones_nbu=list(data.lista_determinaciones),
        estado=EstadoOrden.PENDIENTE,
        resultados=[
            Resultado(nbu=nbu, estado=EstadoResultado.PENDIENTE) for nbu in codigos
        ],
    )
    db.add(orden)
    await db.flush()

    logger.info(
        "Orden creada: id=%s protocolo=%s paciente=%s determinaciones=%d",
        orden.id, protocolo, paciente.id, len(codigos),
    )
    return orden


# ── Consulta ─────────────────────────────────────────


async def get_orden(db: AsyncSession, orden_id: int) -> Orden:
    """Obtiene una orden con paciente, médico y resultados cargados."""
    orden = await db.scalar(
        select(Orden)
        .where(Orden.id == orden_id)
        .options(
            selectinload(Orden.paciente),
            selectinload(Orden.medico),
            selectinload(Orden.resultados),
        )
        .execution_options(populate_existing=True)
    )
    if not orden:
        raise NotFoundException(detail="Orden no encontrada")
    return orden


async def list_ordenes(db: AsyncSession) -> list[OrdenListItem]:
    """Lista todas las órdenes, más recientes primero."""
    result = await db.execute(
        select(Orden)
        .options(selectinload(Orden.paciente), selectinload(Orden.medico))
        .order_by(Orden.fecha_creacion.desc(), Orden.id.desc())
    )
    return [
        OrdenListItem(
            id=o.id,
            protocolo=o.protocolo,
            fecha_creacion=o.fecha_creacion,
            estado=o.estado,
            apellido_nombre=o.paciente.apellido_nombre if o.paciente else "",
            dni=(o.paciente.dni if o.paciente else None) or "",
            medico_nombre=o.medico.nombre_completo if o.medico else None,
        )
        for o in result.scalars().all()
    ]


async def get_orden_detalle(db: AsyncSession, orden_id: int) -> OrdenDetalleResponse:
    """
    Detalle de una orden para la pantalla de carga: datos del paciente,
    resultados guardados enriquecidos con el catálogo y el id de la
    siguiente orden pendiente.
    """
    orden = await get_orden(db, orden_id)
    paciente = orden.paciente
    catalogo = await determinacion_service.get_catalogo(
        db, [r.nbu for r in orden.resultados]
    )

    guardados = []
    for r in orden.resultados:
        det = catalogo.get(r.nbu)
        guardados.append(
            ResultadoGuardado(
                nbu=r.nbu,
                valor=r.valor,
                estado=r.estado,
                nombre=det.nombre if det else r.nbu,
                tipo=det.tipo_resultado if det else TipoResultado.NUMERICO,
                unidades=(det.unidades_resultado if det else None) or "",
                vr=(det.valores_referencia if det else None) or "",
                opciones_lista=(det.opciones_lista if det else None) or "",
                es_perfil=det.es_perfil if det else False,
                hijos_nbu=(det.hijos_nbu if det else None) or "",
            )
        )

    siguiente_id = await db.scalar(
        select(Orden.id)
        .where(Orden.id > orden_id, Orden.estado == EstadoOrden.PENDIENTE)
        .order_by(Orden.id.asc())
        .limit(1)
    )

    return OrdenDetalleResponse(
        id=orden.id,
        protocolo=orden.protocolo,
        estado=orden.estado,
        fecha_creacion=orden.fecha_creacion,
        lista_determinaciones_nbu=orden.lista_determinaciones_nbu or [],
        apellido_nombre=paciente.apellido_nombre,
        dni=paciente.dni or "",
        email=paciente.email or "",
        obra_social=paciente.obra_social or "",
        domicilio=paciente.domicilio or "",
        telefono=paciente.telefono or "",
        nro_afiliado=paciente.nro_afiliado or "",
        fecha_nacimiento=paciente.fecha_nacimiento or "",
        medico_nombre=orden.medico.nombre_completo if orden.medico else "",
        resultados_guardados=guardados,
        siguiente_id=siguiente_id,
    )


# ── Carga de resultados ──────────────────────────────


async def update_resultados(
    db: AsyncSession, orden_id: int, data: ResultadosUpdate
) -> Orden:
    """
    Concilia el listado de resultados recibido contra el guardado.

    - Actualiza los datos del paciente si vienen (último en escribir gana).
    - Renombra al médico de la orden, o crea uno con matrícula 'S/M'.
    - Upsert por (orden, nbu) y borrado de los nbu ausentes del listado.
    - Deja la orden En Proceso, salvo que ya esté Completado.
    """
    orden = await get_orden(db, orden_id)

    if data.paciente is not None:
        for field, value in data.paciente.paciente_fields().items():
            setattr(orden.paciente, field, value)

        if data.paciente.medico:
            if orden.medico is not None:
                # Renombra el registro compartido del médico
                orden.medico.nombre_completo = data.paciente.medico
            else:
                orden.medico = Medico(
                    matricula=MATRICULA_SIN_DATO,
                    nombre_completo=data.paciente.medico,
                )

    ahora = datetime.now(timezone.utc)
    existentes = {r.nbu: r for r in orden.resultados}
    cargados = 0

    for item in data.resultados:
        resultado = existentes.get(item.nbu)
        if resultado is not None:
            resultado.valor = item.valor
            resultado.estado = EstadoResultado.CARGADO
            resultado.fecha_carga = ahora
        else:
            resultado = Resultado(
                nbu=item.nbu,
                valor=item.valor,
                estado=EstadoResultado.CARGADO,
                fecha_carga=ahora,
            )
            orden.resultados.append(resultado)
            existentes[item.nbu] = resultado
        cargados += 1

    nbus_actuales = {item.nbu for item in data.resultados}
    eliminados = [r for r in orden.resultados if r.nbu not in nbus_actuales]
    for resultado in eliminados:
        orden.resultados.remove(resultado)

    if orden.estado != EstadoOrden.COMPLETADO:
        orden.estado = EstadoOrden.EN_PROCESO

    await db.flush()

    logger.info(
        "Resultados de orden %s guardados: cargados=%d eliminados=%d estado=%s",
        orden.id, cargados, len(eliminados), orden.estado.value,
    )
    return orden
