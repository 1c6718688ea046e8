"""
Tests unitarios del servicio de órdenes (sin pasar por HTTP).
"""

from datetime import datetime

import pytest

from app.core.exceptions import NotFoundException
from app.models.orden import EstadoOrden, Orden
from app.models.resultado import EstadoResultado
from app.schemas.orden import OrdenCreate, ResultadoCarga, ResultadosUpdate
from app.services import orden_service


def _orden_create(**overrides) -> OrdenCreate:
    data = {
        "dni_paciente": "30111222",
        "apellido_nombre": "García, Ana",
        "lista_determinaciones": ["GLU", "UREA"],
    }
    data.update(overrides)
    return OrdenCreate(**data)


class TestProtocolo:

    def test_formato_fecha_mas_sufijo(self):
        protocolo = orden_service.generate_protocolo(datetime(2026, 3, 7, 23, 59))

        assert protocolo.startswith("20260307")
        assert len(protocolo) == 11
        assert 100 <= int(protocolo[8:]) <= 999

    async def test_evita_protocolo_existente(self, db_session, monkeypatch):
        await orden_service.create_orden(db_session, _orden_create())
        existente = (await orden_service.list_ordenes(db_session))[0].protocolo

        candidatos = iter([existente, "20260101555"])
        monkeypatch.setattr(orden_service, "generate_protocolo", lambda: next(candidatos))

        orden = await orden_service.create_orden(db_session, _orden_create())
        assert orden.protocolo == "20260101555"


class TestCreateOrden:

    async def test_resultados_pendientes(self, db_session):
        orden = await orden_service.create_orden(db_session, _orden_create())
        await db_session.commit()

        orden = await orden_service.get_orden(db_session, orden.id)
        assert orden.estado == EstadoOrden.PENDIENTE
        assert [(r.nbu, r.estado, r.valor) for r in orden.resultados] == [
            ("GLU", EstadoResultado.PENDIENTE, None),
            ("UREA", EstadoResultado.PENDIENTE, None),
        ]
        assert orden.paciente.dni == "30111222"
        assert orden.medico is None


class TestUpdateResultados:

    async def test_upsert_y_borrado(self, db_session):
        orden = await orden_service.create_orden(
            db_session, _orden_create(lista_determinaciones=["GLU", "UREA", "COL"])
        )

        await orden_service.update_resultados(
            db_session,
            orden.id,
            ResultadosUpdate(resultados=[
                ResultadoCarga(nbu="UREA", valor="30"),
                ResultadoCarga(nbu="TSH", valor="2.1"),
            ]),
        )
        await db_session.commit()

        orden = await orden_service.get_orden(db_session, orden.id)
        assert {(r.nbu, r.valor, r.estado) for r in orden.resultados} == {
            ("UREA", "30", EstadoResultado.CARGADO),
            ("TSH", "2.1", EstadoResultado.CARGADO),
        }
        assert orden.estado == EstadoOrden.EN_PROCESO

    async def test_nbu_repetido_en_la_carga_gana_el_ultimo(self, db_session):
        orden = await orden_service.create_orden(db_session, _orden_create())

        await orden_service.update_resultados(
            db_session,
            orden.id,
            ResultadosUpdate(resultados=[
                ResultadoCarga(nbu="GLU", valor="90"),
                ResultadoCarga(nbu="GLU", valor="91"),
            ]),
        )

        orden = await orden_service.get_orden(db_session, orden.id)
        assert [(r.nbu, r.valor) for r in orden.resultados] == [("GLU", "91")]

    async def test_en_proceso_se_mantiene(self, db_session):
        orden = await orden_service.create_orden(db_session, _orden_create())
        carga = ResultadosUpdate(resultados=[ResultadoCarga(nbu="GLU", valor="90")])

        await orden_service.update_resultados(db_session, orden.id, carga)
        orden = await orden_service.update_resultados(db_session, orden.id, carga)

        assert orden.estado == EstadoOrden.EN_PROCESO

    async def test_orden_inexistente(self, db_session):
        with pytest.raises(NotFoundException) as exc_info:
            await orden_service.update_resultados(
                db_session, 12345, ResultadosUpdate(resultados=[])
            )

        assert exc_info.value.status_code == 404
        assert await db_session.get(Orden, 12345) is None
