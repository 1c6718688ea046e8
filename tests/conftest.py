"""
Fixtures compartidas para Pytest.
Configura base de datos de test y clientes HTTP.
"""

from collections.abc import AsyncGenerator
from datetime import date

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.core.security import hash_password
from app.database import Base, get_db
from app.main import app
from app.models.determinacion import Determinacion, TipoResultado
from app.models.medico import Medico
from app.models.paciente import Paciente
from app.models.paciente_usuario import PacienteUsuario

# ── Engine de test (SQLite async) ────────────────────
TEST_DATABASE_URL = "sqlite+aiosqlite:///./test.db"

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
test_session_factory = async_sessionmaker(
    test_engine, class_=AsyncSession, expire_on_commit=False
)

PASSWORD_PORTAL = "test123"


@pytest_asyncio.fixture(autouse=True)
async def setup_database():
    """Crea y destruye las tablas para cada test."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provee una sesión de DB de test."""
    async with test_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Cliente HTTP de test que usa la DB de test."""

    async def _get_test_db():
        yield db_session
        await db_session.commit()

    app.dependency_overrides[get_db] = _get_test_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def paciente(db_session: AsyncSession) -> Paciente:
    """Paciente de test con DNI 12345678."""
    paciente = Paciente(
        dni="12345678",
        apellido_nombre="Pérez, Juan",
        fecha_nacimiento=date(1990, 1, 1),
        telefono="2611234567",
        email="juan.perez@example.com",
        obra_social="OSEP",
    )
    db_session.add(paciente)
    await db_session.commit()
    return paciente


@pytest_asyncio.fixture
async def medico(db_session: AsyncSession) -> Medico:
    medico = Medico(matricula="MP-1234", nombre_completo="Dra. Gómez")
    db_session.add(medico)
    await db_session.commit()
    return medico


@pytest_asyncio.fixture
async def determinaciones(db_session: AsyncSession) -> dict[str, Determinacion]:
    """Catálogo mínimo: glucemia, urea y un perfil."""
    items = [
        Determinacion(
            nbu="GLU",
            nombre="Glucemia",
            tipo_resultado=TipoResultado.NUMERICO,
            unidades_resultado="mg/dl",
            valores_referencia="70 - 110",
        ),
        Determinacion(
            nbu="UREA",
            nombre="Uremia",
            tipo_resultado=TipoResultado.NUMERICO,
            unidades_resultado="mg/dl",
            valores_referencia="15 - 45",
        ),
        Determinacion(
            nbu="HEP",
            nombre="Hepatograma",
            es_perfil=True,
            hijos_nbu="GOT,GPT,FAL",
            tipo_resultado=TipoResultado.TEXTO,
        ),
    ]
    db_session.add_all(items)
    await db_session.commit()
    return {d.nbu: d for d in items}


@pytest_asyncio.fixture
async def usuario_portal(db_session: AsyncSession, paciente: Paciente) -> PacienteUsuario:
    """Usuario de portal activo para el paciente de test."""
    usuario = PacienteUsuario(
        dni=paciente.dni,
        password_hash=hash_password(PASSWORD_PORTAL),
        id_paciente=paciente.id,
        activo=True,
    )
    db_session.add(usuario)
    await db_session.commit()
    return usuario
