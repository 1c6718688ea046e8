"""
Crea un usuario de prueba para el Portal de Pacientes.

Uso:
    python scripts/crear_paciente_usuario.py [dni] [password]

Si el paciente con ese DNI no existe, lo crea. Si ya hay un usuario de
portal para el DNI, no hace nada.
"""

import asyncio
import sys
from datetime import date
from pathlib import Path

from sqlalchemy import select

# Agregar el directorio raíz al path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.core.security import hash_password  # noqa: E402
from app.database import async_session_factory, dispose_engine  # noqa: E402
from app.models.paciente import Paciente  # noqa: E402
from app.models.paciente_usuario import PacienteUsuario  # noqa: E402

DNI_PRUEBA = "12345678"
PASSWORD_PRUEBA = "test123"
NOMBRE_PRUEBA = "Juan Pérez"


async def crear_usuario_paciente(dni: str, password: str) -> None:
    """Crea paciente (si falta) y su usuario de portal."""
    async with async_session_factory() as db:
        paciente = await db.scalar(
            select(Paciente).where(Paciente.dni == dni).order_by(Paciente.id).limit(1)
        )
        if paciente is None:
            print("📝 Creando registro de paciente...")
            paciente = Paciente(
                dni=dni,
                apellido_nombre=NOMBRE_PRUEBA,
                fecha_nacimiento=date(1990, 1, 1),
                telefono="2611234567",
                email="juan.perez@example.com",
            )
            db.add(paciente)
            await db.flush()
            print(f"✅ Paciente creado con ID: {paciente.id}")
        else:
            print(f"✅ Paciente ya existe con ID: {paciente.id}")

        existing = await db.scalar(
            select(PacienteUsuario.id).where(PacienteUsuario.dni == dni)
        )
        if existing is not None:
            print(f"⚠️  Ya existe un usuario con DNI {dni}")
            await db.commit()
            return

        db.add(
            PacienteUsuario(
                dni=dni,
                password_hash=hash_password(password),
                id_paciente=paciente.id,
                activo=True,
            )
        )
        await db.commit()

    print("✅ Usuario creado exitosamente!\n")
    print("═" * 50)
    print("📋 CREDENCIALES DE PRUEBA:")
    print(f"   DNI:         {dni}")
    print(f"   Contraseña:  {password}")
    print(f"   Paciente:    {paciente.apellido_nombre}")
    print("═" * 50)


async def main() -> None:
    dni = sys.argv[1] if len(sys.argv) > 1 else DNI_PRUEBA
    password = sys.argv[2] if len(sys.argv) > 2 else PASSWORD_PRUEBA
    try:
        await crear_usuario_paciente(dni, password)
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
