"""
Modelo PacienteUsuario — Credenciales del portal de pacientes.
Una por DNI; el acceso al portal se valida por DNI + contraseña.
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class PacienteUsuario(Base):
    __tablename__ = "pacientes_usuarios"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    dni: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    id_paciente: Mapped[int] = mapped_column(ForeignKey("pacientes.id"), index=True)
    activo: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    ultimo_acceso: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )

    paciente: Mapped["Paciente"] = relationship("Paciente")  # noqa: F821

    def __repr__(self) -> str:
        return f"<PacienteUsuario {self.dni}>"
