"""
Modelo Paciente — Pacientes del laboratorio.
El DNI es opcional (pacientes sin documento) y no es único.
"""

from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Paciente(Base):
    __tablename__ = "pacientes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # ── Identidad ────────────────────────────────────
    dni: Mapped[str | None] = mapped_column(
        String(20), nullable=True, index=True,
        comment="DNI del paciente; null para pacientes sin documento"
    )
    apellido_nombre: Mapped[str] = mapped_column(String(200), nullable=False)
    fecha_nacimiento: Mapped[date | None] = mapped_column(Date, nullable=True)

    # ── Contacto ─────────────────────────────────────
    telefono: Mapped[str | None] = mapped_column(String(50))
    email: Mapped[str | None] = mapped_column(String(255))
    domicilio: Mapped[str | None] = mapped_column(String(500))

    # ── Cobertura ────────────────────────────────────
    obra_social: Mapped[str | None] = mapped_column(String(200))
    nro_afiliado: Mapped[str | None] = mapped_column(String(100))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )

    # ── Relaciones ───────────────────────────────────
    ordenes: Mapped[list["Orden"]] = relationship(  # noqa: F821
        "Orden", back_populates="paciente"
    )

    def __repr__(self) -> str:
        return f"<Paciente {self.apellido_nombre} ({self.dni or 'S/D'})>"
