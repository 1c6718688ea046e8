"""
Modelo Medico — Médicos solicitantes de órdenes.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

# Matrícula usada cuando el médico se carga solo por nombre
MATRICULA_SIN_DATO = "S/M"


class Medico(Base):
    __tablename__ = "medicos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    matricula: Mapped[str | None] = mapped_column(
        String(50), nullable=True, index=True,
        comment="Matrícula profesional; 'S/M' si se desconoce"
    )
    nombre_completo: Mapped[str] = mapped_column(String(200), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<Medico {self.nombre_completo} ({self.matricula})>"
