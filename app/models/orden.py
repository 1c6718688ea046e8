"""
Modelo Orden — Órdenes de laboratorio.

Ciclo de vida: Pendiente → En Proceso → Completado.
El paso a Completado lo realiza un sistema externo.
"""

import enum
from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class EstadoOrden(str, enum.Enum):
    """Estados del flujo de una orden."""
    PENDIENTE = "Pendiente"       # Creada, sin resultados
    EN_PROCESO = "En Proceso"     # Resultados en carga
    COMPLETADO = "Completado"     # Validada, visible en el portal


class Orden(Base):
    __tablename__ = "ordenes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    protocolo: Mapped[str] = mapped_column(
        String(20), nullable=False, index=True,
        comment="YYYYMMDD + sufijo aleatorio de 3 dígitos"
    )
    id_paciente: Mapped[int] = mapped_column(ForeignKey("pacientes.id"), index=True)
    id_medico: Mapped[int | None] = mapped_column(
        ForeignKey("medicos.id"), nullable=True, index=True
    )

    # Lista original de códigos NBU pedidos (metadato, no normalizado)
    lista_determinaciones_nbu: Mapped[list] = mapped_column(JSON, default=list)

    estado: Mapped[EstadoOrden] = mapped_column(
        Enum(EstadoOrden, values_callable=lambda e: [m.value for m in e]),
        default=EstadoOrden.PENDIENTE,
        index=True,
    )
    fecha_creacion: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        index=True,
    )

    # ── Relaciones ───────────────────────────────────
    paciente: Mapped["Paciente"] = relationship(  # noqa: F821
        "Paciente", back_populates="ordenes"
    )
    medico: Mapped["Medico | None"] = relationship("Medico")  # noqa: F821
    resultados: Mapped[list["Resultado"]] = relationship(  # noqa: F821
        "Resultado",
        back_populates="orden",
        cascade="all, delete-orphan",
        order_by="Resultado.id",
    )

    def __repr__(self) -> str:
        return f"<Orden {self.protocolo} [{self.estado.value}]>"
