"""
Modelo Resultado — Valor de una determinación dentro de una orden.
Único por (id_orden, nbu).
"""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class EstadoResultado(str, enum.Enum):
    PENDIENTE = "Pendiente"
    CARGADO = "Cargado"


class Resultado(Base):
    __tablename__ = "resultados"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_orden: Mapped[int] = mapped_column(ForeignKey("ordenes.id"), index=True)
    nbu: Mapped[str] = mapped_column(String(20), nullable=False)
    valor: Mapped[str | None] = mapped_column(Text, nullable=True)
    estado: Mapped[EstadoResultado] = mapped_column(
        Enum(EstadoResultado, values_callable=lambda e: [m.value for m in e]),
        default=EstadoResultado.PENDIENTE,
    )
    fecha_carga: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    orden: Mapped["Orden"] = relationship(  # noqa: F821
        "Orden", back_populates="resultados"
    )

    __table_args__ = (
        UniqueConstraint("id_orden", "nbu", name="uq_resultado_orden_nbu"),
    )

    def __repr__(self) -> str:
        return f"<Resultado orden={self.id_orden} {self.nbu}={self.valor}>"
