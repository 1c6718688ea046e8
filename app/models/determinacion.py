"""
Modelo Determinacion — Catálogo de determinaciones (prácticas NBU).

Las determinaciones "perfil" agrupan otras por código (hijos_nbu).
La baja es lógica: activo=False.
"""

import enum

from sqlalchemy import Boolean, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class TipoResultado(str, enum.Enum):
    """Tipo de valor que se carga como resultado."""
    NUMERICO = "numerico"
    TEXTO = "texto"
    LISTA = "lista"


class Determinacion(Base):
    __tablename__ = "determinaciones"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nbu: Mapped[str] = mapped_column(
        String(20), nullable=False, unique=True,
        comment="Código del Nomenclador Bioquímico Único"
    )
    nombre: Mapped[str] = mapped_column(String(200), nullable=False)
    ub: Mapped[str | None] = mapped_column(String(20), comment="Unidades bioquímicas")
    metodo: Mapped[str | None] = mapped_column(String(200))

    # ── Perfiles ─────────────────────────────────────
    es_perfil: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    hijos_nbu: Mapped[str | None] = mapped_column(
        Text, comment="Códigos NBU de las determinaciones hijas, separados por coma"
    )

    # ── Resultado ────────────────────────────────────
    tipo_resultado: Mapped[TipoResultado] = mapped_column(
        Enum(TipoResultado, values_callable=lambda e: [m.value for m in e]),
        default=TipoResultado.NUMERICO,
        nullable=False,
    )
    unidades_resultado: Mapped[str | None] = mapped_column(String(50))
    valores_referencia: Mapped[str | None] = mapped_column(Text)
    opciones_lista: Mapped[str | None] = mapped_column(
        Text, comment="Opciones válidas para tipo 'lista', separadas por coma"
    )

    activo: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Determinacion {self.nbu}: {self.nombre}>"
