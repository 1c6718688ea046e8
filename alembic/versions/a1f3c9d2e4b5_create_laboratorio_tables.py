"""Create laboratorio tables

Pacientes, médicos, catálogo de determinaciones, órdenes, resultados
y usuarios del portal de pacientes.

Revision ID: a1f3c9d2e4b5
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "a1f3c9d2e4b5"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

estado_orden = sa.Enum("Pendiente", "En Proceso", "Completado", name="estadoorden")
estado_resultado = sa.Enum("Pendiente", "Cargado", name="estadoresultado")
tipo_resultado = sa.Enum("numerico", "texto", "lista", name="tiporesultado")


def upgrade() -> None:
    # ── pacientes ────────────────────────────────────
    op.create_table(
        "pacientes",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("dni", sa.String(20), nullable=True, comment="DNI del paciente; null para pacientes sin documento"),
        sa.Column("apellido_nombre", sa.String(200), nullable=False),
        sa.Column("fecha_nacimiento", sa.Date(), nullable=True),
        sa.Column("telefono", sa.String(50), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("domicilio", sa.String(500), nullable=True),
        sa.Column("obra_social", sa.String(200), nullable=True),
        sa.Column("nro_afiliado", sa.String(100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_pacientes_dni", "pacientes", ["dni"])

    # ── medicos ──────────────────────────────────────
    op.create_table(
        "medicos",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("matricula", sa.String(50), nullable=True, comment="Matrícula profesional; 'S/M' si se desconoce"),
        sa.Column("nombre_completo", sa.String(200), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_medicos_matricula", "medicos", ["matricula"])

    # ── determinaciones ──────────────────────────────
    op.create_table(
        "determinaciones",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("nbu", sa.String(20), nullable=False, unique=True, comment="Código del Nomenclador Bioquímico Único"),
        sa.Column("nombre", sa.String(200), nullable=False),
        sa.Column("ub", sa.String(20), nullable=True),
        sa.Column("metodo", sa.String(200), nullable=True),
        sa.Column("es_perfil", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("hijos_nbu", sa.Text(), nullable=True),
        sa.Column("tipo_resultado", tipo_resultado, nullable=False, server_default="numerico"),
        sa.Column("unidades_resultado", sa.String(50), nullable=True),
        sa.Column("valores_referencia", sa.Text(), nullable=True),
        sa.Column("opciones_lista", sa.Text(), nullable=True),
        sa.Column("activo", sa.Boolean(), nullable=False, server_default=sa.text("true")),
    )

    # ── ordenes ──────────────────────────────────────
    op.create_table(
        "ordenes",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("protocolo", sa.String(20), nullable=False),
        sa.Column("id_paciente", sa.Integer(), sa.ForeignKey("pacientes.id"), nullable=False),
        sa.Column("id_medico", sa.Integer(), sa.ForeignKey("medicos.id"), nullable=True),
        sa.Column("lista_determinaciones_nbu", sa.JSON(), nullable=True),
        sa.Column("estado", estado_orden, nullable=False, server_default="Pendiente"),
        sa.Column("fecha_creacion", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_ordenes_protocolo", "ordenes", ["protocolo"])
    op.create_index("ix_ordenes_id_paciente", "ordenes", ["id_paciente"])
    op.create_index("ix_ordenes_id_medico", "ordenes", ["id_medico"])
    op.create_index("ix_ordenes_estado", "ordenes", ["estado"])
    op.create_index("ix_ordenes_fecha_creacion", "ordenes", ["fecha_creacion"])

    # ── resultados ───────────────────────────────────
    op.create_table(
        "resultados",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("id_orden", sa.Integer(), sa.ForeignKey("ordenes.id"), nullable=False),
        sa.Column("nbu", sa.String(20), nullable=False),
        sa.Column("valor", sa.Text(), nullable=True),
        sa.Column("estado", estado_resultado, nullable=False, server_default="Pendiente"),
        sa.Column("fecha_carga", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("id_orden", "nbu", name="uq_resultado_orden_nbu"),
    )
    op.create_index("ix_resultados_id_orden", "resultados", ["id_orden"])

    # ── pacientes_usuarios ───────────────────────────
    op.create_table(
        "pacientes_usuarios",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("dni", sa.String(20), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("id_paciente", sa.Integer(), sa.ForeignKey("pacientes.id"), nullable=False),
        sa.Column("activo", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("ultimo_acceso", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_pacientes_usuarios_id_paciente", "pacientes_usuarios", ["id_paciente"])


def downgrade() -> None:
    op.drop_index("ix_pacientes_usuarios_id_paciente", table_name="pacientes_usuarios")
    op.drop_table("pacientes_usuarios")
    op.drop_index("ix_resultados_id_orden", table_name="resultados")
    op.drop_table("resultados")
    for index in (
        "ix_ordenes_fecha_creacion",
        "ix_ordenes_estado",
        "ix_ordenes_id_medico",
        "ix_ordenes_id_paciente",
        "ix_ordenes_protocolo",
    ):
        op.drop_index(index, table_name="ordenes")
    op.drop_table("ordenes")
    op.drop_table("determinaciones")
    op.drop_index("ix_medicos_matricula", table_name="medicos")
    op.drop_table("medicos")
    op.drop_index("ix_pacientes_dni", table_name="pacientes")
    op.drop_table("pacientes")

    estado_resultado.drop(op.get_bind(), checkfirst=True)
    estado_orden.drop(op.get_bind(), checkfirst=True)
    tipo_resultado.drop(op.get_bind(), checkfirst=True)
