"""esquema de expedientes, resoluciones y valor de cuotas

Revision ID: 20261019_0001
Revises: 
Create Date: 2026-10-19

"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = inspect(bind)
    tables = set(insp.get_table_names())

    if "pacientes" not in tables:
        op.create_table(
            "pacientes",
            sa.Column("id_paciente", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("documento", sa.String(length=20), nullable=False),
            sa.Column("nombre1", sa.String(length=100), nullable=False),
            sa.Column("apellido1", sa.String(length=100), nullable=False),
            sa.UniqueConstraint("documento", name="uq_pacientes_documento"),
        )

    if "especificaciones" not in tables:
        op.create_table(
            "especificaciones",
            sa.Column("id_especificacion", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("nombre", sa.String(length=120), nullable=False),
            sa.Column("cantidad_cuotas", sa.Integer(), nullable=True),
        )

    if "expedientes" not in tables:
        op.create_table(
            "expedientes",
            sa.Column("id_expediente", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("fecha_inicio", sa.Date(), nullable=False),
            sa.Column("rnt", sa.String(length=50), nullable=True),
            sa.Column("caso_nuevo", sa.Boolean(), nullable=True),
            sa.Column("observaciones", sa.Text(), nullable=True),
            sa.Column("especificacion_id", sa.Integer(), nullable=True),
            sa.Column("paciente_id", sa.Integer(), nullable=True),
            sa.ForeignKeyConstraint(["especificacion_id"], ["especificaciones.id_especificacion"], ondelete="RESTRICT"),
            sa.ForeignKeyConstraint(["paciente_id"], ["pacientes.id_paciente"], ondelete="RESTRICT"),
        )

    if "valor_cuotas" not in tables:
        op.create_table(
            "valor_cuotas",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("anio", sa.Integer(), nullable=False),
            sa.Column("importe", sa.Numeric(10, 2), nullable=False),
            sa.UniqueConstraint("anio", name="uq_valor_cuotas_anio"),
        )

    if "estados_resolucion" not in tables:
        op.create_table(
            "estados_resolucion",
            sa.Column("id_estado_resolucion", sa.Integer(), primary_key=True),
            sa.Column("nombre", sa.String(length=50), nullable=False),
            sa.UniqueConstraint("nombre", name="uq_estados_resolucion_nombre"),
        )

    if "tipos_item_resolucion" not in tables:
        op.create_table(
            "tipos_item_resolucion",
            sa.Column("id_tipo_item", sa.Integer(), primary_key=True),
            sa.Column("nombre", sa.String(length=50), nullable=False),
            sa.UniqueConstraint("nombre", name="uq_tipos_item_resolucion_nombre"),
        )

    if "resoluciones" not in tables:
        op.create_table(
            "resoluciones",
            sa.Column("id_resolucion", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("fecha", sa.Date(), nullable=False),
            sa.Column("descripcion", sa.String(length=500), nullable=True),
            sa.Column("estado_id", sa.Integer(), nullable=False),
            sa.Column("expediente_id", sa.Integer(), nullable=False),
            sa.ForeignKeyConstraint(["estado_id"], ["estados_resolucion.id_estado_resolucion"], ondelete="RESTRICT"),
            sa.ForeignKeyConstraint(["expediente_id"], ["expedientes.id_expediente"], ondelete="CASCADE"),
        )
        op.create_index("ix_resoluciones_expediente_id", "resoluciones", ["expediente_id"], unique=False)

    if "items_resolucion" not in tables:
        op.create_table(
            "items_resolucion",
            sa.Column("id_item_resolucion", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("resolucion_id", sa.Integer(), nullable=False),
            sa.Column("tipo_item_id", sa.Integer(), nullable=False),
            sa.Column("importe", sa.Numeric(10, 2), nullable=False),
            sa.Column("cantidad_cuotas", sa.Integer(), nullable=False),
            sa.Column("cuota_actual_item", sa.Integer(), nullable=True),
            sa.ForeignKeyConstraint(["resolucion_id"], ["resoluciones.id_resolucion"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["tipo_item_id"], ["tipos_item_resolucion.id_tipo_item"], ondelete="RESTRICT"),
            sa.CheckConstraint("cantidad_cuotas >= 1", name="ck_items_resolucion_cantidad"),
            sa.CheckConstraint(
                "cuota_actual_item IS NULL OR (cuota_actual_item >= 0 AND cuota_actual_item <= cantidad_cuotas)",
                name="ck_items_resolucion_progreso",
            ),
        )
        op.create_index("ix_items_resolucion_resolucion_id", "items_resolucion", ["resolucion_id"], unique=False)


def downgrade():
    bind = op.get_bind()
    insp = inspect(bind)
    tables = set(insp.get_table_names())

    if "items_resolucion" in tables:
        op.drop_index("ix_items_resolucion_resolucion_id", table_name="items_resolucion")
        op.drop_table("items_resolucion")
    if "resoluciones" in tables:
        op.drop_index("ix_resoluciones_expediente_id", table_name="resoluciones")
        op.drop_table("resoluciones")

    for table in ("tipos_item_resolucion", "estados_resolucion", "valor_cuotas", "expedientes", "especificaciones", "pacientes"):
        if table in tables:
            op.drop_table(table)
