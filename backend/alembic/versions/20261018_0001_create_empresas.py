"""create empresas

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20261018_0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TIPO_PESSOA = ("JURIDICA", "FISICA", "ESTRANGEIRA")
PERFIL_EMPRESA = (
    "DESPACHANTE",
    "BENEFICIARIO",
    "CONSIGNATARIO",
    "ARMADOR",
    "AGENTE_CARGA",
    "TRANSPORTADORA",
)
STATUS_EMPRESA = ("PENDENTE", "APROVADA", "REPROVADA")


def upgrade() -> None:
    op.create_table(
        "empresas",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column(
            "tipo_pessoa",
            sa.Enum(*TIPO_PESSOA, name="tipo_pessoa", create_constraint=True),
            nullable=False,
        ),
        sa.Column("razao_social", sa.String(length=255), nullable=True),
        sa.Column("cnpj", sa.String(length=14), nullable=True),
        sa.Column("nome", sa.String(length=255), nullable=True),
        sa.Column("cpf", sa.String(length=11), nullable=True),
        sa.Column("identificador_estrangeiro", sa.String(length=100), nullable=True),
        sa.Column("nome_fantasia", sa.String(length=255), nullable=False),
        sa.Column(
            "perfil",
            sa.Enum(*PERFIL_EMPRESA, name="perfil_empresa", create_constraint=True),
            nullable=False,
        ),
        sa.Column(
            "faturamento_direto",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        sa.Column(
            "status",
            sa.Enum(*STATUS_EMPRESA, name="status_empresa", create_constraint=True),
            server_default="PENDENTE",
            nullable=False,
        ),
        sa.Column("documento_comprobatorio", sa.Text(), nullable=False),
        sa.Column("documento_opcional", sa.Text(), nullable=True),
        sa.Column("motivo_reprovacao", sa.Text(), nullable=True),
        sa.Column("usuario_responsavel", sa.String(length=255), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_empresas_created_at", "empresas", ["created_at"], unique=False)
    op.create_index("ix_empresas_status", "empresas", ["status"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_empresas_status", table_name="empresas")
    op.drop_index("ix_empresas_created_at", table_name="empresas")
    op.drop_table("empresas")
    sa.Enum(name="status_empresa").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="perfil_empresa").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="tipo_pessoa").drop(op.get_bind(), checkfirst=True)
