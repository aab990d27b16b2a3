"""create usuarios and tokens_revogados

Revision ID: 20261018_0001
Revises: 
Create Date: 2026-10-18

"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision = "20261018_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = inspect(bind)
    tables = set(insp.get_table_names())

    if "usuarios" not in tables:
        op.create_table(
            "usuarios",
            sa.Column("id_usuario", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("nome", sa.String(length=150), nullable=False),
            sa.Column("email", sa.String(length=255), nullable=False),
            sa.Column("hash_senha", sa.String(length=255), nullable=False),
            sa.Column("ativo", sa.Boolean(), server_default=sa.text("1"), nullable=False),
            sa.Column("criado_em", sa.TIMESTAMP(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
            sa.UniqueConstraint("email", name="uq_usuarios_email"),
        )

    if "tokens_revogados" not in tables:
        op.create_table(
            "tokens_revogados",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("jti", sa.String(length=64), nullable=False),
            sa.Column("revogado_em", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        )
        op.create_index("ix_tokens_revogados_jti", "tokens_revogados", ["jti"], unique=True)


def downgrade():
    bind = op.get_bind()
    insp = inspect(bind)
    tables = set(insp.get_table_names())

    if "tokens_revogados" in tables:
        op.drop_index("ix_tokens_revogados_jti", table_name="tokens_revogados")
        op.drop_table("tokens_revogados")

    if "usuarios" in tables:
        op.drop_table("usuarios")
