"""create reports and infractions

Revision ID: 20261018_0002
Revises: 20261018_0001
Create Date: 2026-10-18

"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


revision = "20261018_0002"
down_revision = "20261018_0001"
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = inspect(bind)
    tables = set(insp.get_table_names())

    if "reports" not in tables:
        op.create_table(
            "reports",
            sa.Column("id", sa.String(length=36), primary_key=True),
            sa.Column("responsible_name", sa.String(length=150), nullable=True),
            sa.Column(
                "service_name",
                sa.Enum("ordinario", "operacao", "ras", name="service_name_enum"),
                nullable=False,
            ),
            sa.Column("sector", sa.String(length=60), nullable=False),
            sa.Column("car_removals", sa.Integer(), server_default=sa.text("0"), nullable=False),
            sa.Column("motorcycle_removals", sa.Integer(), server_default=sa.text("0"), nullable=False),
            sa.Column("total_approaches", sa.Integer(), server_default=sa.text("0"), nullable=False),
            sa.Column("protocol_number", sa.String(length=32), nullable=False),
            sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
            sa.UniqueConstraint("protocol_number", name="uq_reports_protocol_number"),
            sa.CheckConstraint("car_removals >= 0", name="ck_reports_car_removals"),
            sa.CheckConstraint("motorcycle_removals >= 0", name="ck_reports_motorcycle_removals"),
            sa.CheckConstraint("total_approaches >= 0", name="ck_reports_total_approaches"),
        )
        op.create_index("ix_reports_service_name", "reports", ["service_name"], unique=False)
        op.create_index("ix_reports_created_at", "reports", ["created_at"], unique=False)

    if "infractions" not in tables:
        op.create_table(
            "infractions",
            sa.Column("id", sa.String(length=36), primary_key=True),
            sa.Column("infraction_type", sa.String(length=255), nullable=False),
            sa.Column("quantity", sa.Integer(), nullable=False),
            sa.Column("report_id", sa.String(length=36), nullable=True),
            sa.ForeignKeyConstraint(["report_id"], ["reports.id"], ondelete="RESTRICT"),
            sa.CheckConstraint("quantity > 0", name="ck_infractions_quantity"),
        )
        op.create_index("ix_infractions_report_id", "infractions", ["report_id"], unique=False)


def downgrade():
    bind = op.get_bind()
    insp = inspect(bind)
    tables = set(insp.get_table_names())

    if "infractions" in tables:
        op.drop_index("ix_infractions_report_id", table_name="infractions")
        op.drop_table("infractions")

    if "reports" in tables:
        op.drop_index("ix_reports_created_at", table_name="reports")
        op.drop_index("ix_reports_service_name", table_name="reports")
        op.drop_table("reports")
