"""device flow codes."""

from alembic import op
import sqlalchemy as sa


revision = "0002_device_codes"
down_revision = "0001_persisted_grants"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "device_codes",
        sa.Column("user_code", sa.String(length=200), nullable=False),
        sa.Column("device_code", sa.String(length=200), nullable=False),
        sa.Column("subject_id", sa.String(length=200), nullable=True),
        sa.Column("client_id", sa.String(length=200), nullable=False),
        sa.Column("creation_time", sa.DateTime(), nullable=False),
        sa.Column("expiration", sa.DateTime(), nullable=False),
        sa.Column("data", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("user_code"),
    )
    op.create_index("ix_device_codes_device_code", "device_codes", ["device_code"], unique=True)
    op.create_index("ix_device_codes_expiration", "device_codes", ["expiration"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_device_codes_expiration", table_name="device_codes")
    op.drop_index("ix_device_codes_device_code", table_name="device_codes")
    op.drop_table("device_codes")
