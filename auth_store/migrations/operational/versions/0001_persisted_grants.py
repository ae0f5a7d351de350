"""persisted grants table."""

from alembic import op
import sqlalchemy as sa


revision = "0001_persisted_grants"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "persisted_grants",
        sa.Column("key", sa.String(length=200), nullable=False),
        sa.Column("type", sa.String(length=50), nullable=False),
        sa.Column("subject_id", sa.String(length=200), nullable=True),
        sa.Column("session_id", sa.String(length=100), nullable=True),
        sa.Column("client_id", sa.String(length=200), nullable=False),
        sa.Column("description", sa.String(length=200), nullable=True),
        sa.Column("creation_time", sa.DateTime(), nullable=False),
        sa.Column("expiration", sa.DateTime(), nullable=True),
        sa.Column("consumed_time", sa.DateTime(), nullable=True),
        sa.Column("data", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("key"),
    )
    op.create_index("ix_persisted_grants_expiration", "persisted_grants", ["expiration"], unique=False)
    op.create_index(
        "ix_persisted_grants_subject_client_type",
        "persisted_grants",
        ["subject_id", "client_id", "type"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_persisted_grants_subject_client_type", table_name="persisted_grants")
    op.drop_index("ix_persisted_grants_expiration", table_name="persisted_grants")
    op.drop_table("persisted_grants")
