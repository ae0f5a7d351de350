"""post-logout redirect uris and offline access on clients."""

from alembic import op
import sqlalchemy as sa


revision = "0002_client_logout_and_offline"
down_revision = "0001_configuration_initial"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column(
        "clients",
        sa.Column("post_logout_redirect_uris", sa.Text(), nullable=False, server_default="[]"),
    )
    op.add_column(
        "clients",
        sa.Column("allow_offline_access", sa.Boolean(), nullable=False, server_default=sa.false()),
    )


def downgrade() -> None:
    with op.batch_alter_table("clients") as batch_op:
        batch_op.drop_column("allow_offline_access")
        batch_op.drop_column("post_logout_redirect_uris")
