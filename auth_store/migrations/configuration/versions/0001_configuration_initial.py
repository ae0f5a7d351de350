"""clients, identity resources and api scopes."""

from alembic import op
import sqlalchemy as sa


revision = "0001_configuration_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "clients",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("client_id", sa.String(length=200), nullable=False),
        sa.Column("client_name", sa.String(length=200), nullable=True),
        sa.Column("allowed_grant_types", sa.Text(), nullable=False),
        sa.Column("allowed_scopes", sa.Text(), nullable=False),
        sa.Column("redirect_uris", sa.Text(), nullable=False),
        sa.Column("client_secret_hashes", sa.Text(), nullable=False),
        sa.Column("require_pkce", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    # Natural key: two instances racing to seed an empty store cannot both insert
    op.create_index("ix_clients_client_id", "clients", ["client_id"], unique=True)

    op.create_table(
        "identity_resources",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("display_name", sa.String(length=200), nullable=True),
        sa.Column("claims", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_identity_resources_name", "identity_resources", ["name"], unique=True)

    op.create_table(
        "api_scopes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("display_name", sa.String(length=200), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_api_scopes_name", "api_scopes", ["name"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_api_scopes_name", table_name="api_scopes")
    op.drop_table("api_scopes")
    op.drop_index("ix_identity_resources_name", table_name="identity_resources")
    op.drop_table("identity_resources")
    op.drop_index("ix_clients_client_id", table_name="clients")
    op.drop_table("clients")
