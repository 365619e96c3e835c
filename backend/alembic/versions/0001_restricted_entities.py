"""create restricted users and modules tables"""

from alembic import op
import sqlalchemy as sa

revision = "0001_restricted_entities"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    for table_name in ("users", "modules"):
        op.create_table(
            table_name,
            sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
            sa.Column("reason", sa.Text(), nullable=True),
            sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        )


def downgrade() -> None:
    op.drop_table("modules")
    op.drop_table("users")
