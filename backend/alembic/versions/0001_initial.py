from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "cities",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("deleted_at", sa.DateTime()),
    )
    op.create_table(
        "sections",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("city_id", sa.Integer(), sa.ForeignKey("cities.id"), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("deleted_at", sa.DateTime()),
        sa.UniqueConstraint("city_id", "name", name="uq_section_city_name"),
    )
    op.create_table(
        "hourses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("universal_id", sa.Uuid(), nullable=False, unique=True),
        sa.Column("section_id", sa.Integer(), sa.ForeignKey("sections.id"), nullable=False),
        sa.Column("link", sa.String(), nullable=False, server_default=""),
        sa.Column("layout", sa.String()),
        sa.Column("address", sa.String()),
        sa.Column("price", sa.Integer(), nullable=False),
        sa.Column("floor", sa.String(), nullable=False),
        sa.Column("shape", sa.String(), nullable=False),
        sa.Column("age", sa.String(), nullable=False),
        sa.Column("area", sa.String(), nullable=False),
        sa.Column("main_area", sa.String()),
        sa.Column("raw", sa.JSON()),
        sa.Column("others", sa.JSON(), server_default=sa.text("'[]'")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("deleted_at", sa.DateTime()),
    )


def downgrade() -> None:
    op.drop_table("hourses")
    op.drop_table("sections")
    op.drop_table("cities")
