"""QSL Card Manager database schema

Revision ID: 001
Revises:
Create Date: 2024-01-01 00:00:00.000000

"""
import sqlalchemy as sa

from alembic import op  # type: ignore[attr-defined]

# revision identifiers, used by Alembic.
revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    # Operator accounts (FastAPI Users base table plus station profile)
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("hashed_password", sa.String(length=1024), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("is_superuser", sa.Boolean(), nullable=False),
        sa.Column("is_verified", sa.Boolean(), nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("callsign", sa.String(length=20), nullable=True),
        sa.Column("name", sa.String(length=100), nullable=True),
        sa.Column("qth", sa.String(length=100), nullable=True),
        sa.Column("locator", sa.String(length=10), nullable=True),
        sa.Column("power", sa.String(length=32), nullable=True),
        sa.Column("antenna", sa.String(length=100), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)
    op.create_index(op.f("ix_users_callsign"), "users", ["callsign"], unique=True)

    op.create_table(
        "qsl_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("contact_call", sa.String(length=32), nullable=False),
        sa.Column("contact_name", sa.String(length=100), nullable=False),
        sa.Column("frequency", sa.String(length=32), nullable=False),
        sa.Column("mode", sa.String(length=32), nullable=False),
        sa.Column("band", sa.String(length=16), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.String(length=8), nullable=False),
        sa.Column("rst_sent", sa.String(length=8), nullable=False),
        sa.Column("rst_received", sa.String(length=8), nullable=False),
        sa.Column("power", sa.String(length=32), nullable=False),
        sa.Column("antenna", sa.String(length=100), nullable=False),
        sa.Column("qth", sa.String(length=100), nullable=False),
        sa.Column("locator", sa.String(length=10), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False),
        sa.Column("qsl_sent", sa.Boolean(), nullable=False),
        sa.Column("qsl_received", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_qsl_logs_user_id"), "qsl_logs", ["user_id"])
    op.create_index(op.f("ix_qsl_logs_contact_call"), "qsl_logs", ["contact_call"])
    op.create_index("ix_qsl_logs_user_id_date", "qsl_logs", ["user_id", "date"])

    op.create_table(
        "card_templates",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("html_content", sa.Text(), nullable=False),
        sa.Column("css_content", sa.Text(), nullable=True),
        sa.Column("is_default", sa.Boolean(), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_card_templates_user_id"), "card_templates", ["user_id"])
    op.create_index(
        op.f("ix_card_templates_is_public"), "card_templates", ["is_public"]
    )


def downgrade() -> None:
    # Drop tables in reverse order
    op.drop_table("card_templates")
    op.drop_table("qsl_logs")
    op.drop_table("users")
