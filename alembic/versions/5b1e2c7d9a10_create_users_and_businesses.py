"""create_users_and_businesses

Revision ID: 5b1e2c7d9a10
Revises: 
Create Date: 2026-10-19 10:12:41.208117
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5b1e2c7d9a10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""

    # USERS
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("number", sa.String(), nullable=True),
        sa.Column("address", sa.String(), nullable=False, server_default="Not Provided"),
        sa.Column("profile_photo", sa.String(), nullable=True),
        sa.Column("role", sa.String(), nullable=False, server_default="user"),
        sa.Column("business_id", sa.Integer(), nullable=True),
        sa.Column("otp", sa.String(length=6), nullable=True),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("auth_token", sa.Text(), nullable=True),
        sa.Column("refresh_token", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_users_id", "users", ["id"], unique=False)
    # Email uniqueness lives in the store, not in a read-before-write
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_business_id", "users", ["business_id"], unique=False)

    # BUSINESSES
    op.create_table(
        "businesses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("owner_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("logo", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
    )
    op.create_index("ix_businesses_id", "businesses", ["id"], unique=False)
    op.create_index("ix_businesses_owner_id", "businesses", ["owner_id"], unique=False)

    op.create_foreign_key(
        "fk_users_business_id",
        "users",
        "businesses",
        ["business_id"],
        ["id"],
    )


def downgrade() -> None:
    """Downgrade schema."""

    op.drop_constraint("fk_users_business_id", "users", type_="foreignkey")
    op.drop_index("ix_businesses_owner_id", table_name="businesses")
    op.drop_index("ix_businesses_id", table_name="businesses")
    op.drop_table("businesses")
    op.drop_index("ix_users_business_id", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_id", table_name="users")
    op.drop_table("users")
