"""init

Revision ID: 0001_init
Revises: 
Create Date: 2026-10-18 09:00:00.000000
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
	op.create_table(
		"users",
		sa.Column("id", sa.Integer(), primary_key=True),
		sa.Column("email", sa.String(), nullable=False),
		sa.Column("password_hash", sa.String(), nullable=False),
		sa.Column("role", sa.String(), nullable=False, server_default="user"),
		sa.Column("created_at", sa.DateTime(), nullable=True),
	)
	op.create_index("ix_users_email", "users", ["email"], unique=True)
	op.create_index("ix_users_id", "users", ["id"], unique=False)

	op.create_table(
		"profiles",
		sa.Column("id", sa.Integer(), primary_key=True),
		sa.Column("display_name", sa.String(), nullable=False),
		sa.Column("phone", sa.String(), nullable=True),
		sa.Column("university", sa.String(), nullable=True),
		sa.Column("created_at", sa.DateTime(), nullable=True),
		sa.ForeignKeyConstraint(["id"], ["users.id"], ondelete="CASCADE"),
	)

	op.create_table(
		"items",
		sa.Column("id", sa.Integer(), primary_key=True),
		sa.Column("title", sa.String(), nullable=False),
		sa.Column("price", sa.Numeric(10, 2), nullable=False),
		sa.Column("category", sa.String(), nullable=False),
		sa.Column("description", sa.Text(), nullable=False),
		sa.Column("location", sa.String(), nullable=False),
		sa.Column("image_url", sa.Text(), nullable=True),
		sa.Column("user_id", sa.Integer(), nullable=False),
		sa.Column("created_at", sa.DateTime(), nullable=True),
		sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
	)
	op.create_index("ix_items_id", "items", ["id"], unique=False)
	op.create_index("ix_items_title", "items", ["title"], unique=False)
	op.create_index("ix_items_category", "items", ["category"], unique=False)
	op.create_index("ix_items_user_id", "items", ["user_id"], unique=False)
	op.create_index("ix_items_created_at", "items", ["created_at"], unique=False)

	op.create_table(
		"saved_items",
		sa.Column("id", sa.Integer(), primary_key=True),
		sa.Column("user_id", sa.Integer(), nullable=False),
		sa.Column("item_id", sa.Integer(), nullable=False),
		sa.Column("created_at", sa.DateTime(), nullable=True),
		sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
		sa.ForeignKeyConstraint(["item_id"], ["items.id"], ondelete="CASCADE"),
		sa.UniqueConstraint("user_id", "item_id", name="uq_saved_user_item"),
	)
	op.create_index("ix_saved_items_id", "saved_items", ["id"], unique=False)
	op.create_index("ix_saved_items_user_id", "saved_items", ["user_id"], unique=False)
	op.create_index("ix_saved_items_item_id", "saved_items", ["item_id"], unique=False)


def downgrade() -> None:
	op.drop_index("ix_saved_items_item_id", table_name="saved_items")
	op.drop_index("ix_saved_items_user_id", table_name="saved_items")
	op.drop_index("ix_saved_items_id", table_name="saved_items")
	op.drop_table("saved_items")
	op.drop_index("ix_items_created_at", table_name="items")
	op.drop_index("ix_items_user_id", table_name="items")
	op.drop_index("ix_items_category", table_name="items")
	op.drop_index("ix_items_title", table_name="items")
	op.drop_index("ix_items_id", table_name="items")
	op.drop_table("items")
	op.drop_table("profiles")
	op.drop_index("ix_users_id", table_name="users")
	op.drop_index("ix_users_email", table_name="users")
	op.drop_table("users")
