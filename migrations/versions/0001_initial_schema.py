"""initial schema: users, check_ins, community_summaries

Revision ID: 0001
Revises:
Create Date: 2026-10-18

One check-in per (user_id, day), enforced by a unique constraint.
community_summaries holds a single "latest" row replaced on each refresh.
"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    plan_type_enum = sa.Enum("cold_turkey", "gradual", name="plan_type_enum")

    op.create_table(
        "users",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column("plan_type", plan_type_enum, nullable=False),
        sa.Column("plan_started_at", sa.DateTime(), nullable=False),
        sa.Column("current_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("longest_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_days_sugar_free", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_check_in", sa.Date(), nullable=True),
        sa.Column("health_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("stats_updated_at", sa.DateTime(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_users_stats_updated_at", "users", ["stats_updated_at"])

    op.create_table(
        "check_ins",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "user_id",
            sa.String(128),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("day", sa.Date(), nullable=False),
        sa.Column("sugar_free", sa.Boolean(), nullable=False),
        sa.Column("grams_consumed", sa.Integer(), nullable=True),
        sa.Column("mood", sa.Integer(), nullable=True),
        sa.Column("craving_level", sa.Integer(), nullable=True),
        sa.Column("energy_level", sa.Integer(), nullable=True),
        sa.Column("sleep_quality", sa.Integer(), nullable=True),
        sa.Column("notes", sa.String(200), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.UniqueConstraint("user_id", "day", name="uq_check_in_user_day"),
    )
    op.create_index("ix_check_ins_id", "check_ins", ["id"])
    op.create_index("ix_check_ins_user_id", "check_ins", ["user_id"])
    op.create_index("ix_check_ins_day", "check_ins", ["day"])

    op.create_table(
        "community_summaries",
        sa.Column("key", sa.String(32), primary_key=True),
        sa.Column("total_users", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("active_users", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("average_streak", sa.Numeric(10, 1), nullable=False, server_default="0"),
        sa.Column("average_health_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_days_sugar_free", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("top_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("top_health_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("community_summaries")
    op.drop_index("ix_check_ins_day", table_name="check_ins")
    op.drop_index("ix_check_ins_user_id", table_name="check_ins")
    op.drop_index("ix_check_ins_id", table_name="check_ins")
    op.drop_table("check_ins")
    op.drop_index("ix_users_stats_updated_at", table_name="users")
    op.drop_table("users")
    sa.Enum(name="plan_type_enum").drop(op.get_bind(), checkfirst=True)
