"""initial_schema

Create the CrushBoard schema:
- User profiles (anonymous users, identity verification status)
- Posts (confessions with denormalized vote and reply counters)
- Votes (the vote ledger, one row per user and post)
- Replies (flat answers to a post)

Revision ID: 3c1f9a7d52e4
Revises:
Create Date: 2026-10-17 10:12:44.318205

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a7d52e4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


ENUM_TYPES = {
    "verification_status": ("unverified", "pending", "verified", "rejected"),
    "primary_tag": ("#Crush", "#Roast", "#Confession", "#Dare", "#Question"),
    "vote_direction": ("up", "down"),
}


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUM_TYPES[name], name=name, create_type=False)


def upgrade() -> None:
    """Upgrade schema."""
    # Create ENUM types (idempotent)
    for name, values in ENUM_TYPES.items():
        postgresql.ENUM(*values, name=name).create(op.get_bind(), checkfirst=True)

    # ========================================================================
    # USER_PROFILES table
    # ========================================================================
    op.create_table(
        "user_profiles",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column(
            "alias", sa.String(length=100), server_default="Newbie", nullable=False
        ),
        sa.Column(
            "college",
            sa.String(length=255),
            server_default="Unknown University",
            nullable=False,
        ),
        sa.Column("crush_points", sa.Integer(), server_default="0", nullable=False),
        sa.Column(
            "verification_status",
            _enum("verification_status"),
            server_default="unverified",
            nullable=False,
        ),
        sa.Column("id_card_url", sa.Text(), server_default="", nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # ========================================================================
    # POSTS table
    # ========================================================================
    op.create_table(
        "posts",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("primary_tag", _enum("primary_tag"), nullable=False),
        sa.Column(
            "optional_tags",
            postgresql.ARRAY(sa.Text()),
            server_default="{}",
            nullable=False,
        ),
        sa.Column(
            "alias", sa.String(length=100), server_default="Anonymous", nullable=False
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("upvotes", sa.Integer(), server_default="0", nullable=False),
        sa.Column("downvotes", sa.Integer(), server_default="0", nullable=False),
        sa.Column("score", sa.Integer(), server_default="0", nullable=False),
        sa.Column("reply_count", sa.Integer(), server_default="0", nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("clock_timestamp()"),
            nullable=False,
        ),
        sa.CheckConstraint("upvotes >= 0", name="upvotes_non_negative"),
        sa.CheckConstraint("downvotes >= 0", name="downvotes_non_negative"),
        sa.CheckConstraint("reply_count >= 0", name="reply_count_non_negative"),
        sa.CheckConstraint("score = upvotes - downvotes", name="score_matches_votes"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_posts_created_at", "posts", [sa.text("created_at DESC")])
    op.create_index(
        "idx_posts_score_created_at",
        "posts",
        [sa.text("score DESC"), sa.text("created_at DESC")],
    )
    op.create_index("idx_posts_primary_tag", "posts", ["primary_tag"])

    # ========================================================================
    # VOTES table
    # ========================================================================
    op.create_table(
        "votes",
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("direction", _enum("vote_direction"), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "post_id", name="pk_votes"),
    )
    op.create_index("idx_votes_post_id", "votes", ["post_id"])

    # ========================================================================
    # REPLIES table
    # ========================================================================
    op.create_table(
        "replies",
        sa.Column("id", sa.UUID(), nullable=False),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column(
            "alias", sa.String(length=100), server_default="Anonymous", nullable=False
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("clock_timestamp()"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["post_id"], ["posts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_replies_post_id_created_at", "replies", ["post_id", "created_at"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_replies_post_id_created_at", table_name="replies")
    op.drop_table("replies")
    op.drop_index("idx_votes_post_id", table_name="votes")
    op.drop_table("votes")
    op.drop_index("idx_posts_primary_tag", table_name="posts")
    op.drop_index("idx_posts_score_created_at", table_name="posts")
    op.drop_index("idx_posts_created_at", table_name="posts")
    op.drop_table("posts")
    op.drop_table("user_profiles")

    for name in reversed(list(ENUM_TYPES)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
