"""SQLAlchemy table definitions for CrushBoard.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USER PROFILES TABLE (keyed by anonymous user id)
# ============================================================================
user_profiles_table = Table(
    "user_profiles",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("alias", String(100), nullable=False, server_default="Newbie"),
    Column("college", String(255), nullable=False, server_default="Unknown University"),
    Column("crush_points", Integer, nullable=False, server_default="0"),
    Column(
        "verification_status",
        postgresql.ENUM(
            "unverified",
            "pending",
            "verified",
            "rejected",
            name="verification_status",
            create_type=False,
        ),
        nullable=False,
        server_default="unverified",
    ),
    Column("id_card_url", Text, nullable=False, server_default=""),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("message", Text, nullable=False),
    Column(
        "primary_tag",
        postgresql.ENUM(
            "#Crush",
            "#Roast",
            "#Confession",
            "#Dare",
            "#Question",
            name="primary_tag",
            create_type=False,
        ),
        nullable=False,
    ),
    Column("optional_tags", ARRAY(Text), nullable=False, server_default="{}"),
    Column("alias", String(100), nullable=False, server_default="Anonymous"),
    Column("user_id", UUID, nullable=False),
    # Denormalized aggregates, only ever changed by signed increments
    Column("upvotes", Integer, nullable=False, server_default="0"),
    Column("downvotes", Integer, nullable=False, server_default="0"),
    Column("score", Integer, nullable=False, server_default="0"),
    Column("reply_count", Integer, nullable=False, server_default="0"),
    # clock_timestamp() differs per statement, NOW() is fixed per transaction
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default="clock_timestamp()",
    ),
    CheckConstraint("upvotes >= 0", name="upvotes_non_negative"),
    CheckConstraint("downvotes >= 0", name="downvotes_non_negative"),
    CheckConstraint("reply_count >= 0", name="reply_count_non_negative"),
    CheckConstraint("score = upvotes - downvotes", name="score_matches_votes"),
)

Index("idx_posts_created_at", posts_table.c.created_at.desc())
Index(
    "idx_posts_score_created_at",
    posts_table.c.score.desc(),
    posts_table.c.created_at.desc(),
)
Index("idx_posts_primary_tag", posts_table.c.primary_tag)

# ============================================================================
# VOTES TABLE (the vote ledger)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("user_id", UUID, nullable=False),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column(
        "direction",
        postgresql.ENUM("up", "down", name="vote_direction", create_type=False),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    # At most one vote per (user, post)
    PrimaryKeyConstraint("user_id", "post_id", name="pk_votes"),
)

Index("idx_votes_post_id", votes_table.c.post_id)

# ============================================================================
# REPLIES TABLE
# ============================================================================
replies_table = Table(
    "replies",
    metadata,
    Column("id", UUID, primary_key=True),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column("user_id", UUID, nullable=False),
    Column("text", Text, nullable=False),
    Column("alias", String(100), nullable=False, server_default="Anonymous"),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default="clock_timestamp()",
    ),
)

Index("idx_replies_post_id_created_at", replies_table.c.post_id, replies_table.c.created_at)
