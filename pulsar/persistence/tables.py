"""SQLAlchemy table definitions for Pulsar Playgrounds.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(255), nullable=False, server_default=""),
    Column("email", String(255), nullable=True, unique=True),
    Column("mobile", String(32), nullable=True, unique=True),
    Column("image", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# SUBMISSIONS TABLE
# ============================================================================
submissions_table = Table(
    "submissions",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("challenge_id", UUID, nullable=True),
    Column(
        "type",
        Enum(
            "AI_ARTWORK",
            "AI_SONG",
            "AI_VIDEO",
            "UPLOAD_ARTWORK",
            "UPLOAD_VIDEO",
            name="submission_type",
            create_type=False,
        ),
        nullable=False,
    ),
    Column("title", String(300), nullable=False),
    Column("caption", Text, nullable=True),
    Column("content_url", Text, nullable=False),
    Column(
        "status",
        Enum(
            "PENDING",
            "APPROVED",
            "REJECTED",
            name="submission_status",
            create_type=False,
        ),
        nullable=False,
        server_default="PENDING",
    ),
    # Denormalized count of rows in votes for this submission
    Column("vote_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("vote_count >= 0", name="vote_count_non_negative"),
)

Index("idx_submissions_user_id", submissions_table.c.user_id)
Index("idx_submissions_status", submissions_table.c.status)

# ============================================================================
# VOTES TABLE
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "submission_id",
        UUID,
        ForeignKey("submissions.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "submission_id", name="unique_user_submission_vote"),
)

# Daily quota and history queries filter by user and creation time
Index("idx_votes_user_created_at", votes_table.c.user_id, votes_table.c.created_at)
Index("idx_votes_submission_id", votes_table.c.submission_id)
