"""SQLAlchemy table definitions for QueryNet.

These table definitions are used with SQLAlchemy Core queries.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
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
    text,
)
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

NOW = text("NOW()")

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("username", String(30), nullable=False, unique=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=False),
    Column("avatar_url", Text, nullable=True),
    Column("bio", String(500), nullable=True),
    Column("location", String(100), nullable=True),
    Column("website", String(200), nullable=True),
    Column("reputation", Integer, nullable=False, server_default="1"),
    Column(
        "role",
        Enum("user", "moderator", "admin", name="user_role", create_type=False),
        nullable=False,
        server_default="user",
    ),
    Column("is_verified", Boolean, nullable=False, server_default="false"),
    # Preferences
    Column("email_notifications", Boolean, nullable=False, server_default="true"),
    Column("push_notifications", Boolean, nullable=False, server_default="true"),
    Column(
        "theme",
        Enum("light", "dark", "system", name="theme", create_type=False),
        nullable=False,
        server_default="system",
    ),
    # Denormalized stats (adjusted with atomic increments)
    Column("questions_asked", Integer, nullable=False, server_default="0"),
    Column("answers_given", Integer, nullable=False, server_default="0"),
    Column("accepted_answers", Integer, nullable=False, server_default="0"),
    Column("upvotes_received", Integer, nullable=False, server_default="0"),
    Column("downvotes_received", Integer, nullable=False, server_default="0"),
    Column("last_active", TIMESTAMP(timezone=True), nullable=False, server_default=NOW),
    Column("created_at", TIMESTAMP(timezone=True), nullable=False, server_default=NOW),
    Column("updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=NOW),
    CheckConstraint("reputation >= 0", name="check_reputation_non_negative"),
)

# ============================================================================
# QUESTIONS TABLE
# ============================================================================
questions_table = Table(
    "questions",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("title", String(200), nullable=False),
    Column("body", Text, nullable=False),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("tags", ARRAY(String(35)), nullable=False, server_default="{}"),
    Column("views", Integer, nullable=False, server_default="0"),
    Column(
        "status",
        Enum("open", "closed", "duplicate", name="question_status", create_type=False),
        nullable=False,
        server_default="open",
    ),
    # Circular with answers.question_id, created after both tables exist
    Column(
        "accepted_answer_id",
        UUID,
        ForeignKey(
            "answers.id",
            ondelete="SET NULL",
            use_alter=True,
            name="fk_questions_accepted_answer",
        ),
        nullable=True,
    ),
    Column(
        "duplicate_of",
        UUID,
        ForeignKey("questions.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("closed_reason", Text, nullable=True),
    Column(
        "closed_by", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    Column("closed_at", TIMESTAMP(timezone=True), nullable=True),
    Column("is_pinned", Boolean, nullable=False, server_default="false"),
    Column("is_featured", Boolean, nullable=False, server_default="false"),
    Column(
        "last_activity", TIMESTAMP(timezone=True), nullable=False, server_default=NOW
    ),
    Column("created_at", TIMESTAMP(timezone=True), nullable=False, server_default=NOW),
    Column("updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=NOW),
    CheckConstraint("views >= 0", name="check_views_non_negative"),
)

Index("idx_questions_author_id", questions_table.c.author_id)
Index("idx_questions_status_created", questions_table.c.status, questions_table.c.created_at)
Index("idx_questions_last_activity", questions_table.c.last_activity)
Index("idx_questions_tags", questions_table.c.tags, postgresql_using="gin")

# ============================================================================
# ANSWERS TABLE
# ============================================================================
answers_table = Table(
    "answers",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("body", Text, nullable=False),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "question_id",
        UUID,
        ForeignKey("questions.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("is_accepted", Boolean, nullable=False, server_default="false"),
    Column("accepted_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "accepted_by", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    Column("created_at", TIMESTAMP(timezone=True), nullable=False, server_default=NOW),
    Column("updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=NOW),
)

Index("idx_answers_question_id", answers_table.c.question_id)
Index("idx_answers_author_id", answers_table.c.author_id)
# At most one accepted answer per question
Index(
    "uq_answers_one_accepted",
    answers_table.c.question_id,
    unique=True,
    postgresql_where=answers_table.c.is_accepted,
)

# ============================================================================
# VOTES TABLE (polymorphic: questions and answers)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "votable_type",
        Enum("question", "answer", name="votable_type", create_type=False),
        nullable=False,
    ),
    Column("votable_id", UUID, nullable=False),
    Column(
        "direction",
        Enum("upvote", "downvote", name="vote_direction", create_type=False),
        nullable=False,
    ),
    Column("created_at", TIMESTAMP(timezone=True), nullable=False, server_default=NOW),
    UniqueConstraint("user_id", "votable_type", "votable_id", name="unique_vote"),
)

Index("idx_votes_votable", votes_table.c.votable_type, votes_table.c.votable_id)

# ============================================================================
# NOTIFICATIONS TABLE
# ============================================================================
notifications_table = Table(
    "notifications",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("gen_random_uuid()")),
    Column(
        "recipient_id",
        UUID,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "type",
        Enum(
            "answer",
            "comment",
            "question",
            "badge",
            "mention",
            "vote",
            "accept",
            name="notification_type",
            create_type=False,
        ),
        nullable=False,
    ),
    Column("title", String(200), nullable=False),
    Column("message", String(500), nullable=False),
    Column("is_read", Boolean, nullable=False, server_default="false"),
    Column("read_at", TIMESTAMP(timezone=True), nullable=True),
    Column("data", JSONB, nullable=True),
    Column(
        "created_by", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    ),
    Column("created_at", TIMESTAMP(timezone=True), nullable=False, server_default=NOW),
)

Index(
    "idx_notifications_recipient_created",
    notifications_table.c.recipient_id,
    notifications_table.c.created_at,
)
Index(
    "idx_notifications_recipient_unread",
    notifications_table.c.recipient_id,
    postgresql_where=~notifications_table.c.is_read,
)
