"""initial_schema

Create the QueryNet schema:
- Users (credentials, preferences, denormalized activity counters)
- Questions (tags array, view counter, accepted-answer pointer)
- Answers (at most one accepted answer per question)
- Votes (one vote per user per question or answer, up or down)
- Notifications (per-recipient inbox with typed JSON payload)

Revision ID: 3f1c9a2b7d40
Revises:
Create Date: 2026-10-12 09:14:03.512881

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f1c9a2b7d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ENUMS = {
    "user_role": ("user", "moderator", "admin"),
    "theme": ("light", "dark", "system"),
    "question_status": ("open", "closed", "duplicate"),
    "votable_type": ("question", "answer"),
    "vote_direction": ("upvote", "downvote"),
    "notification_type": (
        "answer",
        "comment",
        "question",
        "badge",
        "mention",
        "vote",
        "accept",
    ),
}


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUMS[name], name=name, create_type=False)


def _uuid_pk() -> sa.Column:
    return sa.Column(
        "id", sa.UUID(), server_default=sa.text("gen_random_uuid()"), nullable=False
    )


def _timestamp(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=nullable,
        server_default=None if nullable else sa.text("NOW()"),
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "pgcrypto"')

    # Create ENUM types (idempotent)
    for name, values in ENUMS.items():
        labels = ", ".join(f"'{value}'" for value in values)
        op.execute(f"""
            DO $$ BEGIN
                CREATE TYPE {name} AS ENUM ({labels});
            EXCEPTION
                WHEN duplicate_object THEN null;
            END $$;
        """)

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        _uuid_pk(),
        sa.Column("username", sa.String(30), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column("bio", sa.String(500), nullable=True),
        sa.Column("location", sa.String(100), nullable=True),
        sa.Column("website", sa.String(200), nullable=True),
        sa.Column("reputation", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("role", _enum("user_role"), nullable=False, server_default="user"),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "email_notifications", sa.Boolean(), nullable=False, server_default="true"
        ),
        sa.Column(
            "push_notifications", sa.Boolean(), nullable=False, server_default="true"
        ),
        sa.Column("theme", _enum("theme"), nullable=False, server_default="system"),
        sa.Column("questions_asked", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("answers_given", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("accepted_answers", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("upvotes_received", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "downvotes_received", sa.Integer(), nullable=False, server_default="0"
        ),
        _timestamp("last_active"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="users_username_key"),
        sa.UniqueConstraint("email", name="users_email_key"),
        sa.CheckConstraint("reputation >= 0", name="check_reputation_non_negative"),
    )

    # ========================================================================
    # QUESTIONS table
    # ========================================================================
    op.create_table(
        "questions",
        _uuid_pk(),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column(
            "tags",
            postgresql.ARRAY(sa.String(35)),
            nullable=False,
            server_default="{}",
        ),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "status", _enum("question_status"), nullable=False, server_default="open"
        ),
        sa.Column("accepted_answer_id", sa.UUID(), nullable=True),
        sa.Column("duplicate_of", sa.UUID(), nullable=True),
        sa.Column("closed_reason", sa.Text(), nullable=True),
        sa.Column("closed_by", sa.UUID(), nullable=True),
        _timestamp("closed_at", nullable=True),
        sa.Column("is_pinned", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default="false"),
        _timestamp("last_activity"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["duplicate_of"], ["questions.id"], ondelete="SET NULL"
        ),
        sa.ForeignKeyConstraint(["closed_by"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("views >= 0", name="check_views_non_negative"),
    )
    op.create_index("idx_questions_author_id", "questions", ["author_id"])
    op.create_index(
        "idx_questions_status_created", "questions", ["status", "created_at"]
    )
    op.create_index("idx_questions_last_activity", "questions", ["last_activity"])
    op.create_index(
        "idx_questions_tags", "questions", ["tags"], postgresql_using="gin"
    )

    # ========================================================================
    # ANSWERS table
    # ========================================================================
    op.create_table(
        "answers",
        _uuid_pk(),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("question_id", sa.UUID(), nullable=False),
        sa.Column("is_accepted", sa.Boolean(), nullable=False, server_default="false"),
        _timestamp("accepted_at", nullable=True),
        sa.Column("accepted_by", sa.UUID(), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["question_id"], ["questions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["accepted_by"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_answers_question_id", "answers", ["question_id"])
    op.create_index("idx_answers_author_id", "answers", ["author_id"])
    # At most one accepted answer per question
    op.create_index(
        "uq_answers_one_accepted",
        "answers",
        ["question_id"],
        unique=True,
        postgresql_where=sa.text("is_accepted"),
    )

    # questions <-> answers is circular, so the pointer FK is added last
    op.create_foreign_key(
        "fk_questions_accepted_answer",
        "questions",
        "answers",
        ["accepted_answer_id"],
        ["id"],
        ondelete="SET NULL",
    )

    # ========================================================================
    # VOTES table (polymorphic: questions and answers)
    # ========================================================================
    op.create_table(
        "votes",
        _uuid_pk(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("votable_type", _enum("votable_type"), nullable=False),
        sa.Column("votable_id", sa.UUID(), nullable=False),
        sa.Column("direction", _enum("vote_direction"), nullable=False),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "votable_type", "votable_id", name="unique_vote"
        ),
    )
    op.create_index("idx_votes_votable", "votes", ["votable_type", "votable_id"])

    # ========================================================================
    # NOTIFICATIONS table
    # ========================================================================
    op.create_table(
        "notifications",
        _uuid_pk(),
        sa.Column("recipient_id", sa.UUID(), nullable=False),
        sa.Column("type", _enum("notification_type"), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("message", sa.String(500), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default="false"),
        _timestamp("read_at", nullable=True),
        sa.Column("data", postgresql.JSONB(), nullable=True),
        sa.Column("created_by", sa.UUID(), nullable=True),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["recipient_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_notifications_recipient_created",
        "notifications",
        ["recipient_id", "created_at"],
    )
    op.create_index(
        "idx_notifications_recipient_unread",
        "notifications",
        ["recipient_id"],
        postgresql_where=sa.text("NOT is_read"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("notifications")
    op.drop_table("votes")
    op.drop_constraint(
        "fk_questions_accepted_answer", "questions", type_="foreignkey"
    )
    op.drop_table("answers")
    op.drop_table("questions")
    op.drop_table("users")

    for name in reversed(list(ENUMS)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
