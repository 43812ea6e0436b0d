"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from pydantic import TypeAdapter

from querynet.domain.model import (
    Answer,
    Notification,
    Question,
    User,
    UserPreferences,
    UserStats,
    Vote,
)
from querynet.domain.model.notification import NotificationPayload
from querynet.domain.value import (
    AnswerId,
    Email,
    NotificationId,
    NotificationType,
    QuestionId,
    QuestionStatus,
    TagName,
    Theme,
    UserId,
    Username,
    UserRole,
    VotableType,
    VoteDirection,
    VoteId,
)

_payload_adapter: TypeAdapter = TypeAdapter(NotificationPayload)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> UUID | None:
    return None if value is None else _uuid(value)


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        username=Username(row["username"]),
        email=Email(row["email"]),
        password_hash=row["password_hash"],
        avatar_url=row.get("avatar_url"),
        bio=row.get("bio"),
        location=row.get("location"),
        website=row.get("website"),
        reputation=row["reputation"],
        role=UserRole(row["role"]),
        is_verified=row["is_verified"],
        preferences=UserPreferences(
            email_notifications=row["email_notifications"],
            push_notifications=row["push_notifications"],
            theme=Theme(row["theme"]),
        ),
        stats=UserStats(
            questions_asked=row["questions_asked"],
            answers_given=row["answers_given"],
            accepted_answers=row["accepted_answers"],
            upvotes_received=row["upvotes_received"],
            downvotes_received=row["downvotes_received"],
        ),
        last_active=row["last_active"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Preferences and stats are flattened into columns.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": user.id,
        "username": user.username.root,
        "email": user.email.root,
        "password_hash": user.password_hash,
        "avatar_url": user.avatar_url,
        "bio": user.bio,
        "location": user.location,
        "website": user.website,
        "reputation": user.reputation,
        "role": user.role.value,
        "is_verified": user.is_verified,
        "email_notifications": user.preferences.email_notifications,
        "push_notifications": user.preferences.push_notifications,
        "theme": user.preferences.theme.value,
        **user.stats.model_dump(),
        "last_active": user.last_active,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def row_to_question(row: Dict[str, Any]) -> Question:
    """Convert database row to Question domain model."""
    return Question(
        id=QuestionId(_uuid(row["id"])),
        title=row["title"],
        body=row["body"],
        author_id=UserId(_uuid(row["author_id"])),
        tags=[TagName(tag) for tag in row["tags"] or []],
        views=row["views"],
        status=QuestionStatus(row["status"]),
        accepted_answer_id=_optional_uuid(row.get("accepted_answer_id")),
        duplicate_of=_optional_uuid(row.get("duplicate_of")),
        closed_reason=row.get("closed_reason"),
        closed_by=_optional_uuid(row.get("closed_by")),
        closed_at=row.get("closed_at"),
        is_pinned=row["is_pinned"],
        is_featured=row["is_featured"],
        last_activity=row["last_activity"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def question_to_dict(question: Question) -> Dict[str, Any]:
    """Convert Question domain model to database dict."""
    data = question.model_dump()
    data["tags"] = [tag.root for tag in question.tags]
    data["status"] = question.status.value
    return data


def row_to_answer(row: Dict[str, Any]) -> Answer:
    """Convert database row to Answer domain model."""
    return Answer(
        id=AnswerId(_uuid(row["id"])),
        body=row["body"],
        author_id=UserId(_uuid(row["author_id"])),
        question_id=QuestionId(_uuid(row["question_id"])),
        is_accepted=row["is_accepted"],
        accepted_at=row.get("accepted_at"),
        accepted_by=_optional_uuid(row.get("accepted_by")),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def answer_to_dict(answer: Answer) -> Dict[str, Any]:
    """Convert Answer domain model to database dict."""
    return answer.model_dump()


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        id=VoteId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        votable_type=VotableType(row["votable_type"]),
        votable_id=_uuid(row["votable_id"]),
        direction=VoteDirection(row["direction"]),
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    return {
        "id": vote.id,
        "user_id": vote.user_id,
        "votable_type": vote.votable_type.value,
        "votable_id": vote.votable_id,
        "direction": vote.direction.value,
        "created_at": vote.created_at,
    }


def row_to_notification(row: Dict[str, Any]) -> Notification:
    """Convert database row to Notification domain model.

    The JSONB ``data`` column is parsed back into its tagged payload variant.
    """
    data = row.get("data")
    return Notification(
        id=NotificationId(_uuid(row["id"])),
        recipient_id=UserId(_uuid(row["recipient_id"])),
        type=NotificationType(row["type"]),
        title=row["title"],
        message=row["message"],
        is_read=row["is_read"],
        read_at=row.get("read_at"),
        data=_payload_adapter.validate_python(data) if data else None,
        created_by=_optional_uuid(row.get("created_by")),
        created_at=row["created_at"],
    )


def notification_to_dict(notification: Notification) -> Dict[str, Any]:
    """Convert Notification domain model to database dict."""
    return {
        "id": notification.id,
        "recipient_id": notification.recipient_id,
        "type": notification.type.value,
        "title": notification.title,
        "message": notification.message,
        "is_read": notification.is_read,
        "read_at": notification.read_at,
        "data": (
            notification.data.model_dump(mode="json") if notification.data else None
        ),
        "created_by": notification.created_by,
        "created_at": notification.created_at,
    }
