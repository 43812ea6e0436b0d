"""Unit tests for NotificationService."""

from uuid import uuid4

import pytest

from querynet.domain.error import NotFoundError
from querynet.domain.model.notification import AnswerPayload, VotePayload
from querynet.domain.repository import NotificationRepository
from querynet.domain.service import NotificationService
from querynet.domain.service import notification_service as notification_module
from querynet.domain.value import (
    AnswerId,
    NotificationType,
    QuestionId,
    UserId,
    VoteDirection,
)
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class _RecordingCounter:
    def __init__(self) -> None:
        self.total = 0

    def add(self, amount: int, attributes=None) -> None:
        self.total += amount


@pytest.fixture
def failure_counter(monkeypatch):
    counter = _RecordingCounter()
    monkeypatch.setattr(notification_module, "notification_failures", counter)
    return counter


async def _notify(service: NotificationService, recipient: UserId, n: int = 1):
    created = []
    for i in range(n):
        created.append(
            await service.notify(
                recipient,
                NotificationType.ANSWER,
                "New answer to your question",
                f"Someone answered ({i})",
                data=AnswerPayload(question_id=QuestionId(uuid4()), answer_id=AnswerId(uuid4())),
            )
        )
    return created


@pytest.mark.asyncio
async def test_mark_all_read_changes_only_unread(unit_env):
    service = await unit_env.get(NotificationService)
    recipient = UserId(uuid4())
    created = await _notify(service, recipient, 8)
    for notification in created[:3]:
        await service.mark_read(notification.id, recipient)

    changed = await service.mark_all_read(recipient)

    assert changed == 5
    page = await service.list_for_recipient(recipient, limit=20)
    assert page.total == 8
    assert page.unread_count == 0
    assert all(n.is_read and n.read_at is not None for n in page.notifications)


@pytest.mark.asyncio
async def test_list_filters_by_read_state(unit_env):
    service = await unit_env.get(NotificationService)
    recipient = UserId(uuid4())
    created = await _notify(service, recipient, 3)
    await service.mark_read(created[0].id, recipient)

    unread = await service.list_for_recipient(recipient, is_read=False)

    assert unread.total == 2
    assert unread.unread_count == 2
    assert created[0].id not in {n.id for n in unread.notifications}


@pytest.mark.asyncio
async def test_mark_unread_clears_read_at(unit_env):
    service = await unit_env.get(NotificationService)
    recipient = UserId(uuid4())
    (notification,) = await _notify(service, recipient)

    read = await service.mark_read(notification.id, recipient)
    unread = await service.mark_unread(notification.id, recipient)

    assert read.is_read and read.read_at is not None
    assert not unread.is_read and unread.read_at is None


@pytest.mark.asyncio
async def test_other_users_cannot_touch_a_notification(unit_env):
    service = await unit_env.get(NotificationService)
    recipient = UserId(uuid4())
    stranger = UserId(uuid4())
    (notification,) = await _notify(service, recipient)

    with pytest.raises(NotFoundError):
        await service.mark_read(notification.id, stranger)
    with pytest.raises(NotFoundError):
        await service.delete(notification.id, stranger)

    page = await service.list_for_recipient(recipient)
    assert page.unread_count == 1


@pytest.mark.asyncio
async def test_delete(unit_env):
    service = await unit_env.get(NotificationService)
    recipient = UserId(uuid4())
    (notification,) = await _notify(service, recipient)

    await service.delete(notification.id, recipient)

    assert (await service.list_for_recipient(recipient)).total == 0
    with pytest.raises(NotFoundError):
        await service.delete(notification.id, recipient)


@pytest.mark.asyncio
async def test_mismatched_payload_is_counted_not_raised(unit_env, failure_counter):
    service = await unit_env.get(NotificationService)
    recipient = UserId(uuid4())

    result = await service.notify(
        recipient,
        NotificationType.ACCEPT,
        "Vote",
        "Wrong payload",
        data=VotePayload(question_id=QuestionId(uuid4()), direction=VoteDirection.UPVOTE),
    )

    assert result is None
    assert failure_counter.total == 1


@pytest.mark.asyncio
async def test_repository_failure_is_swallowed(unit_env, monkeypatch, failure_counter):
    service = await unit_env.get(NotificationService)
    repository = await unit_env.get(NotificationRepository)

    async def _broken_save(notification):
        raise RuntimeError("notifications table unavailable")

    monkeypatch.setattr(repository, "save", _broken_save)

    result = await service.notify(
        UserId(uuid4()), NotificationType.QUESTION, "Title", "Message"
    )

    assert result is None
    assert failure_counter.total == 1
