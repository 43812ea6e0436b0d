"""E2E tests for notifications, preferences and stats."""

from uuid import uuid4

from tests.factories import ANSWER_BODY, QUESTION_BODY, bearer, register_via_api
from tests.harness import create_client_fixture

client = create_client_fixture()


def _question_with_answers(client, asker: dict, answerer: dict, answers: int) -> str:
    question = client.post(
        "/questions",
        json={"title": "How do I await in a loop?", "body": QUESTION_BODY, "tags": ["python"]},
        headers=bearer(asker["token"]),
    ).json()["data"]
    for _ in range(answers):
        client.post(
            "/answers",
            json={"body": ANSWER_BODY, "questionId": question["id"]},
            headers=bearer(answerer["token"]),
        )
    return question["id"]


def test_answers_notify_the_asker(client):
    bob = register_via_api(client, "bob")
    dave = register_via_api(client, "dave")
    question_id = _question_with_answers(client, bob, dave, 2)

    listing = client.get("/notifications", headers=bearer(bob["token"])).json()

    assert listing["count"] == 2
    assert listing["meta"] == {"unreadCount": 2}
    first = listing["data"][0]
    assert first["type"] == "answer"
    assert first["isRead"] is False
    assert first["data"]["questionId"] == question_id
    assert first["createdBy"] == dave["user"]["id"]

    assert client.get("/notifications", headers=bearer(dave["token"])).json()["count"] == 0


def test_read_unread_mark_all_and_delete(client):
    bob = register_via_api(client, "bob")
    dave = register_via_api(client, "dave")
    _question_with_answers(client, bob, dave, 3)
    headers = bearer(bob["token"])
    ids = [n["id"] for n in client.get("/notifications", headers=headers).json()["data"]]

    read = client.put(f"/notifications/{ids[0]}/read", headers=headers).json()["data"]
    assert read["isRead"] is True
    assert read["readAt"] is not None

    unread_only = client.get("/notifications?isRead=false", headers=headers).json()
    assert unread_only["count"] == 2

    unread = client.put(f"/notifications/{ids[0]}/unread", headers=headers).json()["data"]
    assert unread["isRead"] is False
    assert unread["readAt"] is None

    marked = client.put("/notifications/mark-all-read", headers=headers).json()
    assert marked == {
        "success": True,
        "data": "All notifications marked as read",
        "meta": {"updatedCount": 3},
    }
    assert client.get("/notifications", headers=headers).json()["meta"] == {"unreadCount": 0}

    # Someone else's notification looks like a missing one
    stranger = client.delete(f"/notifications/{ids[1]}", headers=bearer(dave["token"]))
    assert stranger.status_code == 404

    deleted = client.delete(f"/notifications/{ids[1]}", headers=headers)
    assert deleted.json() == {"success": True, "data": "Notification deleted"}
    assert client.get("/notifications", headers=headers).json()["count"] == 2


def test_mark_missing_notification(client):
    bob = register_via_api(client, "bob")

    response = client.put(f"/notifications/{uuid4()}/read", headers=bearer(bob["token"]))

    assert response.status_code == 404


def test_preferences(client):
    bob = register_via_api(client, "bob")
    headers = bearer(bob["token"])

    defaults = client.get("/users/me/preferences", headers=headers).json()["data"]
    assert defaults == {"emailNotifications": True, "pushNotifications": True, "theme": "system"}

    updated = client.put(
        "/users/me/preferences", json={"theme": "dark", "pushNotifications": False}, headers=headers
    ).json()["data"]
    assert updated == {"emailNotifications": True, "pushNotifications": False, "theme": "dark"}

    bad = client.put("/users/me/preferences", json={"theme": "neon"}, headers=headers)
    assert bad.status_code == 400


def test_unknown_profile(client):
    assert client.get(f"/users/{uuid4()}").status_code == 404


def test_stats(client):
    bob = register_via_api(client, "bob")
    dave = register_via_api(client, "dave")
    _question_with_answers(client, bob, dave, 1)
    client.post(
        "/questions",
        json={"title": "Why is my borrow failing?", "body": QUESTION_BODY, "tags": ["rust"]},
        headers=bearer(bob["token"]),
    )

    stats = client.get("/stats").json()

    assert stats == {
        "success": True,
        "data": {
            "totalQuestions": 2,
            "totalUsers": 2,
            "questionsToday": 2,
            "answeredPercentage": 50,
        },
    }
