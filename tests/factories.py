"""Helpers that create users, questions and answers through the services."""

from querynet.domain.model import Answer, Question, User
from querynet.domain.service import AnswerService, QuestionService, UserService

PASSWORD = "secret123"
QUESTION_BODY = "I have tried several approaches and none of them seem to work here."
ANSWER_BODY = "You need to await the coroutine before reading its result value."


async def make_user(user_service: UserService, name: str) -> User:
    """Register a user named ``name``."""
    return await user_service.register(
        username=name, email=f"{name}@example.com", password=PASSWORD
    )


async def make_question(
    question_service: QuestionService,
    author: User,
    title: str = "How do I await in a loop?",
    tags: list[str] | None = None,
) -> Question:
    return await question_service.create_question(
        author_id=author.id,
        title=title,
        body=QUESTION_BODY,
        tags=tags or ["python"],
    )


async def make_answer(
    answer_service: AnswerService, question: Question, author: User
) -> Answer:
    return await answer_service.create_answer(
        question_id=question.id, author_id=author.id, body=ANSWER_BODY
    )


def register_via_api(client, name: str) -> dict:
    """Register through the API; returns the ``data`` block (token and user)."""
    response = client.post(
        "/auth/register",
        json={"username": name, "email": f"{name}@example.com", "password": PASSWORD},
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
