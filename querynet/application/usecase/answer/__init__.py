"""Answer use cases."""

from .accept_answer import AcceptAnswerRequest, AcceptAnswerUseCase
from .create_answer import CreateAnswerRequest, CreateAnswerUseCase
from .delete_answer import DeleteAnswerRequest, DeleteAnswerUseCase
from .list_answers import ListAnswersRequest, ListAnswersUseCase
from .update_answer import UpdateAnswerRequest, UpdateAnswerUseCase

__all__ = [
    "AcceptAnswerRequest",
    "AcceptAnswerUseCase",
    "CreateAnswerRequest",
    "CreateAnswerUseCase",
    "DeleteAnswerRequest",
    "DeleteAnswerUseCase",
    "ListAnswersRequest",
    "ListAnswersUseCase",
    "UpdateAnswerRequest",
    "UpdateAnswerUseCase",
]
