"""Domain layer DI providers."""

from dishka import Scope, provide

from querynet.config import AuthSettings
from querynet.domain.repository import (
    AnswerRepository,
    NotificationRepository,
    QuestionRepository,
    UserRepository,
    VoteRepository,
)
from querynet.domain.service import (
    AnswerService,
    JWTService,
    NotificationService,
    QuestionService,
    StatsService,
    UserService,
    VoteService,
)
from querynet.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(
        self, user_repository: UserRepository, auth_settings: AuthSettings
    ) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository, auth_settings=auth_settings)

    @provide
    def get_notification_service(
        self, notification_repository: NotificationRepository
    ) -> NotificationService:
        """Provide notification domain service."""
        return NotificationService(notification_repository=notification_repository)

    @provide
    def get_question_service(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        vote_repository: VoteRepository,
        user_service: UserService,
    ) -> QuestionService:
        """Provide question domain service."""
        return QuestionService(
            question_repository=question_repository,
            answer_repository=answer_repository,
            vote_repository=vote_repository,
            user_service=user_service,
        )

    @provide
    def get_answer_service(
        self,
        answer_repository: AnswerRepository,
        vote_repository: VoteRepository,
        question_service: QuestionService,
        user_service: UserService,
        notification_service: NotificationService,
    ) -> AnswerService:
        """Provide answer domain service."""
        return AnswerService(
            answer_repository=answer_repository,
            vote_repository=vote_repository,
            question_service=question_service,
            user_service=user_service,
            notification_service=notification_service,
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        question_service: QuestionService,
        notification_service: NotificationService,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            question_repository=question_repository,
            answer_repository=answer_repository,
            question_service=question_service,
            notification_service=notification_service,
        )

    @provide
    def get_stats_service(
        self,
        question_repository: QuestionRepository,
        answer_repository: AnswerRepository,
        user_repository: UserRepository,
    ) -> StatsService:
        """Provide community stats service."""
        return StatsService(
            question_repository=question_repository,
            answer_repository=answer_repository,
            user_repository=user_repository,
        )
