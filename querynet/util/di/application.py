"""Application layer DI providers."""

from dishka import Scope, provide

from querynet.application.usecase.answer import (
    AcceptAnswerUseCase,
    CreateAnswerUseCase,
    DeleteAnswerUseCase,
    ListAnswersUseCase,
    UpdateAnswerUseCase,
)
from querynet.application.usecase.auth import (
    ChangePasswordUseCase,
    GetCurrentUserUseCase,
    LoginUseCase,
    RegisterUseCase,
    UpdateProfileUseCase,
)
from querynet.application.usecase.notification import (
    DeleteNotificationUseCase,
    ListNotificationsUseCase,
    MarkAllReadUseCase,
    MarkNotificationUseCase,
)
from querynet.application.usecase.projection import ReadProjection
from querynet.application.usecase.question import (
    CreateQuestionUseCase,
    DeleteQuestionUseCase,
    GetQuestionUseCase,
    ListQuestionsUseCase,
    UpdateQuestionUseCase,
)
from querynet.application.usecase.stats import GetStatsUseCase
from querynet.application.usecase.user import (
    GetPreferencesUseCase,
    GetUserProfileUseCase,
    UpdatePreferencesUseCase,
)
from querynet.application.usecase.vote import CastVoteUseCase
from querynet.config import PaginationSettings
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


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    @provide
    def get_read_projection(
        self,
        vote_service: VoteService,
        answer_service: AnswerService,
        user_service: UserService,
    ) -> ReadProjection:
        """Provide the question/answer read projection."""
        return ReadProjection(
            vote_service=vote_service,
            answer_service=answer_service,
            user_service=user_service,
        )

    # Auth use cases
    @provide
    def get_register_use_case(
        self, user_service: UserService, jwt_service: JWTService
    ) -> RegisterUseCase:
        return RegisterUseCase(user_service=user_service, jwt_service=jwt_service)

    @provide
    def get_login_use_case(
        self, user_service: UserService, jwt_service: JWTService
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(user_service=user_service, jwt_service=jwt_service)

    @provide
    def get_current_user_use_case(self, user_service: UserService) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(user_service=user_service)

    @provide
    def get_update_profile_use_case(self, user_service: UserService) -> UpdateProfileUseCase:
        return UpdateProfileUseCase(user_service=user_service)

    @provide
    def get_change_password_use_case(
        self, user_service: UserService
    ) -> ChangePasswordUseCase:
        return ChangePasswordUseCase(user_service=user_service)

    # Question use cases
    @provide
    def get_create_question_use_case(
        self, question_service: QuestionService, projection: ReadProjection
    ) -> CreateQuestionUseCase:
        return CreateQuestionUseCase(
            question_service=question_service, projection=projection
        )

    @provide
    def get_get_question_use_case(
        self,
        question_service: QuestionService,
        answer_service: AnswerService,
        projection: ReadProjection,
    ) -> GetQuestionUseCase:
        return GetQuestionUseCase(
            question_service=question_service,
            answer_service=answer_service,
            projection=projection,
        )

    @provide
    def get_list_questions_use_case(
        self,
        question_service: QuestionService,
        projection: ReadProjection,
        pagination: PaginationSettings,
    ) -> ListQuestionsUseCase:
        return ListQuestionsUseCase(
            question_service=question_service,
            projection=projection,
            pagination=pagination,
        )

    @provide
    def get_update_question_use_case(
        self,
        question_service: QuestionService,
        answer_service: AnswerService,
        projection: ReadProjection,
    ) -> UpdateQuestionUseCase:
        return UpdateQuestionUseCase(
            question_service=question_service,
            answer_service=answer_service,
            projection=projection,
        )

    @provide
    def get_delete_question_use_case(
        self, question_service: QuestionService
    ) -> DeleteQuestionUseCase:
        return DeleteQuestionUseCase(question_service=question_service)

    # Answer use cases
    @provide
    def get_list_answers_use_case(
        self,
        question_service: QuestionService,
        answer_service: AnswerService,
        projection: ReadProjection,
    ) -> ListAnswersUseCase:
        return ListAnswersUseCase(
            question_service=question_service,
            answer_service=answer_service,
            projection=projection,
        )

    @provide
    def get_create_answer_use_case(
        self, answer_service: AnswerService, projection: ReadProjection
    ) -> CreateAnswerUseCase:
        return CreateAnswerUseCase(answer_service=answer_service, projection=projection)

    @provide
    def get_update_answer_use_case(
        self, answer_service: AnswerService, projection: ReadProjection
    ) -> UpdateAnswerUseCase:
        return UpdateAnswerUseCase(answer_service=answer_service, projection=projection)

    @provide
    def get_delete_answer_use_case(
        self, answer_service: AnswerService
    ) -> DeleteAnswerUseCase:
        return DeleteAnswerUseCase(answer_service=answer_service)

    @provide
    def get_accept_answer_use_case(
        self, answer_service: AnswerService
    ) -> AcceptAnswerUseCase:
        return AcceptAnswerUseCase(answer_service=answer_service)

    # Vote use cases
    @provide
    def get_cast_vote_use_case(self, vote_service: VoteService) -> CastVoteUseCase:
        """Provide vote use case."""
        return CastVoteUseCase(vote_service=vote_service)

    # Notification use cases
    @provide
    def get_list_notifications_use_case(
        self,
        notification_service: NotificationService,
        pagination: PaginationSettings,
    ) -> ListNotificationsUseCase:
        return ListNotificationsUseCase(
            notification_service=notification_service, pagination=pagination
        )

    @provide
    def get_mark_notification_use_case(
        self, notification_service: NotificationService
    ) -> MarkNotificationUseCase:
        return MarkNotificationUseCase(notification_service=notification_service)

    @provide
    def get_mark_all_read_use_case(
        self, notification_service: NotificationService
    ) -> MarkAllReadUseCase:
        return MarkAllReadUseCase(notification_service=notification_service)

    @provide
    def get_delete_notification_use_case(
        self, notification_service: NotificationService
    ) -> DeleteNotificationUseCase:
        return DeleteNotificationUseCase(notification_service=notification_service)

    # User use cases
    @provide
    def get_user_profile_use_case(
        self, user_service: UserService
    ) -> GetUserProfileUseCase:
        """Provide get user profile use case."""
        return GetUserProfileUseCase(user_service=user_service)

    @provide
    def get_preferences_use_case(self, user_service: UserService) -> GetPreferencesUseCase:
        return GetPreferencesUseCase(user_service=user_service)

    @provide
    def get_update_preferences_use_case(
        self, user_service: UserService
    ) -> UpdatePreferencesUseCase:
        return UpdatePreferencesUseCase(user_service=user_service)

    @provide
    def get_stats_use_case(self, stats_service: StatsService) -> GetStatsUseCase:
        """Provide community stats use case."""
        return GetStatsUseCase(stats_service=stats_service)
