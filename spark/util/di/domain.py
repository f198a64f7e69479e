"""Domain layer DI providers."""

from dishka import Scope, provide

from spark.config import AuthSettings, RecommendationSettings, TrendingSettings
from spark.domain.repository import (
    ActivityRepository,
    BookmarkRepository,
    CommentRepository,
    IdeaRepository,
    PreferencesRepository,
    UserRepository,
    VoteRepository,
)
from spark.domain.service import (
    IdeaService,
    JWTService,
    KarmaAccumulator,
    PreferencesService,
    RecommendationEngine,
    TrendingWindowCalculator,
    VoteLedger,
)
from spark.util.di.base import ProviderBase


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
    def get_karma_accumulator(self, user_repository: UserRepository) -> KarmaAccumulator:
        """Provide karma accumulator."""
        return KarmaAccumulator(user_repository=user_repository)

    @provide
    def get_vote_ledger(
        self,
        vote_repository: VoteRepository,
        idea_repository: IdeaRepository,
        comment_repository: CommentRepository,
        activity_repository: ActivityRepository,
        karma_accumulator: KarmaAccumulator,
    ) -> VoteLedger:
        """Provide vote ledger."""
        return VoteLedger(
            vote_repository=vote_repository,
            idea_repository=idea_repository,
            comment_repository=comment_repository,
            activity_repository=activity_repository,
            karma_accumulator=karma_accumulator,
        )

    @provide
    def get_idea_service(
        self,
        idea_repository: IdeaRepository,
        vote_repository: VoteRepository,
        bookmark_repository: BookmarkRepository,
        activity_repository: ActivityRepository,
    ) -> IdeaService:
        """Provide idea domain service."""
        return IdeaService(
            idea_repository=idea_repository,
            vote_repository=vote_repository,
            bookmark_repository=bookmark_repository,
            activity_repository=activity_repository,
        )

    @provide
    def get_recommendation_engine(
        self,
        user_repository: UserRepository,
        idea_repository: IdeaRepository,
        vote_repository: VoteRepository,
        bookmark_repository: BookmarkRepository,
        preferences_repository: PreferencesRepository,
        settings: RecommendationSettings,
    ) -> RecommendationEngine:
        """Provide recommendation engine."""
        return RecommendationEngine(
            user_repository=user_repository,
            idea_repository=idea_repository,
            vote_repository=vote_repository,
            bookmark_repository=bookmark_repository,
            preferences_repository=preferences_repository,
            settings=settings,
        )

    @provide
    def get_trending_calculator(
        self, idea_repository: IdeaRepository, settings: TrendingSettings
    ) -> TrendingWindowCalculator:
        """Provide trending window calculator."""
        return TrendingWindowCalculator(
            idea_repository=idea_repository, settings=settings
        )

    @provide
    def get_preferences_service(
        self, preferences_repository: PreferencesRepository
    ) -> PreferencesService:
        """Provide preferences domain service."""
        return PreferencesService(preferences_repository=preferences_repository)
