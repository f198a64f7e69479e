"""Application layer DI providers."""

from dishka import Scope, provide

from spark.application.usecase.idea import (
    GetIdeaUseCase,
    ListIdeasUseCase,
    ToggleBookmarkUseCase,
)
from spark.application.usecase.preferences import (
    GetPreferenceOptionsUseCase,
    GetPreferencesUseCase,
    ResetPreferencesUseCase,
    UpdatePreferencesUseCase,
)
from spark.application.usecase.recommendation import (
    GetRecommendationsUseCase,
    GetTrendingUseCase,
)
from spark.application.usecase.vote import CastVoteUseCase
from spark.domain.repository import UnitOfWork
from spark.domain.service import (
    BroadcastSink,
    IdeaService,
    PreferencesService,
    RecommendationEngine,
    TrendingWindowCalculator,
    VoteLedger,
)
from spark.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(
        self,
        vote_ledger: VoteLedger,
        unit_of_work: UnitOfWork,
        broadcast_sink: BroadcastSink,
    ) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(
            vote_ledger=vote_ledger,
            unit_of_work=unit_of_work,
            broadcast_sink=broadcast_sink,
        )

    # Idea use cases
    @provide(scope=Scope.REQUEST)
    def get_list_ideas_use_case(self, idea_service: IdeaService) -> ListIdeasUseCase:
        """Provide list ideas use case."""
        return ListIdeasUseCase(idea_service=idea_service)

    @provide(scope=Scope.REQUEST)
    def get_get_idea_use_case(self, idea_service: IdeaService) -> GetIdeaUseCase:
        """Provide get idea use case."""
        return GetIdeaUseCase(idea_service=idea_service)

    @provide(scope=Scope.REQUEST)
    def get_toggle_bookmark_use_case(
        self, idea_service: IdeaService
    ) -> ToggleBookmarkUseCase:
        """Provide toggle bookmark use case."""
        return ToggleBookmarkUseCase(idea_service=idea_service)

    # Recommendation use cases
    @provide(scope=Scope.REQUEST)
    def get_get_recommendations_use_case(
        self, recommendation_engine: RecommendationEngine
    ) -> GetRecommendationsUseCase:
        """Provide get recommendations use case."""
        return GetRecommendationsUseCase(recommendation_engine=recommendation_engine)

    @provide(scope=Scope.REQUEST)
    def get_get_trending_use_case(
        self, trending_calculator: TrendingWindowCalculator
    ) -> GetTrendingUseCase:
        """Provide get trending use case."""
        return GetTrendingUseCase(trending_calculator=trending_calculator)

    # Preferences use cases
    @provide(scope=Scope.REQUEST)
    def get_get_preferences_use_case(
        self, preferences_service: PreferencesService
    ) -> GetPreferencesUseCase:
        """Provide get preferences use case."""
        return GetPreferencesUseCase(preferences_service=preferences_service)

    @provide(scope=Scope.REQUEST)
    def get_update_preferences_use_case(
        self, preferences_service: PreferencesService
    ) -> UpdatePreferencesUseCase:
        """Provide update preferences use case."""
        return UpdatePreferencesUseCase(preferences_service=preferences_service)

    @provide(scope=Scope.REQUEST)
    def get_reset_preferences_use_case(
        self, preferences_service: PreferencesService
    ) -> ResetPreferencesUseCase:
        """Provide reset preferences use case."""
        return ResetPreferencesUseCase(preferences_service=preferences_service)

    @provide(scope=Scope.APP)
    def get_preference_options_use_case(self) -> GetPreferenceOptionsUseCase:
        """Provide preference options use case."""
        return GetPreferenceOptionsUseCase()
