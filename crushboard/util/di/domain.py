"""Domain layer DI providers."""

from dishka import Scope, provide

from crushboard.config import AuthSettings, VotingSettings
from crushboard.domain.repository import (
    ChangeFeed,
    PostRepository,
    RecordStore,
    ReplyRepository,
    UserProfileRepository,
    VoteRepository,
)
from crushboard.domain.service import (
    FeedService,
    JWTService,
    PostService,
    ReplyService,
    UserProfileService,
    VoteService,
)
from crushboard.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request (or WebSocket connection) gets fresh service instances.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_profile_service(
        self, user_profile_repository: UserProfileRepository
    ) -> UserProfileService:
        """Provide user profile domain service."""
        return UserProfileService(user_profile_repository=user_profile_repository)

    @provide
    def get_post_service(
        self, post_repository: PostRepository, record_store: RecordStore
    ) -> PostService:
        """Provide post domain service."""
        return PostService(post_repository=post_repository, record_store=record_store)

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        record_store: RecordStore,
        post_service: PostService,
        voting_settings: VotingSettings,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            record_store=record_store,
            post_service=post_service,
            max_retries=voting_settings.max_retries,
        )

    @provide
    def get_reply_service(
        self,
        reply_repository: ReplyRepository,
        record_store: RecordStore,
        post_service: PostService,
    ) -> ReplyService:
        """Provide reply domain service."""
        return ReplyService(
            reply_repository=reply_repository,
            record_store=record_store,
            post_service=post_service,
        )

    @provide
    def get_feed_service(
        self, record_store: RecordStore, change_feed: ChangeFeed
    ) -> FeedService:
        """Provide feed domain service.

        Needs no request session: live queries read through short-lived
        readers from the record store.
        """
        return FeedService(record_store=record_store, change_feed=change_feed)
