"""Application layer DI providers."""

from dishka import Scope, provide

from crushboard.application.usecase.auth import (
    GetCurrentUserUseCase,
    SignInAnonymouslyUseCase,
)
from crushboard.application.usecase.post import (
    CreatePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
    WatchPostsUseCase,
    WatchPostUseCase,
)
from crushboard.application.usecase.profile import (
    ResetVerificationUseCase,
    SubmitVerificationUseCase,
)
from crushboard.application.usecase.reply import AddReplyUseCase, ListRepliesUseCase
from crushboard.application.usecase.vote import CastVoteUseCase, GetVoteUseCase
from crushboard.domain.service import (
    FeedService,
    JWTService,
    PostService,
    ReplyService,
    UserProfileService,
    VoteService,
)
from crushboard.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_sign_in_anonymously_use_case(
        self, jwt_service: JWTService, user_profile_service: UserProfileService
    ) -> SignInAnonymouslyUseCase:
        """Provide anonymous sign-in use case."""
        return SignInAnonymouslyUseCase(
            jwt_service=jwt_service, user_profile_service=user_profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, jwt_service: JWTService, user_profile_service: UserProfileService
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(
            jwt_service=jwt_service, user_profile_service=user_profile_service
        )

    # Profile use cases
    @provide(scope=Scope.REQUEST)
    def get_submit_verification_use_case(
        self, user_profile_service: UserProfileService
    ) -> SubmitVerificationUseCase:
        """Provide submit verification use case."""
        return SubmitVerificationUseCase(user_profile_service=user_profile_service)

    @provide(scope=Scope.REQUEST)
    def get_reset_verification_use_case(
        self, user_profile_service: UserProfileService
    ) -> ResetVerificationUseCase:
        """Provide reset verification use case."""
        return ResetVerificationUseCase(user_profile_service=user_profile_service)

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(
        self, post_service: PostService, user_profile_service: UserProfileService
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(
            post_service=post_service, user_profile_service=user_profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(
        self, post_service: PostService, vote_service: VoteService
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(post_service=post_service, vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(
        self, post_service: PostService, vote_service: VoteService
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(post_service=post_service, vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_watch_posts_use_case(self, feed_service: FeedService) -> WatchPostsUseCase:
        """Provide live post feed use case."""
        return WatchPostsUseCase(feed_service=feed_service)

    @provide(scope=Scope.REQUEST)
    def get_watch_post_use_case(self, feed_service: FeedService) -> WatchPostUseCase:
        """Provide live post detail use case."""
        return WatchPostUseCase(feed_service=feed_service)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(
        self,
        vote_service: VoteService,
        post_service: PostService,
        user_profile_service: UserProfileService,
    ) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(
            vote_service=vote_service,
            post_service=post_service,
            user_profile_service=user_profile_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_vote_use_case(self, vote_service: VoteService) -> GetVoteUseCase:
        """Provide get vote use case."""
        return GetVoteUseCase(vote_service=vote_service)

    # Reply use cases
    @provide(scope=Scope.REQUEST)
    def get_add_reply_use_case(
        self, reply_service: ReplyService, user_profile_service: UserProfileService
    ) -> AddReplyUseCase:
        """Provide add reply use case."""
        return AddReplyUseCase(
            reply_service=reply_service, user_profile_service=user_profile_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_replies_use_case(
        self, reply_service: ReplyService, post_service: PostService
    ) -> ListRepliesUseCase:
        """Provide list replies use case."""
        return ListRepliesUseCase(reply_service=reply_service, post_service=post_service)
