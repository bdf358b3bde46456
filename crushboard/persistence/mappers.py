"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from crushboard.domain.model import Post, Reply, UserProfile, Vote
from crushboard.domain.value import (
    OptionalTag,
    PostId,
    PrimaryTag,
    ReplyId,
    UserId,
    VerificationStatus,
    VoteDirection,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(_uuid(row["id"])),
        message=row["message"],
        primary_tag=PrimaryTag(row["primary_tag"]),
        optional_tags=[OptionalTag(tag) for tag in row.get("optional_tags") or []],
        alias=row["alias"],
        user_id=UserId(_uuid(row["user_id"])),
        upvotes=row["upvotes"],
        downvotes=row["downvotes"],
        score=row["score"],
        reply_count=row["reply_count"],
        created_at=row["created_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict.

    created_at is left out so the database assigns it.
    """
    return {
        "id": post.id,
        "message": post.message,
        "primary_tag": post.primary_tag.value,
        "optional_tags": [tag.root for tag in post.optional_tags],
        "alias": post.alias,
        "user_id": post.user_id,
        "upvotes": post.upvotes,
        "downvotes": post.downvotes,
        "score": post.score,
        "reply_count": post.reply_count,
    }


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        user_id=UserId(_uuid(row["user_id"])),
        post_id=PostId(_uuid(row["post_id"])),
        direction=VoteDirection(row["direction"]),
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    return {
        "user_id": vote.user_id,
        "post_id": vote.post_id,
        "direction": vote.direction.value,
    }


def row_to_reply(row: Dict[str, Any]) -> Reply:
    """Convert database row to Reply domain model."""
    return Reply(
        id=ReplyId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        text=row["text"],
        alias=row["alias"],
        created_at=row["created_at"],
    )


def reply_to_dict(reply: Reply) -> Dict[str, Any]:
    """Convert Reply domain model to database dict (without created_at)."""
    return {
        "id": reply.id,
        "post_id": reply.post_id,
        "user_id": reply.user_id,
        "text": reply.text,
        "alias": reply.alias,
    }


def row_to_user_profile(row: Dict[str, Any]) -> UserProfile:
    """Convert database row to UserProfile domain model."""
    return UserProfile(
        id=UserId(_uuid(row["id"])),
        alias=row["alias"],
        college=row["college"],
        crush_points=row["crush_points"],
        verification_status=VerificationStatus(row["verification_status"]),
        id_card_url=row["id_card_url"],
    )


def user_profile_to_dict(profile: UserProfile) -> Dict[str, Any]:
    """Convert UserProfile domain model to database dict."""
    return {
        "id": profile.id,
        "alias": profile.alias,
        "college": profile.college,
        "crush_points": profile.crush_points,
        "verification_status": profile.verification_status.value,
        "id_card_url": profile.id_card_url,
    }
