"""Reply representation shared by the reply use cases."""

from datetime import datetime

from pydantic import BaseModel

from crushboard.domain.model import Reply


class ReplyItem(BaseModel):
    """Reply as returned to clients."""

    reply_id: str
    post_id: str
    text: str
    alias: str
    created_at: datetime | None

    @classmethod
    def from_reply(cls, reply: Reply) -> "ReplyItem":
        """Build the client view of a reply."""
        return cls(
            reply_id=str(reply.id),
            post_id=str(reply.post_id),
            text=reply.text,
            alias=reply.alias,
            created_at=reply.created_at,
        )
