"""Typed identifiers.

A vote is keyed by (UserId, PostId); distinct NewTypes keep the two halves
of that key from being swapped silently.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
ReplyId = NewType("ReplyId", UUID)
