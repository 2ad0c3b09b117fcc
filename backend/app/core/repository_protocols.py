"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Writes only flush; the caller owns commit/rollback (unit of work)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Lookups return None on a miss: the service decides whether a miss is a 404
"""

from typing import Protocol, Sequence

from app.core.aggregation import ReplyStats
from app.core.domain_types import ReplyId, TopicId


class TopicRecord(Protocol):
    topic_id: int
    subject: str


class ReplyRecord(Protocol):
    reply_id: int
    topic_id: int
    time: int
    content: str
    author: str


class UserRecord(Protocol):
    username: str
    password_hash: str


class ForumRepository(Protocol):
    """Contract for forum persistence — implemented by shell."""
    async def insert_topic(self, subject: str) -> TopicId: ...
    async def insert_reply(
        self, topic_id: TopicId, time: int, content: str, author: str,
    ) -> ReplyId: ...
    async def insert_user(self, username: str, password_hash: str) -> None: ...
    async def get_topic(self, topic_id: TopicId) -> TopicRecord | None: ...
    async def get_user(self, username: str) -> UserRecord | None: ...
    async def list_topics(self) -> Sequence[TopicRecord]: ...
    async def list_topics_by_activity(self) -> Sequence[TopicRecord]: ...
    async def list_replies(self, topic_id: TopicId) -> Sequence[ReplyRecord]: ...
    async def count_replies(self, topic_id: TopicId) -> int: ...
    async def last_reply_time(self, topic_id: TopicId) -> int | None: ...
    async def reply_stats(
        self, topic_ids: Sequence[int],
    ) -> dict[int, ReplyStats]: ...
    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
