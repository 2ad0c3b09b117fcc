"""Posting Service — topic creation with its originating reply, and reply appends.

Invariants:
    - post_topic commits Topic + originating Reply in ONE transaction: either both
      rows exist or neither does (no reader ever sees a reply-less topic)
    - A failure between the two inserts is rolled back and re-raised as
      DatabaseError("post_topic"); it is never swallowed
    - post_reply verifies the topic exists inside the same transaction; an unknown
      topic raises ResourceNotFoundError and writes nothing
    - time is stamped from one clock read per reply (Unix seconds)

Design Decisions:
    - Clock injected: tests pin timestamps, production uses int(time.time())
    - Repository only flushes; this service owns commit/rollback
"""

import logging
import time
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError

from app.core.domain_types import ReplyId, TopicId
from app.core.errors import DatabaseError, ErrorContext, ResourceNotFoundError
from app.core.repository_protocols import ForumRepository

logger = logging.getLogger(__name__)


def unix_timestamp() -> int:
    return int(time.time())


class PostingService:
    """Writes topics and replies as complete units of work."""

    def __init__(
        self, repo: ForumRepository, clock: Callable[[], int] = unix_timestamp,
    ):
        self.repo = repo
        self.clock = clock

    async def post_topic(self, subject: str, content: str, author: str) -> TopicId:
        """Create a topic and its originating reply atomically."""
        try:
            topic_id = await self.repo.insert_topic(subject)
            await self.repo.insert_reply(topic_id, self.clock(), content, author)
            await self.repo.commit()
        except SQLAlchemyError as e:
            await self.repo.rollback()
            logger.error(
                f"Topic creation rolled back: {e}",
                extra={"username": author, "operation": "post_topic"},
            )
            raise DatabaseError(
                "topic and originating reply could not be stored", "post_topic",
                ErrorContext(username=author),
            ) from e
        logger.info(
            "Topic posted", extra={"topic_id": topic_id, "username": author},
        )
        return topic_id

    async def post_reply(
        self, topic_id: TopicId, content: str, author: str,
    ) -> ReplyId:
        """Append a reply to an existing topic."""
        try:
            if await self.repo.get_topic(topic_id) is None:
                raise ResourceNotFoundError(
                    "Topic", str(topic_id), ErrorContext(topic_id=topic_id),
                )
            reply_id = await self.repo.insert_reply(
                topic_id, self.clock(), content, author,
            )
            await self.repo.commit()
        except SQLAlchemyError as e:
            await self.repo.rollback()
            logger.error(
                f"Reply insert rolled back: {e}",
                extra={"topic_id": topic_id, "operation": "post_reply"},
            )
            raise DatabaseError(
                "reply could not be stored", "post_reply",
                ErrorContext(topic_id=topic_id, username=author),
            ) from e
        logger.info(
            "Reply posted",
            extra={"topic_id": topic_id, "reply_id": reply_id, "username": author},
        )
        return reply_id
