"""Forum Repository — SQLAlchemy implementation of the ForumRepository protocol.

Invariants:
    - Writes flush (ids assigned) but never commit — services own the unit of work
    - insert_user maps the username uniqueness violation to UsernameTakenError and
      rolls the unit of work back; every other SQLAlchemy error propagates
    - list_replies orders by (time, reply_id): insertion order breaks time ties
    - reply_stats is a single grouped statement (one consistent snapshot)

Design Decisions:
    - ORM rows returned as-is: they satisfy the core's *Record protocols structurally
    - Topics without replies sort last in activity order (NULL max time)
"""

import logging
from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.aggregation import ReplyStats
from app.core.domain_types import ReplyId, TopicId
from app.core.errors import UsernameTakenError
from app.models.reply import Reply
from app.models.topic import Topic
from app.models.user import User

logger = logging.getLogger(__name__)


class SqlAlchemyForumRepository:
    """Forum persistence over one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Writes ──────────────────────────────────────────────────

    async def insert_topic(self, subject: str) -> TopicId:
        topic = Topic(subject=subject)
        self.db.add(topic)
        await self.db.flush()
        return TopicId(topic.topic_id)

    async def insert_reply(
        self, topic_id: TopicId, time: int, content: str, author: str,
    ) -> ReplyId:
        reply = Reply(
            topic_id=topic_id, time=time, content=content, author=author,
        )
        self.db.add(reply)
        await self.db.flush()
        return ReplyId(reply.reply_id)

    async def insert_user(self, username: str, password_hash: str) -> None:
        self.db.add(User(username=username, password_hash=password_hash))
        try:
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            logger.info(
                "Username constraint rejected registration",
                extra={"username": username},
            )
            raise UsernameTakenError(username)

    async def commit(self) -> None:
        await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()

    # ─── Reads ───────────────────────────────────────────────────

    async def get_topic(self, topic_id: TopicId) -> Topic | None:
        result = await self.db.execute(
            select(Topic).where(Topic.topic_id == topic_id),
        )
        return result.scalar_one_or_none()

    async def get_user(self, username: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.username == username),
        )
        return result.scalar_one_or_none()

    async def list_topics(self) -> Sequence[Topic]:
        result = await self.db.execute(select(Topic).order_by(Topic.topic_id))
        return result.scalars().all()

    async def list_topics_by_activity(self) -> Sequence[Topic]:
        """Topics ordered by most recent reply time, newest first."""
        last_activity = (
            select(func.max(Reply.time))
            .where(Reply.topic_id == Topic.topic_id)
            .correlate(Topic)
            .scalar_subquery()
        )
        result = await self.db.execute(
            select(Topic).order_by(
                last_activity.desc().nulls_last(), Topic.topic_id.desc(),
            ),
        )
        return result.scalars().all()

    async def list_replies(self, topic_id: TopicId) -> Sequence[Reply]:
        result = await self.db.execute(
            select(Reply)
            .where(Reply.topic_id == topic_id)
            .order_by(Reply.time, Reply.reply_id),
        )
        return result.scalars().all()

    async def count_replies(self, topic_id: TopicId) -> int:
        result = await self.db.execute(
            select(func.count(Reply.reply_id)).where(Reply.topic_id == topic_id),
        )
        return result.scalar_one()

    async def last_reply_time(self, topic_id: TopicId) -> int | None:
        result = await self.db.execute(
            select(func.max(Reply.time)).where(Reply.topic_id == topic_id),
        )
        return result.scalar_one()

    async def reply_stats(
        self, topic_ids: Sequence[int],
    ) -> dict[int, ReplyStats]:
        """Count and latest time per topic, in one grouped query."""
        if not topic_ids:
            return {}
        result = await self.db.execute(
            select(
                Reply.topic_id,
                func.count(Reply.reply_id),
                func.max(Reply.time),
            )
            .where(Reply.topic_id.in_(list(topic_ids)))
            .group_by(Reply.topic_id),
        )
        return {
            topic_id: ReplyStats(count=count, last_time=last_time)
            for topic_id, count, last_time in result.all()
        }
