"""Topic Index — read views: topics by activity (enriched) and single threads.

Invariants:
    - list_by_activity() output order == repository activity order
    - Enrichment stats come from one grouped query per call (consistent snapshot),
      never from per-topic round trips
    - thread() raises ResourceNotFoundError for an unknown topic
"""

from dataclasses import dataclass
from typing import Sequence

from app.core.aggregation import EnrichedTopic, TopicLike, enrich_topics
from app.core.domain_types import TopicId
from app.core.errors import ErrorContext, ResourceNotFoundError
from app.core.repository_protocols import (
    ForumRepository, ReplyRecord, TopicRecord,
)


@dataclass(frozen=True)
class TopicThread:
    topic: TopicRecord
    replies: Sequence[ReplyRecord]


class TopicIndex:
    """Aggregated and per-topic read paths."""

    def __init__(self, repo: ForumRepository):
        self.repo = repo

    async def enrich(self, topics: Sequence[TopicLike]) -> list[EnrichedTopic]:
        stats = await self.repo.reply_stats([t.topic_id for t in topics])
        return enrich_topics(topics, stats)

    async def list_by_activity(self) -> list[EnrichedTopic]:
        topics = await self.repo.list_topics_by_activity()
        return await self.enrich(topics)

    async def thread(self, topic_id: TopicId) -> TopicThread:
        topic = await self.repo.get_topic(topic_id)
        if topic is None:
            raise ResourceNotFoundError(
                "Topic", str(topic_id), ErrorContext(topic_id=topic_id),
            )
        replies = await self.repo.list_replies(topic_id)
        return TopicThread(topic=topic, replies=replies)
