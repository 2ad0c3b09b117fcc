"""Topic Aggregation — derives reply count and last activity for topic listings.

Invariants:
    - Output is index-aligned with input: len(out) == len(in), out[i] describes in[i]
    - replies == count - 1 (originating reply excluded) and is never negative
    - A topic with zero replies (or no stats at all) is an internal-consistency error,
      never a displayed -1
    - Pure: stats are fetched by the shell (services/topic_index.py)

Design Decisions:
    - Stats keyed by topic_id and joined back by identity: order comes from the
      input sequence only, so however stats were fetched the ordering contract holds
"""

from dataclasses import dataclass
from typing import Mapping, Protocol, Sequence

from app.core.errors import TopicConsistencyError


class TopicLike(Protocol):
    topic_id: int
    subject: str


@dataclass(frozen=True)
class ReplyStats:
    """Raw per-topic aggregate as read from storage."""
    count: int
    last_time: int | None


@dataclass(frozen=True)
class EnrichedTopic:
    topic_id: int
    subject: str
    replies: int
    last_reply_date: int


def enrich_topic(topic: TopicLike, stats: ReplyStats | None) -> EnrichedTopic:
    if stats is None or stats.count < 1 or stats.last_time is None:
        raise TopicConsistencyError(topic.topic_id)
    return EnrichedTopic(
        topic_id=topic.topic_id,
        subject=topic.subject,
        replies=stats.count - 1,
        last_reply_date=stats.last_time,
    )


def enrich_topics(
    topics: Sequence[TopicLike], stats: Mapping[int, ReplyStats],
) -> list[EnrichedTopic]:
    """Enrich topics in input order. Raises TopicConsistencyError on a reply-less topic."""
    return [enrich_topic(t, stats.get(t.topic_id)) for t in topics]
