"""Posting service tests — topic + originating reply atomicity, reply appends.

Invariants:
    - After post_topic returns, count_replies == 1
    - A failed originating-reply insert leaves no topic behind (DatabaseError raised)
    - post_reply to an unknown topic writes nothing (ResourceNotFoundError)
"""

import pytest

from app.core.errors import DatabaseError, ResourceNotFoundError
from app.services.posting import PostingService, unix_timestamp


async def test_post_topic_creates_exactly_one_reply(repo, step_clock):
    posting = PostingService(repo, clock=step_clock(1000))
    topic_id = await posting.post_topic("Hello", "First post", "alice")

    assert topic_id == 1
    assert await repo.count_replies(topic_id) == 1
    replies = await repo.list_replies(topic_id)
    assert len(replies) == 1
    assert replies[0].content == "First post"
    assert replies[0].author == "alice"
    assert replies[0].time == 1000


async def test_failed_originating_reply_rolls_back_topic(repo):
    posting = PostingService(repo)
    # content is NOT NULL: the reply insert fails after the topic insert
    with pytest.raises(DatabaseError) as exc_info:
        await posting.post_topic("Hello", None, "alice")

    assert exc_info.value.operation == "post_topic"
    assert await repo.list_topics() == []


async def test_topic_ids_continue_after_rollback(repo):
    posting = PostingService(repo, clock=lambda: 10)
    with pytest.raises(DatabaseError):
        await posting.post_topic("broken", None, "alice")
    topic_id = await posting.post_topic("ok", "content", "alice")
    assert [t.topic_id for t in await repo.list_topics()] == [topic_id]


async def test_post_reply_appends_with_clock_time(repo, step_clock):
    posting = PostingService(repo, clock=step_clock(100, 200))
    topic_id = await posting.post_topic("Hello", "First post", "alice")
    reply_id = await posting.post_reply(topic_id, "Second post", "bob")

    replies = await repo.list_replies(topic_id)
    assert [r.reply_id for r in replies][-1] == reply_id
    assert replies[-1].time == 200
    assert replies[-1].author == "bob"


async def test_same_second_replies_keep_insertion_order(repo):
    posting = PostingService(repo, clock=lambda: 500)
    topic_id = await posting.post_topic("t", "first", "alice")
    await posting.post_reply(topic_id, "second", "bob")
    await posting.post_reply(topic_id, "third", "carol")

    replies = await repo.list_replies(topic_id)
    assert [r.content for r in replies] == ["first", "second", "third"]


async def test_post_reply_to_missing_topic_writes_nothing(repo):
    posting = PostingService(repo)
    with pytest.raises(ResourceNotFoundError):
        await posting.post_reply(999, "orphan", "alice")
    assert await repo.count_replies(999) == 0


def test_default_clock_is_unix_seconds():
    assert isinstance(unix_timestamp(), int)
    assert unix_timestamp() > 1_600_000_000
