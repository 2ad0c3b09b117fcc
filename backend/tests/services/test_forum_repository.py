"""Forum repository tests — storage contract against in-memory SQLite.

Invariants:
    - Ids assigned on insert, monotonically increasing
    - list_replies orders by time, then insertion order
    - Activity order: most recent reply first
    - Username uniqueness enforced at insert (UsernameTakenError)
    - replies.topic_id must name an existing topic (foreign key enforced)
"""

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError

from app.core.aggregation import ReplyStats
from app.core.errors import UsernameTakenError
from app.infrastructure.forum_repository import SqlAlchemyForumRepository
from app.models.reply import Reply
from app.models.topic import Topic


async def _topic(repo, subject, *times):
    topic_id = await repo.insert_topic(subject)
    for i, t in enumerate(times):
        await repo.insert_reply(topic_id, t, f"{subject} #{i}", "alice")
    await repo.commit()
    return topic_id


async def test_insert_topic_assigns_increasing_ids(repo):
    first = await repo.insert_topic("one")
    second = await repo.insert_topic("two")
    await repo.commit()
    assert (first, second) == (1, 2)


async def test_get_topic_miss_returns_none(repo):
    assert await repo.get_topic(999) is None


async def test_replies_ordered_by_time_then_insertion(repo):
    topic_id = await repo.insert_topic("t")
    late = await repo.insert_reply(topic_id, 300, "late", "a")
    tie_1 = await repo.insert_reply(topic_id, 100, "tie-1", "b")
    tie_2 = await repo.insert_reply(topic_id, 100, "tie-2", "c")
    mid = await repo.insert_reply(topic_id, 200, "mid", "d")
    await repo.commit()

    replies = await repo.list_replies(topic_id)
    assert [r.reply_id for r in replies] == [tie_1, tie_2, mid, late]


async def test_count_and_last_reply_time(repo):
    topic_id = await _topic(repo, "t", 100, 250, 200)
    assert await repo.count_replies(topic_id) == 3
    assert await repo.last_reply_time(topic_id) == 250


async def test_last_reply_time_none_without_replies(repo):
    topic_id = await repo.insert_topic("empty")
    await repo.commit()
    assert await repo.count_replies(topic_id) == 0
    assert await repo.last_reply_time(topic_id) is None


async def test_list_topics_by_activity_most_recent_first(repo):
    old = await _topic(repo, "old", 100)
    new = await _topic(repo, "new", 200)
    revived = await _topic(repo, "revived", 50, 300)

    topics = await repo.list_topics_by_activity()
    assert [t.topic_id for t in topics] == [revived, new, old]


async def test_list_topics_returns_all_by_id(repo):
    a = await _topic(repo, "a", 300)
    b = await _topic(repo, "b", 100)
    assert [t.topic_id for t in await repo.list_topics()] == [a, b]


async def test_reply_stats_single_grouped_read(repo):
    a = await _topic(repo, "a", 100)
    b = await _topic(repo, "b", 100, 400, 200)
    stats = await repo.reply_stats([a, b, 999])
    assert stats == {
        a: ReplyStats(count=1, last_time=100),
        b: ReplyStats(count=3, last_time=400),
    }


async def test_reply_stats_empty_ids(repo):
    assert await repo.reply_stats([]) == {}


async def test_get_user_round_trip(repo):
    await repo.insert_user("alice", "hash")
    await repo.commit()
    user = await repo.get_user("alice")
    assert user.username == "alice"
    assert user.password_hash == "hash"
    assert await repo.get_user("bob") is None


async def test_duplicate_username_rejected_by_storage(test_session_factory):
    async with test_session_factory() as first, test_session_factory() as second:
        repo_a = SqlAlchemyForumRepository(first)
        repo_b = SqlAlchemyForumRepository(second)
        await repo_a.insert_user("alice", "hash-a")
        await repo_a.commit()

        with pytest.raises(UsernameTakenError):
            await repo_b.insert_user("alice", "hash-b")

        user = await repo_a.get_user("alice")
        assert user.password_hash == "hash-a"


async def test_reply_to_unknown_topic_violates_foreign_key(repo):
    with pytest.raises(IntegrityError):
        await repo.insert_reply(999, 100, "orphan", "alice")
    await repo.rollback()
    assert await repo.list_replies(999) == []


def test_topic_and_reply_linked_only_by_foreign_key():
    assert not inspect(Topic).relationships
    assert not inspect(Reply).relationships
    assert [fk.target_fullname for fk in Reply.__table__.c.topic_id.foreign_keys] == [
        "topics.topic_id",
    ]
