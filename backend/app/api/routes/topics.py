"""Topic Routes — front page, threads, and the login-gated posting actions.

Invariants:
    - Mutating routes depend on require_login FIRST: anonymous callers get 403
      and no form handling or write happens
    - Read views pop pending flashes (each flash is shown once)
    - Successful posts flash an info message and return a redirect target
    - topic_id path params outside 1..2**63-1 are rejected as 400 before any query
"""

import logging
import time

from fastapi import APIRouter, Depends, Path, Request, status

from app.api.deps import (
    get_posting_service, get_topic_index, require_login,
)
from app.core.domain_types import FlashCategory, TopicId
from app.core.session_context import flash, pop_flashes
from app.core.time_format import format_relative_time
from app.schemas.forum import (
    FlashResponse, NewTopicForm, ReplyCreatedResponse, ReplyForm,
    ReplyResponse, TopicCreatedResponse, TopicListResponse,
    TopicSummaryResponse, TopicThreadResponse,
)
from app.services.forms import NEW_TOPIC_FORM, REPLY_FORM, validate_form
from app.services.posting import PostingService
from app.services.topic_index import TopicIndex

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/topics", tags=["topics"])

# Largest id a 64-bit INTEGER column can hold
MAX_TOPIC_ID = 2**63 - 1


def topic_path(topic_id: int) -> str:
    return f"/topic/{topic_id}"


def _flashes(request: Request) -> list[FlashResponse]:
    return [
        FlashResponse(category=f.category, message=f.message)
        for f in pop_flashes(request.session)
    ]


@router.get("", response_model=TopicListResponse)
async def list_topics(
    request: Request, index: TopicIndex = Depends(get_topic_index),
):
    """Topics by most recent activity, with reply counts."""
    topics = await index.list_by_activity()
    now = int(time.time())
    return TopicListResponse(
        topics=[
            TopicSummaryResponse(
                topic_id=t.topic_id,
                subject=t.subject,
                replies=t.replies,
                last_reply_date=t.last_reply_date,
                last_reply_ago=format_relative_time(t.last_reply_date, now),
            )
            for t in topics
        ],
        flashes=_flashes(request),
    )


@router.post(
    "", response_model=TopicCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_topic(
    request: Request,
    body: NewTopicForm,
    username: str = Depends(require_login),
    posting: PostingService = Depends(get_posting_service),
):
    """Post a new topic with its first reply."""
    data = validate_form(NEW_TOPIC_FORM, body.model_dump())
    topic_id = await posting.post_topic(data["subject"], data["content"], username)
    flash(request.session, FlashCategory.INFO, "New topic posted.")
    return TopicCreatedResponse(topic_id=topic_id, redirect=topic_path(topic_id))


@router.get("/{topic_id}", response_model=TopicThreadResponse)
async def get_topic(
    request: Request,
    topic_id: int = Path(ge=1, le=MAX_TOPIC_ID),
    index: TopicIndex = Depends(get_topic_index),
):
    """Single topic with replies in posting order."""
    thread = await index.thread(TopicId(topic_id))
    now = int(time.time())
    return TopicThreadResponse(
        topic_id=thread.topic.topic_id,
        subject=thread.topic.subject,
        replies=[
            ReplyResponse(
                reply_id=r.reply_id,
                time=r.time,
                posted_ago=format_relative_time(r.time, now),
                content=r.content,
                author=r.author,
            )
            for r in thread.replies
        ],
        flashes=_flashes(request),
    )


@router.post(
    "/{topic_id}/replies", response_model=ReplyCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_reply(
    request: Request,
    body: ReplyForm,
    topic_id: int = Path(ge=1, le=MAX_TOPIC_ID),
    username: str = Depends(require_login),
    posting: PostingService = Depends(get_posting_service),
):
    """Append a reply to an existing topic."""
    data = validate_form(REPLY_FORM, body.model_dump())
    reply_id = await posting.post_reply(TopicId(topic_id), data["content"], username)
    flash(request.session, FlashCategory.INFO, "Reply posted.")
    return ReplyCreatedResponse(
        topic_id=topic_id, reply_id=reply_id, redirect=topic_path(topic_id),
    )
