"""Forum Schemas — topic/reply forms and render payloads."""

from pydantic import BaseModel

from app.core.domain_types import FlashCategory


class NewTopicForm(BaseModel):
    subject: str = ""
    content: str = ""


class ReplyForm(BaseModel):
    content: str = ""


class FlashResponse(BaseModel):
    category: FlashCategory
    message: str


class TopicSummaryResponse(BaseModel):
    """One row of the front page — enriched topic."""
    topic_id: int
    subject: str
    replies: int
    last_reply_date: int
    last_reply_ago: str


class TopicListResponse(BaseModel):
    topics: list[TopicSummaryResponse]
    flashes: list[FlashResponse] = []


class ReplyResponse(BaseModel):
    reply_id: int
    time: int
    posted_ago: str
    content: str
    author: str


class TopicThreadResponse(BaseModel):
    topic_id: int
    subject: str
    replies: list[ReplyResponse]
    flashes: list[FlashResponse] = []


class TopicCreatedResponse(BaseModel):
    topic_id: int
    redirect: str


class ReplyCreatedResponse(BaseModel):
    topic_id: int
    reply_id: int
    redirect: str
