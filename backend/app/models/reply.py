"""Reply ORM — a single post within a Topic.

Invariants:
    - Always belongs to a Topic (topic_id FK, non-null)
    - time is Unix seconds, stamped once at insert
    - Within a topic, replies order by (time, reply_id)
    - author references User by value, not by foreign key
"""

from sqlalchemy import Integer, String, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.user import USERNAME_MAX_LENGTH


class Reply(Base):
    """Reply entity — ordered by time within its topic."""
    __tablename__ = "replies"
    __table_args__ = {"sqlite_autoincrement": True}

    reply_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    topic_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("topics.topic_id"), nullable=False, index=True,
    )
    time: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str] = mapped_column(
        String(USERNAME_MAX_LENGTH), nullable=False,
    )
