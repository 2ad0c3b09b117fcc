"""Topic ORM — a discussion thread.

Invariants:
    - topic_id assigned by storage on insert, monotonically increasing
    - Every committed Topic has at least one Reply (its originating reply),
      guaranteed by PostingService committing both in one transaction
    - No ORM relationship to Reply: listings aggregate via SQL, threads load
      replies through the repository with an explicit ordering
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Topic(Base):
    """Topic aggregate root; replies reference it by topic_id."""
    __tablename__ = "topics"
    __table_args__ = {"sqlite_autoincrement": True}

    topic_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    subject: Mapped[str] = mapped_column(Text, nullable=False)
