"""User ORM — registered forum accounts.

Invariants:
    - username is the primary key: uniqueness enforced at insert, not only by validation
    - password_hash is a bcrypt hash; plaintext never reaches this table
    - Rows are never updated or deleted by the forum
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base

USERNAME_MAX_LENGTH = 20


class User(Base):
    """Registered user — identified by username."""
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(USERNAME_MAX_LENGTH), primary_key=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User(username='{self.username}')>"
