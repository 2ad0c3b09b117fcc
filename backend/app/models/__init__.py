"""ORM Models — SQLAlchemy declarative models for forum entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - A Reply references its Topic only through the topic_id foreign key

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete for create_all and
      alembic autogenerate
"""

from app.models.user import User  # noqa: F401
from app.models.topic import Topic  # noqa: F401
from app.models.reply import Reply  # noqa: F401
