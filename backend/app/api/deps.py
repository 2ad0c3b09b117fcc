"""API Dependencies — per-request repository, services, session context, login gate.

Invariants:
    - SessionContext is resolved once per request from the cookie session
    - require_login raises LoginRequiredError (403) before the handler body runs
    - Services share the request's single AsyncSession (one unit of work per request)
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.core.errors import LoginRequiredError
from app.core.session_context import SessionContext, resolve_context
from app.infrastructure.database import get_db
from app.infrastructure.forum_repository import SqlAlchemyForumRepository
from app.services.auth import AuthService
from app.services.posting import PostingService
from app.services.topic_index import TopicIndex


def get_repository(
    db: AsyncSession = Depends(get_db),
) -> SqlAlchemyForumRepository:
    return SqlAlchemyForumRepository(db)


def get_posting_service(
    repo: SqlAlchemyForumRepository = Depends(get_repository),
) -> PostingService:
    return PostingService(repo)


def get_topic_index(
    repo: SqlAlchemyForumRepository = Depends(get_repository),
) -> TopicIndex:
    return TopicIndex(repo)


def get_auth_service(
    repo: SqlAlchemyForumRepository = Depends(get_repository),
) -> AuthService:
    return AuthService(repo, bcrypt_rounds=get_settings().bcrypt_rounds)


def get_session_context(request: Request) -> SessionContext:
    return resolve_context(request.session)


def require_login(
    context: SessionContext = Depends(get_session_context),
) -> str:
    """Gate for mutating actions. Returns the authenticated username."""
    if not context.is_authenticated:
        raise LoginRequiredError()
    return context.username
