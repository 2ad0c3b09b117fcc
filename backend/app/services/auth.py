"""Auth Service — registration and credential checks.

Invariants:
    - Passwords are bcrypt-hashed before storage; plaintext is never stored or logged
    - Username uniqueness: validation pre-check is a fast path, the storage
      constraint is the authority (UsernameTakenError either way)
    - authenticate() raises the same InvalidCredentialsError for unknown user and
      wrong password

Design Decisions:
    - Session transitions (log_in/log_out) stay in core/session_context.py: this
      service never touches the cookie session
"""

import logging
from typing import Mapping

from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import (
    DatabaseError, ErrorContext, InvalidCredentialsError, UsernameTakenError,
)
from app.core.repository_protocols import ForumRepository
from app.infrastructure.password_hashing import hash_password, verify_password
from app.services.forms import LOGIN_FORM, validate_form, validate_registration

logger = logging.getLogger(__name__)


class AuthService:
    """Registers users and verifies credentials."""

    def __init__(self, repo: ForumRepository, bcrypt_rounds: int = 12):
        self.repo = repo
        self.bcrypt_rounds = bcrypt_rounds

    async def register(self, raw: Mapping[str, object]) -> str:
        """Validate the registration form and create the user. Returns username."""
        data = await validate_registration(self.repo, raw)
        username = data["username"]
        password_hash = await hash_password(data["password"], self.bcrypt_rounds)
        try:
            await self.repo.insert_user(username, password_hash)
            await self.repo.commit()
        except SQLAlchemyError as e:
            await self.repo.rollback()
            # A racing registration can also surface at commit time
            if await self.repo.get_user(username) is not None:
                raise UsernameTakenError(username) from e
            raise DatabaseError(
                "user could not be stored", "register",
                ErrorContext(username=username),
            ) from e
        logger.info("User registered", extra={"username": username})
        return username

    async def authenticate(self, raw: Mapping[str, object]) -> str:
        """Check login form credentials. Returns the username on success."""
        data = validate_form(LOGIN_FORM, raw)
        username = data["username"]
        user = await self.repo.get_user(username)
        if user is None or not await verify_password(
            data["password"], user.password_hash,
        ):
            logger.warning("Failed login attempt", extra={"username": username})
            raise InvalidCredentialsError()
        logger.info("User logged in", extra={"username": username})
        return username
