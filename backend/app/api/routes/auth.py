"""Auth Routes — register, login, logout, and current session state.

Invariants:
    - Login failure is one generic 401 whatever the cause, and queues the same
      message as an error flash for the next rendered view
    - log_in/log_out are the only writers of the session username
    - Logout is allowed for anonymous sessions (no-op transition)
"""

import logging

from fastapi import APIRouter, Depends, Request, status

from app.api.deps import get_auth_service, get_session_context
from app.core.domain_types import FlashCategory
from app.core.errors import InvalidCredentialsError
from app.core.session_context import SessionContext, flash, log_in, log_out
from app.schemas.auth import (
    LoginForm, RedirectResponse, RegistrationForm, SessionStateResponse,
)
from app.services.auth import AuthService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post(
    "/register", response_model=RedirectResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    request: Request,
    body: RegistrationForm,
    auth: AuthService = Depends(get_auth_service),
):
    await auth.register(body.model_dump())
    flash(request.session, FlashCategory.INFO, "Account created. Login to continue.")
    return RedirectResponse(redirect="/login")


@router.post("/login", response_model=RedirectResponse)
async def login(
    request: Request,
    body: LoginForm,
    auth: AuthService = Depends(get_auth_service),
):
    try:
        username = await auth.authenticate(body.model_dump())
    except InvalidCredentialsError as exc:
        flash(request.session, FlashCategory.ERROR, exc.message)
        raise
    log_in(request.session, username)
    flash(request.session, FlashCategory.INFO, "Login successful.")
    return RedirectResponse(redirect="/")


@router.post("/logout", response_model=RedirectResponse)
async def logout(request: Request):
    log_out(request.session)
    flash(request.session, FlashCategory.INFO, "You have been logged out.")
    return RedirectResponse(redirect="/")


@router.get("/session", response_model=SessionStateResponse)
async def session_state(
    context: SessionContext = Depends(get_session_context),
):
    return SessionStateResponse(
        is_logged_in=context.is_authenticated, username=context.username,
    )
