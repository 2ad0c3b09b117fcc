"""Session Context — explicit per-request auth state and one-shot flash messages.

Invariants:
    - Two states only: Anonymous (username None) and Authenticated (username set)
    - log_in/log_out are the only transitions; the core never reads a global session
    - Flashes are popped once: pop_flashes() returns them and clears the store
    - Errors are returned before infos
    - At most FLASH_LIMIT pending messages per category; older ones are dropped
      so the signed cookie stays under the browser size limit

Design Decisions:
    - Functions over a MutableMapping (the transport's session dict): the cookie
      layer stays outside the core, tests pass a plain dict
    - SessionContext is resolved once per request and threaded into gated handlers
"""

from dataclasses import dataclass
from typing import MutableMapping

from app.core.domain_types import AuthState, FlashCategory

USERNAME_KEY = "username"
FLASH_KEY = "flashes"
FLASH_LIMIT = 10


@dataclass(frozen=True)
class SessionContext:
    username: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.username is not None

    @property
    def state(self) -> AuthState:
        if self.is_authenticated:
            return AuthState.AUTHENTICATED
        return AuthState.ANONYMOUS


@dataclass(frozen=True)
class FlashMessage:
    category: FlashCategory
    message: str


def resolve_context(session: MutableMapping) -> SessionContext:
    username = session.get(USERNAME_KEY)
    return SessionContext(username=username if isinstance(username, str) else None)


def log_in(session: MutableMapping, username: str) -> SessionContext:
    session[USERNAME_KEY] = username
    return SessionContext(username=username)


def log_out(session: MutableMapping) -> SessionContext:
    session.pop(USERNAME_KEY, None)
    return SessionContext()


def flash(session: MutableMapping, category: FlashCategory, message: str) -> None:
    """Queue a message for the next rendered view."""
    pending = dict(session.get(FLASH_KEY) or {})
    queued = [*pending.get(category.value, []), message]
    pending[category.value] = queued[-FLASH_LIMIT:]
    session[FLASH_KEY] = pending


def pop_flashes(session: MutableMapping) -> list[FlashMessage]:
    pending = session.pop(FLASH_KEY, None) or {}
    messages = []
    for category in (FlashCategory.ERROR, FlashCategory.INFO):
        for text in pending.get(category.value, []):
            messages.append(FlashMessage(category=category, message=text))
    return messages
