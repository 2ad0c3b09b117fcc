"""Forum Forms — field rules per form plus the storage-backed username check.

Invariants:
    - Forms either pass entirely (sanitized data returned) or raise
      FormValidationError carrying every field's messages
    - username_free is a best-effort pre-check; the users primary key is the authority
    - username_free runs only once the username's own rules pass (no query for "")
    - A taken username raises UsernameTakenError on both paths (pre-check and
      storage constraint), carrying any other field errors along

Design Decisions:
    - Async rule kept out of core/validation.py: it does IO
"""

from typing import Mapping

from app.core.errors import (
    USERNAME_TAKEN_MESSAGE, FormValidationError, UsernameTakenError,
)
from app.core.repository_protocols import ForumRepository
from app.core.validation import (
    FieldSpec, FormSpec, check_form, match_field, max_bytes, max_length, required,
)
from app.models.user import USERNAME_MAX_LENGTH

# bcrypt only looks at the first 72 bytes of a password
PASSWORD_MAX_BYTES = 72

LOGIN_FORM: FormSpec = {
    "username": FieldSpec(rules=(required,)),
    "password": FieldSpec(rules=(required,), strip=False),
}

REPLY_FORM: FormSpec = {
    "content": FieldSpec(rules=(required,)),
}

NEW_TOPIC_FORM: FormSpec = {
    "subject": FieldSpec(rules=(required,)),
    "content": FieldSpec(rules=(required,)),
}

REGISTRATION_FORM: FormSpec = {
    "username": FieldSpec(rules=(required, max_length(USERNAME_MAX_LENGTH))),
    "password": FieldSpec(
        rules=(required, max_bytes(PASSWORD_MAX_BYTES)), strip=False,
    ),
    "confirm": FieldSpec(
        rules=(required, match_field("password")), strip=False,
    ),
}


def validate_form(spec: FormSpec, raw: Mapping[str, object]) -> dict[str, str]:
    """Check a form with sync rules only. Raises FormValidationError."""
    result = check_form(spec, raw)
    if not result.is_valid:
        raise FormValidationError(result.errors)
    return result.data


async def username_free(repo: ForumRepository, username: str) -> str | None:
    """Error message when the username already exists, else None."""
    if await repo.get_user(username) is not None:
        return USERNAME_TAKEN_MESSAGE
    return None


async def validate_registration(
    repo: ForumRepository, raw: Mapping[str, object],
) -> dict[str, str]:
    """Registration form: sync rules, then the username availability check."""
    result = check_form(REGISTRATION_FORM, raw)
    if "username" not in result.errors:
        username = result.data["username"]
        if await username_free(repo, username):
            raise UsernameTakenError(username, other_errors=result.errors)
    if not result.is_valid:
        raise FormValidationError(result.errors)
    return result.data
